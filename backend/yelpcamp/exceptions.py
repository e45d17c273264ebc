class YelpCampError(Exception):
    """Base class for errors that end in a flash message instead of a crash."""


class NotFoundError(YelpCampError):
    pass


class PermissionDeniedError(YelpCampError):
    pass


class LoginRequiredError(YelpCampError):
    pass


class InvalidImageError(YelpCampError):
    pass


class MediaStoreError(YelpCampError):
    """Upload or destroy rejected by the media host; carries its message."""


class RegistrationError(YelpCampError):
    pass


class StorageError(YelpCampError):
    """A write was rejected by the database and rolled back."""
