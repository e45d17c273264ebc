"""
Campground lifecycle: list/search, create with upload, read with children,
update with optional re-image and delete with cascade.

The media host and the database are written in sequence without a shared
transaction. Every window where the two disagree is logged at WARNING so an
operator can reconcile it.
"""
from typing import BinaryIO, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yelpcamp.core.security import can_edit
from yelpcamp.db.crud import campgrounds as crud
from yelpcamp.db.crud import comments as comment_crud
from yelpcamp.db.crud import reviews as review_crud
from yelpcamp.db.models import Campground, User
from yelpcamp.exceptions import MediaStoreError, NotFoundError, PermissionDeniedError, StorageError
from yelpcamp.media import MediaStore, ensure_image
from yelpcamp.schemas import CampgroundIn

logger = logging.getLogger(__name__)

NOT_FOUND = "Campground not found!"
NO_PERMISSION = "You don't have permission to do that"


def list_campgrounds(db: Session, search: Optional[str] = None) -> Optional[List[Campground]]:
    """Returns all campgrounds, or those whose name contains ``search``.

    ``None`` means the store failed; callers render an empty list.
    """
    try:
        if search:
            return list(crud.search(db, search))
        return list(crud.list_all(db))
    except SQLAlchemyError:
        logger.exception("Error retrieving campgrounds")
        db.rollback()
        return None


def get_campground(db: Session, campground_id: int) -> Campground:
    try:
        campground = crud.get_with_children(db, campground_id)
    except SQLAlchemyError:
        logger.exception(f"Error retrieving campground {campground_id}")
        db.rollback()
        campground = None
    if campground is None:
        raise NotFoundError(NOT_FOUND)
    return campground


def get_editable(db: Session, user: Optional[User], campground_id: int) -> Campground:
    campground = crud.get(db, campground_id)
    if campground is None:
        raise NotFoundError(NOT_FOUND)
    if not can_edit(user, campground):
        raise PermissionDeniedError(NO_PERMISSION)
    return campground


def create_campground(db: Session, media: MediaStore, author: User, data: CampgroundIn,
                      fileobj: BinaryIO, filename: str) -> Campground:
    ensure_image(filename)
    asset = media.upload(fileobj, filename)

    campground = Campground(
        name=data.name,
        price=data.price,
        description=data.description,
        image=asset.secure_url,
        image_id=asset.public_id,
        author_id=author.id,
        author_username=author.username,
    )
    try:
        db.add(campground)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Campground insert failed, image {asset.public_id} is orphaned on the media host: {e}")
        raise StorageError(str(e)) from e
    db.refresh(campground)
    logger.info(f"Campground {campground.id} created by {author.username}")
    return campground


def update_campground(db: Session, media: MediaStore, user: Optional[User], campground_id: int,
                      data: CampgroundIn, fileobj: Optional[BinaryIO] = None,
                      filename: Optional[str] = None) -> Campground:
    campground = get_editable(db, user, campground_id)

    # Nothing is assigned until the image swap has fully succeeded.
    asset = old_id = None
    if fileobj is not None:
        ensure_image(filename)
        old_id = campground.image_id
        media.destroy(old_id)
        try:
            asset = media.upload(fileobj, filename)
        except MediaStoreError:
            logger.warning(f"Campground {campground_id} still references destroyed image {old_id}")
            raise

    if asset is not None:
        campground.image = asset.secure_url
        campground.image_id = asset.public_id
    campground.name = data.name
    campground.price = data.price
    campground.description = data.description
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        if asset is not None:
            logger.warning(f"Campground {campground_id} update failed, image {asset.public_id} is orphaned: {e}")
            logger.warning(f"Campground {campground_id} still references destroyed image {old_id}")
        raise StorageError(str(e)) from e
    db.refresh(campground)
    return campground


def delete_campground(db: Session, media: MediaStore, user: Optional[User], campground_id: int) -> None:
    campground = get_editable(db, user, campground_id)
    media.destroy(campground.image_id)

    comment_ids = campground.comment_ids
    review_ids = campground.review_ids
    try:
        comment_crud.delete_by_ids(db, comment_ids)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Campground {campground_id}: comments {comment_ids} left behind")
    try:
        review_crud.delete_by_ids(db, review_ids)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Campground {campground_id}: reviews {review_ids} left behind")

    # children were removed in SQL; keep the ORM from touching stale collections
    db.expire(campground, ["comments", "reviews"])
    try:
        db.delete(campground)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Campground {campground_id} row survived after its image was destroyed: {e}")
        raise StorageError(str(e)) from e
    logger.info(f"Campground {campground_id} deleted")
