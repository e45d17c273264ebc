from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from yelpcamp.core.config import get_settings
from yelpcamp.db.models import Campground, User
from yelpcamp.db.session import get_db
from yelpcamp.exceptions import LoginRequiredError
from yelpcamp.media import CloudinaryMediaStore, MediaStore
from yelpcamp.services import campgrounds as campground_service

def get_current_user_id(request: Request) -> Optional[int]:
    return request.session.get("uid")

def get_current_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    uid = get_current_user_id(request)
    if not uid:
        return None
    user = db.get(User, uid)
    if user is None:
        # account vanished: drop the stale session
        request.session.clear()
    return user

def require_login(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise LoginRequiredError("You need to be logged in to do that")
    return user

def require_campground_owner(
    campground_id: int,
    user: User = Depends(require_login),
    db: Session = Depends(get_db),
) -> Campground:
    return campground_service.get_editable(db, user, campground_id)

@lru_cache
def get_media_store() -> MediaStore:
    s = get_settings()
    return CloudinaryMediaStore(
        cloud_name=s.CLOUDINARY_CLOUD_NAME,
        api_key=s.CLOUDINARY_API_KEY,
        api_secret=s.CLOUDINARY_API_SECRET,
        timeout=s.MEDIA_TIMEOUT,
    )
