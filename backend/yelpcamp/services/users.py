from typing import List, Optional, Tuple
import logging, secrets

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from yelpcamp.core.config import Settings
from yelpcamp.core.security import hash_password, verify_password
from yelpcamp.db.crud import campgrounds as campground_crud
from yelpcamp.db.crud import users as crud
from yelpcamp.db.models import Campground, User
from yelpcamp.exceptions import NotFoundError, RegistrationError
from yelpcamp.schemas import UserCreate

logger = logging.getLogger(__name__)

def _grants_admin(admin_code: Optional[str], settings: Settings) -> bool:
    if not admin_code or not settings.ADMIN_CODE:
        return False
    return secrets.compare_digest(admin_code.encode(), settings.ADMIN_CODE.encode())

def register(db: Session, data: UserCreate, settings: Settings) -> User:
    if not data.username or not data.password or not data.email:
        raise RegistrationError("Username, email and password are required")
    if crud.exists(db, data.username, data.email):
        raise RegistrationError("A user with the given username or email is already registered")
    is_admin = _grants_admin(data.admin_code, settings)
    try:
        user = crud.create(
            db,
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            avatar=data.avatar,
            is_admin=is_admin,
        )
    except IntegrityError as e:
        db.rollback()
        raise RegistrationError("A user with the given username or email is already registered") from e
    if is_admin:
        logger.warning(f"User {user.username} registered with admin rights")
    return user

def authenticate(db: Session, login: str, password: str) -> Optional[User]:
    user = crud.get_by_email_or_username(db, login)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

def get_profile(db: Session, user_id: int) -> Tuple[User, List[Campground]]:
    try:
        user = crud.get(db, user_id)
        if user is None:
            raise NotFoundError("Something went wrong")
        return user, list(campground_crud.by_author(db, user.id))
    except SQLAlchemyError as e:
        logger.exception(f"Error loading profile {user_id}")
        db.rollback()
        raise NotFoundError("Something went wrong") from e

def ensure_admin(db: Session, settings: Settings) -> Optional[User]:
    """Creates the operator-configured admin account once."""
    if not (settings.ADMIN_USERNAME and settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return None
    existing = crud.get_by_username(db, settings.ADMIN_USERNAME)
    if existing is not None:
        return existing
    user = crud.create(
        db,
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        is_admin=True,
    )
    logger.info(f"Admin account {user.username} created")
    return user
