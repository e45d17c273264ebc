from typing import Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from yelpcamp.db.models import User

def get(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.scalars(select(User).where(User.username == username)).first()

def get_by_email_or_username(db: Session, identifier: str) -> Optional[User]:
    """Looks a user up by e-mail or username."""
    return db.scalars(
        select(User).where(or_(User.email == identifier, User.username == identifier))
    ).first()

def exists(db: Session, username: str, email: str) -> bool:
    return db.scalars(
        select(User.id).where(or_(User.username == username, User.email == email))
    ).first() is not None

def create(db: Session, *, username: str, email: str, password_hash: str,
           first_name: str | None = None, last_name: str | None = None,
           avatar: str | None = None, is_admin: bool = False) -> User:
    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        avatar=avatar,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
