from typing import Optional, Sequence
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from yelpcamp.db.models import Campground

def list_all(db: Session) -> Sequence[Campground]:
    return db.scalars(select(Campground).order_by(Campground.id.asc())).all()

def search(db: Session, term: str) -> Sequence[Campground]:
    """Case-insensitive literal substring match on the name.

    ``autoescape`` escapes ``%`` and ``_`` so the term never acts as a pattern.
    """
    stmt = (
        select(Campground)
        .where(Campground.name.icontains(term, autoescape=True))
        .order_by(Campground.id.asc())
    )
    return db.scalars(stmt).all()

def get(db: Session, campground_id: int) -> Optional[Campground]:
    return db.get(Campground, campground_id)

def get_with_children(db: Session, campground_id: int) -> Optional[Campground]:
    stmt = (
        select(Campground)
        .where(Campground.id == campground_id)
        .options(selectinload(Campground.comments), selectinload(Campground.reviews))
    )
    return db.scalars(stmt).first()

def by_author(db: Session, author_id: int) -> Sequence[Campground]:
    return db.scalars(
        select(Campground).where(Campground.author_id == author_id).order_by(Campground.id.asc())
    ).all()
