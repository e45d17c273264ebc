from typing import Iterable, Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from yelpcamp.db.models import Review

def get(db: Session, review_id: int) -> Optional[Review]:
    return db.get(Review, review_id)

def find_by_author(db: Session, campground_id: int, author_id: int) -> Optional[Review]:
    return db.scalars(
        select(Review).where(Review.campground_id == campground_id, Review.author_id == author_id)
    ).first()

def delete_by_ids(db: Session, ids: Iterable[int]) -> int:
    ids = list(ids)
    if not ids:
        return 0
    result = db.execute(
        delete(Review).where(Review.id.in_(ids)).execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount
