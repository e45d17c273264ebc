from typing import Iterable, Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session

from yelpcamp.db.models import Comment

def get(db: Session, comment_id: int) -> Optional[Comment]:
    return db.get(Comment, comment_id)

def delete_by_ids(db: Session, ids: Iterable[int]) -> int:
    ids = list(ids)
    if not ids:
        return 0
    result = db.execute(
        delete(Comment).where(Comment.id.in_(ids)).execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount
