import logging

from sqlalchemy.orm import Session

from yelpcamp.core.security import can_edit
from yelpcamp.db.crud import campgrounds as campground_crud
from yelpcamp.db.crud import comments as crud
from yelpcamp.db.models import Comment, User
from yelpcamp.exceptions import NotFoundError, PermissionDeniedError
from yelpcamp.schemas import CommentIn

logger = logging.getLogger(__name__)

def add_comment(db: Session, author: User, campground_id: int, data: CommentIn) -> Comment:
    campground = campground_crud.get(db, campground_id)
    if campground is None:
        raise NotFoundError("Campground not found!")
    comment = Comment(
        text=data.text,
        author_id=author.id,
        author_username=author.username,
        campground_id=campground.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment

def delete_comment(db: Session, user: User, campground_id: int, comment_id: int) -> None:
    comment = crud.get(db, comment_id)
    if comment is None or comment.campground_id != campground_id:
        raise NotFoundError("Comment not found!")
    if not can_edit(user, comment):
        raise PermissionDeniedError("You don't have permission to do that")
    crud.delete_by_ids(db, [comment.id])
    logger.info(f"Comment {comment_id} deleted by {user.username}")
