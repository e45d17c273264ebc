import logging

from sqlalchemy.orm import Session

from yelpcamp.core.security import can_edit
from yelpcamp.db.crud import campgrounds as campground_crud
from yelpcamp.db.crud import reviews as crud
from yelpcamp.db.models import Review, User
from yelpcamp.exceptions import NotFoundError, PermissionDeniedError, YelpCampError
from yelpcamp.schemas import ReviewIn

logger = logging.getLogger(__name__)

def add_review(db: Session, author: User, campground_id: int, data: ReviewIn) -> Review:
    campground = campground_crud.get(db, campground_id)
    if campground is None:
        raise NotFoundError("Campground not found!")
    # one review per user and campground
    if crud.find_by_author(db, campground.id, author.id) is not None:
        raise YelpCampError("You already wrote a review.")
    review = Review(
        rating=data.rating,
        text=data.text,
        author_id=author.id,
        author_username=author.username,
        campground_id=campground.id,
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review

def delete_review(db: Session, user: User, campground_id: int, review_id: int) -> None:
    review = crud.get(db, review_id)
    if review is None or review.campground_id != campground_id:
        raise NotFoundError("Review not found!")
    if not can_edit(user, review):
        raise PermissionDeniedError("You don't have permission to do that")
    crud.delete_by_ids(db, [review.id])
    logger.info(f"Review {review_id} deleted by {user.username}")
