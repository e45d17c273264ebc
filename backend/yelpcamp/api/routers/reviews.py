from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from yelpcamp.api.deps import get_db, require_login
from yelpcamp.api.web import flash, redirect
from yelpcamp.db.models import User
from yelpcamp.exceptions import YelpCampError
from yelpcamp.schemas import ReviewIn
from yelpcamp.services import reviews as service

router = APIRouter(prefix="/campgrounds/{campground_id}/reviews", tags=["reviews"])

@router.post("")
def create(request: Request, campground_id: int, rating: str = Form(""), text: str = Form(""),
           user: User = Depends(require_login), db: Session = Depends(get_db)):
    try:
        data = ReviewIn(rating=rating, text=text.strip())
    except ValidationError as e:
        raise YelpCampError("Please rate the campground from 1 to 5") from e
    service.add_review(db, user, campground_id, data)
    flash(request, "Your review has been successfully added.")
    return redirect(f"/campgrounds/{campground_id}")

@router.delete("/{review_id}")
@router.post("/{review_id}/delete")
def destroy(request: Request, campground_id: int, review_id: int,
            user: User = Depends(require_login), db: Session = Depends(get_db)):
    service.delete_review(db, user, campground_id, review_id)
    flash(request, "Your review was deleted successfully.")
    return redirect(f"/campgrounds/{campground_id}")
