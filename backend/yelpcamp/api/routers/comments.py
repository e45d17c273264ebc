from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from yelpcamp.api.deps import get_db, require_login
from yelpcamp.api.web import flash, redirect
from yelpcamp.db.models import User
from yelpcamp.exceptions import YelpCampError
from yelpcamp.schemas import CommentIn
from yelpcamp.services import comments as service

router = APIRouter(prefix="/campgrounds/{campground_id}/comments", tags=["comments"])

@router.post("")
def create(request: Request, campground_id: int, text: str = Form(""),
           user: User = Depends(require_login), db: Session = Depends(get_db)):
    try:
        data = CommentIn(text=text.strip())
    except ValidationError as e:
        raise YelpCampError("Comment cannot be empty") from e
    service.add_comment(db, user, campground_id, data)
    flash(request, "Successfully added comment")
    return redirect(f"/campgrounds/{campground_id}")

@router.delete("/{comment_id}")
@router.post("/{comment_id}/delete")
def destroy(request: Request, campground_id: int, comment_id: int,
            user: User = Depends(require_login), db: Session = Depends(get_db)):
    service.delete_comment(db, user, campground_id, comment_id)
    flash(request, "Comment deleted")
    return redirect(f"/campgrounds/{campground_id}")
