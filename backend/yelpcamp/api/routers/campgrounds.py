from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from yelpcamp.api.deps import get_db, get_media_store, require_campground_owner, require_login
from yelpcamp.api.web import flash, redirect, redirect_back, render
from yelpcamp.db.models import Campground, User
from yelpcamp.exceptions import YelpCampError
from yelpcamp.media import MediaStore
from yelpcamp.schemas import CampgroundIn
from yelpcamp.services import campgrounds as service

router = APIRouter(prefix="/campgrounds", tags=["campgrounds"])

def _campground_in(name: str, price: str, description: str) -> CampgroundIn:
    if not name.strip():
        raise YelpCampError("Campground name cannot be blank")
    try:
        return CampgroundIn(name=name.strip(), price=price.strip() or None, description=description)
    except ValidationError as e:
        raise YelpCampError("Price must be a number") from e

def _has_file(image: Optional[UploadFile]) -> bool:
    return image is not None and bool(image.filename)

# INDEX - all campgrounds, optionally filtered by name
@router.get("", response_class=HTMLResponse)
def index(request: Request, search: Optional[str] = None, db: Session = Depends(get_db)):
    campgrounds = service.list_campgrounds(db, search or None)
    if search and campgrounds is not None and not campgrounds:
        flash(request, "Oops, there is no campground that matches your search!", "error")
        return redirect_back(request, "/campgrounds")
    return render(
        request,
        "campgrounds/index.html",
        {"campgrounds": campgrounds or [], "page": "campgrounds", "search": search},
    )

# CREATE - upload the image, then store the campground
@router.post("")
def create(
    request: Request,
    name: str = Form(""),
    price: str = Form(""),
    description: str = Form(""),
    image: Optional[UploadFile] = File(None),
    user: User = Depends(require_login),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    data = _campground_in(name, price, description)
    fileobj = image.file if _has_file(image) else None
    filename = image.filename if _has_file(image) else None
    campground = service.create_campground(db, media, user, data, fileobj, filename)
    return redirect(f"/campgrounds/{campground.id}")

# NEW - form to create a campground
@router.get("/new", response_class=HTMLResponse)
def new(request: Request, _: User = Depends(require_login)):
    return render(request, "campgrounds/new.html")

# SHOW - one campground with comments and reviews
@router.get("/{campground_id}", response_class=HTMLResponse)
def show(request: Request, campground_id: int, db: Session = Depends(get_db)):
    campground = service.get_campground(db, campground_id)
    return render(request, "campgrounds/show.html", {"campground": campground})

# EDIT - owner or admin only
@router.get("/{campground_id}/edit", response_class=HTMLResponse)
def edit(request: Request, campground: Campground = Depends(require_campground_owner)):
    return render(request, "campgrounds/edit.html", {"campground": campground})

# UPDATE - ownership is checked again by the service at submit time
@router.put("/{campground_id}")
@router.post("/{campground_id}/update")
def update(
    request: Request,
    campground_id: int,
    name: str = Form(""),
    price: str = Form(""),
    description: str = Form(""),
    image: Optional[UploadFile] = File(None),
    user: User = Depends(require_login),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    data = _campground_in(name, price, description)
    if _has_file(image):
        service.update_campground(db, media, user, campground_id, data, image.file, image.filename)
    else:
        service.update_campground(db, media, user, campground_id, data)
    flash(request, "Successfully Updated!")
    return redirect(f"/campgrounds/{campground_id}")

# DESTROY - image, comments, reviews, then the campground itself
@router.delete("/{campground_id}")
@router.post("/{campground_id}/delete")
def destroy(
    request: Request,
    campground_id: int,
    user: User = Depends(require_login),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    service.delete_campground(db, media, user, campground_id)
    flash(request, "Campground deleted successfully!")
    return redirect("/campgrounds")
