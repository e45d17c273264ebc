from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from yelpcamp.api.deps import get_db
from yelpcamp.api.web import flash, redirect, render
from yelpcamp.core.config import Settings, get_settings
from yelpcamp.db.models import User
from yelpcamp.exceptions import RegistrationError
from yelpcamp.schemas import UserCreate
from yelpcamp.services import users as service

router = APIRouter(tags=["auth"])

def _start_session(request: Request, user: User) -> None:
    request.session["uid"] = user.id
    request.session["username"] = user.username
    request.session["is_admin"] = bool(user.is_admin)

@router.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return render(request, "landing.html")

@router.get("/register", response_class=HTMLResponse)
def register_form(request: Request):
    return render(request, "register.html", {"page": "register"})

@router.post("/register")
def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    email: str = Form(""),
    first_name: str = Form("", alias="firstName"),
    last_name: str = Form("", alias="lastName"),
    avatar: str = Form(""),
    admin_code: str = Form("", alias="adminCode"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    data = UserCreate(
        username=username.strip(),
        password=password,
        email=email.strip(),
        first_name=first_name or None,
        last_name=last_name or None,
        avatar=avatar or None,
        admin_code=admin_code or None,
    )
    try:
        user = service.register(db, data, settings)
    except RegistrationError as e:
        return render(request, "register.html", {"page": "register", "error": str(e)}, status_code=400)
    _start_session(request, user)
    flash(request, f"Welcome to YelpCamp, {user.username}")
    return redirect("/campgrounds")

@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request):
    return render(request, "login.html", {"page": "login"})

@router.post("/login")
def login(request: Request, login: str = Form(""), password: str = Form(""), db: Session = Depends(get_db)):
    user = service.authenticate(db, login.strip(), password) if login and password else None
    if user is None:
        request.session.pop("uid", None)
        flash(request, "Invalid username or password", "error")
        return redirect("/login")
    _start_session(request, user)
    return redirect("/campgrounds")

@router.get("/logout")
@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    flash(request, "Log out successfully!")
    return redirect("/campgrounds")

@router.get("/users/{user_id}", response_class=HTMLResponse)
def profile(request: Request, user_id: int, db: Session = Depends(get_db)):
    user, campgrounds = service.get_profile(db, user_id)
    return render(request, "users/show.html", {"user": user, "campgrounds": campgrounds})
