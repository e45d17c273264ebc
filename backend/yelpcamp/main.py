from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.sessions import SessionMiddleware

from yelpcamp.api.routers import campgrounds, comments, index, reviews
from yelpcamp.api.web import flash, redirect, redirect_back
from yelpcamp.core.config import get_settings
from yelpcamp.db.session import SessionLocal, create_tables
from yelpcamp.exceptions import LoginRequiredError, NotFoundError, YelpCampError
from yelpcamp.services.users import ensure_admin

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    db = SessionLocal()
    try:
        ensure_admin(db, settings)
    finally:
        db.close()
    yield


app = FastAPI(title="YelpCamp", lifespan=lifespan)
# sessions must wrap everything that touches request.session
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)

app.include_router(index.router)
app.include_router(campgrounds.router)
app.include_router(comments.router)
app.include_router(reviews.router)


@app.exception_handler(LoginRequiredError)
async def _login_required(request: Request, exc: LoginRequiredError):
    flash(request, str(exc), "error")
    return redirect("/login")


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    flash(request, str(exc), "error")
    if request.url.path.startswith("/users/"):
        return redirect("/")
    return redirect_back(request, "/campgrounds")


@app.exception_handler(YelpCampError)
async def _flash_and_back(request: Request, exc: YelpCampError):
    logger.info(f"{request.method} {request.url.path} failed: {exc}")
    flash(request, str(exc), "error")
    return redirect_back(request, "/campgrounds")


# path ids that are not integers read as missing records
_BAD_PATH_PARAM = {
    "campground_id": "Campground not found!",
    "comment_id": "Comment not found!",
    "review_id": "Review not found!",
    "user_id": "Something went wrong",
}


@app.exception_handler(RequestValidationError)
async def _bad_request(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc.errors()}")
    message = "Something went wrong"
    for error in exc.errors():
        loc = error.get("loc") or ()
        if len(loc) == 2 and loc[0] == "path" and loc[1] in _BAD_PATH_PARAM:
            message = _BAD_PATH_PARAM[loc[1]]
            break
    flash(request, message, "error")
    if request.url.path.startswith("/users/"):
        return redirect("/")
    return redirect_back(request, "/campgrounds")
