"""
Pytest configuration: in-memory SQLite, a fake media host and logging.
"""
import logging
import os
import sys

# must be set before yelpcamp builds its engine and settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ.pop("ADMIN_CODE", None)

import pytest
from fastapi.testclient import TestClient

from yelpcamp.api.deps import get_media_store
from yelpcamp.core.security import hash_password
from yelpcamp.db.base import Base
from yelpcamp.db.crud import users as users_crud
from yelpcamp.db.models import Campground, Comment, Review
from yelpcamp.db.session import SessionLocal, engine
from yelpcamp.exceptions import MediaStoreError
from yelpcamp.main import app
from yelpcamp.media import MediaStore
from yelpcamp.schemas import MediaAsset

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)

PASSWORD = "s3cret-pass"


class FakeMediaStore(MediaStore):
    """Keeps assets in a dict; set ``fail_upload``/``fail_destroy`` to a message to fail."""

    def __init__(self):
        self.assets = {}
        self.uploads = []
        self.destroyed = []
        self.fail_upload = None
        self.fail_destroy = None
        self._counter = 0

    def add(self, public_id):
        url = f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg"
        self.assets[public_id] = url
        return url

    def upload(self, fileobj, filename):
        if self.fail_upload:
            raise MediaStoreError(self.fail_upload)
        self._counter += 1
        public_id = f"yelpcamp/{self._counter}-{filename.rsplit('.', 1)[0]}"
        self.uploads.append((filename, fileobj.read()))
        return MediaAsset(secure_url=self.add(public_id), public_id=public_id)

    def destroy(self, public_id):
        if self.fail_destroy:
            raise MediaStoreError(self.fail_destroy)
        self.assets.pop(public_id, None)
        self.destroyed.append(public_id)


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def media():
    return FakeMediaStore()


@pytest.fixture
def client(media):
    app.dependency_overrides[get_media_store] = lambda: media
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(username, is_admin=False, password=PASSWORD):
        return users_crud.create(
            db,
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            is_admin=is_admin,
        )
    return _make


@pytest.fixture
def make_campground(db, media):
    def _make(author, name="Pine Lake", price=20, description="quiet", comments=(), reviews=()):
        public_id = f"seed/{name.replace(' ', '-').lower()}"
        campground = Campground(
            name=name,
            price=price,
            description=description,
            image=media.add(public_id),
            image_id=public_id,
            author_id=author.id,
            author_username=author.username,
        )
        db.add(campground)
        db.flush()
        for text in comments:
            db.add(Comment(text=text, author_id=author.id, author_username=author.username,
                           campground_id=campground.id))
        for rating in reviews:
            db.add(Review(rating=rating, text="nice", author_id=author.id,
                          author_username=author.username, campground_id=campground.id))
        db.commit()
        db.refresh(campground)
        return campground
    return _make


@pytest.fixture
def login(client):
    def _login(username, password=PASSWORD):
        resp = client.post("/login", data={"login": username, "password": password}, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/campgrounds"
        return resp
    return _login
