import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from yelpcamp.core.config import get_settings
from yelpcamp.db.base import Base

logger = logging.getLogger(__name__)

def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # one shared connection so an in-memory database survives across threads
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}

DATABASE_URL = get_settings().DATABASE_URL
engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def create_tables() -> None:
    from yelpcamp.db import models  # noqa: F401  (registers tables on Base)
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (if they didn't exist previously).")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
