from datetime import datetime

from sqlalchemy import String, Integer, DateTime, Text, ForeignKey, Boolean, Numeric
from sqlalchemy.orm import relationship, Mapped, mapped_column

from yelpcamp.db.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    avatar: Mapped[str | None] = mapped_column(String(500))
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Campground(Base):
    __tablename__ = "campgrounds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[float | None] = mapped_column(Numeric(10, 2))
    description: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    image_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Snapshot of the creator; not updated if the user is renamed later.
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    author_username: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # No ORM cascade: children are removed explicitly by id batch.
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="campground",
        order_by="[Comment.created_at, Comment.id]",
        passive_deletes=True,
    )
    reviews: Mapped[list["Review"]] = relationship(
        back_populates="campground",
        order_by="[Review.created_at.desc(), Review.id.desc()]",
        passive_deletes=True,
    )

    @property
    def comment_ids(self) -> list[int]:
        return [c.id for c in self.comments]

    @property
    def review_ids(self) -> list[int]:
        return [r.id for r in self.reviews]

    @property
    def rating(self) -> float:
        if not self.reviews:
            return 0
        return sum(r.rating for r in self.reviews) / len(self.reviews)


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    author_username: Mapped[str] = mapped_column(String(64), nullable=False)
    campground_id: Mapped[int | None] = mapped_column(
        ForeignKey("campgrounds.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    campground: Mapped[Campground | None] = relationship(back_populates="comments")


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str | None] = mapped_column(Text)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    author_username: Mapped[str] = mapped_column(String(64), nullable=False)
    campground_id: Mapped[int | None] = mapped_column(
        ForeignKey("campgrounds.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    campground: Mapped[Campground | None] = relationship(back_populates="reviews")
