"""
Comments and reviews attached to a campground.
"""
from sqlalchemy import select

from yelpcamp.db.models import Comment, Review


def test_add_comment_stamps_author(client, db, make_user, make_campground, login):
    alice = make_user("alice")
    make_user("bob")
    campground = make_campground(alice)
    login("bob")

    resp = client.post(f"/campgrounds/{campground.id}/comments", data={"text": "Great spot"})

    assert "Great spot" in resp.text
    comment = db.scalars(select(Comment)).one()
    assert comment.author_username == "bob"
    assert comment.campground_id == campground.id


def test_comment_requires_login(client, db, make_user, make_campground):
    campground = make_campground(make_user("alice"))

    resp = client.post(f"/campgrounds/{campground.id}/comments", data={"text": "hi"}, follow_redirects=False)

    assert resp.headers["location"] == "/login"
    assert db.scalars(select(Comment)).all() == []


def test_empty_comment_rejected(client, db, make_user, make_campground, login):
    campground = make_campground(make_user("alice"))
    login("alice")

    resp = client.post(f"/campgrounds/{campground.id}/comments", data={"text": "   "})

    assert "Comment cannot be empty" in resp.text
    assert db.scalars(select(Comment)).all() == []


def test_only_comment_author_deletes(client, db, make_user, make_campground, login):
    alice = make_user("alice")
    make_user("bob")
    campground = make_campground(alice, comments=["mine"])
    comment_id = campground.comment_ids[0]
    login("bob")

    client.post(f"/campgrounds/{campground.id}/comments/{comment_id}/delete")
    db.expire_all()
    assert db.get(Comment, comment_id) is not None

    client.get("/logout")
    login("alice")
    client.post(f"/campgrounds/{campground.id}/comments/{comment_id}/delete")
    db.expire_all()
    assert db.get(Comment, comment_id) is None


def test_add_review_once_per_user(client, db, make_user, make_campground, login):
    campground = make_campground(make_user("alice"))
    make_user("bob")
    login("bob")

    client.post(f"/campgrounds/{campground.id}/reviews", data={"rating": "4", "text": "good"})
    resp = client.post(f"/campgrounds/{campground.id}/reviews", data={"rating": "2", "text": "again"})

    assert "You already wrote a review." in resp.text
    reviews = db.scalars(select(Review)).all()
    assert [r.rating for r in reviews] == [4]


def test_review_rating_must_be_in_range(client, db, make_user, make_campground, login):
    campground = make_campground(make_user("alice"))
    login("alice")

    resp = client.post(f"/campgrounds/{campground.id}/reviews", data={"rating": "6"})

    assert "Please rate the campground from 1 to 5" in resp.text
    assert db.scalars(select(Review)).all() == []


def test_reviews_shown_newest_first_with_rating(db, make_user, make_campground):
    from yelpcamp.services.campgrounds import get_campground

    campground = make_campground(make_user("alice"), reviews=[2, 4])

    loaded = get_campground(db, campground.id)

    assert [r.rating for r in loaded.reviews] == [4, 2]
    assert loaded.rating == 3


def test_admin_deletes_any_review(client, db, make_user, make_campground, login):
    campground = make_campground(make_user("alice"), reviews=[1])
    review_id = campground.review_ids[0]
    make_user("root", is_admin=True)
    login("root")

    client.post(f"/campgrounds/{campground.id}/reviews/{review_id}/delete")

    db.expire_all()
    assert db.get(Review, review_id) is None


def test_review_on_unknown_campground(client, db, make_user, login):
    make_user("alice")
    login("alice")

    resp = client.post("/campgrounds/999/reviews", data={"rating": "5"})

    assert "Campground not found!" in resp.text
