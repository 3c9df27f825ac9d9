from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models
from app.database import Base
from app.models import BookingStatus, ListingStatus
from app.services import rating_aggregator


def setup_db():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    return Session()


def create_listing(db, display_id=1, email="helper@example.com"):
    listing = models.HelperListing(
        display_id=display_id,
        email=email,
        name="Helen Helper",
        status=ListingStatus.APPROVED,
        rating=5.0,
        reviews=0,
    )
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


def add_reviews(db, helper_id, ratings):
    for i, rating in enumerate(ratings, start=1):
        db.add(
            models.Review(
                helper_id=helper_id,
                booking_id=helper_id * 1000 + i,
                reviewer_name="Reviewer",
                rating=rating,
                review_text="ok",
            )
        )
    db.commit()


def test_average_rating_rounds_half_up():
    assert rating_aggregator.average_rating(17, 4) == 4.3  # 4.25
    assert rating_aggregator.average_rating(9, 2) == 4.5
    assert rating_aggregator.average_rating(13, 3) == 4.3  # 4.333...
    assert rating_aggregator.average_rating(14, 3) == 4.7  # 4.666...


def test_average_rating_defaults_without_reviews():
    assert rating_aggregator.average_rating(0, 0) == 5.0


def test_recompute_writes_mean_and_count():
    db = setup_db()
    listing = create_listing(db)
    add_reviews(db, listing.id, [5, 4, 4, 4])

    summary = rating_aggregator.recompute(db, listing.id)
    db.commit()
    db.refresh(listing)

    assert summary.rating == 4.3
    assert summary.reviews == 4
    assert listing.rating == 4.3
    assert listing.reviews == 4


def test_recompute_is_idempotent():
    db = setup_db()
    listing = create_listing(db)
    add_reviews(db, listing.id, [3, 4])

    first = rating_aggregator.recompute(db, listing.id)
    second = rating_aggregator.recompute(db, listing.id)
    db.commit()
    db.refresh(listing)

    assert first == second
    assert listing.rating == 3.5
    assert listing.reviews == 2


def test_recompute_without_reviews_resets_to_default():
    db = setup_db()
    listing = create_listing(db)
    listing.rating = 2.0
    listing.reviews = 7
    db.commit()

    summary = rating_aggregator.recompute(db, listing.id)
    db.commit()
    db.refresh(listing)

    assert summary.rating == 5.0
    assert listing.rating == 5.0
    assert listing.reviews == 0


def test_recompute_ignores_other_helpers_reviews():
    db = setup_db()
    first = create_listing(db, display_id=1, email="one@example.com")
    second = create_listing(db, display_id=2, email="two@example.com")
    add_reviews(db, first.id, [1, 1])
    add_reviews(db, second.id, [5])

    rating_aggregator.recompute(db, first.id)
    db.commit()
    db.refresh(first)
    db.refresh(second)

    assert first.rating == 1.0
    assert first.reviews == 2
    # untouched until its own recompute runs
    assert second.reviews == 0


def test_recompute_missing_listing_returns_summary():
    db = setup_db()
    db.add(
        models.Booking(
            id=1,
            user_email="u@example.com",
            helper_id=42,
            date=date(2030, 1, 1),
            status=BookingStatus.CONFIRMED,
        )
    )
    add_reviews(db, 42, [2])

    summary = rating_aggregator.recompute(db, 42)

    assert summary.helper_id == 42
    assert summary.rating == 2.0
    assert summary.reviews == 1
