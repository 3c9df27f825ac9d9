from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models
from app.crud import account as crud_account
from app.crud import booking as crud_booking
from app.database import Base
from app.models import BookingStatus, ListingStatus
from app.schemas import BookingCreate
from app.utils.errors import ConflictError, NotFoundError, ValidationError

TODAY = date(2030, 1, 10)


def setup_db():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    return Session()


def seed(db):
    crud_account.create_account(db, email="user@example.com", full_name="Uma User")
    crud_account.create_account(db, email="helper@example.com", full_name="Helen Helper")
    listing = models.HelperListing(
        display_id=1,
        email="helper@example.com",
        name="Helen Helper",
        status=ListingStatus.APPROVED,
    )
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


def booking_in(listing, **overrides):
    data = {
        "userEmail": "user@example.com",
        "helperId": listing.id,
        "date": "2030-01-12",
        "startTime": "09:00",
        "endTime": "11:00",
        "address": "1 Main St",
    }
    data.update(overrides)
    return BookingCreate(**data)


def test_create_booking_starts_pending():
    db = setup_db()
    listing = seed(db)

    booking = crud_booking.create_booking(db, booking_in(listing), today=TODAY)

    assert booking.status == BookingStatus.PENDING
    assert booking.is_reviewed is False
    assert booking.user_name == "Uma User"
    assert booking.helper_email == "helper@example.com"
    assert booking.helper_name == "Helen Helper"
    assert booking.id > 1_600_000_000_000


def test_booking_ids_are_unique_within_same_millisecond(monkeypatch):
    db = setup_db()
    listing = seed(db)
    monkeypatch.setattr("app.crud.crud_booking.time.time", lambda: 1_900_000_000.0)

    first = crud_booking.create_booking(db, booking_in(listing), today=TODAY)
    second = crud_booking.create_booking(db, booking_in(listing), today=TODAY)

    assert first.id == 1_900_000_000_000
    assert second.id == first.id + 1


def test_create_booking_rejects_past_date():
    db = setup_db()
    listing = seed(db)
    with pytest.raises(ValidationError):
        crud_booking.create_booking(db, booking_in(listing, date="2030-01-09"), today=TODAY)
    assert db.query(models.Booking).count() == 0


def test_create_booking_rejects_self_booking():
    db = setup_db()
    listing = seed(db)
    with pytest.raises(ValidationError):
        crud_booking.create_booking(db, booking_in(listing, userEmail="Helper@example.com"), today=TODAY)


def test_create_booking_unknown_user_or_helper():
    db = setup_db()
    listing = seed(db)
    with pytest.raises(NotFoundError):
        crud_booking.create_booking(db, booking_in(listing, userEmail="ghost@example.com"), today=TODAY)
    with pytest.raises(NotFoundError):
        crud_booking.create_booking(db, booking_in(listing, helperId=999), today=TODAY)


def test_confirm_then_cancel():
    db = setup_db()
    listing = seed(db)
    booking = crud_booking.create_booking(db, booking_in(listing), today=TODAY)

    confirmed = crud_booking.transition(db, booking.id, BookingStatus.CONFIRMED)
    assert confirmed.status == BookingStatus.CONFIRMED

    cancelled = crud_booking.transition(db, booking.id, BookingStatus.CANCELLED)
    assert cancelled.status == BookingStatus.CANCELLED


@pytest.mark.parametrize(
    "first, second",
    [
        (BookingStatus.CONFIRMED, BookingStatus.PENDING),
        (BookingStatus.CONFIRMED, BookingStatus.REJECTED),
        (BookingStatus.REJECTED, BookingStatus.CONFIRMED),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
    ],
)
def test_status_never_moves_backwards(first, second):
    db = setup_db()
    listing = seed(db)
    booking = crud_booking.create_booking(db, booking_in(listing), today=TODAY)
    crud_booking.transition(db, booking.id, first)

    with pytest.raises(ConflictError):
        crud_booking.transition(db, booking.id, second)

    assert crud_booking.get_booking(db, booking.id).status == first


def test_transition_missing_booking():
    db = setup_db()
    with pytest.raises(NotFoundError):
        crud_booking.transition(db, 1, BookingStatus.CONFIRMED)


def test_list_bookings_filters_by_party():
    db = setup_db()
    listing = seed(db)
    crud_booking.create_booking(db, booking_in(listing), today=TODAY)

    assert len(crud_booking.list_bookings(db, user_email="USER@example.com")) == 1
    assert len(crud_booking.list_bookings(db, helper_email="helper@example.com")) == 1
    assert crud_booking.list_bookings(db, user_email="helper@example.com") == []
