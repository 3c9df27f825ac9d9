"""Review lifecycle tied to bookings.

A booking gets at most one review, only once it is Confirmed, and its
``is_reviewed`` flag is true exactly while that review exists. Each operation
writes the review, the listing aggregate and the booking flag in a single
transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import models
from app.crud import crud_booking, crud_helper_listing, crud_review
from app.database import atomic
from app.models import BookingStatus
from app.services import rating_aggregator
from app.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("helper_id", "rating", "review_text", "booking_id", "reviewer_name")

# Wire names used in error payloads
_FIELD_NAMES = {
    "helper_id": "helperId",
    "rating": "rating",
    "review_text": "reviewText",
    "booking_id": "bookingId",
    "reviewer_name": "reviewerName",
}


def _as_int(value: Any) -> Optional[int]:
    """Parse an integer from an int or a string of digits; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def parse_rating(value: Any) -> int:
    rating = _as_int(value)
    if rating is None or not 1 <= rating <= 5:
        raise ValidationError("Rating must be an integer between 1 and 5.", {"rating": "out_of_range"})
    return rating


def parse_identity(value: Any, field: str = "helper_id") -> int:
    """Validate a positive integer identity reference."""
    identity = _as_int(value)
    if identity is None or identity <= 0:
        name = _FIELD_NAMES.get(field, field)
        raise ValidationError(f"Invalid {name} format.", {name: "invalid"})
    return identity


def submit_review(db: Session, payload: Mapping[str, Any]) -> models.Review:
    missing = [field for field in REQUIRED_FIELDS if payload.get(field) is None]
    if missing:
        raise ValidationError(
            "Missing required review fields: " + ", ".join(_FIELD_NAMES[f] for f in missing),
            {_FIELD_NAMES[f]: "required" for f in missing},
        )
    rating = parse_rating(payload["rating"])
    helper_id = parse_identity(payload["helper_id"])
    booking_id = parse_identity(payload["booking_id"], "booking_id")

    with atomic(db):
        booking = crud_booking.booking.get_booking(db, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found.", {"bookingId": "not_found"})
        if crud_helper_listing.helper_listing.get_listing(db, helper_id) is None:
            raise NotFoundError("Helper listing not found.", {"helperId": "not_found"})
        if booking.helper_id is not None and booking.helper_id != helper_id:
            raise ValidationError("Review must be for the booked helper.", {"helperId": "mismatch"})
        if booking.is_reviewed:
            raise ConflictError("This booking has already been reviewed.", {"bookingId": "review_exists"})
        if booking.status != BookingStatus.CONFIRMED:
            raise ConflictError("Booking must be Confirmed to be reviewed.", {"bookingId": "not_confirmed"})

        db_review = models.Review(
            helper_id=helper_id,
            booking_id=booking_id,
            reviewer_name=str(payload["reviewer_name"]),
            rating=rating,
            review_text=str(payload["review_text"]),
        )
        db.add(db_review)
        try:
            db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent submission for the same booking
            raise ConflictError("This booking has already been reviewed.", {"bookingId": "review_exists"}) from exc
        rating_aggregator.recompute(db, helper_id)
        booking.is_reviewed = True
    db.refresh(db_review)
    logger.info("review.created id=%s booking_id=%s helper_id=%s", db_review.id, booking_id, helper_id)
    return db_review


def update_review(
    db: Session,
    review_id: int,
    rating: Any = None,
    review_text: Optional[str] = None,
) -> models.Review:
    """Overwrite rating and/or text; the listing aggregate follows."""
    new_rating = parse_rating(rating) if rating is not None else None
    with atomic(db):
        db_review = crud_review.review.get_review(db, review_id)
        if db_review is None:
            raise NotFoundError("Review not found.", {"id": "not_found"})
        if new_rating is not None:
            db_review.rating = new_rating
        if review_text is not None:
            db_review.review_text = review_text
        db.flush()
        rating_aggregator.recompute(db, db_review.helper_id)
    db.refresh(db_review)
    logger.info("review.updated id=%s helper_id=%s", review_id, db_review.helper_id)
    return db_review


def _unlink(db: Session, db_review: models.Review) -> int:
    helper_id = db_review.helper_id
    booking = crud_booking.booking.get_booking(db, db_review.booking_id)
    db.delete(db_review)
    db.flush()
    if booking is not None:
        booking.is_reviewed = False
    rating_aggregator.recompute(db, helper_id)
    return helper_id


def delete_review(db: Session, review_id: int) -> None:
    with atomic(db):
        db_review = crud_review.review.get_review(db, review_id)
        if db_review is None:
            raise NotFoundError("Review not found.", {"id": "not_found"})
        helper_id = _unlink(db, db_review)
    logger.info("review.deleted id=%s helper_id=%s", review_id, helper_id)


def delete_booking(db: Session, booking_id: int) -> None:
    """Delete a booking; its review goes with it and the aggregate follows."""
    with atomic(db):
        booking = crud_booking.booking.get_booking(db, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found.", {"id": "not_found"})
        db_review = crud_review.review.get_review_by_booking(db, booking_id)
        if db_review is not None:
            _unlink(db, db_review)
        db.delete(booking)
    logger.info("booking.deleted id=%s", booking_id)
