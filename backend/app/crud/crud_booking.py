import logging
import time
from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import atomic
from ..models.booking_status import ALLOWED_TRANSITIONS, BookingStatus
from ..utils.auth import normalize_email
from ..utils.errors import ConflictError, NotFoundError, ValidationError
from .crud_account import account as crud_account
from .crud_helper_listing import helper_listing as crud_helper_listing

logger = logging.getLogger(__name__)


def _time_based_id(db: Session) -> int:
    """Current epoch milliseconds, bumped past the newest id on collision."""
    candidate = int(time.time() * 1000)
    newest = db.query(func.max(models.Booking.id)).scalar() or 0
    return max(candidate, int(newest) + 1)


class CRUDBooking:
    def get_booking(self, db: Session, booking_id: int) -> Optional[models.Booking]:
        return db.query(models.Booking).filter(models.Booking.id == booking_id).first()

    def list_bookings(
        self,
        db: Session,
        user_email: Optional[str] = None,
        helper_email: Optional[str] = None,
    ) -> List[models.Booking]:
        query = db.query(models.Booking)
        if user_email:
            query = query.filter(models.Booking.user_email == normalize_email(user_email))
        if helper_email:
            query = query.filter(models.Booking.helper_email == normalize_email(helper_email))
        return query.order_by(models.Booking.id.desc()).all()

    def create_booking(
        self, db: Session, booking_in: schemas.BookingCreate, today: Optional[date] = None
    ) -> models.Booking:
        user_email = normalize_email(booking_in.user_email)
        helper_email = normalize_email(booking_in.helper_email) if booking_in.helper_email else None
        with atomic(db):
            user = crud_account.get_account_by_email(db, user_email)
            if user is None:
                raise NotFoundError("Booking user not found.", {"userEmail": "not_found"})
            listing = crud_helper_listing.get_listing(db, booking_in.helper_id)
            if listing is None:
                raise NotFoundError("Helper listing not found.", {"helperId": "not_found"})
            helper_email = helper_email or listing.email
            if helper_email == user_email:
                raise ValidationError("You cannot book yourself.", {"helperEmail": "self_booking"})
            if booking_in.date < (today or date.today()):
                raise ValidationError("You cannot book a date in the past.", {"date": "in_past"})

            db_booking = models.Booking(
                id=_time_based_id(db),
                user_email=user_email,
                user_name=user.full_name,
                helper_id=listing.id,
                helper_name=booking_in.helper_name or listing.name,
                helper_email=helper_email,
                date=booking_in.date,
                start_time=booking_in.start_time,
                end_time=booking_in.end_time,
                address=booking_in.address,
                phone=booking_in.phone,
                notes=booking_in.notes,
                status=BookingStatus.PENDING,
                is_reviewed=False,
            )
            db.add(db_booking)
        db.refresh(db_booking)
        logger.info("booking.created id=%s user=%s helper_id=%s", db_booking.id, user_email, listing.id)
        return db_booking

    def transition(self, db: Session, booking_id: int, new_status: BookingStatus) -> models.Booking:
        """Move a booking forward; statuses never move backwards."""
        with atomic(db):
            db_booking = self.get_booking(db, booking_id)
            if db_booking is None:
                raise NotFoundError("Booking not found.", {"id": "not_found"})
            current = BookingStatus(db_booking.status)
            if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
                raise ConflictError(
                    f"Booking cannot move from {current.value} to {new_status.value}.",
                    {"status": "invalid_transition"},
                )
            db_booking.status = new_status
        db.refresh(db_booking)
        return db_booking


booking = CRUDBooking()
