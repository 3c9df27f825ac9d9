import logging
from typing import Any, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..crud import booking as crud_booking
from ..database import get_db
from ..models import BookingStatus
from ..notifications.booking_emails import send_booking_status_email, send_new_booking_email
from ..services import review_linker
from ..utils import NotFoundError

router = APIRouter(tags=["bookings"])
logger = logging.getLogger(__name__)


@router.get("/bookings", response_model=List[schemas.BookingResponse])
def list_bookings(
    user_email: Optional[str] = Query(None, alias="userEmail"),
    helper_email: Optional[str] = Query(None, alias="helperEmail"),
    db: Session = Depends(get_db),
) -> Any:
    return crud_booking.list_bookings(db, user_email=user_email, helper_email=helper_email)


@router.get("/bookings/{booking_id}", response_model=schemas.BookingResponse)
def read_booking(booking_id: int, db: Session = Depends(get_db)) -> Any:
    booking = crud_booking.get_booking(db, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found.", {"id": "not_found"})
    return booking


@router.post("/bookings", response_model=schemas.BookingResponse)
def create_booking(
    booking_in: schemas.BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> Any:
    booking = crud_booking.create_booking(db, booking_in)
    background_tasks.add_task(
        send_new_booking_email,
        booking.helper_email,
        booking.helper_name,
        booking.user_name,
        booking.date.isoformat(),
        booking.start_time,
        booking.end_time,
    )
    return booking


def _transition(
    db: Session,
    booking_id: int,
    new_status: BookingStatus,
    background_tasks: Optional[BackgroundTasks] = None,
) -> Any:
    booking = crud_booking.transition(db, booking_id, new_status)
    if background_tasks is not None:
        background_tasks.add_task(
            send_booking_status_email,
            booking.user_email,
            booking.user_name,
            booking.helper_name,
            booking.date.isoformat(),
            new_status.value,
        )
    return booking


@router.put("/bookings/{booking_id}/approve", response_model=schemas.BookingResponse)
def approve_booking(booking_id: int, background_tasks: BackgroundTasks, db: Session = Depends(get_db)) -> Any:
    return _transition(db, booking_id, BookingStatus.CONFIRMED, background_tasks)


@router.put("/bookings/{booking_id}/reject", response_model=schemas.BookingResponse)
def reject_booking(booking_id: int, background_tasks: BackgroundTasks, db: Session = Depends(get_db)) -> Any:
    return _transition(db, booking_id, BookingStatus.REJECTED, background_tasks)


@router.put("/bookings/{booking_id}/cancel", response_model=schemas.BookingResponse)
def cancel_booking(booking_id: int, db: Session = Depends(get_db)) -> Any:
    return _transition(db, booking_id, BookingStatus.CANCELLED)


@router.delete("/bookings/{booking_id}", response_model=schemas.MessageResponse)
def delete_booking(booking_id: int, db: Session = Depends(get_db)) -> Any:
    review_linker.delete_booking(db, booking_id)
    return {"message": "Booking deleted"}
