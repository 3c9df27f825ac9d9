from datetime import date as Date, datetime
from pydantic import EmailStr
from typing import Optional

from ..models.booking_status import BookingStatus
from .base import CamelModel


class BookingCreate(CamelModel):
    user_email: EmailStr
    helper_id: int
    helper_name: Optional[str] = None
    helper_email: Optional[EmailStr] = None
    date: Date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class BookingResponse(CamelModel):
    id: int
    user_email: str
    user_name: Optional[str] = None
    helper_id: Optional[int] = None
    helper_name: Optional[str] = None
    helper_email: Optional[str] = None
    date: Date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    status: BookingStatus
    is_reviewed: bool
    created_at: Optional[datetime] = None
