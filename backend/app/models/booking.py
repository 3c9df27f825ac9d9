# backend/app/models/booking.py

from sqlalchemy import BigInteger, Boolean, Column, Date, Enum, Integer, String, Text

from .base import BaseModel
from .booking_status import BookingStatus

class Booking(BaseModel):
    __tablename__ = "bookings"

    # Epoch milliseconds at creation, assigned by the application
    id          = Column(BigInteger, primary_key=True, autoincrement=False)
    user_email  = Column(String, index=True, nullable=False)
    user_name   = Column(String, nullable=True)
    helper_id   = Column(Integer, index=True, nullable=True)
    helper_name = Column(String, nullable=True)
    helper_email = Column(String, index=True, nullable=True)
    date        = Column(Date, nullable=False)
    start_time  = Column(String, nullable=True)
    end_time    = Column(String, nullable=True)
    address     = Column(String, nullable=True)
    phone       = Column(String, nullable=True)
    notes       = Column(Text, nullable=True)
    status      = Column(
        Enum(BookingStatus, name="bookingstatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    is_reviewed = Column(Boolean, nullable=False, default=False)
