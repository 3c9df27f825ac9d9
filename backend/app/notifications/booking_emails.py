from __future__ import annotations

import logging
from html import escape
from typing import Optional

from app.utils.email import send_email

logger = logging.getLogger(__name__)


def send_new_booking_email(
    helper_email: Optional[str],
    helper_name: Optional[str],
    user_name: Optional[str],
    date: str,
    start_time: Optional[str],
    end_time: Optional[str],
) -> bool:
    """Tell a helper that a new booking request is waiting for them."""
    if not helper_email:
        logger.error("Failed to send booking email: helper email missing")
        return False
    window = " - ".join(t for t in (start_time, end_time) if t)
    body = (
        f"<p>Hi {escape(helper_name or 'there')},</p>"
        f"<p>{escape(user_name or 'A user')} requested a booking on "
        f"<strong>{escape(date)}</strong> {escape(window)}.</p>"
        "<p>Open your dashboard to confirm or reject it.</p>"
    )
    return send_email(helper_email, "New booking request", body)


def send_booking_status_email(
    user_email: Optional[str],
    user_name: Optional[str],
    helper_name: Optional[str],
    date: str,
    status: str,
) -> bool:
    """Tell the booking user that the helper confirmed or rejected it."""
    if not user_email:
        logger.error("Failed to send booking status email: user email missing")
        return False
    body = (
        f"<p>Hi {escape(user_name or 'there')},</p>"
        f"<p>Your booking with {escape(helper_name or 'your helper')} on "
        f"<strong>{escape(date)}</strong> is now <strong>{escape(status)}</strong>.</p>"
    )
    return send_email(user_email, f"Booking {status.lower()}", body)
