from pydantic import Field
from typing import Any, Optional
from datetime import datetime

from .base import CamelModel


class ReviewSubmission(CamelModel):
    """Raw review payload.

    Fields stay loosely typed so the review linker reports missing or
    malformed values itself, listing every missing field at once.
    """

    helper_id: Any = None
    rating: Any = None
    review_text: Any = None
    booking_id: Any = None
    reviewer_name: Any = None


class ReviewUpdate(CamelModel):
    rating: Any = None
    review_text: Optional[str] = None


class ReviewResponse(CamelModel):
    id: int
    helper_id: int
    booking_id: int
    reviewer_name: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    review_text: Optional[str] = None
    created_at: Optional[datetime] = None
