from pydantic import EmailStr
from typing import Optional

from ..models.helper_listing import ListingStatus
from .base import CamelModel


class ListingFields(CamelModel):
    name: Optional[str] = None
    image: Optional[str] = None
    service_category: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None


class ListingCreate(ListingFields):
    email: EmailStr


class ListingUpdate(ListingFields):
    """Descriptive fields only; rating, reviews and status have their own writers."""


class ListingResponse(CamelModel):
    id: int
    display_id: int
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    service_category: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[str] = None
    rating: float
    reviews: int
    status: ListingStatus
