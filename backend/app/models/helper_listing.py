# backend/app/models/helper_listing.py

import enum

from sqlalchemy import Column, Enum, Float, Integer, String, Text

from .base import BaseModel


class ListingStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"


class HelperListing(BaseModel):
    """Published helper profile, owned by the account with the same email.

    ``rating`` and ``reviews`` are written only by the rating aggregator.
    """

    __tablename__ = "helper_listings"

    id               = Column(Integer, primary_key=True, index=True)
    # Small sequential number shown in URLs (/helpers/3)
    display_id       = Column(Integer, unique=True, index=True, nullable=False)
    # Denormalized from the owning account
    email            = Column(String, unique=True, index=True, nullable=False)
    name             = Column(String, nullable=True)
    image            = Column(String, nullable=True)

    service_category = Column(String, nullable=True)
    price            = Column(String, nullable=True)
    description      = Column(Text, nullable=True)
    location         = Column(String, nullable=True)
    bio              = Column(Text, nullable=True)
    experience       = Column(String, nullable=True)

    rating           = Column(Float, nullable=False, default=5.0)
    reviews          = Column(Integer, nullable=False, default=0)
    status           = Column(
        Enum(ListingStatus, name="listingstatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ListingStatus.PENDING,
        index=True,
    )
