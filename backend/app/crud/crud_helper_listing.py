from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional

from .. import models
from ..utils.auth import normalize_email
from .crud_sequence import next_value

DISPLAY_ID_SEQUENCE = "helper_listing_display_id"


class CRUDHelperListing:
    def get_listing(self, db: Session, listing_id: int) -> Optional[models.HelperListing]:
        return db.query(models.HelperListing).filter(models.HelperListing.id == listing_id).first()

    def get_listing_by_display_id(self, db: Session, display_id: int) -> Optional[models.HelperListing]:
        return (
            db.query(models.HelperListing)
            .filter(models.HelperListing.display_id == display_id)
            .first()
        )

    def get_listing_by_email(self, db: Session, email: str) -> Optional[models.HelperListing]:
        return (
            db.query(models.HelperListing)
            .filter(models.HelperListing.email == normalize_email(email))
            .first()
        )

    def list_listings(self, db: Session, approved_only: bool = False) -> List[models.HelperListing]:
        query = db.query(models.HelperListing)
        if approved_only:
            query = query.filter(models.HelperListing.status == models.ListingStatus.APPROVED)
        return query.order_by(models.HelperListing.display_id).all()

    def next_display_id(self, db: Session) -> int:
        # The first allocation continues after the highest id already issued.
        return next_value(
            db,
            DISPLAY_ID_SEQUENCE,
            seed=lambda: db.query(func.max(models.HelperListing.display_id)).scalar() or 0,
        )


helper_listing = CRUDHelperListing()
