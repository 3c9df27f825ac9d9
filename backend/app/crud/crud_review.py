from sqlalchemy.orm import Session
from typing import List, Optional

from .. import models


class CRUDReview:
    def get_review(self, db: Session, review_id: int) -> Optional[models.Review]:
        return db.query(models.Review).filter(models.Review.id == review_id).first()

    def get_review_by_booking(self, db: Session, booking_id: int) -> Optional[models.Review]:
        # A booking has at most one review
        return db.query(models.Review).filter(models.Review.booking_id == booking_id).first()

    def get_reviews_by_helper(self, db: Session, helper_id: int) -> List[models.Review]:
        return (
            db.query(models.Review)
            .filter(models.Review.helper_id == helper_id)
            .order_by(models.Review.created_at.desc(), models.Review.id.desc())
            .all()
        )


review = CRUDReview()
