"""Keep a helper listing's rating and review count in line with its reviews.

``recompute`` always derives both numbers from the full review set and
overwrites them, so running it again after any partial failure (or twice in a
row) converges on the same values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app import models

logger = logging.getLogger(__name__)

DEFAULT_RATING = 5.0
_ONE_PLACE = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    helper_id: int
    rating: float
    reviews: int


def average_rating(total: int, count: int) -> float:
    """Mean of ``count`` ratings summing to ``total``, rounded half-up to 0.1."""
    if count <= 0:
        return DEFAULT_RATING
    mean = Decimal(int(total)) / Decimal(int(count))
    return float(mean.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP))


def recompute(db: Session, helper_id: int) -> RatingSummary:
    """Rewrite ``rating``/``reviews`` of listing ``helper_id`` from its reviews.

    Does not commit; callers include it in their own unit of work. A missing
    listing is not an error: the summary is still returned, nothing is written.
    """
    total, count = (
        db.query(func.coalesce(func.sum(models.Review.rating), 0), func.count(models.Review.id))
        .filter(models.Review.helper_id == helper_id)
        .one()
    )
    summary = RatingSummary(helper_id=helper_id, rating=average_rating(total, count), reviews=int(count))

    listing = db.query(models.HelperListing).filter(models.HelperListing.id == helper_id).first()
    if listing is None:
        logger.warning("rating.recompute listing missing helper_id=%s", helper_id)
        return summary
    listing.rating = summary.rating
    listing.reviews = summary.reviews
    db.flush()
    logger.info(
        "rating.recompute helper_id=%s rating=%.1f reviews=%d",
        helper_id,
        summary.rating,
        summary.reviews,
    )
    return summary
