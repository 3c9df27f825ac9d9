from sqlalchemy import BigInteger, Column, Integer, String, Text

from .base import BaseModel

class Review(BaseModel):
    __tablename__ = "reviews"

    id            = Column(Integer, primary_key=True, index=True)
    helper_id     = Column(Integer, index=True, nullable=False)
    # A booking has at most one review
    booking_id    = Column(BigInteger, unique=True, nullable=False)
    reviewer_name = Column(String, nullable=True)
    rating        = Column(Integer, nullable=False)
    review_text   = Column(Text, nullable=True)
