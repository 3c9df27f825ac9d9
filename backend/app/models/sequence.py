from sqlalchemy import Column, Integer, String

from ..database import Base


class Sequence(Base):
    """Named counters handing out small sequential numbers."""

    __tablename__ = "sequences"

    name          = Column(String, primary_key=True)
    current_value = Column(Integer, nullable=False, default=0)
