from sqlalchemy import Column, Integer, String, Text

from .base import BaseModel


class ContactMessage(BaseModel):
    __tablename__ = "contact_messages"

    id      = Column(Integer, primary_key=True, index=True)
    name    = Column(String, nullable=True)
    email   = Column(String, nullable=True)
    subject = Column(String, nullable=True)
    message = Column(Text, nullable=True)
