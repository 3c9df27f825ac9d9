from datetime import datetime
from pydantic import EmailStr
from typing import Optional

from .base import CamelModel


class ContactCreate(CamelModel):
    name: str
    email: EmailStr
    subject: Optional[str] = None
    message: str


class ContactResponse(ContactCreate):
    id: int
    created_at: Optional[datetime] = None
