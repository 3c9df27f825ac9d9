# backend/app/models/account.py

from sqlalchemy import Column, Integer, String, Text, Enum
from .base import BaseModel
import enum


class AccountRole(str, enum.Enum):
    """Enumeration of all supported account roles."""

    USER = "user"
    HELPER = "helper"
    ADMIN = "admin"


class Account(BaseModel):
    __tablename__ = "accounts"

    id        = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=True)
    email     = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash; NULL for accounts created through an external identity login
    password  = Column(String, nullable=True)
    role      = Column(
        Enum(AccountRole, name="accountrole", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AccountRole.USER,
    )
    image     = Column(String, nullable=True)
    phone     = Column(String, nullable=True)
    address   = Column(String, nullable=True)
    bio       = Column(Text, nullable=True)
