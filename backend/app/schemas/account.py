# backend/app/schemas/account.py

from pydantic import EmailStr, Field
from typing import Optional

from ..models.account import AccountRole
from .base import CamelModel


class AccountRegister(CamelModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    # Admins are only ever made through a role change.
    role: Optional[AccountRole] = AccountRole.USER


class AccountLogin(CamelModel):
    email: EmailStr
    password: str


class ExternalLogin(CamelModel):
    """Identity already verified by an external provider (Google)."""

    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None


class AccountUpdate(CamelModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None


class RoleUpdate(CamelModel):
    new_role: AccountRole


class AccountResponse(CamelModel):
    id: int
    full_name: Optional[str] = None
    email: str
    role: AccountRole
    image: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None


class AccountMessageResponse(CamelModel):
    message: str
    user: AccountResponse
