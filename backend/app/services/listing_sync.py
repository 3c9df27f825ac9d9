"""Keep account roles and helper listings in lockstep.

An account with role ``helper`` owns exactly one listing (matched by email);
accounts with any other role own none. The only exception is a Pending listing
submitted through ``create_listing``: it is an application and the owner stays
a plain user until ``approve_listing`` runs.

Every public function here is one unit of work: it commits on success and
rolls back everything it wrote on failure.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import models
from app.core.config import settings
from app.crud import crud_account, crud_helper_listing
from app.database import atomic
from app.models import AccountRole, ListingStatus
from app.utils.auth import normalize_email
from app.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Listing columns that mirror the owning account.
_LISTING_FROM_ACCOUNT = {
    "name": "full_name",
    "image": "image",
    "location": "address",
    "bio": "bio",
}

_EDITABLE_LISTING_FIELDS = (
    "name",
    "image",
    "service_category",
    "price",
    "description",
    "location",
    "bio",
    "experience",
)

_EDITABLE_ACCOUNT_FIELDS = ("full_name", "phone", "address", "bio", "image")


def copy_account_to_listing(account: models.Account, listing: models.HelperListing) -> None:
    """Refresh the denormalized account fields held on ``listing``.

    Empty account values never blank out what the listing already has.
    """
    listing.email = account.email
    for listing_attr, account_attr in _LISTING_FROM_ACCOUNT.items():
        value = getattr(account, account_attr)
        if value:
            setattr(listing, listing_attr, value)


def _require_account(db: Session, email: str) -> models.Account:
    account = crud_account.account.get_account_by_email(db, email)
    if account is None:
        raise NotFoundError("Account not found.", {"email": "not_found"})
    return account


def _require_listing(db: Session, display_id: int) -> models.HelperListing:
    listing = crud_helper_listing.helper_listing.get_listing_by_display_id(db, display_id)
    if listing is None:
        raise NotFoundError("Helper listing not found.", {"id": "not_found"})
    return listing


def _new_listing(db: Session, email: str, status: ListingStatus, **fields: Any) -> models.HelperListing:
    listing = models.HelperListing(
        display_id=crud_helper_listing.helper_listing.next_display_id(db),
        email=normalize_email(email),
        status=status,
        rating=5.0,
        reviews=0,
        **fields,
    )
    db.add(listing)
    try:
        db.flush()
    except IntegrityError as exc:
        # Unique email or display id taken by a concurrent writer
        raise ConflictError("Helper listing already exists.", {"email": "listing_exists"}) from exc
    return listing


def _promotion_listing(db: Session, account: models.Account, auto_approve: bool) -> models.HelperListing:
    listing = _new_listing(
        db,
        account.email,
        ListingStatus.APPROVED if auto_approve else ListingStatus.PENDING,
        name=account.full_name,
        service_category=settings.DEFAULT_SERVICE_CATEGORY,
        price=settings.DEFAULT_HELPER_PRICE,
        experience=settings.DEFAULT_HELPER_EXPERIENCE,
        location=settings.DEFAULT_HELPER_LOCATION,
        bio=settings.DEFAULT_HELPER_BIO,
        description=settings.DEFAULT_HELPER_DESCRIPTION,
        image=settings.placeholder_avatar(account.full_name),
    )
    copy_account_to_listing(account, listing)
    return listing


def _ensure_listing_for_helper(db: Session, account: models.Account, auto_approve: bool) -> models.HelperListing:
    listing = crud_helper_listing.helper_listing.get_listing_by_email(db, account.email)
    if listing is None:
        listing = _promotion_listing(db, account, auto_approve)
        logger.info(
            "listing.created display_id=%s email=%s status=%s",
            listing.display_id,
            listing.email,
            listing.status.value,
        )
    elif listing.status == ListingStatus.PENDING:
        listing.status = ListingStatus.APPROVED
    return listing


def _drop_listing(db: Session, email: str) -> int:
    return (
        db.query(models.HelperListing)
        .filter(models.HelperListing.email == normalize_email(email))
        .delete(synchronize_session="fetch")
    )


def _parse_role(new_role: AccountRole | str) -> AccountRole:
    try:
        return AccountRole(new_role)
    except ValueError as exc:
        raise ValidationError("Unknown role.", {"newRole": "invalid"}) from exc


def _apply_role(db: Session, account: models.Account, role: AccountRole, auto_approve: bool) -> None:
    account.role = role
    if role == AccountRole.HELPER:
        _ensure_listing_for_helper(db, account, auto_approve)
    elif _drop_listing(db, account.email):
        logger.info("listing.removed email=%s reason=role_change", account.email)


def set_role(
    db: Session,
    email: str,
    new_role: AccountRole | str,
    *,
    auto_approve: Optional[bool] = None,
) -> models.Account:
    """Change an account's role and create, approve or delete its listing."""
    role = _parse_role(new_role)
    if auto_approve is None:
        auto_approve = settings.AUTO_APPROVE_ON_PROMOTION

    with atomic(db):
        account = _require_account(db, email)
        previous = account.role
        _apply_role(db, account, role, auto_approve)
    db.refresh(account)
    logger.info("account.role email=%s from=%s to=%s", account.email, previous.value, role.value)
    return account


def register_account(
    db: Session,
    *,
    email: str,
    full_name: Optional[str],
    password: str,
    role: AccountRole | str = AccountRole.USER,
) -> models.Account:
    """Create an account and, for a helper, its listing in one unit of work.

    A failure anywhere leaves no account behind.
    """
    role = _parse_role(role)
    with atomic(db):
        account = crud_account.account.create_account(
            db, email=email, full_name=full_name, password=password
        )
        if role != AccountRole.USER:
            _apply_role(db, account, role, settings.AUTO_APPROVE_ON_PROMOTION)
    db.refresh(account)
    logger.info("account.registered email=%s role=%s", account.email, account.role.value)
    return account


def create_listing(db: Session, email: str, fields: Mapping[str, Any]) -> models.HelperListing:
    """Submit a Pending listing (a helper application) for an existing account."""
    with atomic(db):
        account = _require_account(db, email)
        if crud_helper_listing.helper_listing.get_listing_by_email(db, account.email) is not None:
            raise ConflictError("Helper listing already exists.", {"email": "listing_exists"})
        values = {k: v for k, v in fields.items() if k in _EDITABLE_LISTING_FIELDS and v is not None}
        values.setdefault("name", account.full_name)
        values.setdefault("image", account.image or settings.placeholder_avatar(values.get("name")))
        # An account that already is a helper gets an approved listing so the
        # one-listing-per-helper rule holds immediately.
        status = ListingStatus.APPROVED if account.role == AccountRole.HELPER else ListingStatus.PENDING
        listing = _new_listing(db, account.email, status, **values)
    db.refresh(listing)
    logger.info("listing.created display_id=%s email=%s status=%s", listing.display_id, listing.email, status.value)
    return listing


def approve_listing(db: Session, display_id: int) -> models.HelperListing:
    """Approve a listing and make its owner a helper."""
    with atomic(db):
        listing = _require_listing(db, display_id)
        account = _require_account(db, listing.email)
        listing.status = ListingStatus.APPROVED
        account.role = AccountRole.HELPER
        copy_account_to_listing(account, listing)
    db.refresh(listing)
    logger.info("listing.approved display_id=%s email=%s", listing.display_id, listing.email)
    return listing


def remove_listing(db: Session, display_id: int) -> None:
    """Delete a listing; a helper owner reverts to a plain user."""
    with atomic(db):
        listing = _require_listing(db, display_id)
        email = listing.email
        db.delete(listing)
        account = crud_account.account.get_account_by_email(db, email)
        if account is not None and account.role == AccountRole.HELPER:
            account.role = AccountRole.USER
    logger.info("listing.removed display_id=%s email=%s", display_id, email)


def update_listing(db: Session, display_id: int, fields: Mapping[str, Any]) -> models.HelperListing:
    """Edit descriptive listing fields. Rating, reviews and status are never touched."""
    with atomic(db):
        listing = _require_listing(db, display_id)
        for key, value in fields.items():
            if key in _EDITABLE_LISTING_FIELDS:
                setattr(listing, key, value)
    db.refresh(listing)
    return listing


def update_account_profile(db: Session, email: str, fields: Mapping[str, Any]) -> models.Account:
    """Edit an account's profile and re-sync its listing when it is a helper."""
    values = {k: v for k, v in fields.items() if k in _EDITABLE_ACCOUNT_FIELDS}
    if not values:
        raise ValidationError("Request body is empty.", {"body": "empty"})
    with atomic(db):
        account = _require_account(db, email)
        for key, value in values.items():
            setattr(account, key, value)
        if account.role == AccountRole.HELPER:
            listing = crud_helper_listing.helper_listing.get_listing_by_email(db, account.email)
            if listing is not None:
                copy_account_to_listing(account, listing)
    db.refresh(account)
    return account


def update_helper_profile(
    db: Session,
    email: str,
    fields: Mapping[str, Any],
    image_url: Optional[str] = None,
) -> models.HelperListing:
    """Edit a listing by owner email; a new image is copied back to the account
    together with the listing's bio and location."""
    with atomic(db):
        listing = crud_helper_listing.helper_listing.get_listing_by_email(db, email)
        if listing is None:
            raise NotFoundError("Helper profile not found.", {"email": "not_found"})
        for key, value in fields.items():
            if key in _EDITABLE_LISTING_FIELDS and value is not None:
                setattr(listing, key, value)
        if image_url:
            listing.image = image_url
            account = crud_account.account.get_account_by_email(db, email)
            if account is not None:
                account.image = image_url
                account.bio = listing.bio
                account.address = listing.location
    db.refresh(listing)
    return listing


def delete_account(db: Session, email: str) -> None:
    """Delete an account together with its listing."""
    with atomic(db):
        account = _require_account(db, email)
        _drop_listing(db, account.email)
        db.delete(account)
    logger.info("account.deleted email=%s", normalize_email(email))
