import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import schemas
from ..crud import account as crud_account
from ..database import atomic, get_db
from ..models import AccountRole
from ..services import listing_sync
from ..utils import error_response
from ..utils.auth import verify_password

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=schemas.AccountMessageResponse)
def register(user_in: schemas.AccountRegister, db: Session = Depends(get_db)):
    if user_in.role == AccountRole.ADMIN:
        raise error_response(
            "Admin accounts cannot be self-registered.",
            {"role": "forbidden"},
            status.HTTP_400_BAD_REQUEST,
        )
    if crud_account.get_account_by_email(db, user_in.email):
        raise error_response("Email already exists.", {"email": "taken"}, status.HTTP_400_BAD_REQUEST)
    try:
        account = listing_sync.register_account(
            db,
            email=user_in.email,
            full_name=user_in.full_name,
            password=user_in.password,
            role=user_in.role or AccountRole.USER,
        )
    except IntegrityError:
        raise error_response("Email already exists.", {"email": "taken"}, status.HTTP_400_BAD_REQUEST)
    return {"message": "Registration successful!", "user": account}


@router.post("/login", response_model=schemas.AccountMessageResponse)
def login(credentials: schemas.AccountLogin, db: Session = Depends(get_db)):
    account = crud_account.get_account_by_email(db, credentials.email)
    if account is None or not verify_password(credentials.password, account.password):
        logger.warning("Failed login for %s", credentials.email)
        raise error_response("Invalid credentials", {}, status.HTTP_401_UNAUTHORIZED)
    return {"message": "Login successful", "user": account}


@router.post("/google-login", response_model=schemas.AccountMessageResponse)
def google_login(identity: schemas.ExternalLogin, db: Session = Depends(get_db)):
    account = crud_account.get_account_by_email(db, identity.email)
    if account is None:
        with atomic(db):
            account = crud_account.create_account(
                db,
                email=identity.email,
                full_name=identity.name,
                image=identity.image,
            )
        db.refresh(account)
        logger.info("account.registered email=%s via=google", account.email)
    elif identity.image and account.image != identity.image:
        # Goes through the profile path so a helper's listing picks it up too
        account = listing_sync.update_account_profile(db, account.email, {"image": identity.image})
    return {"message": "Google Login Success", "user": account}
