import logging
from typing import Any, List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from .. import schemas
from ..crud import account as crud_account
from ..database import get_db
from ..services import listing_sync
from ..services.media import AVATAR_FOLDER, store_image
from ..utils import error_response

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/users", response_model=List[schemas.AccountResponse])
def list_users(db: Session = Depends(get_db)) -> Any:
    return crud_account.list_accounts(db)


@router.put("/users/{email}", response_model=schemas.AccountMessageResponse)
def update_user(email: str, profile_in: schemas.AccountUpdate, db: Session = Depends(get_db)) -> Any:
    account = listing_sync.update_account_profile(db, email, profile_in.model_dump(exclude_unset=True))
    return {"message": "Profile updated successfully", "user": account}


@router.put("/users/{email}/image-upload", response_model=schemas.AccountMessageResponse)
async def upload_user_image(
    email: str,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> Any:
    """Upload a new avatar; a helper's listing shows it as well."""
    if crud_account.get_account_by_email(db, email) is None:
        raise error_response("User not found.", {"email": "not_found"}, status.HTTP_404_NOT_FOUND)
    url = await store_image(image, AVATAR_FOLDER, email)
    account = listing_sync.update_account_profile(db, email, {"image": url})
    return {"message": "Image updated successfully", "user": account}


@router.put("/admin/users/{email}/role", response_model=schemas.AccountMessageResponse)
def change_role(email: str, role_in: schemas.RoleUpdate, db: Session = Depends(get_db)) -> Any:
    account = listing_sync.set_role(db, email, role_in.new_role)
    return {"message": f"Role updated to {account.role.value} successfully.", "user": account}


@router.delete("/users/{email}", response_model=schemas.MessageResponse)
def delete_user(email: str, db: Session = Depends(get_db)) -> Any:
    listing_sync.delete_account(db, email)
    return {"message": "Account deleted successfully"}
