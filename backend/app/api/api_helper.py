import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from .. import models, schemas
from ..crud import helper_listing as crud_helper_listing
from ..database import atomic, get_db
from ..services import listing_sync, rating_aggregator
from ..services.media import HELPER_PROFILE_FOLDER, store_image
from ..utils import NotFoundError
from .dependencies import get_listing_or_404

router = APIRouter(tags=["helpers"])
logger = logging.getLogger(__name__)


@router.get("/helpers", response_model=List[schemas.ListingResponse])
def list_approved_helpers(db: Session = Depends(get_db)) -> Any:
    return crud_helper_listing.list_listings(db, approved_only=True)


@router.get("/admin/helpers", response_model=List[schemas.ListingResponse])
def list_all_helpers(db: Session = Depends(get_db)) -> Any:
    return crud_helper_listing.list_listings(db)


@router.get("/helpers/{display_id}", response_model=schemas.ListingResponse)
def read_helper(listing: models.HelperListing = Depends(get_listing_or_404)) -> Any:
    return listing


@router.post("/helpers", response_model=schemas.ListingResponse)
def create_helper(listing_in: schemas.ListingCreate, db: Session = Depends(get_db)) -> Any:
    """Submit a helper application; it stays Pending until approved."""
    return listing_sync.create_listing(
        db,
        listing_in.email,
        listing_in.model_dump(exclude={"email"}, exclude_none=True),
    )


@router.put("/helpers/{display_id}/approve", response_model=schemas.ListingResponse)
def approve_helper(display_id: int, db: Session = Depends(get_db)) -> Any:
    return listing_sync.approve_listing(db, display_id)


@router.put("/helpers/{display_id}", response_model=schemas.ListingResponse)
def update_helper(display_id: int, listing_in: schemas.ListingUpdate, db: Session = Depends(get_db)) -> Any:
    return listing_sync.update_listing(db, display_id, listing_in.model_dump(exclude_unset=True))


@router.delete("/helpers/{display_id}", response_model=schemas.MessageResponse)
def delete_helper(display_id: int, db: Session = Depends(get_db)) -> Any:
    listing_sync.remove_listing(db, display_id)
    return {"message": "Helper and user role deleted/reverted."}


@router.post("/admin/helpers/{display_id}/recompute-rating", response_model=schemas.ListingResponse)
def recompute_helper_rating(
    listing: models.HelperListing = Depends(get_listing_or_404),
    db: Session = Depends(get_db),
) -> Any:
    """Rebuild rating and review count from the stored reviews."""
    with atomic(db):
        rating_aggregator.recompute(db, listing.id)
    db.refresh(listing)
    return listing


@router.get("/helper-profile/{email}", response_model=schemas.ListingResponse)
def read_helper_profile(email: str, db: Session = Depends(get_db)) -> Any:
    listing = crud_helper_listing.get_listing_by_email(db, email)
    if listing is None:
        raise NotFoundError("Helper profile not found.", {"email": "not_found"})
    return listing


@router.put("/helper-profile/{email}", response_model=schemas.ListingResponse)
async def update_helper_profile(
    email: str,
    service_category: Optional[str] = Form(None, alias="serviceCategory"),
    price: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None, alias="imageURL"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
) -> Any:
    if crud_helper_listing.get_listing_by_email(db, email) is None:
        raise NotFoundError("Helper profile not found.", {"email": "not_found"})
    new_image = image_url
    if image is not None and image.filename:
        new_image = await store_image(image, HELPER_PROFILE_FOLDER, email)
    fields = {
        "service_category": service_category,
        "price": price,
        "location": location,
        "experience": experience,
        "bio": bio,
        "description": description,
    }
    return listing_sync.update_helper_profile(db, email, fields, image_url=new_image)
