from fastapi import Depends, status
from sqlalchemy.orm import Session

from .. import models
from ..crud import helper_listing as crud_helper_listing
from ..database import get_db
from ..utils import error_response


def get_listing_or_404(display_id: int, db: Session = Depends(get_db)) -> models.HelperListing:
    listing = crud_helper_listing.get_listing_by_display_id(db, display_id)
    if listing is None:
        raise error_response("Helper not found.", {"id": "not_found"}, status.HTTP_404_NOT_FOUND)
    return listing
