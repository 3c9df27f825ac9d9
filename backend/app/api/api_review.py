from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, List

from .. import schemas
from ..crud import review as crud_review
from ..database import get_db
from ..services import review_linker

router = APIRouter(tags=["reviews"])


@router.post(
    "/reviews",
    response_model=schemas.ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_review(review_in: schemas.ReviewSubmission, db: Session = Depends(get_db)) -> Any:
    """Review a Confirmed booking. Each booking can be reviewed once."""
    return review_linker.submit_review(db, review_in.model_dump(exclude_none=True))


@router.get("/reviews/helper/{helper_id}", response_model=List[schemas.ReviewResponse])
def list_reviews_for_helper(helper_id: str, db: Session = Depends(get_db)) -> Any:
    """Newest first."""
    return crud_review.get_reviews_by_helper(db, review_linker.parse_identity(helper_id))


@router.put("/reviews/{review_id}", response_model=schemas.ReviewResponse)
def update_review(review_id: int, review_in: schemas.ReviewUpdate, db: Session = Depends(get_db)) -> Any:
    return review_linker.update_review(db, review_id, review_in.rating, review_in.review_text)


@router.delete("/reviews/{review_id}", response_model=schemas.MessageResponse)
def delete_review(review_id: int, db: Session = Depends(get_db)) -> Any:
    review_linker.delete_review(db, review_id)
    return {"message": "Review deleted"}
