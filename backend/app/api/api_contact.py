from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Any, List

from .. import schemas
from ..crud import crud_contact
from ..database import get_db
from ..utils import NotFoundError

router = APIRouter(tags=["contact"])


@router.post("/contact", response_model=schemas.MessageResponse)
def create_contact_message(message_in: schemas.ContactCreate, db: Session = Depends(get_db)) -> Any:
    crud_contact.create_message(db, message_in)
    return {"message": "Message received successfully!"}


@router.get("/contact", response_model=List[schemas.ContactResponse])
def list_contact_messages(db: Session = Depends(get_db)) -> Any:
    return crud_contact.list_messages(db)


@router.delete("/contact/{message_id}", response_model=schemas.MessageResponse)
def delete_contact_message(message_id: int, db: Session = Depends(get_db)) -> Any:
    if not crud_contact.delete_message(db, message_id):
        raise NotFoundError("Message not found.", {"id": "not_found"})
    return {"message": "Message deleted"}
