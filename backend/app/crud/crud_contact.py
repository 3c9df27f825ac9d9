from sqlalchemy.orm import Session
from typing import List

from .. import models, schemas


def create_message(db: Session, message_in: schemas.ContactCreate) -> models.ContactMessage:
    db_message = models.ContactMessage(**message_in.model_dump())
    db.add(db_message)
    db.commit()
    db.refresh(db_message)
    return db_message


def list_messages(db: Session) -> List[models.ContactMessage]:
    return (
        db.query(models.ContactMessage)
        .order_by(models.ContactMessage.created_at.desc(), models.ContactMessage.id.desc())
        .all()
    )


def delete_message(db: Session, message_id: int) -> bool:
    deleted = db.query(models.ContactMessage).filter(models.ContactMessage.id == message_id).delete()
    db.commit()
    return bool(deleted)
