from sqlalchemy.orm import Session
from typing import List, Optional

from .. import models
from ..core.config import settings
from ..utils.auth import get_password_hash, normalize_email


class CRUDAccount:
    def get_account(self, db: Session, account_id: int) -> Optional[models.Account]:
        return db.query(models.Account).filter(models.Account.id == account_id).first()

    def get_account_by_email(self, db: Session, email: str) -> Optional[models.Account]:
        return db.query(models.Account).filter(models.Account.email == normalize_email(email)).first()

    def list_accounts(self, db: Session) -> List[models.Account]:
        return db.query(models.Account).order_by(models.Account.id).all()

    def create_account(
        self,
        db: Session,
        *,
        email: str,
        full_name: Optional[str],
        password: Optional[str] = None,
        image: Optional[str] = None,
    ) -> models.Account:
        """Add a plain user account to the session without committing."""
        db_account = models.Account(
            email=normalize_email(email),
            full_name=full_name,
            password=get_password_hash(password) if password else None,
            role=models.AccountRole.USER,
            image=image or settings.placeholder_avatar(full_name),
        )
        db.add(db_account)
        db.flush()
        return db_account


account = CRUDAccount()
