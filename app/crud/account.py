"""
CRUD operations for Account model
"""
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.user import User


class CRUDAccount:
    """CRUD operations for Account"""

    def get_owned(self, db: Session, account_id: int, user_id: int) -> Optional[Account]:
        """Get account only if it belongs to user_id"""
        return db.query(Account).filter(
            Account.id == account_id,
            Account.user_id == user_id
        ).first()

    def get_by_user(self, db: Session, user_id: int) -> List[Account]:
        return db.query(Account).filter(
            Account.user_id == user_id
        ).order_by(Account.name).all()

    def get_all_with_owner(self, db: Session) -> List[Tuple[Account, Optional[str]]]:
        """All accounts with their owner's username"""
        return db.query(Account, User.username).outerjoin(
            User, Account.user_id == User.id
        ).order_by(Account.name).all()


account = CRUDAccount()
