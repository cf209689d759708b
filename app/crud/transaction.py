"""
CRUD operations for Transaction model
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.transaction import Transaction
from app.models.user import User

PAGE_SIZE = 10


class CRUDTransaction:
    """CRUD operations for Transaction"""

    def get_by_slug(self, db: Session, slug: str) -> Optional[Transaction]:
        return db.query(Transaction).filter(Transaction.slug == slug).first()

    def slug_exists(self, db: Session, slug: str) -> bool:
        return db.query(Transaction.id).filter(Transaction.slug == slug).first() is not None

    def get_by_username(self, db: Session, username: str) -> List[Transaction]:
        """Transactions owned by username, newest first; empty if no such user"""
        return db.query(Transaction).join(
            User, Transaction.user_id == User.id
        ).filter(
            User.username == username
        ).order_by(Transaction.id.desc()).all()

    def get_page(self, db: Session, page: int = 0) -> List[Transaction]:
        """One page of all transactions, newest first"""
        return db.query(Transaction).order_by(
            Transaction.id.desc()
        ).offset(max(0, page) * PAGE_SIZE).limit(PAGE_SIZE).all()

    def create(self, db: Session, data: Dict[str, Any]) -> Transaction:
        """Insert one transaction and commit"""
        db_obj = Transaction(**data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, db_obj: Transaction, data: Dict[str, Any]) -> Transaction:
        for field, value in data.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, db_obj: Transaction) -> None:
        db.delete(db_obj)
        db.commit()


transaction = CRUDTransaction()
