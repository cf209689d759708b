"""
CRUD operations for User model (the credential store)
"""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.user import User


class CRUDUser:
    """CRUD operations for User"""

    def get(self, db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.get(User, user_id)

    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def get_by_username_or_email(
        self,
        db: Session,
        username: str,
        email: str
    ) -> Optional[User]:
        """Find a user clashing with either identifier"""
        return db.query(User).filter(
            or_(User.username == username, User.email == email)
        ).first()

    def get_multi(self, db: Session) -> List[User]:
        """Get all users ordered by username"""
        return db.query(User).order_by(User.username).all()

    def create(
        self,
        db: Session,
        username: str,
        email: str,
        password: str,
        admin: bool = False
    ) -> User:
        """Create user; the password is hashed before it touches the session"""
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            admin=admin
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user


user = CRUDUser()
