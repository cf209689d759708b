"""
User model
"""
from enum import Enum
from typing import List, TYPE_CHECKING

from sqlalchemy import String, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.account import Account
    from app.models.budget import Budget
    from app.models.transaction import Transaction


class Role(str, Enum):
    """Privilege tier, persisted as the users.admin flag"""
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def from_admin_flag(cls, admin: bool) -> "Role":
        return cls.ADMIN if admin else cls.USER


class User(Base, TimestampMixin):
    """
    User model

    Identity that owns accounts, budgets and transactions.
    The admin flag is set outside the API and never changed by it.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Credentials
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash, never the password itself"
    )

    # Role
    admin: Mapped[bool] = mapped_column(default=False, nullable=False)

    # Relationships
    accounts: Mapped[List["Account"]] = relationship(
        "Account",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    budgets: Mapped[List["Budget"]] = relationship(
        "Budget",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    transactions: Mapped[List["Transaction"]] = relationship(
        "Transaction",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    # Indexes
    __table_args__ = (
        Index("idx_user_username", "username"),
        Index("idx_user_email", "email"),
    )

    @property
    def role(self) -> Role:
        return Role.from_admin_flag(self.admin)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, admin={self.admin})>"
