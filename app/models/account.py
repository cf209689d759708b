"""
Account model
"""
from decimal import Decimal
from typing import List, TYPE_CHECKING

from sqlalchemy import String, ForeignKey, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.transaction import Transaction


class Account(Base, TimestampMixin):
    """
    Account model

    A named money container owned by exactly one user.
    """
    __tablename__ = "accounts"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Ownership
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Account info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        default=Decimal("0.00")
    )
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="accounts")

    transactions: Mapped[List["Transaction"]] = relationship(
        "Transaction",
        back_populates="account"
    )

    __table_args__ = (
        Index("idx_account_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, user_id={self.user_id}, name={self.name})>"
