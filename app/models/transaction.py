"""
Transaction model for financial transactions
"""
from typing import TYPE_CHECKING
from decimal import Decimal
from enum import Enum

from sqlalchemy import String, ForeignKey, Index, Numeric, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.account import Account


class TransactionType(str, Enum):
    """Transaction type enum"""
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(Base, TimestampMixin):
    """
    Transaction model

    Represents a financial transaction (income or expense).
    Internally keyed by id, addressed externally by slug.
    """
    __tablename__ = "transactions"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Public identifier
    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Externally visible unique identifier"
    )

    # Transaction details
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Transaction amount (always positive)"
    )

    transaction_type: Mapped[TransactionType] = mapped_column(
        SQLEnum(
            TransactionType,
            native_enum=False,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        comment="Income or Expense"
    )

    category: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str] = mapped_column(String(1024), nullable=False)

    # Foreign keys
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    payment_method_id: Mapped[int] = mapped_column(
        ForeignKey("payment_methods.id", ondelete="RESTRICT"),
        nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="transactions")
    account: Mapped["Account"] = relationship("Account", back_populates="transactions")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_user_id", "user_id"),
        Index("idx_transaction_account_id", "account_id"),
        Index("idx_transaction_type", "transaction_type"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, slug={self.slug}, "
            f"type={self.transaction_type}, amount={self.amount})>"
        )
