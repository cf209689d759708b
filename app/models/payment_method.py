"""
Payment method model
"""
from enum import IntEnum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PaymentMethodId(IntEnum):
    """Known payment methods, keyed by their fixed primary key"""
    CASH = 1
    CREDIT_CARD = 2
    BANK_TRANSFER = 3


PAYMENT_METHOD_NAMES = {
    PaymentMethodId.CASH: "reiðufé",
    PaymentMethodId.CREDIT_CARD: "kreditkort",
    PaymentMethodId.BANK_TRANSFER: "bankamillifærsla",
}


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<PaymentMethod(id={self.id}, name={self.name})>"
