"""
Transaction Pydantic schemas for request/response validation
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

from app.models.category import CategoryName
from app.models.payment_method import PaymentMethodId
from app.models.transaction import TransactionType

MAX_AMOUNT = Decimal("1000000")
MAX_DESCRIPTION_LENGTH = 1024


def _require_text(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("Description must not be blank")
    return v


class TransactionCreate(BaseModel):
    """Schema for creating a new transaction"""
    account_id: StrictInt = Field(..., gt=0, description="Account the transaction is booked on")
    payment_method_id: PaymentMethodId = Field(..., description="One of the known payment method ids")
    transaction_type: TransactionType = Field(..., description="income or expense")
    category: CategoryName = Field(..., description="Category name")
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        decimal_places=2,
        description="Amount, always positive, at most two decimal places"
    )
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    target_user_id: Optional[StrictInt] = Field(
        None,
        gt=0,
        description="Admin only: create the transaction on behalf of this user"
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction (all fields optional)"""
    account_id: Optional[StrictInt] = Field(None, gt=0)
    payment_method_id: Optional[PaymentMethodId] = None
    transaction_type: Optional[TransactionType] = None
    category: Optional[CategoryName] = None
    amount: Optional[Decimal] = Field(None, gt=0, le=MAX_AMOUNT, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)

    @model_validator(mode="after")
    def check_not_empty(self) -> "TransactionUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class TransactionResponse(BaseModel):
    """Schema for API response"""
    id: int
    slug: str
    account_id: int
    user_id: int
    payment_method_id: int
    transaction_type: TransactionType
    category: str
    amount: Decimal
    description: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
