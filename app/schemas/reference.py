"""
Read-only schemas for accounts, budgets and reference data
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class PaymentMethodResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class BudgetResponse(BaseModel):
    id: int
    user_id: int
    category: str
    monthly_limit: Decimal
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AccountResponse(BaseModel):
    id: int
    user_id: int
    name: str
    balance: Decimal
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminAccountResponse(AccountResponse):
    """Account with its owner's username, for admin listings"""
    owner_username: Optional[str] = None
