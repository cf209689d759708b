"""
Read-only endpoints: reference data and the caller's own accounts and budgets
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.crud import account as crud_account
from app.crud import reference as crud_reference
from app.db.session import get_db
from app.schemas.auth import CurrentUser
from app.schemas.reference import (
    AccountResponse,
    BudgetResponse,
    CategoryResponse,
    PaymentMethodResponse,
)

router = APIRouter(tags=["Reference"])


@router.get("/categories", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    """Get all transaction categories"""
    return crud_reference.get_categories(db)


@router.get("/payment-methods", response_model=List[PaymentMethodResponse])
def get_payment_methods(db: Session = Depends(get_db)):
    """Get all payment methods"""
    return crud_reference.get_payment_methods(db)


@router.get("/my-accounts", response_model=List[AccountResponse])
def get_my_accounts(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Accounts owned by the current user"""
    return crud_account.get_by_user(db, current_user.id)


@router.get("/budgets", response_model=List[BudgetResponse])
def get_my_budgets(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Budgets owned by the current user"""
    return crud_reference.get_budgets_for_user(db, current_user.id)
