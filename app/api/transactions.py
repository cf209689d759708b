"""
Transaction API endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.db.session import get_db
from app.schemas.auth import CurrentUser
from app.schemas.transaction import TransactionResponse
from app.services import transactions as transaction_service

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_transaction(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Create new transaction

    - Non-admins may only book on their own accounts
    - Admins may pass **target_user_id** to book on behalf of another user
    """
    return transaction_service.create_transaction(db, current_user, payload)


@router.get("/{username}", response_model=List[TransactionResponse])
def get_user_transactions(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get all transactions of a user (yourself, or anyone if admin)
    """
    return transaction_service.list_user_transactions(db, current_user, username)


@router.patch("/{slug}", response_model=TransactionResponse)
def update_transaction(
    slug: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Update transaction
    """
    return transaction_service.update_transaction(db, current_user, slug, payload)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    slug: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Delete transaction
    """
    transaction_service.delete_transaction(db, current_user, slug)
    return None
