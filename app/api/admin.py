"""
Admin-only listings

Every route here runs get_current_user and then the admin gate.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.crud import account as crud_account
from app.crud import user as crud_user
from app.db.session import get_db
from app.schemas.auth import CurrentUser, UserResponse
from app.schemas.reference import AdminAccountResponse
from app.schemas.transaction import TransactionResponse
from app.services import transactions as transaction_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/users", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin)
):
    """All users, without password hashes"""
    logger.info(f"Admin {admin.username} listing users")
    return crud_user.get_multi(db)


@router.get("/accounts", response_model=List[AdminAccountResponse])
def list_accounts(
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin)
):
    """All accounts with their owner's username"""
    logger.info(f"Admin {admin.username} listing accounts")
    return [
        AdminAccountResponse.model_validate(account).model_copy(
            update={"owner_username": owner_username}
        )
        for account, owner_username in crud_account.get_all_with_owner(db)
    ]


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    page: int = Query(0, description="Zero-based page, 10 transactions per page"),
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin)
):
    """All transactions, newest first"""
    logger.info(f"Admin {admin.username} fetching transactions page {page}")
    return transaction_service.list_all_transactions(db, page)
