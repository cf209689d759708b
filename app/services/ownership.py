"""
Resource ownership decisions

Non-owners always get the same AuthorizationError whether or not the
resource exists, so responses never reveal other users' accounts or
transactions. Admins acting for another user via an explicit target id
skip the account check entirely.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.crud import account as crud_account
from app.crud import transaction as crud_transaction
from app.crud import user as crud_user
from app.models.transaction import Transaction
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 100


@dataclass(frozen=True)
class OwnershipDecision:
    """Who the new record belongs to"""
    owner_id: int
    account_id: int
    admin_override: bool = False


def resolve_transaction_owner(
    db: Session,
    requester: CurrentUser,
    account_id: int,
    target_user_id: Optional[int] = None
) -> OwnershipDecision:
    """
    Decide whether requester may book on account_id, and for whom

    1. Admin + target_user_id: the target must exist (NotFoundError otherwise);
       the transaction belongs to the target, the account is not checked.
    2. Anyone else: the account must exist and belong to the requester.
    """
    if requester.is_admin and target_user_id is not None:
        target = crud_user.get(db, target_user_id)
        if target is None:
            logger.warning(
                f"Admin {requester.username} targeted unknown user id {target_user_id}"
            )
            raise NotFoundError("Target user not found")

        logger.info(
            f"Admin {requester.username} acting for user {target.username} "
            f"on account {account_id}"
        )
        return OwnershipDecision(owner_id=target.id, account_id=account_id, admin_override=True)

    if target_user_id is not None and target_user_id != requester.id:
        logger.warning(
            f"User {requester.username} sent target_user_id={target_user_id}; ignored"
        )

    owned = crud_account.get_owned(db, account_id=account_id, user_id=requester.id)
    if owned is None:
        logger.warning(
            f"User {requester.username} tried to use account {account_id} they don't own"
        )
        raise AuthorizationError("Invalid account specified")

    return OwnershipDecision(owner_id=requester.id, account_id=owned.id)


def authorize_transaction_access(
    db: Session,
    requester: CurrentUser,
    slug: str
) -> Transaction:
    """Load a transaction the requester is allowed to modify"""
    transaction = crud_transaction.get_by_slug(db, slug)

    if requester.is_admin:
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    if transaction is None or transaction.user_id != requester.id:
        logger.warning(f"User {requester.username} denied access to transaction {slug}")
        raise AuthorizationError("Forbidden")

    return transaction


def ensure_self_or_admin(requester: CurrentUser, username: str) -> None:
    """Gate per-user listings: own data, or any data for admins"""
    if requester.username != username and not requester.is_admin:
        logger.warning(
            f"User {requester.username} denied access to transactions of {username}"
        )
        raise AuthorizationError("Forbidden")

    # Checked after the permission gate: non-admins learn nothing about other names
    if not username or len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError("Invalid username parameter")
