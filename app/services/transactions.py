"""
Transaction workflow: validate, decide ownership, persist
"""

import logging
import secrets
import time
from enum import Enum
from typing import Any, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InternalError, ValidationError
from app.crud import transaction as crud_transaction
from app.models.transaction import Transaction
from app.schemas.auth import CurrentUser
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.schemas.validation import ValidationResult, validate_payload
from app.services.ownership import (
    authorize_transaction_access,
    ensure_self_or_admin,
    resolve_transaction_owner,
)

logger = logging.getLogger(__name__)

SLUG_INSERT_ATTEMPTS = 5


def validate_transaction_create(payload: Any) -> ValidationResult[TransactionCreate]:
    return validate_payload(TransactionCreate, payload)


def validate_transaction_update(payload: Any) -> ValidationResult[TransactionUpdate]:
    return validate_payload(TransactionUpdate, payload)


def _column_values(values: dict) -> dict:
    """Unwrap enum members into the plain values stored in the columns"""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
    }


def generate_slug(owner_id: int) -> str:
    """tx-<owner>-<nanoseconds>-<random>; the unique constraint has the last word"""
    return f"tx-{owner_id}-{time.time_ns()}-{secrets.token_hex(4)}"


def _insert_with_unique_slug(db: Session, data: dict) -> Transaction:
    """Insert, regenerating the slug if another insert already took it"""
    for attempt in range(1, SLUG_INSERT_ATTEMPTS + 1):
        slug = generate_slug(data["user_id"])
        try:
            return crud_transaction.create(db, {**data, "slug": slug})
        except IntegrityError as e:
            db.rollback()
            if not crud_transaction.slug_exists(db, slug):
                logger.error(f"Integrity error creating transaction: {e.orig}")
                raise InternalError("Failed to create transaction") from e
            logger.warning(f"Slug collision on {slug} (attempt {attempt}), retrying")

    raise InternalError("Failed to create transaction")


def create_transaction(db: Session, requester: CurrentUser, payload: Any) -> Transaction:
    """
    Create a transaction on behalf of the authenticated user

    Steps:
    1. Validate the payload (all field errors reported together)
    2. Decide ownership, including the admin override path
    3. Insert once with a unique slug; persistence errors are not retried
    """
    result = validate_transaction_create(payload)
    if not result.ok:
        logger.info(f"Rejected transaction payload from {requester.username}")
        raise ValidationError("Invalid transaction data", details=result.error_details())

    data = result.value
    decision = resolve_transaction_owner(
        db,
        requester,
        account_id=data.account_id,
        target_user_id=data.target_user_id,
    )

    values = _column_values(data.model_dump(exclude={"target_user_id"}))
    values["user_id"] = decision.owner_id

    try:
        transaction = _insert_with_unique_slug(db, values)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error creating transaction: {e}")
        raise InternalError("Failed to create transaction") from e

    logger.info(
        f"User {requester.username} created transaction {transaction.slug} "
        f"for user id {transaction.user_id}"
    )
    return transaction


def update_transaction(
    db: Session,
    requester: CurrentUser,
    slug: str,
    payload: Any
) -> Transaction:
    """Partial update; moving to another account re-runs the ownership check"""
    result = validate_transaction_update(payload)
    if not result.ok:
        raise ValidationError("Invalid transaction data", details=result.error_details())

    transaction = authorize_transaction_access(db, requester, slug)
    changes = _column_values(result.value.model_dump(exclude_unset=True))

    if "account_id" in changes and not requester.is_admin:
        resolve_transaction_owner(db, requester, account_id=changes["account_id"])

    try:
        updated = crud_transaction.update(db, transaction, changes)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error updating transaction {slug}: {e}")
        raise InternalError("Failed to update transaction") from e

    logger.info(f"User {requester.username} updated transaction {slug}")
    return updated


def delete_transaction(db: Session, requester: CurrentUser, slug: str) -> None:
    transaction = authorize_transaction_access(db, requester, slug)
    try:
        crud_transaction.delete(db, transaction)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error deleting transaction {slug}: {e}")
        raise InternalError("Failed to delete transaction") from e

    logger.info(f"User {requester.username} deleted transaction {slug}")


def list_user_transactions(
    db: Session,
    requester: CurrentUser,
    username: str
) -> List[Transaction]:
    ensure_self_or_admin(requester, username)
    try:
        return crud_transaction.get_by_username(db, username)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching transactions for {username}: {e}")
        raise InternalError("Failed to retrieve transactions") from e


def list_all_transactions(db: Session, page: int) -> List[Transaction]:
    if page < 0:
        raise ValidationError("Invalid page query parameter")
    try:
        return crud_transaction.get_page(db, page)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching transactions page {page}: {e}")
        raise InternalError("Failed to retrieve transactions") from e
