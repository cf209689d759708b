"""
API endpoints for registration and password login

Endpoints:
1. POST /auth/register - create an identity (password hashed immediately)
2. POST /auth/login - verify credentials and issue an access token
3. GET /auth/me - current user information

Login answers "Invalid credentials" whether the username is unknown or the
password is wrong, so the endpoint cannot be used to enumerate users.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user, get_token_service
from app.core.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ValidationError,
)
from app.core.security import TokenService, dummy_verify, verify_password
from app.crud import user as crud_user
from app.db.session import get_db
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from app.schemas.validation import validate_payload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Register a new (non-admin) user

    Fails with 400 on invalid data and 409 if the username or email is taken.
    """
    result = validate_payload(RegisterRequest, payload)
    if not result.ok:
        raise ValidationError("Invalid registration data", details=result.error_details())

    data = result.value
    if crud_user.get_by_username_or_email(db, data.username, data.email):
        logger.info(f"Registration refused, username or email taken: {data.username}")
        raise ConflictError("Username or email already exists")

    try:
        user = crud_user.create(
            db,
            username=data.username,
            email=data.email,
            password=data.password,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("Username or email already exists")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration failed for {data.username}: {e}")
        raise InternalError("Registration failed due to server error")

    logger.info(f"User {user.username} registered with id {user.id}")
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange username and password for a signed access token

    Returns the user, the token and its lifetime in seconds (expiresIn).
    """
    result = validate_payload(LoginRequest, payload)
    if not result.ok:
        raise ValidationError("Username and password required", details=result.error_details())

    data = result.value
    user = crud_user.get_by_username(db, data.username)
    if user is None:
        dummy_verify()
        logger.info("Login failed: unknown username")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(data.password, user.password_hash):
        logger.info(f"Login failed: wrong password for user id {user.id}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = token_service.issue(user)
    logger.info(f"User {user.username} logged in")

    return LoginResponse(
        user=UserResponse.model_validate(user),
        token=token,
        expires_in=token_service.lifetime_seconds,
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get current authenticated user information

    Requires: Bearer token in Authorization header
    """
    user = crud_user.get(db, current_user.id)
    if user is None:
        logger.warning(f"Token for user id {current_user.id} has no matching user")
        raise AuthenticationError("User not found")
    return user
