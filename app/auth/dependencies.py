"""
FastAPI dependencies for bearer-token authorization

Core functions:
1. get_current_user - validates the bearer token and returns the identity context
2. require_role / require_admin - checks the identity's role (RBAC)

The identity context is rebuilt from the token on every request and lives
only as long as that request; nothing is cached between requests.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import TokenService, TokenError, TokenExpiredError
from app.models.user import Role
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


# Security scheme for Bearer tokens; missing headers are reported by us, not FastAPI
security = HTTPBearer(auto_error=False)

ROLE_LABELS = {
    Role.USER: "User",
    Role.ADMIN: "Administrator",
}


def get_token_service(request: Request) -> TokenService:
    """Token service built at startup"""
    return request.app.state.token_service


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service)
) -> CurrentUser:
    """
    FastAPI dependency to get current user

    Usage:
    @app.get("/protected")
    async def protected_endpoint(user: CurrentUser = Depends(get_current_user)):
        return {"message": f"Hello, {user.username}!"}
    """
    if not credentials:
        logger.warning(f"No valid Bearer header on {request.url.path}")
        raise AuthenticationError("Authorization header missing or invalid")

    try:
        claims = token_service.verify(credentials.credentials)
    except TokenExpiredError:
        logger.warning("Expired token attempted")
        raise AuthenticationError("Token expired")
    except TokenError as e:
        logger.warning(f"Token rejected ({e.reason}): {e}")
        raise AuthenticationError("Invalid token")

    user = CurrentUser.from_claims(claims)
    logger.debug(f"Authenticated {user.username} (id={user.id}, role={user.role.value})")
    return user


def require_role(required_role: Role):
    """
    Dependency factory for role checking (RBAC)

    Usage:
    @app.get("/admin")
    async def admin_endpoint(user: CurrentUser = Depends(require_role(Role.ADMIN))):
        return {"message": "Admin only"}
    """
    async def check_role(user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
        if user is None or user.role is not required_role:
            username = user.username if user else "<anonymous>"
            logger.warning(f"Access denied for user {username}. Required: {required_role.value}")
            raise AuthorizationError(f"Forbidden: {ROLE_LABELS[required_role]} access required")

        logger.debug(f"Role check passed for user {user.username}")
        return user

    return check_role


require_admin = require_role(Role.ADMIN)
