"""
Credential hashing and stateless access tokens

1. Passwords are hashed with bcrypt through passlib and never leave this module
   in clear text.
2. TokenService issues and verifies HMAC-signed JWTs carrying the identity id,
   username, admin flag, issue time and expiry. There is no server-side record
   of issued tokens: a token is valid until it expires.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError, JWTClaimsError
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from app.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REQUIRED_CLAIMS = ("id", "username", "iat", "exp")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def dummy_verify() -> None:
    """Burn the same bcrypt work as a real check when the user does not exist"""
    pwd_context.dummy_verify()


class TokenError(Exception):
    """Base class for token verification failures"""
    reason = "invalid"


class MalformedTokenError(TokenError):
    reason = "malformed"


class InvalidSignatureError(TokenError):
    reason = "signature_invalid"


class TokenExpiredError(TokenError):
    reason = "expired"


class TokenService:
    """Issue and verify signed claims tokens

    Built once at startup from settings; holds only the read-only secret,
    algorithm and lifetime, so a single instance is shared by all requests.
    """

    def __init__(self, secret_key: str, lifetime_seconds: int, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("Token signing secret must not be empty")
        if lifetime_seconds <= 0:
            raise ValueError("Token lifetime must be positive")
        self._secret_key = secret_key
        self.lifetime_seconds = lifetime_seconds
        self.algorithm = algorithm

    def issue(self, identity, now: Optional[datetime] = None) -> str:
        """
        Encode claims for an identity

        Args:
            identity: anything with id, username and admin attributes
            now: issue time, defaults to the current UTC time
        """
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self.lifetime_seconds)
        claims = {
            "id": identity.id,
            "username": identity.username,
            "admin": bool(identity.admin),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry, all or nothing

        Raises:
            MalformedTokenError: not a JWT, or required claims missing
            InvalidSignatureError: tampered token or foreign secret
            TokenExpiredError: signature fine, but past expiry
        """
        try:
            unverified = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(str(e)) from e

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in unverified]
        if missing:
            raise MalformedTokenError(f"Missing claims: {', '.join(missing)}")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_aud": False,
                },
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTClaimsError as e:
            raise MalformedTokenError(str(e)) from e
        except JWTError as e:
            raise InvalidSignatureError(str(e)) from e

        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise MalformedTokenError("Invalid token payload") from e
