"""
Authentication Pydantic schemas: credentials, token claims, identity views
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import Role


class RegisterRequest(BaseModel):
    """Schema for registering a new identity"""
    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    email: EmailStr = Field(..., description="Unique email")
    password: str = Field(..., min_length=8, max_length=72, description="Plain password, hashed on arrival")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Usernames appear in URLs, so no surrounding or inner whitespace"""
        if v != v.strip() or any(ch.isspace() for ch in v):
            raise ValueError("Username must not contain whitespace")
        return v


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenClaims(BaseModel):
    """Signed payload carried by an access token"""
    id: int
    username: str
    admin: bool = False
    iat: int
    exp: int

    @property
    def role(self) -> Role:
        return Role.from_admin_flag(self.admin)


class CurrentUser(BaseModel):
    """Identity context attached to a single authenticated request"""
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "CurrentUser":
        return cls(id=claims.id, username=claims.username, role=claims.role)


class UserResponse(BaseModel):
    """Identity as returned by the API (never includes the password hash)"""
    id: int
    username: str
    email: str
    admin: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    expires_in: int = Field(..., serialization_alias="expiresIn")
