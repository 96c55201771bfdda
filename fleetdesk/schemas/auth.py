"""Request/response schemas for auth and self-service (/me) endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from fleetdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from fleetdesk.schemas.common import OptionalText


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class RoleRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class SessionUser(BaseModel):
    """User block returned with the token so the SPA can render menus."""

    id: int
    name: str
    email: str
    status: str
    role: str | None = None
    permissions: list[str] = Field(default_factory=list)


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token (send as: Authorization: Bearer <token>)")
    token_type: str = Field(default="bearer", description="Token type")
    user: SessionUser


class RegisteredUser(BaseModel):
    id: int
    name: str
    email: str
    role: str | None = None


class RegisterResponse(BaseModel):
    message: str
    user: RegisteredUser


class CurrentUser(BaseModel):
    """Authenticated caller resolved from the bearer token; permissions filled by the authorization gate."""

    id: int
    permissions: frozenset[str] = Field(default_factory=frozenset)


class MeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    status: str
    created_at: datetime
    role: RoleRef | None = None
    permissions: list[str] = Field(default_factory=list)


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: OptionalText = None
    address: OptionalText = None


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
