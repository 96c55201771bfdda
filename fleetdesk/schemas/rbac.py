"""Request/response schemas for roles, permissions, admin user management and the audit log."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from fleetdesk.core.permissions import is_valid_permission_key
from fleetdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from fleetdesk.schemas.auth import RoleRef

UserStatus = Literal["active", "inactive"]


def _validate_key(value: str) -> str:
    value = value.strip()
    if not is_valid_permission_key(value):
        raise ValueError("invalid permission key, use module.action")
    return value


class PermissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    description: str | None = None
    created_at: datetime


class PermissionCreate(BaseModel):
    key: str = Field(..., min_length=3, max_length=120)
    description: str | None = Field(default=None, max_length=255)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        return _validate_key(v)


class PermissionUpdate(BaseModel):
    key: str | None = Field(default=None, min_length=3, max_length=120)
    description: str | None = Field(default=None, max_length=255)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str | None) -> str | None:
        return None if v is None else _validate_key(v)


class RoleOut(BaseModel):
    """Role with its resolved permission keys (sorted)."""

    id: int
    name: str
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=120)
    description: str | None = Field(default=None, max_length=255)


class RoleUpdate(RoleCreate):
    pass


class RolePermissionsSet(BaseModel):
    """Full replacement set; an empty list revokes every permission of the role."""

    permissions: list[str] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def validate_keys(cls, v: list[str]) -> list[str]:
        return [_validate_key(k) for k in v]


class AdminUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    status: str
    created_at: datetime
    role: RoleRef | None = None


class AdminUserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    role_id: int
    status: UserStatus = "active"
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class AdminUserCreated(BaseModel):
    """temp_password is present only when the server generated it; it is shown exactly once."""

    user: AdminUserOut
    temp_password: str | None = None


class AdminUserUpdate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    role_id: int
    status: UserStatus


class UserStatusUpdate(BaseModel):
    status: UserStatus


class AuditActor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AuditLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    details: Any = None
    created_at: datetime
    user: AuditActor | None = None


class AuditLogPage(BaseModel):
    items: list[AuditLogOut]
    total: int
    page: int
    page_size: int
