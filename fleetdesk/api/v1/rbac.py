"""Role, permission, admin-user and audit-log management. Every route requires users.manage."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.permissions import USERS_MANAGE
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.schemas.rbac import (
    AdminUserCreate,
    AdminUserCreated,
    AdminUserOut,
    AdminUserUpdate,
    AuditLogOut,
    AuditLogPage,
    PermissionCreate,
    PermissionOut,
    PermissionUpdate,
    RoleCreate,
    RoleOut,
    RolePermissionsSet,
    RoleUpdate,
    UserStatus,
    UserStatusUpdate,
)
from fleetdesk.services import audit, rbac, users

router = APIRouter()

Admin = Annotated[CurrentUser, Depends(require_permission(USERS_MANAGE))]
DB = Annotated[Session, Depends(get_db)]


# --- Permissions -------------------------------------------------------------


@router.get("/permissions", response_model=list[PermissionOut])
def list_permissions(_admin: Admin, db: DB) -> list[PermissionOut]:
    return [PermissionOut.model_validate(p) for p in rbac.list_permissions(db)]


@router.post("/permissions", response_model=PermissionOut, status_code=status.HTTP_201_CREATED)
def create_permission(body: PermissionCreate, admin: Admin, db: DB) -> PermissionOut:
    return PermissionOut.model_validate(rbac.create_permission(db, admin.id, body))


@router.put("/permissions/{permission_id}", response_model=PermissionOut)
def update_permission(
    permission_id: int, body: PermissionUpdate, admin: Admin, db: DB
) -> PermissionOut:
    return PermissionOut.model_validate(rbac.update_permission(db, admin.id, permission_id, body))


@router.delete("/permissions/{permission_id}", response_model=MessageResponse)
def delete_permission(permission_id: int, admin: Admin, db: DB) -> MessageResponse:
    """Refused (400) while any role still holds the permission."""
    rbac.delete_permission(db, admin.id, permission_id)
    return MessageResponse(message="permission deleted")


# --- Roles -------------------------------------------------------------------


@router.get("/roles", response_model=list[RoleOut])
def list_roles(_admin: Admin, db: DB) -> list[RoleOut]:
    return [rbac.role_to_out(r) for r in rbac.list_roles(db)]


@router.post("/roles", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def create_role(body: RoleCreate, admin: Admin, db: DB) -> RoleOut:
    return rbac.role_to_out(rbac.create_role(db, admin.id, body))


@router.put("/roles/{role_id}", response_model=RoleOut)
def update_role(role_id: int, body: RoleUpdate, admin: Admin, db: DB) -> RoleOut:
    return rbac.role_to_out(rbac.update_role(db, admin.id, role_id, body))


@router.put("/roles/{role_id}/permissions", response_model=RoleOut)
def set_role_permissions(role_id: int, body: RolePermissionsSet, admin: Admin, db: DB) -> RoleOut:
    """
    Replace the role's permissions with exactly the given keys.

    Unknown keys are created. An empty list revokes everything. Repeating
    the same call yields the same set.
    """
    return rbac.role_to_out(rbac.set_role_permissions(db, admin.id, role_id, body.permissions))


# --- Users -------------------------------------------------------------------


@router.get("/admin/users", response_model=list[AdminUserOut])
def list_users(
    _admin: Admin,
    db: DB,
    search: str | None = None,
    role_id: int | None = None,
    status_filter: Annotated[UserStatus | None, Query(alias="status")] = None,
) -> list[AdminUserOut]:
    found = users.list_users(db, search=search, role_id=role_id, status=status_filter)
    return [AdminUserOut.model_validate(u) for u in found]


@router.post("/admin/users", response_model=AdminUserCreated, status_code=status.HTTP_201_CREATED)
def create_user(body: AdminUserCreate, admin: Admin, db: DB) -> AdminUserCreated:
    """When no password is supplied a temporary one is generated and returned once."""
    user, temp_password = users.admin_create_user(db, admin.id, body)
    return AdminUserCreated(user=AdminUserOut.model_validate(user), temp_password=temp_password)


@router.put("/admin/users/{user_id}", response_model=AdminUserOut)
def update_user(user_id: int, body: AdminUserUpdate, admin: Admin, db: DB) -> AdminUserOut:
    return AdminUserOut.model_validate(users.admin_update_user(db, admin.id, user_id, body))


@router.patch("/admin/users/{user_id}/status", response_model=AdminUserOut)
def update_user_status(user_id: int, body: UserStatusUpdate, admin: Admin, db: DB) -> AdminUserOut:
    return AdminUserOut.model_validate(
        users.admin_set_user_status(db, admin.id, user_id, body.status)
    )


# --- Audit log ---------------------------------------------------------------


@router.get("/audit-logs", response_model=AuditLogPage)
def list_audit_logs(
    _admin: Admin,
    db: DB,
    user_id: int | None = None,
    action: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=audit.MAX_PAGE_SIZE)] = 20,
) -> AuditLogPage:
    items, total = audit.list_audit_logs(
        db, user_id=user_id, action=action, page=page, page_size=page_size
    )
    return AuditLogPage(
        items=[AuditLogOut.model_validate(i) for i in items],
        total=total,
        page=page,
        page_size=page_size,
    )
