"""
Role/permission store operations and the authorization check.

Permission keys are data: any well-formed module.action key may be attached to
a role, and missing keys are created on demand when a role's set is replaced.
"""

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fleetdesk.core.errors import Conflict, Forbidden, NotFound
from fleetdesk.core.permissions import (
    ADMIN_ROLE_NAME,
    DEFAULT_USER_PERMISSIONS,
    KNOWN_PERMISSIONS,
    USER_ROLE_NAME,
)
from fleetdesk.models import Permission, Role, RolePermission, User
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.rbac import PermissionCreate, PermissionUpdate, RoleCreate, RoleOut, RoleUpdate
from fleetdesk.services.audit import commit_with_audit
from fleetdesk.services.crud import get_or_404

logger = logging.getLogger(__name__)

INSUFFICIENT_PERMISSION = "insufficient permission"


# --- Authorization ---------------------------------------------------------


def get_user_permission_keys(db: Session, user_id: int) -> frozenset[str]:
    """Keys granted through the user's role; empty for a missing user or a user without role."""
    rows = (
        db.query(Permission.key)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(User, User.role_id == RolePermission.role_id)
        .filter(User.id == user_id)
        .all()
    )
    return frozenset(key for (key,) in rows)


def has_permission(db: Session, user_id: int, key: str) -> bool:
    return key in get_user_permission_keys(db, user_id)


def check_permission(user: CurrentUser | None, key: str) -> CurrentUser:
    """Fails closed: no caller, or a caller without `key`, is Forbidden."""
    if user is None or key not in user.permissions:
        raise Forbidden(INSUFFICIENT_PERMISSION)
    return user


# --- Permissions -------------------------------------------------------------


def list_permissions(db: Session) -> list[Permission]:
    return db.query(Permission).order_by(Permission.key.asc()).all()


def create_permission(db: Session, actor_id: int, data: PermissionCreate) -> Permission:
    if db.query(Permission).filter(Permission.key == data.key).first():
        raise Conflict("permission key already exists")
    perm = Permission(key=data.key, description=data.description)
    db.add(perm)
    try:
        db.flush()
        commit_with_audit(db, actor_id, "permissions.create", {"permission_id": perm.id, "key": perm.key})
    except IntegrityError as e:
        db.rollback()
        raise Conflict("permission key already exists") from e
    db.refresh(perm)
    return perm


def update_permission(db: Session, actor_id: int, permission_id: int, data: PermissionUpdate) -> Permission:
    perm = get_or_404(db, Permission, permission_id, "permission not found")
    if data.key is not None and data.key != perm.key:
        if db.query(Permission).filter(Permission.key == data.key, Permission.id != perm.id).first():
            raise Conflict("permission key already exists")
        perm.key = data.key
    if "description" in data.model_fields_set:
        perm.description = data.description
    try:
        commit_with_audit(db, actor_id, "permissions.update", {"permission_id": perm.id, "key": perm.key})
    except IntegrityError as e:
        db.rollback()
        raise Conflict("permission key already exists") from e
    db.refresh(perm)
    return perm


def delete_permission(db: Session, actor_id: int, permission_id: int) -> None:
    perm = get_or_404(db, Permission, permission_id, "permission not found")
    in_use = (
        db.query(RolePermission)
        .filter(RolePermission.permission_id == perm.id)
        .count()
    )
    if in_use:
        raise Conflict("permission is assigned to roles", status_code=400)
    key = perm.key
    db.delete(perm)
    commit_with_audit(db, actor_id, "permissions.delete", {"permission_id": permission_id, "key": key})


def ensure_permissions(db: Session, keys: Iterable[str]) -> list[Permission]:
    """Return Permission rows for `keys`, creating the missing ones (flushed, not committed)."""
    wanted = list(dict.fromkeys(keys))
    if not wanted:
        return []
    existing = {p.key: p for p in db.query(Permission).filter(Permission.key.in_(wanted)).all()}
    for key in wanted:
        if key not in existing:
            perm = Permission(key=key)
            db.add(perm)
            existing[key] = perm
    db.flush()
    return [existing[key] for key in wanted]


# --- Roles -------------------------------------------------------------------


def role_to_out(role: Role) -> RoleOut:
    return RoleOut(
        id=role.id,
        name=role.name,
        description=role.description,
        permissions=role.permission_keys,
    )


def list_roles(db: Session) -> list[Role]:
    return db.query(Role).order_by(Role.name.asc()).all()


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    query = db.query(Role).filter(Role.name == name)
    if exclude_id is not None:
        query = query.filter(Role.id != exclude_id)
    return query.first() is not None


def create_role(db: Session, actor_id: int, data: RoleCreate) -> Role:
    name = data.name.strip()
    if _name_taken(db, name):
        raise Conflict("role name already exists")
    role = Role(name=name, description=data.description)
    db.add(role)
    try:
        db.flush()
        commit_with_audit(db, actor_id, "roles.create", {"role_id": role.id, "name": role.name})
    except IntegrityError as e:
        db.rollback()
        raise Conflict("role name already exists") from e
    db.refresh(role)
    return role


def update_role(db: Session, actor_id: int, role_id: int, data: RoleUpdate) -> Role:
    role = get_or_404(db, Role, role_id, "role not found")
    name = data.name.strip()
    if _name_taken(db, name, exclude_id=role.id):
        raise Conflict("role name already exists")
    role.name = name
    role.description = data.description
    try:
        commit_with_audit(db, actor_id, "roles.update", {"role_id": role.id, "name": role.name})
    except IntegrityError as e:
        db.rollback()
        raise Conflict("role name already exists") from e
    db.refresh(role)
    return role


def set_role_permissions(
    db: Session,
    actor_id: int | None,
    role_id: int,
    keys: Iterable[str],
) -> Role:
    """
    Replace the role's permission set with exactly `keys`.

    Missing permissions are created. Deletion of the old rows, insertion of
    the new ones and creation of missing keys share one transaction: on any
    failure the session is rolled back and the previous set is intact.
    """
    role = get_or_404(db, Role, role_id, "role not found")
    wanted = list(dict.fromkeys(keys))
    try:
        perms = ensure_permissions(db, wanted)
        role.role_permissions.clear()
        db.flush()
        role.role_permissions.extend(RolePermission(permission=p) for p in perms)
        commit_with_audit(
            db,
            actor_id,
            "roles.permissions.set",
            {"role_id": role.id, "permissions": sorted(wanted)},
        )
    except IntegrityError as e:
        db.rollback()
        raise Conflict("permission set changed concurrently, retry") from e
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to set role permissions", extra={"role_id": role_id})
        raise
    db.refresh(role)
    return role


def _get_or_create_role(db: Session, name: str, description: str) -> tuple[Role, bool]:
    role = db.query(Role).filter(Role.name == name).first()
    if role is not None:
        return role, False
    role = Role(name=name, description=description)
    db.add(role)
    db.flush()
    return role, True


def ensure_default_roles(db: Session, *, resync_admin: bool = False) -> tuple[Role, Role]:
    """
    Make sure the Admin and User roles exist.

    Permissions are granted only when a role is created here, so edits made
    later through set_role_permissions are never undone. `resync_admin`
    re-adds every registry key missing from Admin; only the seed script
    passes it. Flushes; the caller commits.
    """
    admin, admin_created = _get_or_create_role(db, ADMIN_ROLE_NAME, "Full access")
    user, user_created = _get_or_create_role(db, USER_ROLE_NAME, "Default role for self-registered users")

    if admin_created or resync_admin:
        have = {rp.permission_id for rp in admin.role_permissions}
        admin.role_permissions.extend(
            RolePermission(permission=p)
            for p in ensure_permissions(db, KNOWN_PERMISSIONS)
            if p.id not in have
        )
    if user_created:
        user.role_permissions.extend(
            RolePermission(permission=p) for p in ensure_permissions(db, DEFAULT_USER_PERMISSIONS)
        )
    db.flush()
    return admin, user
