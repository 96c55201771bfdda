"""Account lifecycle: self-registration, login, profile and admin user management."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.core.errors import Conflict, Forbidden, NotFound, Unauthenticated, ValidationFailed
from fleetdesk.core.security import (
    create_access_token,
    generate_temp_password,
    hash_password,
    verify_password,
)
from fleetdesk.models import Role, User
from fleetdesk.schemas.auth import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    SessionUser,
    TokenResponse,
)
from fleetdesk.schemas.rbac import AdminUserCreate, AdminUserUpdate
from fleetdesk.services.audit import commit_with_audit
from fleetdesk.services.crud import get_or_404, icontains
from fleetdesk.services.rbac import ensure_default_roles, get_user_permission_keys

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "E-mail já está em uso"
INVALID_CREDENTIALS = "Email ou senha inválidos"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def register_user(db: Session, data: RegisterRequest) -> User:
    """
    Create a self-registered account.

    Bootstraps the Admin and User roles; the very first account becomes Admin,
    every later one gets User.
    """
    email = _normalize_email(str(data.email))
    if _email_taken(db, email):
        raise Conflict(EMAIL_IN_USE, status_code=400)

    admin_role, user_role = ensure_default_roles(db)
    is_first = db.query(User.id).first() is None
    user = User(
        name=data.name.strip(),
        email=email,
        password_hash=hash_password(data.password),
        status="active",
        role=admin_role if is_first else user_role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(EMAIL_IN_USE, status_code=400) from e
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id, "role": user.role.name})
    return user


def authenticate(db: Session, email: str, password: str) -> TokenResponse:
    """Check credentials and issue a token. No lockout: every attempt is evaluated."""
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise Unauthenticated(INVALID_CREDENTIALS)
    if user.status != "active":
        raise Forbidden("user inactive")

    permissions = sorted(get_user_permission_keys(db, user.id))
    return TokenResponse(
        token=create_access_token(user.id),
        user=SessionUser(
            id=user.id,
            name=user.name,
            email=user.email,
            status=user.status,
            role=user.role.name if user.role else None,
            permissions=permissions,
        ),
    )


def get_profile(db: Session, user_id: int) -> User:
    return get_or_404(db, User, user_id, "user not found")


def update_profile(db: Session, user_id: int, data: ProfileUpdateRequest) -> User:
    user = get_profile(db, user_id)
    email = _normalize_email(str(data.email))
    if _email_taken(db, email, exclude_id=user.id):
        raise Conflict(EMAIL_IN_USE, status_code=400)
    user.name = data.name.strip()
    user.email = email
    user.phone = data.phone
    user.address = data.address
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(EMAIL_IN_USE, status_code=400) from e
    db.refresh(user)
    return user


def change_password(db: Session, user_id: int, data: PasswordChangeRequest) -> None:
    user = get_profile(db, user_id)
    if not verify_password(data.current_password, user.password_hash):
        raise Unauthenticated("current password is incorrect")
    if data.current_password == data.new_password:
        raise ValidationFailed("new password must differ from the current one")
    user.password_hash = hash_password(data.new_password)
    db.commit()
    logger.info("Password changed", extra={"user_id": user.id})


# --- Admin user management --------------------------------------------------


def list_users(
    db: Session,
    *,
    search: str | None = None,
    role_id: int | None = None,
    status: str | None = None,
) -> list[User]:
    query = db.query(User)
    if search and search.strip():
        text = search.strip()
        query = query.filter(or_(icontains(User.name, text), icontains(User.email, text)))
    if role_id:
        query = query.filter(User.role_id == role_id)
    if status:
        query = query.filter(User.status == status)
    return query.order_by(User.id.desc()).all()


def admin_create_user(db: Session, actor_id: int, data: AdminUserCreate) -> tuple[User, str | None]:
    """Returns (user, temp_password); temp_password is None when the caller supplied one."""
    get_or_404(db, Role, data.role_id, "role not found")
    email = _normalize_email(str(data.email))
    if _email_taken(db, email):
        raise Conflict("email already in use")

    temp_password = None
    password = data.password
    if not password:
        temp_password = generate_temp_password()
        password = temp_password

    user = User(
        name=data.name.strip(),
        email=email,
        password_hash=hash_password(password),
        status=data.status,
        role_id=data.role_id,
    )
    db.add(user)
    try:
        db.flush()
        commit_with_audit(
            db,
            actor_id,
            "users.create",
            {"user_id": user.id, "email": email, "role_id": data.role_id},
        )
    except IntegrityError as e:
        db.rollback()
        raise Conflict("email already in use") from e
    db.refresh(user)
    return user, temp_password


def admin_update_user(db: Session, actor_id: int, user_id: int, data: AdminUserUpdate) -> User:
    user = get_or_404(db, User, user_id, "user not found")
    if db.get(Role, data.role_id) is None:
        raise NotFound("role not found")
    email = _normalize_email(str(data.email))
    if _email_taken(db, email, exclude_id=user.id):
        raise Conflict("email already in use")

    user.name = data.name.strip()
    user.email = email
    user.role_id = data.role_id
    user.status = data.status
    try:
        commit_with_audit(
            db,
            actor_id,
            "users.update",
            {"user_id": user.id, "email": email, "role_id": data.role_id, "status": data.status},
        )
    except IntegrityError as e:
        db.rollback()
        raise Conflict("email already in use") from e
    db.refresh(user)
    return user


def admin_set_user_status(db: Session, actor_id: int, user_id: int, status: str) -> User:
    user = get_or_404(db, User, user_id, "user not found")
    previous = user.status
    user.status = status
    commit_with_audit(
        db,
        actor_id,
        "users.status.update",
        {"user_id": user.id, "from": previous, "to": status},
    )
    db.refresh(user)
    return user
