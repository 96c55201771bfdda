"""Registration, login and the auth dependencies (get_current_user, require_permission)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from fleetdesk.core.database import get_db
from fleetdesk.core.errors import ExpiredToken, MalformedToken, Unauthenticated
from fleetdesk.core.permissions import KNOWN_PERMISSIONS
from fleetdesk.core.security import decode_access_token
from fleetdesk.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from fleetdesk.services.rbac import check_permission, get_user_permission_keys
from fleetdesk.services.users import authenticate, register_user

router = APIRouter()

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _unauthenticated(message: str) -> Unauthenticated:
    return Unauthenticated(message, headers=BEARER_CHALLENGE)


def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """
    Dependency: require `Authorization: Bearer <jwt>` and return the caller.

    Does not touch the store; a deactivated user keeps access until the token expires.
    """
    if not authorization or not authorization.strip():
        raise _unauthenticated("token not provided")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise _unauthenticated("invalid token format")
    try:
        user_id = decode_access_token(parts[1])
    except ExpiredToken:
        raise _unauthenticated("token expired") from None
    except MalformedToken:
        raise _unauthenticated("invalid token") from None
    return CurrentUser(id=user_id)


def get_current_permissions(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: attach the caller's permission keys, read fresh from the store."""
    permissions = get_user_permission_keys(db, current_user.id)
    return current_user.model_copy(update={"permissions": permissions})


def require_permission(key: str) -> Callable[..., CurrentUser]:
    """
    Build a dependency that returns the caller when they hold `key`, else 403.

    Raises ValueError at import time for a key missing from the registry.
    """
    if key not in KNOWN_PERMISSIONS:
        raise ValueError(f"Unknown permission key: {key}")

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_permissions)],
    ) -> CurrentUser:
        return check_permission(current_user, key)

    dependency.__name__ = f"require_{key.replace('.', '_')}"
    return dependency


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create an account. The first account becomes Admin; later ones get the User role."""
    user = register_user(db, body)
    return RegisterResponse(
        message="user created",
        user=RegisteredUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.name if user.role else None,
        ),
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    return authenticate(db, str(body.email), body.password)
