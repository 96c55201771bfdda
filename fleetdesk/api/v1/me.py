"""Self-service profile endpoints. Authentication only, no permission required."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import get_current_user
from fleetdesk.core.database import get_db
from fleetdesk.models import User
from fleetdesk.schemas.auth import (
    CurrentUser,
    MeResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
)
from fleetdesk.schemas.common import MessageResponse
from fleetdesk.services.rbac import get_user_permission_keys
from fleetdesk.services.users import change_password, get_profile, update_profile

router = APIRouter()


def _me(db: Session, user_id: int, user: User) -> MeResponse:
    me = MeResponse.model_validate(user)
    me.permissions = sorted(get_user_permission_keys(db, user_id))
    return me


@router.get("", response_model=MeResponse)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    return _me(db, current_user.id, get_profile(db, current_user.id))


@router.put("", response_model=MeResponse)
def update_me(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Update name, email, phone and address. 400 when the email belongs to someone else."""
    return _me(db, current_user.id, update_profile(db, current_user.id, body))


@router.patch("/password", response_model=MessageResponse)
def update_my_password(
    body: PasswordChangeRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    change_password(db, current_user.id, body)
    return MessageResponse(message="password updated")
