"""Pydantic request/response schemas."""

from fleetdesk.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from fleetdesk.schemas.common import FlexibleDate, MessageResponse
from fleetdesk.schemas.financial import FinancialTotals
from fleetdesk.schemas.health import HealthResponse
from fleetdesk.schemas.rbac import RoleOut

__all__ = [
    "CurrentUser",
    "FinancialTotals",
    "FlexibleDate",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RoleOut",
    "TokenResponse",
]
