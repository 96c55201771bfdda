"""Dashboard counters. Require dashboard.view."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.database import get_db
from fleetdesk.core.permissions import DASHBOARD_VIEW
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.schemas.reports import DashboardResponse, QuickStats
from fleetdesk.services.reports import dashboard, quick_stats

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    _user: Annotated[CurrentUser, Depends(require_permission(DASHBOARD_VIEW))],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    return dashboard(db)


@router.get("/quick-stats", response_model=QuickStats)
def get_quick_stats(
    _user: Annotated[CurrentUser, Depends(require_permission(DASHBOARD_VIEW))],
    db: Annotated[Session, Depends(get_db)],
) -> QuickStats:
    return quick_stats(db)
