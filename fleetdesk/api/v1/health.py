"""Liveness endpoint reporting version, environment and store reachability."""

from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleetdesk.core.config import settings
from fleetdesk.core.database import check_db_connected, get_db
from fleetdesk.schemas.health import HealthResponse

router = APIRouter()


def _package_version() -> str:
    try:
        return version("fleetdesk")
    except PackageNotFoundError:
        return "0.0.0"


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Unauthenticated. status is degraded when the database does not answer SELECT 1."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        version=_package_version(),
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
