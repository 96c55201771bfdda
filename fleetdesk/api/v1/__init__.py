"""API v1 routes."""

from fastapi import APIRouter

from fleetdesk.api.v1 import (
    auth,
    closings,
    companies,
    dashboard,
    employees,
    financial,
    health,
    loads,
    maintenance,
    me,
    months,
    rbac,
    reports,
    trip_expenses,
    trips,
    trucks,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(me.router, prefix="/me", tags=["me"])
router.include_router(rbac.router, tags=["rbac"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(companies.router, prefix="/companies", tags=["companies"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(trucks.router, prefix="/trucks", tags=["trucks"])
router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])
router.include_router(trip_expenses.router, prefix="/trip-expenses", tags=["trip-expenses"])
router.include_router(loads.router, prefix="/loads", tags=["loads"])
router.include_router(financial.router, prefix="/financial", tags=["financial"])
router.include_router(months.router, prefix="/months", tags=["months"])
router.include_router(closings.router, prefix="/closings", tags=["closings"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
