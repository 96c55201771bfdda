"""SQLAlchemy ORM models."""

from fleetdesk.models.audit_log import AuditLog
from fleetdesk.models.base import Base
from fleetdesk.models.company import Company
from fleetdesk.models.employee import Employee, EmployeeTransaction
from fleetdesk.models.financial import Closing, FinancialEntry, Month
from fleetdesk.models.load import Load
from fleetdesk.models.role import Permission, Role, RolePermission
from fleetdesk.models.trip import Trip, TripExpense
from fleetdesk.models.truck import Maintenance, Truck
from fleetdesk.models.user import User

__all__ = [
    "AuditLog",
    "Base",
    "Closing",
    "Company",
    "Employee",
    "EmployeeTransaction",
    "FinancialEntry",
    "Load",
    "Maintenance",
    "Month",
    "Permission",
    "Role",
    "RolePermission",
    "Trip",
    "TripExpense",
    "Truck",
    "User",
]
