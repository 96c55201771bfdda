"""Registry of the permission keys used by the application (module.action)."""

import re
from collections.abc import Iterable

PERMISSION_KEY_PATTERN = re.compile(r"^[a-z][a-zA-Z]*\.[a-z][a-zA-Z]*$")

CRUD_ACTIONS = ("view", "create", "update", "delete")

CRUD_MODULES = (
    "users",
    "roles",
    "permissions",
    "companies",
    "employees",
    "trucks",
    "trips",
    "tripExpenses",
    "maintenance",
    "loads",
    "financial",
    "closings",
    "months",
)

USERS_MANAGE = "users.manage"
DASHBOARD_VIEW = "dashboard.view"
REPORTS_VIEW = "reports.view"
REPORTS_EXPORT = "reports.export"

KNOWN_PERMISSIONS: tuple[str, ...] = (
    DASHBOARD_VIEW,
    USERS_MANAGE,
    *(f"{module}.{action}" for module in CRUD_MODULES for action in CRUD_ACTIONS),
    REPORTS_VIEW,
    REPORTS_EXPORT,
)

# Granted to self-registered users that are not the first account.
DEFAULT_USER_PERMISSIONS: tuple[str, ...] = (DASHBOARD_VIEW,)

ADMIN_ROLE_NAME = "Admin"
USER_ROLE_NAME = "User"


def is_valid_permission_key(key: str) -> bool:
    return bool(PERMISSION_KEY_PATTERN.match(key))


def find_unknown_permissions(keys: Iterable[str]) -> list[str]:
    """Return the keys (sorted, deduplicated) that are not in KNOWN_PERMISSIONS."""
    known = set(KNOWN_PERMISSIONS)
    return sorted({k for k in keys if k not in known})
