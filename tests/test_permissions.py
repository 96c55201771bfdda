"""Tests for the permission registry and the fail-closed authorization check."""

import unittest

from fleetdesk.api.v1.auth import require_permission
from fleetdesk.core.errors import Forbidden
from fleetdesk.core.permissions import (
    DEFAULT_USER_PERMISSIONS,
    KNOWN_PERMISSIONS,
    find_unknown_permissions,
    is_valid_permission_key,
)
from fleetdesk.schemas.auth import CurrentUser
from fleetdesk.services.rbac import check_permission


class TestRegistry(unittest.TestCase):
    def test_every_key_is_well_formed_and_unique(self) -> None:
        self.assertEqual(len(KNOWN_PERMISSIONS), len(set(KNOWN_PERMISSIONS)))
        for key in KNOWN_PERMISSIONS:
            self.assertTrue(is_valid_permission_key(key), key)

    def test_contains_keys_used_by_routes(self) -> None:
        for key in ("dashboard.view", "users.manage", "tripExpenses.create", "reports.view", "months.delete"):
            self.assertIn(key, KNOWN_PERMISSIONS)

    def test_default_user_permissions_are_registered(self) -> None:
        self.assertEqual(find_unknown_permissions(DEFAULT_USER_PERMISSIONS), [])

    def test_find_unknown_permissions(self) -> None:
        self.assertEqual(
            find_unknown_permissions(["users.manage", "fleet.fly", "fleet.fly", "a.b"]),
            ["a.b", "fleet.fly"],
        )

    def test_key_format(self) -> None:
        self.assertTrue(is_valid_permission_key("tripExpenses.view"))
        for bad in ("users", "Users.view", "users.view.extra", "users.", ".view", "users-view"):
            self.assertFalse(is_valid_permission_key(bad), bad)

    def test_require_permission_rejects_unregistered_key(self) -> None:
        with self.assertRaises(ValueError):
            require_permission("users.mange")


class TestCheckPermission(unittest.TestCase):
    def test_no_caller_is_forbidden(self) -> None:
        with self.assertRaises(Forbidden) as ctx:
            check_permission(None, "dashboard.view")
        self.assertEqual(ctx.exception.message, "insufficient permission")

    def test_missing_key_is_forbidden(self) -> None:
        user = CurrentUser(id=1, permissions=frozenset({"financial.create"}))
        with self.assertRaises(Forbidden):
            check_permission(user, "users.manage")

    def test_present_key_returns_caller(self) -> None:
        user = CurrentUser(id=1, permissions=frozenset({"financial.create"}))
        self.assertIs(check_permission(user, "financial.create"), user)


if __name__ == "__main__":
    unittest.main()
