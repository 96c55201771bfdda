"""Tests for the audit commit policy (strict vs best-effort) and audit retention."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from fleetdesk.models import AuditLog
from fleetdesk.services.audit import commit_with_audit, purge_audit_logs


def _db_error() -> OperationalError:
    return OperationalError("INSERT INTO audit_logs", {}, Exception("disk full"))


class TestStrictAudit(unittest.TestCase):
    """Strict mode: the audit row rides in the mutation's transaction."""

    def test_adds_row_then_commits_once(self) -> None:
        session = MagicMock()
        commit_with_audit(session, 3, "roles.update", {"role_id": 1}, strict=True)
        added = session.add.call_args[0][0]
        self.assertIsInstance(added, AuditLog)
        self.assertEqual((added.user_id, added.action), (3, "roles.update"))
        session.commit.assert_called_once()

    def test_audit_failure_propagates(self) -> None:
        session = MagicMock()
        session.commit.side_effect = _db_error()
        with self.assertRaises(OperationalError):
            commit_with_audit(session, 3, "roles.update", strict=True)


class TestBestEffortAudit(unittest.TestCase):
    """Best-effort mode: the mutation commits first; audit failures are logged and swallowed."""

    def test_commits_mutation_then_audit(self) -> None:
        session = MagicMock()
        commit_with_audit(session, None, "users.create", strict=False)
        self.assertEqual(session.commit.call_count, 2)
        session.rollback.assert_not_called()

    def test_audit_failure_keeps_mutation(self) -> None:
        session = MagicMock()
        session.commit.side_effect = [None, _db_error()]
        with self.assertLogs("fleetdesk.services.audit", level="ERROR"):
            commit_with_audit(session, 5, "users.status.update", {"user_id": 9}, strict=False)
        self.assertEqual(session.commit.call_count, 2)
        session.rollback.assert_called_once()

    def test_mutation_failure_propagates(self) -> None:
        session = MagicMock()
        session.commit.side_effect = _db_error()
        with self.assertRaises(OperationalError):
            commit_with_audit(session, 5, "users.update", strict=False)
        session.add.assert_not_called()


class TestAuditRetention(unittest.TestCase):
    def test_disabled_does_nothing(self) -> None:
        settings = MagicMock()
        settings.AUDIT_RETENTION_ENABLED = False
        session = MagicMock()
        self.assertEqual(purge_audit_logs(session, settings), 0)
        session.query.assert_not_called()

    def test_deletes_old_entries(self) -> None:
        settings = MagicMock()
        settings.AUDIT_RETENTION_ENABLED = True
        settings.AUDIT_RETENTION_DAYS = 30
        session = MagicMock()
        session.query.return_value.filter.return_value.delete.return_value = 4
        self.assertEqual(purge_audit_logs(session, settings), 4)
        session.query.assert_called_once_with(AuditLog)
        session.commit.assert_called_once()


if __name__ == "__main__":
    unittest.main()
