"""Audit log: append-only writes, the strict/best-effort commit policy, paginated reads and retention."""

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleetdesk.core.config import get_settings
from fleetdesk.models import AuditLog
from fleetdesk.services.crud import icontains

if TYPE_CHECKING:
    from fleetdesk.core.config import Settings

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def _build_entry(actor_id: int | None, action: str, details: Any = None) -> AuditLog:
    return AuditLog(user_id=actor_id, action=action, details=details)


def append_audit_log(
    db: Session,
    actor_id: int | None,
    action: str,
    details: Any = None,
) -> AuditLog:
    """Write and commit one audit entry. actor_id None means system-initiated."""
    entry = _build_entry(actor_id, action, details)
    db.add(entry)
    db.commit()
    return entry


def commit_with_audit(
    db: Session,
    actor_id: int | None,
    action: str,
    details: Any = None,
    *,
    strict: bool | None = None,
) -> None:
    """
    Commit the pending mutation in `db` and record it in the audit log.

    strict (default: AUDIT_LOG_STRICT): the audit row joins the mutation's
    transaction, so a failed audit write rolls the mutation back.
    Best-effort: the mutation is committed first; an audit failure is logged
    and swallowed.
    """
    if strict is None:
        strict = get_settings().AUDIT_LOG_STRICT

    if strict:
        db.add(_build_entry(actor_id, action, details))
        db.commit()
        return

    db.commit()
    try:
        append_audit_log(db, actor_id, action, details)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Audit log write failed",
            extra={"audit_action": action, "actor_id": actor_id},
        )


def list_audit_logs(
    db: Session,
    *,
    user_id: int | None = None,
    action: str | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[AuditLog], int]:
    """Newest first; action matches as a case-insensitive substring. Returns (items, total)."""
    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    query = db.query(AuditLog)
    if user_id:
        query = query.filter(AuditLog.user_id == user_id)
    if action and action.strip():
        query = query.filter(icontains(AuditLog.action, action.strip()))

    total = query.count()
    items = (
        query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total


def purge_audit_logs(session: Session, settings: "Settings") -> int:
    """
    Delete audit entries older than AUDIT_RETENTION_DAYS.

    No-op unless AUDIT_RETENTION_ENABLED. Idempotent: safe to run repeatedly.
    """
    if not settings.AUDIT_RETENTION_ENABLED:
        logger.info("Audit retention is disabled (AUDIT_RETENTION_ENABLED=false); skipping.")
        return 0

    cutoff = datetime.now(timezone.utc) - timedelta(days=settings.AUDIT_RETENTION_DAYS)
    deleted_count = (
        session.query(AuditLog)
        .filter(AuditLog.created_at < cutoff)
        .delete(synchronize_session=False)
    )
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Audit retention run: cutoff=%s, entries_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
