"""
CLI entrypoint for audit log retention. Run from cron, e.g.:

  python -m fleetdesk.retention

Daily: 15 3 * * * cd /path/to/fleetdesk && .venv/bin/python -m fleetdesk.retention

Does nothing unless AUDIT_RETENTION_ENABLED=true.
"""

import logging
import sys

from fleetdesk.core.config import get_settings
from fleetdesk.core.database import SessionLocal
from fleetdesk.services.audit import purge_audit_logs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete audit entries older than AUDIT_RETENTION_DAYS."""
    settings = get_settings()
    db = SessionLocal()
    try:
        deleted = purge_audit_logs(db, settings)
        logger.info("Audit retention completed: entries_deleted=%s", deleted)
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Audit retention job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
