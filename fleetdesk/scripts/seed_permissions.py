"""
Insert every registry permission key and resync the Admin role. Idempotent. Run from project root:
  python -m fleetdesk.scripts.seed_permissions
"""
import logging
import sys

from fleetdesk.core.database import SessionLocal
from fleetdesk.core.permissions import KNOWN_PERMISSIONS, find_unknown_permissions
from fleetdesk.models import Permission
from fleetdesk.services.audit import append_audit_log
from fleetdesk.services.rbac import ensure_default_roles

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    db = SessionLocal()
    try:
        stored = [key for (key,) in db.query(Permission.key).all()]
        before = len(stored)
        admin, _ = ensure_default_roles(db, resync_admin=True)
        db.commit()
        created = db.query(Permission).count() - before
        append_audit_log(db, None, "permissions.seed", {"created": created, "admin_role_id": admin.id})

        extra = find_unknown_permissions(stored)
        if extra:
            logger.warning("Stored permissions outside the registry: %s", ", ".join(extra))
        logger.info(
            "Seeded permissions: registry=%s created=%s", len(KNOWN_PERMISSIONS), created
        )
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
