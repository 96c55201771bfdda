"""ORM model for the append-only audit log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base, JSONType


class AuditLog(Base):
    """
    One privileged action: who (user_id, NULL for system), what (action), details.

    Rows are never updated. The user reference is nullable so the log
    survives user removal.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action = Column(String(120), nullable=False, index=True)
    details = Column(JSONType, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    user = relationship("User", lazy="joined")
