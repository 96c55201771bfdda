"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from fleetdesk.models.base import Base

USER_STATUSES = ("active", "inactive")


class User(Base):
    """
    User account for JWT authentication.

    A user holds at most one role; its permissions are resolved through the
    role on every request. Users are deactivated, never deleted.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default="active", server_default="active")
    phone = Column(String(64), nullable=True)
    address = Column(String(512), nullable=True)
    role_id = Column(
        Integer,
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    role = relationship("Role", back_populates="users", lazy="joined")
