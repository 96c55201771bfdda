"""Shared base for API tests: a fresh in-memory database per test and helpers to create callers."""

import unittest
from collections.abc import Iterable

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fleetdesk.core.database import get_db
from fleetdesk.core.security import create_access_token, hash_password
from fleetdesk.main import app
from fleetdesk.models import Base, Role, RolePermission, User
from fleetdesk.services.rbac import ensure_permissions

DEFAULT_PASSWORD = "secret123"


class ApiTestCase(unittest.TestCase):
    """TestClient wired to an isolated SQLite database. The app lifespan is not run."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def session(self) -> Session:
        return self.SessionTesting()

    def make_role(self, name: str, permissions: Iterable[str] = ()) -> int:
        with self.session() as db:
            role = Role(name=name)
            db.add(role)
            role.role_permissions.extend(
                RolePermission(permission=p) for p in ensure_permissions(db, permissions)
            )
            db.commit()
            return role.id

    def make_user(
        self,
        email: str,
        permissions: Iterable[str] = (),
        *,
        name: str = "Test User",
        status: str = "active",
        password: str = DEFAULT_PASSWORD,
        role_id: int | None = None,
    ) -> int:
        """Create a user; unless role_id is given, a dedicated role holding `permissions` is created."""
        if role_id is None:
            role_id = self.make_role(f"role-for-{email}", permissions)
        with self.session() as db:
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password),
                status=status,
                role_id=role_id,
            )
            db.add(user)
            db.commit()
            return user.id

    def auth_headers(self, user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    def caller(self, email: str, permissions: Iterable[str] = ()) -> dict[str, str]:
        """Shortcut: create a user with `permissions` and return its auth headers."""
        return self.auth_headers(self.make_user(email, permissions))
