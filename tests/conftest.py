"""Test settings: in-memory SQLite, fast bcrypt, fixed JWT secret. Must run before fleetdesk is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ["AUDIT_LOG_STRICT"] = "false"
os.environ["AUDIT_RETENTION_ENABLED"] = "false"
