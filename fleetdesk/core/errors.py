"""Application error taxonomy. Routes raise these; handlers in main.py render them as JSON."""

from typing import Any


class AppError(Exception):
    """Base error with an HTTP status and a short user-facing message."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
        self.headers = headers

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class Unauthenticated(AppError):
    """No token, bad token format, expired or invalid token."""

    status_code = 401


class Forbidden(AppError):
    """Authenticated but lacking the required permission."""

    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    """Unique constraint violated or row still referenced by dependents."""

    status_code = 409


class ValidationFailed(AppError):
    status_code = 400


class TokenError(Exception):
    """Base for token verification failures raised by core.security."""


class ExpiredToken(TokenError):
    pass


class MalformedToken(TokenError):
    pass
