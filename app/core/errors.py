"""Domain errors raised by services and rendered as JSON responses by app.main."""

from typing import Any


class AppError(Exception):
    """Base error: carries a user-facing message and the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def serialize(self) -> dict[str, Any]:
        return {"message": self.message}

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class InvalidInputError(AppError):
    """Malformed or missing input."""

    status_code = 400


class UnauthorizedError(AppError):
    """Missing, invalid or expired bearer token."""

    status_code = 401

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidCredentialsError(UnauthorizedError):
    """
    Unknown identifier or wrong password.

    attempts_remaining is only set for a wrong password on an existing account;
    it is a UX hint, not a security signal.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        attempts_remaining: int | None = None,
    ) -> None:
        self.attempts_remaining = attempts_remaining
        super().__init__(message)

    @property
    def serialize(self) -> dict[str, Any]:
        body = super().serialize
        if self.attempts_remaining is not None:
            body["attempts_remaining"] = self.attempts_remaining
        return body


class ForbiddenError(AppError):
    """Role, ownership or account-status violation."""

    status_code = 403


class AccountSuspendedError(ForbiddenError):
    def __init__(self, message: str = "Account has been suspended") -> None:
        super().__init__(message)


class AccountPendingError(ForbiddenError):
    def __init__(self, message: str = "Account is pending approval") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate unique field, or a transition the current state does not allow."""

    status_code = 409


class AccountLockedError(AppError):
    """Temporary lockout after repeated failed logins."""

    status_code = 423

    def __init__(self, message: str, retry_after_minutes: int) -> None:
        self.retry_after_minutes = retry_after_minutes
        super().__init__(message)

    @property
    def serialize(self) -> dict[str, Any]:
        body = super().serialize
        body["retry_after_minutes"] = self.retry_after_minutes
        return body

    @property
    def headers(self) -> dict[str, str] | None:
        return {"Retry-After": str(self.retry_after_minutes * 60)}
