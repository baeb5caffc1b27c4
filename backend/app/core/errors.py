"""Domain errors raised by storage and the auth services.

Routes never build these from HTTP concerns; the app maps each subclass to a
status code in ``app.main``.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    CONFLICT = "CONFLICT"
    REFERENTIAL_BLOCK = "REFERENTIAL_BLOCK"
    NOT_FOUND = "NOT_FOUND"
    INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.CONFLICT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConflictError(DomainError):
    """A uniqueness rule was violated (email, username, sponsor already attached)."""

    code = ErrorCode.CONFLICT


class ReferentialBlockError(DomainError):
    """Delete refused because other rows still reference the target."""

    code = ErrorCode.REFERENTIAL_BLOCK


class NotFoundError(DomainError):
    """A write referenced a row that does not exist."""

    code = ErrorCode.NOT_FOUND


class InvalidResetTokenError(DomainError):
    code = ErrorCode.INVALID_RESET_TOKEN

    def __init__(self) -> None:
        super().__init__("Invalid or expired reset token")
