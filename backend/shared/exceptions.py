"""
Base exception classes for the Stockroom backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps every base to exactly one HTTP status, so new errors
must extend one of them rather than StockroomError directly.
"""

from typing import Optional, Any


class StockroomError(Exception):
    """
    Base exception for all Stockroom errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class NotFoundError(StockroomError):
    """Resource not found."""

    pass


class ValidationError(StockroomError):
    """Input validation failed."""

    pass


class InvalidArgumentError(StockroomError):
    """An identifier or argument is malformed."""

    pass


class ConflictError(StockroomError):
    """A uniqueness constraint was violated."""

    pass


class AuthenticationError(StockroomError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class StoreUnavailableError(StockroomError):
    """The document store is not reachable."""

    def __init__(
        self,
        message: str = "Database not available - running in offline mode",
        code: Optional[str] = "DATABASE_OFFLINE",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
