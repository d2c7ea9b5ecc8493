from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP error envelope.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        error: short label rendered as the ``error`` key of the envelope
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    error = "Internal server error"

    def __init__(self, message: str = "Internal server error", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    ``field`` names the offending attribute when the failure concerns a single one.
    """

    http_status = 400
    error = "Validation error"

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Mapping[str, Any]] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.field = field


class StoreValidationError(ServiceValidationError):
    """Raised by the store-access layer when a document fails the store schema."""


class NotFoundError(AppError):
    """Raised when a requested resource was not found. http_status is 404."""

    http_status = 404
    error = "Not found"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class UnauthorizedError(AppError):
    """Raised when no caller identity could be resolved. http_status is 401."""

    http_status = 401
    error = "Unauthorized"

    def __init__(self, message: str = "User not authenticated", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class ForbiddenError(AppError):
    """Raised when the caller is authenticated but lacks the required role."""

    http_status = 403
    error = "Forbidden"

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class StoreError(AppError):
    """Raised by the store-access layer for any non-validation store failure.

    The message is meant for logs only and never reaches the client.
    """


class InternalServerError(AppError):
    """Generic 500 carrying a client-safe message."""
