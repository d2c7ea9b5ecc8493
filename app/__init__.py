"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    AppError,
    ServiceValidationError,
    StoreValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    StoreError,
    InternalServerError,
)

__all__ = [
    "settings",
    "AppError",
    "ServiceValidationError",
    "StoreValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "StoreError",
    "InternalServerError",
]
