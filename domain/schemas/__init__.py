"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    NUMERIC_FIELDS,
    PROTECTED_FIELDS,
    MealCreateRequest,
    MealUpdateRequest,
    MealDocument,
    MealChanges,
    CreatorSummary,
    MealResponse,
    MealEnvelope,
    MealListEnvelope,
    MessageEnvelope,
)
from domain.schemas.user_schemas import CurrentUser

__all__ = [
    "NUMERIC_FIELDS",
    "PROTECTED_FIELDS",
    "MealCreateRequest",
    "MealUpdateRequest",
    "MealDocument",
    "MealChanges",
    "CreatorSummary",
    "MealResponse",
    "MealEnvelope",
    "MealListEnvelope",
    "MessageEnvelope",
    "CurrentUser",
]
