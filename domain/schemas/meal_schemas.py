"""Pydantic schemas for meal requests, stored meal documents and responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional, Union
from datetime import datetime


NUMERIC_FIELDS = ("calories", "carbs", "protein", "fat", "weightGrams")
PROTECTED_FIELDS = ("isCommon", "createdBy")


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class MealCreateRequest(BaseModel):
    """POST body. Presence and sign are checked by the service, not here,
    so the client gets the same message whichever field is missing."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    calories: Optional[float] = None
    carbs: Optional[float] = None
    protein: Optional[float] = None
    fat: Optional[float] = None
    weightGrams: Optional[float] = None


class MealUpdateRequest(BaseModel):
    """PUT body: any subset of the meal fields.

    ``isCommon`` and ``createdBy`` are parsed so the service can discard them;
    they are only ever set at creation.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    calories: Optional[float] = None
    carbs: Optional[float] = None
    protein: Optional[float] = None
    fat: Optional[float] = None
    weightGrams: Optional[float] = None
    isCommon: Optional[Any] = None
    createdBy: Optional[Any] = None


# ---------------------------------------------------------------------------
# Store schema
# ---------------------------------------------------------------------------


def _trim(v):
    return v.strip() if isinstance(v, str) else v


class MealDocument(BaseModel):
    """Schema every meal must satisfy before it is written to the store."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    calories: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    weightGrams: float = Field(..., ge=0)
    isCommon: bool = False
    createdBy: Optional[str] = None

    @field_validator("name", "description", "image", mode="before")
    @classmethod
    def trim_text(cls, v):
        return _trim(v)


class MealChanges(BaseModel):
    """Schema applied to the fields of a partial update."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    calories: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    weightGrams: Optional[float] = Field(None, ge=0)

    @field_validator("name", "description", "image", mode="before")
    @classmethod
    def trim_text(cls, v):
        return _trim(v)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class CreatorSummary(BaseModel):
    """Creator projection embedded in meal listings."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class MealResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    calories: float
    carbs: float
    protein: float
    fat: float
    weightGrams: float
    isCommon: bool
    createdBy: Union[CreatorSummary, str, None] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class MealEnvelope(BaseModel):
    success: bool = True
    data: MealResponse


class MealListEnvelope(BaseModel):
    success: bool = True
    data: List[MealResponse]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
