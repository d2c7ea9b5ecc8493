"""
Base repository helpers for the MongoDB data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Union
from abc import ABC
import logging

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import OperationFailure, PyMongoError
from pydantic import ValidationError

from app.exceptions import StoreError, StoreValidationError

logger = logging.getLogger("nutriadmin.repositories")

# MongoDB server error code for $jsonSchema validator rejections
DOCUMENT_VALIDATION_FAILURE = 121


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or None when it is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def to_reference(value: Any) -> Union[ObjectId, Any]:
    """Store references as ObjectId when they look like one, verbatim otherwise."""
    oid = to_object_id(value)
    return oid if oid is not None else value


def public_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convert MongoDB document to public API format."""
    out = dict(doc)
    out["id"] = str(out.pop("_id"))
    for key, value in out.items():
        if isinstance(value, ObjectId):
            out[key] = str(value)
    return out


def validation_message(entity: str, exc: ValidationError) -> str:
    """Render a pydantic ValidationError as ``"<Entity> validation failed: field: msg, ..."``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or entity.lower()
        parts.append(f"{loc}: {err.get('msg')}")
    return f"{entity} validation failed: " + ", ".join(parts)


class BaseRepository(ABC):
    """
    Base repository wrapping a single collection.
    All repositories should inherit from this class.
    """

    entity_name = "Document"

    def __init__(self, collection: Collection):
        self.collection = collection

    @contextmanager
    def translate_errors(self, operation: str) -> Iterator[None]:
        """Re-raise pymongo failures as StoreValidationError / StoreError."""
        try:
            yield
        except OperationFailure as exc:
            if exc.code == DOCUMENT_VALIDATION_FAILURE:
                logger.warning("%s rejected by store validator during %s", self.entity_name, operation)
                reason = (exc.details or {}).get("errmsg") or str(exc)
                raise StoreValidationError(
                    f"{self.entity_name} validation failed: {reason}"
                ) from exc
            logger.exception("Store operation %s failed", operation)
            raise StoreError(f"{operation} failed: {exc}") from exc
        except PyMongoError as exc:
            logger.exception("Store operation %s failed", operation)
            raise StoreError(f"{operation} failed: {exc}") from exc
