"""
Meal Repository - Data access layer for meal documents (MongoDB integration)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection

from app.exceptions import StoreValidationError
from domain.schemas.meal_schemas import MealChanges, MealDocument
from repositories.base import (
    BaseRepository,
    public_document,
    to_object_id,
    to_reference,
    validation_message,
)
from repositories.user_repository import UserRepository

logger = logging.getLogger("nutriadmin.repositories.meals")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MealRepository(BaseRepository):
    """
    Repository for meal documents.

    Writes are checked against MealDocument / MealChanges first; failures surface
    as StoreValidationError. Every other store failure surfaces as StoreError.
    """

    entity_name = "Meal"

    def __init__(self, collection: Collection, users: Optional[UserRepository] = None):
        super().__init__(collection)
        self.users = users

    def find(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """List meals, optionally restricted by a full-text search.

        Args:
            search: text matched against the indexed name/description fields

        Returns:
            Public meal documents with ``createdBy`` expanded to the creator summary
        """
        query: Dict[str, Any] = {}
        if search:
            query["$text"] = {"$search": search}

        with self.translate_errors("find meals"):
            meals = [public_document(doc) for doc in self.collection.find(query)]

        return self._populate_creators(meals)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and insert a new meal; returns the stored document."""
        try:
            meal = MealDocument.model_validate(data)
        except ValidationError as exc:
            raise StoreValidationError(validation_message(self.entity_name, exc)) from exc

        now = _utcnow()
        doc = meal.model_dump()
        doc["createdBy"] = to_reference(doc["createdBy"])
        doc["createdAt"] = now
        doc["updatedAt"] = now

        with self.translate_errors("insert meal"):
            result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.debug("Meal inserted: %s", result.inserted_id)
        return public_document(doc)

    def update(self, meal_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update and return the resulting document, or None if not found."""
        oid = to_object_id(meal_id)
        if oid is None:
            return None

        try:
            validated = MealChanges.model_validate(changes)
        except ValidationError as exc:
            raise StoreValidationError(validation_message(self.entity_name, exc)) from exc
        fields = validated.model_dump(include=set(changes))

        if not fields:
            with self.translate_errors("find meal"):
                doc = self.collection.find_one({"_id": oid})
        else:
            fields["updatedAt"] = _utcnow()
            with self.translate_errors("update meal"):
                doc = self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": fields},
                    return_document=ReturnDocument.AFTER,
                )
        return public_document(doc) if doc else None

    def delete(self, meal_id: str) -> Optional[Dict[str, Any]]:
        """Delete a meal permanently; returns the removed document or None."""
        oid = to_object_id(meal_id)
        if oid is None:
            return None
        with self.translate_errors("delete meal"):
            doc = self.collection.find_one_and_delete({"_id": oid})
        return public_document(doc) if doc else None

    def _populate_creators(self, meals: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if self.users is None:
            return meals
        summaries = self.users.get_summaries(m.get("createdBy") for m in meals)
        for meal in meals:
            creator = meal.get("createdBy")
            meal["createdBy"] = summaries.get(str(creator)) if creator is not None else None
        return meals
