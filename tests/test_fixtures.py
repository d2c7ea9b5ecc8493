"""
Shared test fixtures and utilities for the NutriAdmin test suite.

Contains in-memory stand-ins for the MongoDB repositories, helpers to build
callers and tokens, and realistic meal payloads.
"""

import copy
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import ValidationError

from app.exceptions import StoreError, StoreValidationError
from app.security import create_access_token
from domain.schemas.meal_schemas import MealChanges, MealDocument
from domain.schemas.user_schemas import CurrentUser
from repositories.base import validation_message


# Realistic default users
REALISTIC_USERS = {
    "admin": {"name": "Sarah Martinez", "email": "sarah.martinez@example.com", "role": "admin"},
    "user": {"name": "Michael Chen", "email": "michael.chen@example.com", "role": "user"},
}


def rice_payload(**overrides) -> Dict[str, Any]:
    """The canonical 150g serving of cooked rice."""
    payload = {
        "name": "Rice",
        "calories": 200,
        "carbs": 45,
        "protein": 4,
        "fat": 0,
        "weightGrams": 150,
    }
    payload.update(overrides)
    return payload


def chicken_payload(**overrides) -> Dict[str, Any]:
    payload = {
        "name": "Grilled chicken breast",
        "description": "Skinless breast, grilled without oil",
        "image": "https://cdn.example.com/meals/chicken.jpg",
        "calories": 165,
        "carbs": 0,
        "protein": 31,
        "fat": 3.6,
        "weightGrams": 100,
    }
    payload.update(overrides)
    return payload


def make_user(profile_type: str = "admin", user_id: Optional[str] = None) -> CurrentUser:
    """Create a caller identity with realistic data."""
    profile = REALISTIC_USERS[profile_type]
    return CurrentUser(
        id=user_id or str(ObjectId()),
        role=profile["role"],
        name=profile["name"],
        email=profile["email"],
    )


def auth_headers(user_id: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


class InMemoryUserRepository:
    """Dict-backed replacement for UserRepository."""

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}

    def add(self, user: CurrentUser) -> CurrentUser:
        self.users[user.id] = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
        }
        return user

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.users.get(str(user_id))
        return dict(user) if user else None

    def get_summaries(self, user_ids) -> Dict[str, Dict[str, Any]]:
        summaries = {}
        for uid in {str(u) for u in user_ids if u is not None}:
            user = self.users.get(uid)
            if user:
                summaries[uid] = {"id": uid, "name": user["name"], "email": user["email"]}
        return summaries


class InMemoryMealRepository:
    """
    Dict-backed replacement for MealRepository.

    Applies the same store schema as the real repository. Set ``fail_with`` to an
    exception instance to make every call raise it.
    """

    def __init__(self, users: Optional[InMemoryUserRepository] = None):
        self.meals: Dict[str, Dict[str, Any]] = {}
        self.users = users
        self.fail_with: Optional[Exception] = None
        self.writes = 0

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _words(text: Optional[str]) -> set:
        return set(re.findall(r"\w+", (text or "").lower()))

    def find(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        self._check()
        meals = [copy.deepcopy(m) for m in self.meals.values()]
        if search:
            terms = self._words(search)
            meals = [
                m
                for m in meals
                if terms & (self._words(m.get("name")) | self._words(m.get("description")))
            ]
        if self.users is not None:
            summaries = self.users.get_summaries(m.get("createdBy") for m in meals)
            for meal in meals:
                meal["createdBy"] = summaries.get(str(meal.get("createdBy")))
        return meals

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check()
        try:
            meal = MealDocument.model_validate(data)
        except ValidationError as exc:
            raise StoreValidationError(validation_message("Meal", exc)) from exc

        now = datetime.now(timezone.utc)
        doc = meal.model_dump()
        doc.update(id=str(ObjectId()), createdAt=now, updatedAt=now)
        self.meals[doc["id"]] = doc
        self.writes += 1
        return copy.deepcopy(doc)

    def update(self, meal_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check()
        try:
            validated = MealChanges.model_validate(changes)
        except ValidationError as exc:
            raise StoreValidationError(validation_message("Meal", exc)) from exc

        meal = self.meals.get(meal_id)
        if meal is None:
            return None
        meal.update(validated.model_dump(include=set(changes)))
        meal["updatedAt"] = datetime.now(timezone.utc)
        self.writes += 1
        return copy.deepcopy(meal)

    def delete(self, meal_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        meal = self.meals.pop(meal_id, None)
        if meal is not None:
            self.writes += 1
        return meal


def store_down() -> StoreError:
    return StoreError("find meals failed: connection refused by mongo:27017")
