"""
Meal administration service.

Validates admin requests locally, delegates persistence to the meal repository
and turns store failures into client-safe errors.
"""

from typing import Any, Dict, List, Optional

from app.exceptions import (
    InternalServerError,
    NotFoundError,
    ServiceValidationError,
    StoreError,
    UnauthorizedError,
)
from app.messages import message
from domain.schemas.meal_schemas import (
    NUMERIC_FIELDS,
    PROTECTED_FIELDS,
    MealCreateRequest,
    MealUpdateRequest,
)
from domain.schemas.user_schemas import CurrentUser
from repositories.meal_repository import MealRepository
from services.base_service import BaseService

# fields that cannot be cleared once set
REQUIRED_FIELDS = ("name",) + NUMERIC_FIELDS


def _require_identity(user: Optional[CurrentUser]) -> CurrentUser:
    if user is None:
        raise UnauthorizedError(message("unauthenticated"))
    return user


class MealAdminService(BaseService[MealRepository]):
    """List, create, update and delete common meals on behalf of an admin."""

    def __init__(self, repository: MealRepository):
        super().__init__(repository, "nutriadmin.services.meals")

    def list_meals(
        self, user: Optional[CurrentUser], search: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Return every meal, or only those matching ``search`` when it is non-empty."""
        _require_identity(user)
        try:
            meals = self.repository.find(search or None)
        except StoreError as exc:
            self.log_error("Listing meals failed", error=exc)
            raise InternalServerError(message("list_failed")) from exc

        self.log_info("Listed meals", count=len(meals), search=search or "")
        return meals

    def create_meal(
        self, user: Optional[CurrentUser], payload: MealCreateRequest
    ) -> Dict[str, Any]:
        """Create a common meal owned by ``user``.

        Raises:
            UnauthorizedError: no caller identity
            ServiceValidationError: a required field is missing or a value is negative
            StoreValidationError: the store schema rejected the document
            InternalServerError: any other store failure
        """
        user = _require_identity(user)

        # 0 is a valid amount, so numeric fields are only checked for absence
        if not payload.name or any(getattr(payload, f) is None for f in NUMERIC_FIELDS):
            raise ServiceValidationError(message("required_fields"))

        if any(getattr(payload, f) < 0 for f in NUMERIC_FIELDS):
            raise ServiceValidationError(message("negative_values"))

        document = payload.model_dump(
            include={"name", "description", "image", *NUMERIC_FIELDS}
        )
        document["isCommon"] = True
        document["createdBy"] = user.id

        try:
            meal = self.repository.create(document)
        except StoreError as exc:
            self.log_error("Creating meal failed", user_id=user.id, error=exc)
            raise InternalServerError(message("create_failed")) from exc

        self.log_info("Meal created", meal_id=meal["id"], user_id=user.id)
        return meal

    def update_meal(
        self, user: Optional[CurrentUser], meal_id: str, payload: MealUpdateRequest
    ) -> Dict[str, Any]:
        """Apply the fields present in ``payload`` to meal ``meal_id``.

        Each numeric field is checked on its own; all violations are reported in
        one ServiceValidationError whose details list them in field order.
        """
        user = _require_identity(user)

        changes = payload.model_dump(exclude_unset=True)
        discarded = [f for f in PROTECTED_FIELDS if changes.pop(f, None) is not None]
        if discarded:
            self.log_warning(
                "Ignoring protected fields on update", meal_id=meal_id, fields=",".join(discarded)
            )
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]

        violations = []
        for field in NUMERIC_FIELDS:
            if field in changes and changes[field] < 0:
                violations.append({"field": field, "message": message(f"negative_{field}")})

        if violations:
            raise ServiceValidationError(
                "; ".join(v["message"] for v in violations),
                details={"errors": violations},
                field=violations[0]["field"] if len(violations) == 1 else None,
            )

        try:
            meal = self.repository.update(meal_id, changes)
        except StoreError as exc:
            self.log_error("Updating meal failed", meal_id=meal_id, error=exc)
            raise InternalServerError(message("update_failed")) from exc

        if meal is None:
            raise NotFoundError(message("meal_not_found"))

        self.log_info("Meal updated", meal_id=meal_id, fields=",".join(sorted(changes)))
        return meal

    def delete_meal(self, user: Optional[CurrentUser], meal_id: str) -> None:
        """Delete meal ``meal_id`` permanently. Raises NotFoundError if absent."""
        user = _require_identity(user)

        try:
            meal = self.repository.delete(meal_id)
        except StoreError as exc:
            self.log_error("Deleting meal failed", meal_id=meal_id, error=exc)
            raise InternalServerError(message("delete_failed")) from exc

        if meal is None:
            raise NotFoundError(message("meal_not_found"))

        self.log_info("Meal deleted", meal_id=meal_id, user_id=user.id)
