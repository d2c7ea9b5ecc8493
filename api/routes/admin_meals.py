"""
Admin meal routes - management of the common meal catalog.

Every route requires an authenticated caller holding the admin role.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import logging

from api.dependencies import get_current_user, get_meal_admin_service, require_admin
from app.messages import message
from domain.schemas.meal_schemas import (
    MealCreateRequest,
    MealEnvelope,
    MealListEnvelope,
    MealUpdateRequest,
    MessageEnvelope,
)
from domain.schemas.user_schemas import CurrentUser
from services.meal_admin_service import MealAdminService

router = APIRouter(tags=["Admin Meals"], dependencies=[Depends(require_admin)])
logger = logging.getLogger("nutriadmin.api.admin_meals")


@router.get("", response_model=MealListEnvelope)
def list_meals(
    search: Optional[str] = Query(
        default=None, description="Full-text search over meal name and description"
    ),
    user: CurrentUser = Depends(get_current_user),
    service: MealAdminService = Depends(get_meal_admin_service),
):
    """List all meals, or those matching **search**, with their creator's name and email."""
    meals = service.list_meals(user, search)
    return {"success": True, "data": meals}


@router.post("", response_model=MealEnvelope, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: MealAdminService = Depends(get_meal_admin_service),
):
    """Create a common meal owned by the calling admin."""
    meal = service.create_meal(user, payload)
    return {"success": True, "data": meal}


@router.put("/{meal_id}", response_model=MealEnvelope)
def update_meal(
    meal_id: str,
    payload: MealUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    service: MealAdminService = Depends(get_meal_admin_service),
):
    """Overwrite the supplied fields of a meal."""
    meal = service.update_meal(user, meal_id, payload)
    return {"success": True, "data": meal}


@router.delete("/{meal_id}", response_model=MessageEnvelope)
def delete_meal(
    meal_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: MealAdminService = Depends(get_meal_admin_service),
):
    service.delete_meal(user, meal_id)
    return {"success": True, "message": message("meal_deleted")}
