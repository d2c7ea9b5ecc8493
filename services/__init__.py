"""Services package - Business logic layer"""

from services.base_service import BaseService
from services.meal_admin_service import MealAdminService

__all__ = ["BaseService", "MealAdminService"]
