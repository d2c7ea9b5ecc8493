"""API routes package"""

from . import admin_meals, health

__all__ = ["admin_meals", "health"]
