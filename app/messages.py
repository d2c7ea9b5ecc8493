"""
User-facing message catalog.

Messages are keyed by error kind so the exception types stay language-neutral.
"""

MESSAGES = {
    "unauthenticated": "User not authenticated",
    "forbidden": "Insufficient permissions",
    "invalid_token": "Invalid or expired token",
    "user_not_found": "User not found",
    "required_fields": "Name, calories, carbs, protein, fat and weightGrams are required",
    "negative_values": "Nutrition values/weight cannot be negative",
    "negative_calories": "Calories cannot be negative",
    "negative_carbs": "Carbs cannot be negative",
    "negative_protein": "Protein cannot be negative",
    "negative_fat": "Fat cannot be negative",
    "negative_weightGrams": "Weight cannot be negative",
    "meal_not_found": "Meal not found",
    "meal_deleted": "Meal deleted successfully",
    "list_failed": "Failed to get meals",
    "create_failed": "Failed to create meal",
    "update_failed": "Failed to update meal",
    "delete_failed": "Failed to delete meal",
    "invalid_request": "Request validation failed",
    "unexpected": "An unexpected error occurred",
}


def message(kind: str) -> str:
    """Return the message for ``kind``; unknown kinds fall back to the generic one."""
    return MESSAGES.get(kind, MESSAGES["unexpected"])
