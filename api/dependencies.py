"""
API dependencies for dependency injection.

Every collaborator of the admin routes is resolved here so tests can swap
them through ``app.dependency_overrides``.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import ForbiddenError, UnauthorizedError
from app.messages import message
from app.security import decode_token
from domain.schemas.user_schemas import CurrentUser
from repositories import MealRepository, UserRepository
from services.meal_admin_service import MealAdminService

logger = logging.getLogger("nutriadmin.api.auth")

bearer = HTTPBearer(auto_error=False)


def get_user_repository() -> UserRepository:
    """User repository bound to the connected database."""
    return UserRepository(mongo_adapter.users_collection())


def get_meal_repository(
    users: UserRepository = Depends(get_user_repository),
) -> MealRepository:
    """Meal repository bound to the connected database."""
    return MealRepository(mongo_adapter.meals_collection(), users=users)


def get_meal_admin_service(
    repository: MealRepository = Depends(get_meal_repository),
) -> MealAdminService:
    return MealAdminService(repository)


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    users: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """
    Resolve the caller from the ``Authorization: Bearer`` header.

    Raises UnauthorizedError when the header is missing, the token does not
    verify, or its subject no longer exists.
    """
    if creds is None or not creds.credentials:
        raise UnauthorizedError(message("unauthenticated"))

    try:
        claims = decode_token(creds.credentials)
    except ValueError:
        logger.warning("Rejected bearer token")
        raise UnauthorizedError(message("invalid_token"))

    user = users.get_by_id(claims["sub"])
    if not user:
        logger.warning("Token subject %s not found", claims["sub"])
        raise UnauthorizedError(message("user_not_found"))

    return CurrentUser(
        id=user["id"],
        role=user.get("role") or "user",
        name=user.get("name"),
        email=user.get("email"),
    )


def require_role(role: str) -> Callable[..., CurrentUser]:
    """Build a dependency that admits only callers holding ``role``."""

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not user.has_role(role):
            logger.warning("User %s with role %s denied (requires %s)", user.id, user.role, role)
            raise ForbiddenError(message("forbidden"))
        return user

    return dependency


require_admin = require_role(settings.admin_role)
