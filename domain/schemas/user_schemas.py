from pydantic import BaseModel
from typing import Optional


class CurrentUser(BaseModel):
    """Caller identity resolved by the authentication dependency."""

    id: str
    role: str
    name: Optional[str] = None
    email: Optional[str] = None

    def has_role(self, role: str) -> bool:
        return self.role == role
