"""JWT helpers for bearer-token authentication."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.config import settings

ACCESS_TOKEN_MINUTES = 60


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed access token whose ``sub`` is ``user_id``."""
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=ACCESS_TOKEN_MINUTES)
    payload = {
        "sub": str(user_id),
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a token. Raises ValueError when it is unusable."""
    try:
        data = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise ValueError("Invalid token")

    if data.get("type", "access") != "access" or not data.get("sub"):
        raise ValueError("Invalid token")
    return data
