from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: UUID,
    tenant_id: UUID,
    is_master: bool = False,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        tenant_id: Home tenant UUID
        is_master: Whether the user may act on behalf of other tenants
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_MINUTES)

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_MINUTES)
    payload = {
        "user_id": str(user_id),
        "tenant_id": str(tenant_id),
        "is_master": bool(is_master),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
