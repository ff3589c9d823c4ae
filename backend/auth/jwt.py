"""
JWT access tokens identifying the caller of an API request.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from backend.config import settings


@dataclass
class TokenPayload:
    """Decoded token payload with user information."""
    user_id: UUID
    role: str


def create_access_token(
    user_id: UUID,
    role: str = "user",
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        user_id: User's UUID, stored in the ``sub`` claim
        role: User's role (user or admin)
        expires_delta: Lifetime of the token; defaults to the configured expiry

    Returns:
        Encoded JWT token
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """
    Decode and validate a JWT token.

    Returns:
        TokenPayload if the token is valid and unexpired, None otherwise
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        subject = claims.get("sub")
        if subject is None:
            return None
        return TokenPayload(user_id=UUID(subject), role=claims.get("role", "user"))
    except (JWTError, ValueError):
        return None
