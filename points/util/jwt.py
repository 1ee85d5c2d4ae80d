"""JWT token utilities.

Tokens are minted by the login service with the same secret. The payload
carries the caller's role so the ledger can authorize without a user lookup.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from points.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    utorid: str
    role: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    utorid: str,
    role: str,
    settings: AuthSettings,
    expires_in: timedelta = timedelta(hours=2),
) -> str:
    """Create a JWT token.

    Used by the login collaborator and by tests.

    Args:
        user_id: User ID
        utorid: User's UTORid
        role: User's role value
        settings: Authentication settings
        expires_in: Token lifetime

    Returns:
        Encoded JWT token
    """
    payload = {
        "user_id": user_id,
        "utorid": utorid,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
