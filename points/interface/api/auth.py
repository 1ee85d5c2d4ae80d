"""Bearer token authentication for API routes."""

from points.domain.service import JWTService
from points.domain.value import Actor
from points.interface.error import AuthenticationError

BEARER_PREFIX = "bearer "


def authenticate(authorization: str | None, jwt_service: JWTService) -> Actor:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw Authorization header value
        jwt_service: Token verification service

    Returns:
        The authenticated caller

    Raises:
        AuthenticationError: If the header is missing or not a bearer token
        JWTError: If the token is invalid or expired
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationError("Authentication required")
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError("Authentication required")
    return jwt_service.actor_from_token(token)
