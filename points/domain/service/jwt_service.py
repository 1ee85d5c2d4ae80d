"""JWT token domain service."""

from uuid import UUID

import logfire

from points.config import AuthSettings
from points.domain.model import User
from points.domain.value import Actor, Role, UserId
from points.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user: User) -> str:
        """Create JWT token for user.

        Args:
            user: User the token identifies

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=str(user.id)):
            return create_token(
                str(user.id), user.utorid.root, user.role.value, self.auth_settings
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.info(
                "JWT token verified", user_id=payload.user_id, utorid=payload.utorid
            )
            return payload

    def actor_from_token(self, token: str) -> Actor:
        """Resolve the authenticated caller from a bearer token.

        Raises:
            JWTError: If the token is invalid, expired, or carries an unknown
                role or malformed user ID
        """
        payload = self.verify_token(token)
        try:
            return Actor(user_id=UserId(UUID(payload.user_id)), role=Role(payload.role))
        except ValueError:
            raise JWTError("Invalid token claims")
