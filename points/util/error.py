"""Utility layer errors."""

from points.config import DEFAULT_JWT_SECRET, Settings


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when settings are unusable for the current environment."""

    pass


class DependencyInjectionError(UtilError):
    """Raised when the DI container cannot be assembled."""

    pass


def ensure_production_ready(settings: Settings) -> None:
    """Refuse to serve production with development defaults.

    Raises:
        ConfigurationError: If the JWT secret is the placeholder or debug
            mode is on
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
    if settings.debug:
        raise ConfigurationError("DEBUG must be off in production")
