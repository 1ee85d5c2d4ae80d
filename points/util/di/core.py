"""Configuration DI providers."""

from dishka import Scope, provide

from points.config import AuthSettings, LoyaltySettings, Settings
from points.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings provider, read from the environment and ``.env``."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_loyalty_settings(self, settings: Settings) -> LoyaltySettings:
        """Provide earning-rate settings."""
        return settings.loyalty
