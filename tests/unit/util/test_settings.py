"""Tests for settings, startup checks and DI provider selection."""

import logging

import pytest

from points.config import (
    DEFAULT_JWT_SECRET,
    AuthSettings,
    ObservabilitySettings,
    Settings,
    read_version,
)
from points.util.di import PersistenceProvider, ProdPersistenceProvider, get_provider
from points.util.di.core import ProdConfigProvider
from points.util.error import ConfigurationError, ensure_production_ready
from points.util.logging import level_for
from points.util.observability import should_send
from tests.di import MockPersistenceProvider


class TestSettings:
    """Tests for Settings."""

    def test_version_file_fills_git_sha(self, tmp_path):
        version_file = tmp_path / "version.txt"
        version_file.write_text("abc123\n")

        settings = Settings(version_file=version_file)

        assert settings.git_sha == "abc123"

    def test_missing_version_file(self, tmp_path):
        assert read_version(tmp_path / "missing.txt") == "unknown"

    def test_nested_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOYALTY__POINTS_PER_DOLLAR", "10")
        monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://x@db/points")

        settings = Settings()

        assert settings.loyalty.points_per_dollar == 10
        assert settings.database_url == "postgresql+asyncpg://x@db/points"


class TestProductionReadiness:
    """Tests for ensure_production_ready."""

    def test_placeholder_secret_refused(self):
        settings = Settings(environment="production")

        with pytest.raises(ConfigurationError):
            ensure_production_ready(settings)

    def test_debug_refused(self):
        settings = Settings(
            environment="production",
            debug=True,
            auth=AuthSettings(jwt_secret="a-real-secret-from-the-environment"),
        )

        with pytest.raises(ConfigurationError):
            ensure_production_ready(settings)

    def test_development_defaults_allowed(self):
        settings = Settings(environment="development")

        assert settings.auth.jwt_secret == DEFAULT_JWT_SECRET
        ensure_production_ready(settings)


class TestObservability:
    """Tests for logging and export decisions."""

    @pytest.mark.parametrize(
        "token,send,expected",
        [
            (None, None, False),
            ("token", None, True),
            ("token", False, False),
            (None, True, True),
        ],
    )
    def test_should_send(self, token, send, expected):
        observability = ObservabilitySettings(logfire_token=token, send_to_logfire=send)

        assert should_send(observability) is expected

    def test_level_for_environment(self):
        assert level_for(Settings(environment="production")) == logging.WARNING
        assert level_for(Settings(environment="development")) == logging.INFO
        assert level_for(Settings(environment="production", debug=True)) == (
            logging.DEBUG
        )


class TestGetProvider:
    """Tests for provider selection."""

    def test_concrete_provider_is_used_as_is(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_persistence_implementations(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert (
            get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider
        )
