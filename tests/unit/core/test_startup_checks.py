"""
Unit Tests for Startup Security Checks.
"""

from unittest.mock import MagicMock, patch

import pytest

from notekeeper.core.startup_checks import StartupSecurityError, run_startup_checks


def make_config(environment: str = "development", debug: bool = False, origins=None) -> MagicMock:
    config = MagicMock()
    config.application.environment = environment
    config.application.debug = debug
    config.application.cors.origins = origins or ["http://localhost:3000"]
    config.security.secrets_validation.jwt_secret_min_length = 32
    return config


def run_with(config: MagicMock, secret: str = "x" * 32) -> None:
    settings = MagicMock()
    settings.jwt_secret = secret
    with (
        patch("notekeeper.core.startup_checks.get_app_config", return_value=config),
        patch("notekeeper.core.startup_checks.get_settings", return_value=settings),
    ):
        run_startup_checks()


class TestRunStartupChecks:
    """Tests for run_startup_checks."""

    def test_passes_with_real_config(self):
        run_startup_checks()

    def test_passes_with_strong_secret(self):
        run_with(make_config())

    def test_short_secret_blocks_startup(self):
        with pytest.raises(StartupSecurityError, match="JWT_SECRET"):
            run_with(make_config(), secret="short")

    def test_debug_blocked_in_production(self):
        with pytest.raises(StartupSecurityError, match="debug"):
            run_with(make_config(environment="production", debug=True))

    def test_wildcard_cors_blocked_in_production(self):
        with pytest.raises(StartupSecurityError, match="CORS"):
            run_with(make_config(environment="production", origins=["*"]))

    def test_debug_allowed_in_development(self):
        run_with(make_config(environment="development", debug=True, origins=["*"]))
