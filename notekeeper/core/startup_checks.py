"""
Startup Security Validation.

Checks security invariants before the application accepts traffic.
If any check fails the application refuses to start.
"""

from notekeeper.core.config import AppConfig, Settings, get_app_config, get_settings
from notekeeper.core.logging import get_logger

logger = get_logger(__name__)


class StartupSecurityError(RuntimeError):
    """Raised when a startup security check fails."""


def run_startup_checks() -> None:
    """
    Validate all security invariants at startup.

    Raises:
        StartupSecurityError: If any check fails
    """
    app_config = get_app_config()
    settings = get_settings()
    environment = app_config.application.environment

    errors: list[str] = []
    _check_secret_strength(settings, app_config, errors)
    _check_production_safety(app_config, environment == "production", errors)

    if errors:
        for error in errors:
            logger.error("Startup security check failed", extra={"check": error})
        raise StartupSecurityError(
            f"Startup blocked: {len(errors)} security check(s) failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    logger.info("Startup security checks passed", extra={"environment": environment})


def _check_secret_strength(settings: Settings, app_config: AppConfig, errors: list[str]) -> None:
    """Validate that the token secret meets the minimum length."""
    min_length = app_config.security.secrets_validation.jwt_secret_min_length
    if len(settings.jwt_secret) < min_length:
        errors.append(f"JWT_SECRET must be at least {min_length} characters")


def _check_production_safety(app_config: AppConfig, is_production: bool, errors: list[str]) -> None:
    """Block permissive settings in production."""
    if not is_production:
        return
    application = app_config.application
    if application.debug:
        errors.append("debug must be disabled in production")
    if "*" in application.cors.origins:
        errors.append("CORS origins must not contain '*' in production")
