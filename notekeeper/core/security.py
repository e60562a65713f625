"""
Security Utilities.

Bearer-token verification and the Actor identity passed explicitly
into every policy and service call.

Tokens are issued by an external identity provider; this module only
verifies them. create_access_token() exists for local development and
tests, which need tokens signed with the configured secret.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from notekeeper.core.config import get_app_config, get_settings
from notekeeper.core.exceptions import UnauthenticatedError
from notekeeper.core.logging import get_logger
from notekeeper.core.utils import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated identity making a request."""

    id: str


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Payload data to encode (``sub`` is the actor id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        UnauthenticatedError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise UnauthenticatedError("Invalid or expired token")


def actor_from_token(token: str) -> Actor:
    """
    Resolve the actor identified by an access token.

    Raises:
        UnauthenticatedError: If the token is invalid, is not an access
            token, or carries no subject
    """
    payload = decode_token(token)

    if payload.get("type", "access") != "access":
        raise UnauthenticatedError("Access token required")

    subject = payload.get("sub")
    if not subject:
        raise UnauthenticatedError("Token has no subject")

    return Actor(id=str(subject))
