"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request
id, the authenticated actor and per-actor rate limiting.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.database import get_db_session
from notekeeper.core.exceptions import RateLimitError, UnauthenticatedError
from notekeeper.core.security import Actor, actor_from_token

_bearer = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(request: Request, x_request_id: str | None = Header(None)) -> str:
    """Return the request ID assigned by the middleware, or the header's."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Actor:
    """
    Resolve the authenticated actor from the bearer token.

    Raises:
        UnauthenticatedError: If no valid bearer token is present
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    return actor_from_token(credentials.credentials)


CurrentActor = Annotated[Actor, Depends(get_current_actor)]


async def enforce_rate_limit(request: Request, actor: CurrentActor) -> None:
    """
    Count the request against the actor's rate limit.

    The limiter lives on app.state; when rate limiting is disabled
    there is none and every request passes.

    Raises:
        RateLimitError: If the actor is over the limit
    """
    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return
    result = limiter.check(actor.id)
    if not result.allowed:
        raise RateLimitError(retry_after=result.retry_after_seconds)
