"""Minimal auth dependency.

Stub implementation that extracts the user id from a bearer token.
Real JWT validation is out of scope.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from backend.docreview.db.context import RequestContext


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    Stub implementation that either:
    - Parses a "Bearer <user_id>" token
    - Returns an anonymous context if no header is sent

    Args:
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        RequestContext with user_id, or an anonymous context

    Raises:
        HTTPException: If authorization is invalid
    """
    if not authorization:
        return RequestContext(user_id=None)

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # Strip "Bearer "

    try:
        return RequestContext(user_id=uuid.UUID(token))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token (expected user id)",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def require_user(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
) -> RequestContext:
    """Like get_current_context, but rejects anonymous callers."""
    if ctx.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ctx
