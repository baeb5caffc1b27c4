"""
Route dependencies: storage access, session authentication and authorization.

Authorization dependencies are the only place an ``Actor`` is created, after
the caller's role or ownership has been checked.
"""

from typing import Optional

import jwt
import structlog
from fastapi import Depends, HTTPException, Request, status

from app.core.actor import Actor
from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.security import decode_access_token
from app.models.event import Event
from app.models.user import User
from app.storage import Storage

logger = get_logger(__name__)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def _session_token(request: Request) -> Optional[str]:
    """Session cookie first, then an ``Authorization: Bearer`` header."""
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _forbidden(detail: str = "Forbidden") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_current_user(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """
    Resolve the signed-in user from the session token.
    Raises 401 if the token is missing, invalid, expired or revoked.
    """
    token = _session_token(request)
    if not token:
        raise _unauthorized()

    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError:
        logger.warning("session_token_invalid")
        raise _unauthorized("Invalid or expired session")

    user = await storage.get_user(payload.get("sub", ""))
    if user is None or payload.get("token_version") != user.token_version:
        logger.warning("session_token_revoked", user_id=payload.get("sub"))
        raise _unauthorized("Invalid or expired session")

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


async def get_actor(user: User = Depends(get_current_user)) -> Actor:
    """Any signed-in user acting on their own behalf."""
    return Actor(user_id=user.id, role=user.role)


def require_roles(*roles: str):
    """
    Dependency factory: the caller must hold one of ``roles``. Admins always pass.

    Usage:
        actor: Actor = Depends(require_roles("organizer"))
    """

    async def dependency(user: User = Depends(get_current_user)) -> Actor:
        if user.role != "admin" and user.role not in roles:
            logger.warning("role_check_failed", user_id=user.id, role=user.role, required=list(roles))
            raise _forbidden("Insufficient permissions")
        return Actor(user_id=user.id, role=user.role)

    return dependency


require_admin = require_roles("admin")


def authorize_owner(user: User, owner_id: Optional[str]) -> Actor:
    """The caller must own the row (``owner_id``) or be an admin."""
    if user.role != "admin" and (owner_id is None or owner_id != user.id):
        logger.warning("ownership_check_failed", user_id=user.id, owner_id=owner_id)
        raise _forbidden("You do not have access to this resource")
    return Actor(user_id=user.id, role=user.role)


async def authorize_event_owner(storage: Storage, user: User, event_id: str) -> tuple[Actor, Event]:
    """
    The caller must manage the event's organizer profile or be an admin.
    Raises 404 for unknown events.
    """
    event = await storage.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    owner_id = event.organizer.user_id if event.organizer is not None else None
    return authorize_owner(user, owner_id), event
