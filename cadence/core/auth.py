"""Caller identity for the queue routes.

Authentication happens in front of this service; by the time a request
reaches a route the proxy has put the authenticated user id in a header.
"""

from cadence.core.config import settings
from cadence.core.errors import InvalidInputError, UnauthorizedError
from fastapi import Request, WebSocket

MAX_USER_ID_LENGTH = 36


def _validate_user_id(raw: str | None) -> str:
    user_id = (raw or "").strip()
    if not user_id:
        raise UnauthorizedError(f"{settings.USER_ID_HEADER} header is required")
    if len(user_id) > MAX_USER_ID_LENGTH:
        raise InvalidInputError(f"user id must be at most {MAX_USER_ID_LENGTH} characters")
    return user_id


async def get_current_user_id(request: Request) -> str:
    """Dependency returning the authenticated user id."""
    return _validate_user_id(request.headers.get(settings.USER_ID_HEADER))


def websocket_user_id(websocket: WebSocket) -> str:
    """User id for a websocket handshake: header first, then ``user_id`` query."""
    raw = websocket.headers.get(settings.USER_ID_HEADER) or websocket.query_params.get("user_id")
    return _validate_user_id(raw)
