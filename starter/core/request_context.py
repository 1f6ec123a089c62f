"""
Request Context

Ambient per-request data (acting user, session) stored in ContextVars so that
code deep in a call chain, interceptors included, can read it without it being
passed explicitly. The HTTP middleware below fills it from request headers.
"""
import logging
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("starter.request_context")

_current_user: ContextVar[Optional[str]] = ContextVar("starter_current_user", default=None)
_current_session: ContextVar[Optional[str]] = ContextVar("starter_current_session", default=None)

UNKNOWN_USER = "?"


class RequestContext:
    """Read access to the ambient request data."""

    def get_user_name(self) -> Optional[str]:
        return _current_user.get()

    def get_session_id(self) -> Optional[str]:
        return _current_session.get()

    def user_or_unknown(self) -> str:
        return self.get_user_name() or UNKNOWN_USER


def set_current_user(user_name: Optional[str], session_id: Optional[str] = None):
    """Bind the acting user for the current flow. Returns tokens for reset_current_user."""
    return _current_user.set(user_name), _current_session.set(session_id)


def reset_current_user(tokens) -> None:
    user_token, session_token = tokens
    _current_user.reset(user_token)
    _current_session.reset(session_token)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Populates the request context from X-User-ID / X-Session-ID headers."""

    async def dispatch(self, request: Request, call_next):
        user_name = request.headers.get("X-User-ID")
        session_id = request.headers.get("X-Session-ID")
        tokens = set_current_user(user_name, session_id)
        try:
            return await call_next(request)
        finally:
            reset_current_user(tokens)


request_context = RequestContext()
