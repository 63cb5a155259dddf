"""The authenticated user of the current execution context."""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Any

_auth: ContextVar[Any] = ContextVar("walletsys.auth", default=None)


def set_auth(user: Any) -> Token:
    """Store ``user`` as the authenticated user of the current context."""
    return _auth.set(user)


def get_auth() -> Any:
    """Return the authenticated user, or ``None`` when none was set."""
    return _auth.get()