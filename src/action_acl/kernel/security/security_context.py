"""Kernel security – SecurityContext using contextvars."""

from __future__ import annotations

import contextvars
from typing import Any

from action_acl.kernel.errors import UnauthorizedError

_VAR: contextvars.ContextVar[Any | None] = contextvars.ContextVar(
    "_security_context", default=None
)


class SecurityContext:
    """Store and retrieve the current authenticated principal via
    :mod:`contextvars` so each asyncio task has its own isolated context."""

    @staticmethod
    def get_current() -> Any | None:
        """Return the current principal, or ``None`` if absent."""
        return _VAR.get()

    @staticmethod
    def set_current(principal: Any) -> contextvars.Token[Any | None]:
        """Set the current principal and return a reset token."""
        return _VAR.set(principal)

    @staticmethod
    def reset(token: contextvars.Token[Any | None]) -> None:
        """Restore the principal that was current before *token* was issued."""
        _VAR.reset(token)

    @staticmethod
    def clear() -> None:
        """Remove the current principal from context."""
        _VAR.set(None)

    @staticmethod
    def require() -> Any:
        """Return the current principal or raise ``UnauthorizedError``."""
        principal = _VAR.get()
        if principal is None:
            raise UnauthorizedError("No authenticated principal in context")
        return principal


__all__ = ["SecurityContext"]
