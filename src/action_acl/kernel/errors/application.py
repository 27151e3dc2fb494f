"""Application-layer errors raised while dispatching actions."""

from __future__ import annotations

from action_acl.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """No authenticated principal where one is required."""

    default_code = "unauthorized"


class ForbiddenError(ApplicationError):
    """The caller may not invoke the requested action at all.

    Raised for private actions, which are reachable only as fallbacks.
    A policy deny is never an error; it redirects instead.
    """

    default_code = "forbidden"

    def __init__(self, message: str = "Access denied", *, action: str | None = None) -> None:
        super().__init__(message, action=action)


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "UnauthorizedError",
]
