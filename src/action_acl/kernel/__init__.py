"""Kernel – framework-agnostic building blocks."""

from action_acl.kernel.errors import (
    ApplicationError,
    BaseError,
    ForbiddenError,
    UnauthorizedError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ForbiddenError",
    "UnauthorizedError",
]
