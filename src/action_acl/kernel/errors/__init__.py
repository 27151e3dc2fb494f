"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    └── ApplicationError     (application.py)
        ├── UnauthorizedError
        ├── ForbiddenError
        └── ConfigError      (action_acl.config.validation)
            └── AclConfigurationError  (action_acl.acl.errors)
"""

from action_acl.kernel.errors.application import (
    ApplicationError,
    ForbiddenError,
    UnauthorizedError,
)
from action_acl.kernel.errors.base import BaseError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ForbiddenError",
    "UnauthorizedError",
]
