"""Kernel security – principals and the per-task security context."""
from action_acl.kernel.security.principal import (
    Principal,
    RoleBearer,
    RolelessPrincipal,
    supports_roles,
)
from action_acl.kernel.security.security_context import SecurityContext

__all__ = [
    "Principal",
    "RoleBearer",
    "RolelessPrincipal",
    "SecurityContext",
    "supports_roles",
]
