"""Policy configuration errors.

Every error here is a programmer error in a policy declaration.  They are
raised at registration time and must never be turned into a deny decision.
"""
from __future__ import annotations

from action_acl.config.validation.errors import ConfigError


class AclConfigurationError(ConfigError):
    """Root of the policy-declaration error family.

    ``action`` names the action whose declaration is broken.
    """

    default_code = "acl_configuration_error"


class MissingFallbackError(AclConfigurationError):
    """The policy does not name an action to detach to on deny."""

    default_code = "missing_fallback"

    def __init__(self, action: str) -> None:
        super().__init__(f"Action '{action}' requires a detach_to fallback action", action=action)


class NoAccessCriteriaError(AclConfigurationError):
    """The policy has no required roles, no allowed roles and no validator."""

    default_code = "no_access_criteria"

    def __init__(self, action: str) -> None:
        super().__init__(
            f"Action '{action}' requires at least one of requires_role, "
            "allowed_role or validate_method",
            action=action,
        )


class UnresolvableValidatorError(AclConfigurationError):
    """A validator name does not resolve to a registered predicate."""

    default_code = "unresolvable_validator"

    def __init__(self, name: str, *, action: str | None = None) -> None:
        where = f" (declared on action '{action}')" if action else ""
        super().__init__(
            f"Validator '{name}' is not registered{where}",
            action=action,
            detail={"validator": name},
        )
        self.validator = name


class InvalidPolicyError(AclConfigurationError):
    """A declared attribute is unknown or has the wrong shape."""

    default_code = "invalid_policy"


class UnknownActionError(AclConfigurationError):
    """An action name (registration lookup or fallback target) is not registered."""

    default_code = "unknown_action"

    def __init__(self, name: str, *, referenced_by: str | None = None) -> None:
        message = f"Action '{name}' is not registered"
        if referenced_by is not None:
            message = f"{message} (fallback of action '{referenced_by}')"
        super().__init__(message, action=referenced_by, detail={"target": name})
        self.target = name


class FallbackCycleError(AclConfigurationError):
    """Following fallbacks from an action leads back to an action already visited."""

    default_code = "fallback_cycle"

    def __init__(self, path: list[str] | tuple[str, ...]) -> None:
        super().__init__(
            f"Fallback cycle: {' -> '.join(path)}",
            action=path[0] if path else None,
            detail={"path": list(path)},
        )
        self.path = tuple(path)


__all__ = [
    "AclConfigurationError",
    "FallbackCycleError",
    "InvalidPolicyError",
    "MissingFallbackError",
    "NoAccessCriteriaError",
    "UnknownActionError",
    "UnresolvableValidatorError",
]
