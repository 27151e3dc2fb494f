"""ACL – AccessPolicy, ValidatorRef, build_policy, PolicyBuilder.

A policy is declared once per protected action, validated eagerly and never
mutated afterwards.  Three equivalent ways to declare one::

    # 1. declared attributes, e.g. read from a config file
    policy = build_policy(
        {"requires_role": "admin", "allowed_role": ["editor", "writer"], "detach_to": "denied"},
        action="articles.edit",
    )

    # 2. fluent builder
    policy = (
        PolicyBuilder("articles.edit")
        .requires("admin")
        .allows("editor", "writer")
        .detach_to("denied")
        .build()
    )

    # 3. a whole table at once
    policies = load_policy_table({"articles.edit": {...}, "articles.read": {...}})
"""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Mapping

from action_acl.acl.errors import InvalidPolicyError, MissingFallbackError, NoAccessCriteriaError
from action_acl.observability.logging import get_logger

_log = get_logger(__name__)

REQUIRES_ROLE = "requires_role"
ALLOWED_ROLE = "allowed_role"
VALIDATE_METHOD = "validate_method"
VALIDATE_ARGS = "validate_args"
DETACH_TO = "detach_to"

POLICY_ATTRIBUTES: frozenset[str] = frozenset(
    {REQUIRES_ROLE, ALLOWED_ROLE, VALIDATE_METHOD, VALIDATE_ARGS, DETACH_TO}
)

ANONYMOUS_ACTION = "<anonymous>"


@dataclasses.dataclass(frozen=True)
class ValidatorRef:
    """Name of a registered predicate plus the opaque arguments declared for it."""

    name: str
    args: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class AccessPolicy:
    """Immutable access rule attached to one protected action.

    Attributes:
        fallback: Action to transfer control to when access is denied.
        required_roles: Principal must hold every one of these.
        allowed_roles: Principal must hold at least one of these (if any).
        validator: Optional custom predicate, consulted before roles.
        action: Owning action name, used in errors and logs.

    A single role name given as a plain string is treated as a one-role set.

    Raises:
        MissingFallbackError: *fallback* is empty or blank.
        InvalidPolicyError: a role is not a string or is blank.
        NoAccessCriteriaError: no roles and no validator were declared.
    """

    fallback: str
    required_roles: frozenset[str] = frozenset()
    allowed_roles: frozenset[str] = frozenset()
    validator: ValidatorRef | None = None
    action: str = ANONYMOUS_ACTION

    def __post_init__(self) -> None:
        _check_fallback(self.fallback, self.action)
        for field_name, key in (("required_roles", REQUIRES_ROLE), ("allowed_roles", ALLOWED_ROLE)):
            roles = _as_strings(getattr(self, field_name), key, self.action, allow_empty_items=False)
            object.__setattr__(self, field_name, frozenset(roles))
        if not (self.required_roles or self.allowed_roles or self.validator is not None):
            raise NoAccessCriteriaError(self.action)

    @property
    def uses_roles(self) -> bool:
        return bool(self.required_roles or self.allowed_roles)

    @property
    def has_validator(self) -> bool:
        return self.validator is not None


def _check_fallback(fallback: Any, action: str) -> None:
    if not fallback or (isinstance(fallback, str) and not fallback.strip()):
        raise MissingFallbackError(action)
    if not isinstance(fallback, str):
        raise InvalidPolicyError(f"Action '{action}': {DETACH_TO} must be an action name", action=action)


def _as_strings(value: Any, key: str, action: str, *, allow_empty_items: bool) -> tuple[str, ...]:
    if value is None:
        return ()
    items: Iterable[Any] = (value,) if isinstance(value, str) else value
    try:
        result = tuple(items)
    except TypeError as exc:
        raise InvalidPolicyError(
            f"Action '{action}': {key} must be a string or a list of strings",
            action=action,
            cause=exc,
        ) from exc
    for item in result:
        if not isinstance(item, str):
            raise InvalidPolicyError(
                f"Action '{action}': {key} entries must be strings, got {item!r}",
                action=action,
            )
        if not allow_empty_items and not item.strip():
            raise InvalidPolicyError(f"Action '{action}': {key} entries must not be blank", action=action)
    return result


def build_policy(attributes: Mapping[str, Any], *, action: str = ANONYMOUS_ACTION) -> AccessPolicy:
    """Validate declared *attributes* and return the resulting :class:`AccessPolicy`.

    Checks run in this order: fallback present, at least one access
    criterion present, then the shape of every attribute.  Nothing is
    returned unless all checks pass.
    """
    fallback = attributes.get(DETACH_TO)
    if not fallback or (isinstance(fallback, str) and not fallback.strip()):
        raise MissingFallbackError(action)
    if not any(attributes.get(key) for key in (REQUIRES_ROLE, ALLOWED_ROLE, VALIDATE_METHOD)):
        raise NoAccessCriteriaError(action)

    unknown = sorted(set(attributes) - POLICY_ATTRIBUTES)
    if unknown:
        raise InvalidPolicyError(
            f"Action '{action}' declares unknown attribute(s): {', '.join(unknown)}",
            action=action,
            detail={"unknown": unknown},
        )
    if not isinstance(fallback, str):
        raise InvalidPolicyError(f"Action '{action}': {DETACH_TO} must be an action name", action=action)

    required = _as_strings(attributes.get(REQUIRES_ROLE), REQUIRES_ROLE, action, allow_empty_items=False)
    allowed = _as_strings(attributes.get(ALLOWED_ROLE), ALLOWED_ROLE, action, allow_empty_items=False)
    args = _as_strings(attributes.get(VALIDATE_ARGS), VALIDATE_ARGS, action, allow_empty_items=True)

    method = attributes.get(VALIDATE_METHOD)
    validator: ValidatorRef | None = None
    if method:
        if not isinstance(method, str):
            raise InvalidPolicyError(
                f"Action '{action}': {VALIDATE_METHOD} must be a validator name", action=action
            )
        validator = ValidatorRef(name=method, args=args)
    elif args:
        raise InvalidPolicyError(
            f"Action '{action}': {VALIDATE_ARGS} given without {VALIDATE_METHOD}", action=action
        )

    policy = AccessPolicy(
        fallback=fallback,
        required_roles=frozenset(required),
        allowed_roles=frozenset(allowed),
        validator=validator,
        action=action,
    )
    _log.debug(
        "acl.policy.built",
        action=action,
        required=sorted(policy.required_roles),
        allowed=sorted(policy.allowed_roles),
        validator=validator.name if validator else None,
        fallback=fallback,
    )
    return policy


class PolicyBuilder:
    """Fluent declaration of an :class:`AccessPolicy`.

    Example::

        policy = (
            PolicyBuilder("reports.export")
            .validated_by("name_length", "5", "11")
            .allows("admin")
            .detach_to("denied")
            .build()
        )
    """

    def __init__(self, action: str = ANONYMOUS_ACTION) -> None:
        self._action = action
        self._required: list[str] = []
        self._allowed: list[str] = []
        self._method: str | None = None
        self._args: list[str] = []
        self._fallback: str | None = None

    def requires(self, *roles: str) -> "PolicyBuilder":
        """Add roles the principal must all hold."""
        self._required.extend(roles)
        return self

    def allows(self, *roles: str) -> "PolicyBuilder":
        """Add roles of which the principal must hold at least one."""
        self._allowed.extend(roles)
        return self

    def validated_by(self, name: str, *args: str) -> "PolicyBuilder":
        """Attach the named validator with its opaque arguments."""
        self._method = name
        self._args = list(args)
        return self

    def detach_to(self, action: str) -> "PolicyBuilder":
        self._fallback = action
        return self

    def attributes(self) -> dict[str, Any]:
        """Return the declaration as a :func:`build_policy` attribute mapping."""
        attrs: dict[str, Any] = {}
        if self._required:
            attrs[REQUIRES_ROLE] = list(self._required)
        if self._allowed:
            attrs[ALLOWED_ROLE] = list(self._allowed)
        if self._method is not None:
            attrs[VALIDATE_METHOD] = self._method
        if self._args:
            attrs[VALIDATE_ARGS] = list(self._args)
        if self._fallback is not None:
            attrs[DETACH_TO] = self._fallback
        return attrs

    def build(self) -> AccessPolicy:
        return build_policy(self.attributes(), action=self._action)


def load_policy_table(table: Mapping[str, Mapping[str, Any]]) -> dict[str, AccessPolicy]:
    """Build a policy for every ``action -> attributes`` entry of *table*.

    Fails on the first invalid declaration.
    """
    return {action: build_policy(attributes, action=action) for action, attributes in table.items()}


__all__ = [
    "ALLOWED_ROLE",
    "AccessPolicy",
    "DETACH_TO",
    "POLICY_ATTRIBUTES",
    "PolicyBuilder",
    "REQUIRES_ROLE",
    "VALIDATE_ARGS",
    "VALIDATE_METHOD",
    "ValidatorRef",
    "build_policy",
    "load_policy_table",
]
