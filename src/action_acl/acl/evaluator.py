"""ACL – access decision evaluator.

:func:`evaluate` is a pure function of the policy, the principal and the
validator registry.  Its only side effects are reading the principal's roles
(at most once) and calling the policy's custom validator, if any.

Decision sequence:

1. No principal → deny.
2. A declared validator runs first.  A falsy result denies at once; a truthy
   result allows at once unless the principal supports roles *and* the
   policy declares role fields, in which case the role checks still apply.
3. Required roles must all be held; allowed roles need one match.
4. Anything not positively allowed is denied.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from action_acl.acl.policy import AccessPolicy
from action_acl.acl.validators import ValidatorRegistry
from action_acl.kernel.security.principal import supports_roles
from action_acl.observability.logging import get_logger

_log = get_logger(__name__)


class DecisionReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VALIDATOR_REJECTED = "validator_rejected"
    VALIDATOR_ACCEPTED = "validator_accepted"
    MISSING_REQUIRED_ROLE = "missing_required_role"
    NO_ALLOWED_ROLE = "no_allowed_role"
    ROLES_SATISFIED = "roles_satisfied"
    NO_CRITERIA = "no_criteria"


@dataclasses.dataclass(frozen=True)
class AccessDecision:
    """Outcome of one evaluation.

    ``fallback`` is the action to detach to and is only set on deny.
    """

    allowed: bool
    reason: DecisionReason
    fallback: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


@dataclasses.dataclass(frozen=True)
class EvaluationContext:
    """Everything one evaluation needs; built per request and then discarded."""

    policy: AccessPolicy
    principal: Any
    validators: ValidatorRegistry
    request: Any = None

    def decide(self) -> AccessDecision:
        return _decide(self)


def _allow(reason: DecisionReason) -> AccessDecision:
    return AccessDecision(allowed=True, reason=reason)


def _deny(policy: AccessPolicy, reason: DecisionReason) -> AccessDecision:
    return AccessDecision(allowed=False, reason=reason, fallback=policy.fallback)


def _held_roles(principal: Any) -> frozenset[str]:
    roles = principal.get_roles()
    if roles is None:
        return frozenset()
    if isinstance(roles, str):
        return frozenset({roles})
    # non-string entries can never match a declared role name
    return frozenset(role for role in roles if isinstance(role, str))


def _decide(ctx: EvaluationContext) -> AccessDecision:
    policy = ctx.policy
    principal = ctx.principal

    if principal is None:
        return _deny(policy, DecisionReason.UNAUTHENTICATED)

    using_roles = supports_roles(principal)
    held: frozenset[str] = frozenset()
    if using_roles and policy.uses_roles:
        held = _held_roles(principal)

    if policy.validator is not None:
        check = ctx.validators.resolve(policy.validator.name, action=policy.action)
        if not check(principal, ctx.request, policy.validator.args):
            return _deny(policy, DecisionReason.VALIDATOR_REJECTED)
        if not using_roles or not policy.uses_roles:
            return _allow(DecisionReason.VALIDATOR_ACCEPTED)

    if not using_roles:
        return _deny(policy, DecisionReason.NO_CRITERIA)

    required = policy.required_roles
    allowed = policy.allowed_roles
    if required and allowed:
        if not required <= held:
            return _deny(policy, DecisionReason.MISSING_REQUIRED_ROLE)
        if allowed.isdisjoint(held):
            return _deny(policy, DecisionReason.NO_ALLOWED_ROLE)
        return _allow(DecisionReason.ROLES_SATISFIED)
    if required:
        if required <= held:
            return _allow(DecisionReason.ROLES_SATISFIED)
        return _deny(policy, DecisionReason.MISSING_REQUIRED_ROLE)
    if allowed:
        if allowed.isdisjoint(held):
            return _deny(policy, DecisionReason.NO_ALLOWED_ROLE)
        return _allow(DecisionReason.ROLES_SATISFIED)

    return _deny(policy, DecisionReason.NO_CRITERIA)


def evaluate(
    policy: AccessPolicy,
    principal: Any,
    *,
    validators: ValidatorRegistry,
    request: Any = None,
) -> AccessDecision:
    """Decide whether *principal* may run the action guarded by *policy*.

    Args:
        policy: The action's policy.
        principal: Authenticated identity, or ``None`` when unauthenticated.
        validators: Registry the policy's validator name is resolved against.
        request: Opaque per-request object handed to the validator.

    Raises:
        UnresolvableValidatorError: the policy names a validator that is not
            registered.  This is a deployment error, never a deny.
    """
    decision = EvaluationContext(
        policy=policy,
        principal=principal,
        validators=validators,
        request=request,
    ).decide()
    _log.debug(
        "acl.decision",
        action=policy.action,
        principal_id=getattr(principal, "id", None),
        allowed=decision.allowed,
        reason=decision.reason.value,
    )
    return decision


def can_visit(
    policy: AccessPolicy,
    principal: Any,
    *,
    validators: ValidatorRegistry,
    request: Any = None,
) -> bool:
    """Return ``True`` if *principal* may run the action guarded by *policy*."""
    return evaluate(policy, principal, validators=validators, request=request).allowed


__all__ = [
    "AccessDecision",
    "DecisionReason",
    "EvaluationContext",
    "can_visit",
    "evaluate",
]
