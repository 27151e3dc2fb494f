"""Dispatch – AccessControlMiddleware."""
from __future__ import annotations

from typing import Any

from action_acl.acl.evaluator import evaluate
from action_acl.acl.validators import ValidatorRegistry
from action_acl.application.pipeline.middleware import Middleware, Next
from action_acl.dispatch.results import ActionRequest, Redirect
from action_acl.observability.logging import AuditLogger, AuditOutcome


class AccessControlMiddleware(Middleware):
    """Evaluate the action's policy before anything else runs.

    On deny the rest of the pipeline (and the handler) is skipped and a
    :class:`Redirect` to the policy's fallback is returned.  Unprotected
    actions pass straight through.
    """

    def __init__(self, validators: ValidatorRegistry, *, audit: AuditLogger | None = None) -> None:
        self._validators = validators
        self._audit = audit

    async def __call__(self, request: ActionRequest, next_: Next) -> Any:  # type: ignore[override]
        policy = request.action.policy
        if policy is None:
            return await next_(request)

        decision = evaluate(
            policy,
            request.principal,
            validators=self._validators,
            request=request.request,
        )
        if decision.allowed:
            return await next_(request)

        if self._audit is not None:
            self._audit.log_access(
                request.principal,
                resource=request.action.name,
                action="dispatch",
                outcome=AuditOutcome.DENIED,
                reason=decision.reason.value,
                fallback=decision.fallback,
            )
        return Redirect(target=policy.fallback, decision=decision)


__all__ = ["AccessControlMiddleware"]
