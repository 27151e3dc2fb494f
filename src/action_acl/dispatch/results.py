"""Dispatch – explicit link results and the per-link request object."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from action_acl.acl.evaluator import AccessDecision

if TYPE_CHECKING:
    from action_acl.dispatch.registry import Action


@dataclasses.dataclass(frozen=True)
class Continue:
    """The link ran; carry on with the next one."""

    value: Any = None


@dataclasses.dataclass(frozen=True)
class Redirect:
    """Stop the chain and hand control to *target*.

    ``decision`` is set when the redirect comes from a denied access check
    and is ``None`` when a handler redirected on its own.
    """

    target: str
    decision: AccessDecision | None = None


@dataclasses.dataclass
class ActionRequest:
    """What flows through the pipeline for one link of a chain.

    ``stash`` is shared by every link of the same chain (and by the fallback
    action if the chain is redirected).
    """

    action: Action
    principal: Any = None
    request: Any = None
    stash: dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.action.name


@dataclasses.dataclass(frozen=True)
class DispatchResult:
    """Outcome of :meth:`~action_acl.dispatch.Dispatcher.run_chain`.

    Attributes:
        value: Return value of the last handler that ran (the fallback's
            when redirected).
        executed: Names of the chain links whose handlers ran, in order.
        redirected_to: Fallback action that ran instead of the rest of the
            chain, if any.
        decision: The denying decision behind the redirect, if any.
    """

    value: Any = None
    executed: tuple[str, ...] = ()
    redirected_to: str | None = None
    decision: AccessDecision | None = None

    @property
    def denied(self) -> bool:
        return self.decision is not None and not self.decision.allowed


__all__ = ["ActionRequest", "Continue", "DispatchResult", "Redirect"]
