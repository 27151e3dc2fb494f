"""Dispatch – Action and ActionRegistry.

Registration is where policies are validated: an action whose policy is
invalid, or whose validator name does not resolve, is never registered.
"""
from __future__ import annotations

import dataclasses
import threading
from typing import Any, Callable, Iterator, Mapping

from action_acl.acl.errors import FallbackCycleError, InvalidPolicyError, UnknownActionError
from action_acl.acl.evaluator import AccessDecision, evaluate
from action_acl.acl.policy import AccessPolicy, build_policy
from action_acl.acl.validators import ValidatorRegistry
from action_acl.observability.logging import get_logger

_log = get_logger(__name__)

ActionHandler = Callable[[Any], Any]


@dataclasses.dataclass(frozen=True)
class Action:
    """A named, dispatchable handler with an optional access policy.

    Private actions cannot be dispatched directly; they exist to serve as
    fallbacks or internal helpers.
    """

    name: str
    handler: ActionHandler
    policy: AccessPolicy | None = None
    private: bool = False

    @property
    def protected(self) -> bool:
        return self.policy is not None


class ActionRegistry:
    """All actions of an application, keyed by name."""

    def __init__(self, validators: ValidatorRegistry | None = None) -> None:
        self._validators = validators if validators is not None else ValidatorRegistry()
        self._actions: dict[str, Action] = {}
        self._lock = threading.Lock()

    @property
    def validators(self) -> ValidatorRegistry:
        return self._validators

    def register(
        self,
        name: str,
        handler: ActionHandler,
        *,
        policy: AccessPolicy | None = None,
        attributes: Mapping[str, Any] | None = None,
        private: bool = False,
    ) -> Action:
        """Register *handler* as action *name*.

        The policy is either given ready-made or built from declared
        *attributes*; the two are mutually exclusive.

        Raises:
            MissingFallbackError, NoAccessCriteriaError, InvalidPolicyError:
                the declared policy is invalid.
            UnresolvableValidatorError: the policy's validator is unknown.
        """
        if policy is not None and attributes is not None:
            raise InvalidPolicyError(
                f"Action '{name}': pass either a policy or attributes, not both", action=name
            )
        if attributes is not None:
            policy = build_policy(attributes, action=name)
        elif policy is not None and policy.action != name:
            policy = dataclasses.replace(policy, action=name)
        if policy is not None:
            self._validators.check(policy)

        action = Action(name=name, handler=handler, policy=policy, private=private)
        with self._lock:
            if name in self._actions:
                raise InvalidPolicyError(f"Action '{name}' is already registered", action=name)
            self._actions[name] = action
        _log.debug("acl.action.registered", action=name, protected=action.protected, private=private)
        return action

    def action(
        self,
        name: str | None = None,
        *,
        private: bool = False,
        **attributes: Any,
    ) -> Callable[[ActionHandler], ActionHandler]:
        """Decorator form of :meth:`register`.

        Example::

            @registry.action("articles.edit", allowed_role=["admin", "editor"], detach_to="denied")
            async def edit(req):
                ...
        """

        def decorator(fn: ActionHandler) -> ActionHandler:
            self.register(
                name or fn.__name__,
                fn,
                attributes=attributes or None,
                private=private,
            )
            return fn

        return decorator

    def get(self, name: str) -> Action:
        try:
            return self._actions[name]
        except KeyError:
            raise UnknownActionError(name) from None

    def validate(self) -> None:
        """Check every fallback target and validator, then freeze the validators.

        Raises:
            UnknownActionError: a policy detaches to an unregistered action.
            FallbackCycleError: following fallbacks returns to an earlier action.
            UnresolvableValidatorError: a policy names an unknown validator.
        """
        for action in self._actions.values():
            if action.policy is None:
                continue
            if action.policy.fallback not in self._actions:
                raise UnknownActionError(action.policy.fallback, referenced_by=action.name)
            self._validators.check(action.policy)
        for action in self._actions.values():
            self._check_fallback_path(action)
        self._validators.freeze()

    def _check_fallback_path(self, action: Action) -> None:
        path = [action.name]
        while action.policy is not None:
            target = action.policy.fallback
            if target in path:
                raise FallbackCycleError(path + [target])
            path.append(target)
            action = self._actions[target]

    def evaluate(self, name: str, principal: Any, request: Any = None) -> AccessDecision | None:
        """Evaluate action *name*'s policy; ``None`` when the action is unprotected."""
        policy = self.get(name).policy
        if policy is None:
            return None
        return evaluate(policy, principal, validators=self._validators, request=request)

    def can_visit(self, name: str, principal: Any, request: Any = None) -> bool:
        """Return ``True`` if *principal* may run action *name*.

        Useful to decide in advance whether to offer a link or a button.
        """
        decision = self.evaluate(name, principal, request)
        return True if decision is None else decision.allowed

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[Action]:
        return iter(list(self._actions.values()))

    def __len__(self) -> int:
        return len(self._actions)


__all__ = ["Action", "ActionHandler", "ActionRegistry"]
