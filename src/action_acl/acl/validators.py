"""ACL – ValidatorRegistry.

Custom validators are plain callables looked up by name::

    validators = ValidatorRegistry()

    @validators.validator()
    def name_length(principal, request, args):
        low, high = (int(a) for a in args)
        return low <= len(principal.id) <= high

A policy refers to a validator by name only; names are resolved when the
owning action is registered so a typo fails at startup, not at the first
request.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Iterator, TypeVar

from action_acl.acl.errors import InvalidPolicyError, UnresolvableValidatorError
from action_acl.acl.policy import AccessPolicy
from action_acl.config.validation.errors import ConfigError

Validator = Callable[[Any, Any, tuple[str, ...]], Any]
V = TypeVar("V", bound=Validator)


class ValidatorRegistry:
    """Name → predicate mapping consulted by the evaluator.

    Registration is guarded by a lock; once :meth:`freeze` has been called
    the registry is read-only and may be shared freely between threads.
    """

    def __init__(self, validators: dict[str, Validator] | None = None) -> None:
        self._validators: dict[str, Validator] = {}
        self._lock = threading.Lock()
        self._frozen = False
        for name, fn in (validators or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: Validator) -> Validator:
        """Register *fn* under *name* and return it unchanged."""
        if not name or not isinstance(name, str):
            raise InvalidPolicyError(f"Validator name must be a non-empty string, got {name!r}")
        if not callable(fn):
            raise InvalidPolicyError(f"Validator '{name}' is not callable")
        with self._lock:
            if self._frozen:
                raise ConfigError(f"Cannot register validator '{name}': registry is frozen")
            if name in self._validators:
                raise InvalidPolicyError(f"Validator '{name}' is already registered")
            self._validators[name] = fn
        return fn

    def validator(self, name: str | None = None) -> Callable[[V], V]:
        """Decorator form of :meth:`register`; defaults to the function's name."""

        def decorator(fn: V) -> V:
            self.register(name or fn.__name__, fn)
            return fn

        return decorator

    def resolve(self, name: str, *, action: str | None = None) -> Validator:
        """Return the predicate registered as *name*.

        Raises:
            UnresolvableValidatorError: nothing is registered under *name*.
        """
        try:
            return self._validators[name]
        except KeyError:
            raise UnresolvableValidatorError(name, action=action) from None

    def check(self, policy: AccessPolicy) -> None:
        """Resolve *policy*'s validator, if it declares one."""
        if policy.validator is not None:
            self.resolve(policy.validator.name, action=policy.action)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._validators

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._validators))

    def __len__(self) -> int:
        return len(self._validators)


__all__ = ["Validator", "ValidatorRegistry"]
