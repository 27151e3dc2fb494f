"""Dispatch – Dispatcher.

Runs a chain of actions through the middleware pipeline.  Each link ends in
either :class:`Continue` or :class:`Redirect`; the first redirect stops the
chain, runs the fallback action (under its own policy) and leaves every
later link unexecuted.
"""
from __future__ import annotations

import inspect
from typing import Any, Iterable, Sequence

from action_acl.acl.errors import FallbackCycleError
from action_acl.application.pipeline import Middleware, Pipeline
from action_acl.config.settings import AclSettings
from action_acl.dispatch.middleware import AccessControlMiddleware
from action_acl.dispatch.registry import Action, ActionRegistry
from action_acl.dispatch.results import ActionRequest, Continue, DispatchResult, Redirect
from action_acl.kernel.errors import ForbiddenError
from action_acl.kernel.security import SecurityContext
from action_acl.observability.logging import AuditLogger, get_logger

_log = get_logger(__name__)

_FROM_CONTEXT: Any = object()


async def _call(action: Action, request: ActionRequest) -> Any:
    result = action.handler(request)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _invoke(request: ActionRequest) -> Continue | Redirect:
    result = await _call(request.action, request)
    if isinstance(result, (Continue, Redirect)):
        return result
    return Continue(result)


class Dispatcher:
    """Dispatch actions from an :class:`ActionRegistry` with access control.

    Parameters
    ----------
    registry:
        Source of actions and validators.
    settings:
        Runtime switches; defaults to :class:`AclSettings` defaults.  With
        ``strict_fallbacks`` the registry is validated (and its validators
        frozen) here, so a broken declaration fails before any request.
    middlewares:
        Extra middlewares that run inside the access check, around the
        handler of every allowed link.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        *,
        settings: AclSettings | None = None,
        middlewares: Iterable[Middleware] = (),
    ) -> None:
        self._registry = registry
        self._settings = settings or AclSettings()
        if self._settings.strict_fallbacks:
            registry.validate()
        audit = AuditLogger(service=self._settings.service_name) if self._settings.audit_denials else None
        self._pipeline = Pipeline([AccessControlMiddleware(registry.validators, audit=audit)])
        for mw in middlewares:
            self._pipeline.add(mw)

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    def _public(self, name: str) -> Action:
        action = self._registry.get(name)
        if action.private:
            raise ForbiddenError(f"Action '{name}' is private", action=name)
        return action

    async def dispatch(self, name: str, *, principal: Any = _FROM_CONTEXT, request: Any = None) -> DispatchResult:
        """Run the single action *name*."""
        return await self.run_chain([name], principal=principal, request=request)

    async def run_chain(
        self,
        names: Sequence[str],
        *,
        principal: Any = _FROM_CONTEXT,
        request: Any = None,
    ) -> DispatchResult:
        """Run the actions *names* in order, stopping at the first redirect.

        When *principal* is omitted it is taken from
        :meth:`SecurityContext.get_current`; an explicit ``None`` evaluates
        the chain as unauthenticated.
        """
        if principal is _FROM_CONTEXT:
            principal = SecurityContext.get_current()
        links = [self._public(name) for name in names]

        stash: dict[str, Any] = {}
        executed: list[str] = []
        value: Any = None
        for action in links:
            link = ActionRequest(action=action, principal=principal, request=request, stash=stash)
            outcome = await self._pipeline.execute(link, _invoke)
            if isinstance(outcome, Redirect):
                if outcome.decision is None:
                    executed.append(action.name)
                return await self._redirect(outcome, link, executed)
            value = outcome.value
            executed.append(action.name)
        return DispatchResult(value=value, executed=tuple(executed))

    async def _redirect(self, redirect: Redirect, link: ActionRequest, executed: list[str]) -> DispatchResult:
        """Run fallbacks through the pipeline until one completes.

        A fallback is guarded by its own policy like any other action, so a
        denied fallback redirects again.  Returning to an action already on
        the path raises :class:`FallbackCycleError`.
        """
        path = [link.action.name]
        outcome: Continue | Redirect = redirect
        while isinstance(outcome, Redirect):
            if outcome.target in path:
                raise FallbackCycleError(path + [outcome.target])
            fallback = self._registry.get(outcome.target)
            _log.info(
                "acl.redirect",
                action=path[-1],
                fallback=fallback.name,
                reason=outcome.decision.reason.value if outcome.decision else None,
            )
            path.append(fallback.name)
            fallback_request = ActionRequest(
                action=fallback,
                principal=link.principal,
                request=link.request,
                stash=link.stash,
            )
            outcome = await self._pipeline.execute(fallback_request, _invoke)
        return DispatchResult(
            value=outcome.value,
            executed=tuple(executed),
            redirected_to=path[-1],
            decision=redirect.decision,
        )


__all__ = ["Dispatcher"]
