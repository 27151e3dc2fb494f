"""Dispatch – action registry, enforcement middleware and chain runner."""
from action_acl.dispatch.results import ActionRequest, Continue, DispatchResult, Redirect
from action_acl.dispatch.registry import Action, ActionHandler, ActionRegistry
from action_acl.dispatch.middleware import AccessControlMiddleware
from action_acl.dispatch.dispatcher import Dispatcher

__all__ = [
    "AccessControlMiddleware",
    "Action",
    "ActionHandler",
    "ActionRegistry",
    "ActionRequest",
    "Continue",
    "DispatchResult",
    "Dispatcher",
    "Redirect",
]
