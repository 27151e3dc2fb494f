"""
action_acl – Role-based authorization for dispatchable actions.

Import path convention::

    from action_acl.acl import AccessPolicy, PolicyBuilder, can_visit
    from action_acl.dispatch import ActionRegistry, Dispatcher
    from action_acl.kernel.security import Principal, SecurityContext
"""

__version__ = "0.5.2"
__all__ = ["__version__"]
