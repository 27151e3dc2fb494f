"""Testing fixtures – pytest fixtures for principals and registries.

Enable them in your ``conftest.py``::

    pytest_plugins = ["action_acl.testing.fixtures"]
"""
from action_acl.testing.fixtures.principal import fake_principal, security_context
from action_acl.testing.fixtures.registry import action_registry, validator_registry

__all__ = [
    "action_registry",
    "fake_principal",
    "security_context",
    "validator_registry",
]
