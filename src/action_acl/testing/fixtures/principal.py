"""Testing fixtures – fake_principal and security_context."""
from __future__ import annotations

import pytest

from action_acl.kernel.security import Principal, SecurityContext


@pytest.fixture
def fake_principal() -> Principal:
    """Return a default :class:`Principal` with subject ``"test-user"`` and no roles.

    Override fields in your test::

        def test_something(fake_principal):
            import dataclasses
            p = dataclasses.replace(fake_principal, roles=frozenset({"admin"}))
    """
    return Principal(subject="test-user")


@pytest.fixture
def security_context(fake_principal: Principal):
    """Make *fake_principal* the current principal for the duration of the test."""
    token = SecurityContext.set_current(fake_principal)
    yield fake_principal
    SecurityContext.reset(token)


__all__ = ["fake_principal", "security_context"]
