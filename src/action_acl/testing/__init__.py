"""Testing support – fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["action_acl.testing.fixtures"]
"""

from action_acl.testing.fakes import CountingPrincipal, RecordingValidator

__all__ = ["CountingPrincipal", "RecordingValidator"]
