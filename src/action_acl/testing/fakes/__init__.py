"""Testing fakes – in-memory doubles for principals and validators."""
from action_acl.testing.fakes.principal import CountingPrincipal
from action_acl.testing.fakes.validator import RecordingValidator

__all__ = ["CountingPrincipal", "RecordingValidator"]
