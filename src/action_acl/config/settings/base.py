"""Config settings – Settings base class and AclSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from action_acl.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AclSettings(Settings):
    """Runtime switches for the dispatcher and its logging.

    Read from ``ACL_*`` environment variables by
    :class:`~action_acl.config.settings.loaders.EnvSettingsLoader`.

    Attributes:
        service_name: Injected into every audit entry.
        log_level: Standard :mod:`logging` level name, applied by
            :func:`~action_acl.observability.logging.configure_logging`.
        audit_denials: Emit an ``audit.access`` entry for every denied action.
        strict_fallbacks: Validate the action registry (fallback targets and
            validator names) when a dispatcher is built.
    """

    _prefix: ClassVar[str] = "ACL"

    service_name: str = "action-acl"
    log_level: str = "INFO"
    audit_denials: bool = True
    strict_fallbacks: bool = True

    def _validate(self) -> None:
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")
        self.log_level = level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["AclSettings", "Settings"]
