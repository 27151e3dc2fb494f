"""Config validation errors.

Settings errors and policy-declaration errors share :class:`ConfigError` as
their root: both mean the deployment is broken and must fail at startup,
never at request time.
"""
from __future__ import annotations

from action_acl.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings or access-policy configuration is invalid."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required ``ACL_*`` variable (or other settings source) is absent."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used, e.g. an unknown log level."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": value, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
