"""Config – 12-factor settings, loaders, and the configuration error taxonomy."""

from action_acl.config.settings import (
    AclSettings,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from action_acl.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "AclSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
