"""Config settings – 12-factor env-based configuration."""
from action_acl.config.settings.base import AclSettings, Settings
from action_acl.config.settings.factory import SettingsFactory
from action_acl.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["AclSettings", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
