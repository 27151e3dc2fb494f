"""Config settings – EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, TypeVar

from action_acl.config.settings.base import Settings
from action_acl.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        """Return only the fields this source actually provides, already coerced."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    ``AclSettings.audit_denials`` is read from ``ACL_AUDIT_DENIALS``.
    List fields take comma-separated values.
    """

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ

    @staticmethod
    def env_key(settings_class: type[Settings], field_name: str) -> str:
        prefix = getattr(settings_class, "_prefix", "").upper()
        return f"{prefix}_{field_name}".upper().lstrip("_")

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        found: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = self.env_key(settings_class, field.name)
            raw = environ.get(key)
            if raw is None:
                continue
            try:
                found[field.name] = self._coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc
        return found

    def load(self, settings_class: type[T]) -> T:
        kwargs = self.values(settings_class)
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            if field.name in kwargs:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(self.env_key(settings_class, field.name))

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:
        if type_hint is bool:
            return value.lower() in ("1", "true", "yes", "on")
        if type_hint is int:
            return int(value)
        if typing.get_origin(type_hint) is list:
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
