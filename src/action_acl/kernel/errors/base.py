"""Root error class for the action-acl error hierarchy.

Every error carries a stable machine-readable ``code``.  The codes raised by
this package are:

==========================  ==================================================
``unauthorized``            no principal where one is required
``forbidden``               a private action was dispatched directly
``config_error``            settings could not be loaded
``missing_required_setting`` / ``invalid_setting_value``
``missing_fallback``        a policy has no ``detach_to`` action
``no_access_criteria``      a policy has no roles and no validator
``unresolvable_validator``  a validator name is not registered
``invalid_policy``          an attribute is unknown or has the wrong shape
``unknown_action``          an action or fallback target is not registered
``fallback_cycle``          fallbacks lead back to an action already visited
==========================  ==================================================
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        action: Name of the action the error is about, if any.  Also
            recorded under ``detail["action"]``.
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        action: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.action = action
        self.detail: dict[str, Any] = dict(detail or {})
        if action is not None:
            self.detail.setdefault("action", action)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Single-line JSON, so the error can be logged as one structured field."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        where = f", action={self.action!r}" if self.action is not None else ""
        return f"{type(self).__name__}(code={self.code!r}{where}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict for logs and audit entries."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
