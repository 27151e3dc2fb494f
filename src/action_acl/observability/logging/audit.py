"""Observability – AuditLogger.

A dedicated structured-log sink for access decisions on protected actions.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from action_acl.observability.logging.processors import get_logger


class AuditOutcome(str, Enum):
    """Standardised audit outcomes."""

    SUCCESS = "success"
    DENIED = "denied"
    ERROR = "error"


class AuditLogger:
    """Structured-log sink for security-sensitive actions.

    All audit entries are emitted at ``WARNING`` level so they pass through
    even restrictive log-level filters.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying structlog logger.  Defaults to one named ``audit``.
    """

    def __init__(
        self,
        service: str = "unknown",
        logger: Any = None,
    ) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_access(
        self,
        principal: Any,
        resource: str,
        action: str,
        outcome: AuditOutcome | str = AuditOutcome.SUCCESS,
        **extra: Any,
    ) -> None:
        """Record a security access event.

        Parameters
        ----------
        principal:
            The user or service performing the action.  Uses
            ``principal.id`` if available, otherwise ``str(principal)``.
            ``None`` is recorded as ``"anonymous"``.
        resource:
            The protected action name.
        action:
            What was attempted (``"dispatch"``, ``"chain"``).
        outcome:
            :class:`AuditOutcome` or plain string.
        **extra:
            Additional structured fields to include in the audit entry.
        """
        if principal is None:
            principal_id = "anonymous"
        else:
            principal_id = getattr(principal, "id", None) or str(principal)
        self._log.warning(
            "audit.access",
            service=self._service,
            principal_id=principal_id,
            resource=resource,
            action=action,
            outcome=outcome.value if isinstance(outcome, AuditOutcome) else str(outcome),
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        )


__all__ = ["AuditLogger", "AuditOutcome"]
