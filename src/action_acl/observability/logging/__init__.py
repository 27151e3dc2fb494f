"""Observability – structured logging helpers."""
from action_acl.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from action_acl.observability.logging.factory import JsonLoggerFactory, configure_logging
from action_acl.observability.logging.processors import get_logger
from action_acl.observability.logging.audit import AuditLogger, AuditOutcome

__all__ = [
    "AuditLogger",
    "AuditOutcome",
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
]
