"""Application pipeline – built-in middleware implementations."""
from __future__ import annotations

import time
from typing import Any

from action_acl.application.pipeline.middleware import Middleware, Next
from action_acl.observability.logging import get_logger

_log = get_logger(__name__)


class LoggingMiddleware(Middleware):
    """Log handler completion or failure with timing."""

    async def __call__(self, request: Any, next_: Next) -> Any:
        name = getattr(request, "name", type(request).__name__)
        start = time.perf_counter()
        try:
            result = await next_(request)
        except Exception:
            duration = (time.perf_counter() - start) * 1000
            _log.error("action.failed", action=name, duration_ms=round(duration, 2))
            raise
        duration = (time.perf_counter() - start) * 1000
        _log.info("action.completed", action=name, duration_ms=round(duration, 2))
        return result


__all__ = ["LoggingMiddleware"]
