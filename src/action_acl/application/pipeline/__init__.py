"""Application pipeline – middleware chain around action handlers."""
from action_acl.application.pipeline.middleware import Handler, Middleware, Next
from action_acl.application.pipeline.pipeline import Pipeline
from action_acl.application.pipeline.middlewares import LoggingMiddleware

__all__ = [
    "Handler",
    "LoggingMiddleware",
    "Middleware",
    "Next",
    "Pipeline",
]
