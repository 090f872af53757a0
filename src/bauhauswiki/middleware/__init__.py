"""
Middleware around the wiki router.

    MiddlewarePipeline   chains middleware, first added = outermost
    LoggingMiddleware    access log on the "bauhauswiki.access" logger
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
]
