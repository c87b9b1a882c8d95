"""
Middleware pipeline and built-in middleware.

The static asset stage itself lives in ``httpstatic.static``
(``StaticMiddleware``); this package holds the plumbing it plugs into.
"""

from .base import Middleware, MiddlewarePipeline, NextHandler, FunctionMiddleware, function_middleware
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "FunctionMiddleware",
    "function_middleware",
    "LoggingMiddleware",
    "RequestLog",
]
