"""
=============================================================================
httpstatic
=============================================================================

Static file serving as a pipeline stage.

    from httpstatic import StaticMiddleware, MiddlewarePipeline
    from httpstatic.http import not_found

    pipeline = MiddlewarePipeline()
    pipeline.add(StaticMiddleware(at="/public", from_="./priv/static", gzip=True))
    handler = pipeline.wrap(lambda request: not_found())

For each GET/HEAD request under the mount the stage answers 200, 206 or
304, rejects an unsafe path with 400, or passes the request on untouched.

=============================================================================
"""

__version__ = "1.0.0"

from .config import StaticConfig, EtagGenerator, PackageDir
from .middleware import MiddlewarePipeline, LoggingMiddleware
from .static import StaticMiddleware, PassThrough, Rejected, Served, InvalidPathError, call, init

__all__ = [
    "StaticConfig",
    "EtagGenerator",
    "PackageDir",
    "MiddlewarePipeline",
    "LoggingMiddleware",
    "StaticMiddleware",
    "PassThrough",
    "Rejected",
    "Served",
    "InvalidPathError",
    "call",
    "init",
    "__version__",
]
