"""
Static asset serving.

    filters.py   which requests are eligible (method, mount, only filters)
    paths.py     segment decoding, validation, path construction
    variants.py  .br / .gz / plain selection
    cache.py     vsn / etag cache decisions
    ranges.py    single byte-range parsing and bounds
    stage.py     init / call / StaticMiddleware
"""

from .paths import InvalidPathError, ResolvedAsset
from .stage import Outcome, PassThrough, Rejected, Served, StaticMiddleware, call, init, serve

__all__ = [
    "InvalidPathError",
    "ResolvedAsset",
    "Outcome",
    "PassThrough",
    "Rejected",
    "Served",
    "StaticMiddleware",
    "call",
    "init",
    "serve",
]
