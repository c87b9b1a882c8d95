"""
=============================================================================
THE STATIC ASSET STAGE
=============================================================================

Composes the five decisions into one request handler:

    method GET/HEAD? ── under the mount? ── passes only/only_matching?
          │ no                │ no                 │ no
          └───────────────────┴────────────────────┴──► PassThrough
                                                   │ yes
    decode + validate segments ────────────────────┤
          │ invalid ──► Rejected (400)             │
                                                   ▼
    pick .br / .gz / plain file ── none exists ──► PassThrough
                                                   │
    cache decision ── fresh ──► 304                │
                                                   ▼
    single valid Range? ── yes ──► 206 slice
                        └─ no  ──► 200 full file

=============================================================================
TWO WAYS TO USE IT
=============================================================================

As plain functions, when the host pipeline wants to decide what a
pass-through or a rejection turns into:

    config = init(at="/public", from_="./priv/static")
    outcome = call(request, config)
    if isinstance(outcome, Served):
        ...

As middleware, where a pass-through calls ``next`` and a rejection becomes a
400 response:

    pipeline.add(StaticMiddleware(at="/public", from_="./priv/static"))

``call`` keeps no state between requests; one config can serve any number
of concurrent requests.

=============================================================================
"""

from dataclasses import dataclass
from typing import Any, Optional, Union
import logging

from ..config import StaticConfig
from ..filesystem import FileBody
from ..http.mime_types import content_type_for
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, bad_request
from ..http.status_codes import HTTPStatus
from ..middleware.base import Middleware, NextHandler
from . import cache
from .filters import ALLOWED_METHODS, allowed, subset
from .paths import InvalidPathError, ResolvedAsset, resolve
from .ranges import requested_range
from .variants import Variant, select_variant


logger = logging.getLogger("httpstatic.static")


@dataclass(frozen=True)
class PassThrough:
    """Not ours: hand the request to the rest of the pipeline unchanged."""

    reason: str


@dataclass(frozen=True)
class Rejected:
    """The request can never name an asset; answer with ``status``."""

    reason: str
    status: HTTPStatus = HTTPStatus.BAD_REQUEST


@dataclass(frozen=True)
class Served:
    """A complete response; nothing further in the pipeline should run."""

    response: HTTPResponse


Outcome = Union[PassThrough, Rejected, Served]


def init(at: str, from_: Any, **options: Any) -> StaticConfig:
    """Build the configuration for one mount. See ``StaticConfig.build``."""
    return StaticConfig.build(at=at, from_=from_, **options)


def call(request: HTTPRequest, config: StaticConfig) -> Outcome:
    """Handle one request against ``config``."""
    if request.method not in ALLOWED_METHODS:
        return PassThrough(f"method {request.method} not served")

    segments = subset(config.at, request.path_info)
    if not allowed(config.only, config.only_matching, segments):
        logger.debug(f"Not a static path: {request.path}")
        return PassThrough("outside mount or filtered")

    try:
        asset = resolve(config.root, segments)
    except InvalidPathError as e:
        logger.warning(f"Rejected static path {request.path!r}: {e}")
        return Rejected(str(e), status=e.status_code)

    variant = select_variant(asset.path, request.headers, config.gzip, config.brotli)
    if variant is None:
        logger.debug(f"No file for {request.path} at {asset.path}")
        return PassThrough("file not found")

    return Served(serve(request, asset, variant, config))


def serve(request: HTTPRequest, asset: ResolvedAsset, variant: Variant, config: StaticConfig) -> HTTPResponse:
    """Build the 304, 206 or 200 response for a file known to exist."""
    headers = {}
    if variant.encoding is not None:
        headers["content-encoding"] = variant.encoding

    decision = cache.decide(request.query_string, request.headers, variant, config)
    headers.update(decision.headers)

    if decision.fresh:
        return HTTPResponse(status=HTTPStatus.NOT_MODIFIED, headers=headers)

    headers["content-type"] = content_type_for(asset.filename, config.content_types)
    headers["accept-ranges"] = "bytes"
    headers.update(config.headers)

    size = variant.info.size
    byte_range = requested_range(request.headers.get_all("range"), size)
    if byte_range is not None:
        logger.debug(f"Serving {byte_range.content_range} of {variant.path}")
        headers["content-range"] = byte_range.content_range
        return HTTPResponse(
            status=HTTPStatus.PARTIAL_CONTENT,
            headers=headers,
            file=FileBody(variant.path, offset=byte_range.start, length=byte_range.length),
        )

    # Caches must key on accept-encoding whenever a compressed variant
    # could have been chosen, whichever one this request got
    if config.gzip or config.brotli:
        headers = {"vary": "Accept-Encoding", **headers}

    return HTTPResponse(
        status=HTTPStatus.OK,
        headers=headers,
        file=FileBody(variant.path, offset=0, length=size),
    )


class StaticMiddleware(Middleware):
    """
    Serve static assets from a pipeline.

    Accepts a ready ``StaticConfig`` or the keyword options of
    ``StaticConfig.build``:

        StaticMiddleware(at="/public", from_="./priv/static", gzip=True)
    """

    def __init__(self, config: Optional[StaticConfig] = None, **options: Any):
        if config is not None and options:
            raise TypeError("Pass either a StaticConfig or build options, not both")
        self.config = config if config is not None else init(**options)

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        outcome = call(request, self.config)

        if isinstance(outcome, Served):
            return outcome.response
        if isinstance(outcome, Rejected):
            response = bad_request("invalid path for static asset")
            response.status = outcome.status
            return response
        return next(request)
