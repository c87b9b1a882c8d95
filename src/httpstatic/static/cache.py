"""
=============================================================================
CACHE VALIDATION
=============================================================================

Decides whether the client's cached copy is still good (304, no body) or
the body has to be sent, and which caching headers go on the response.

    query string starts with "vsn=" ──► cache-control: <vsn value>
    (and a vsn value is configured)     no etag, always send the body

    cache_control_for_etags set ──────► cache-control: <etag value>
                                        etag: W/"..." (or the custom etag)
                                        etag in If-None-Match? → 304

    otherwise ────────────────────────► no caching headers, send the body

=============================================================================
WHY TWO STRATEGIES
=============================================================================

Fingerprinted asset URLs (``app.js?vsn=d41d8cd9``) change whenever the file
does, so the response can be cached for a year with no revalidation at all.

Plain URLs are revalidated with an etag. The default etag is derived from
the file's size and modification time, not its content, so it is sent as
a WEAK validator: equal tags mean "almost certainly the same file", not
"byte for byte identical".

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import zlib

from ..config import StaticConfig
from ..filesystem import FileInfo
from ..http.headers import Headers
from .variants import Variant


VSN_PREFIX = "vsn="


@dataclass(frozen=True)
class CacheDecision:
    """``fresh`` means answer 304; ``headers`` go on the response either way."""

    fresh: bool
    headers: Dict[str, str] = field(default_factory=dict)


def weak_etag(info: FileInfo) -> str:
    """
    ``W/"<hex>"`` from size and modification time.

    Deterministic across processes and restarts, so every worker hands out
    the same tag for the same file.
    """
    tag = zlib.crc32(f"{info.size}:{info.mtime}".encode("ascii"))
    return f'W/"{tag:X}"'


def etag_for(variant: Variant, config: StaticConfig) -> str:
    if config.etag_generation is not None:
        return config.etag_generation(variant.path)
    return weak_etag(variant.info)


def decide(query_string: str, headers: Headers, variant: Variant, config: StaticConfig) -> CacheDecision:
    """Pick the caching strategy for this request and evaluate it."""
    vsn_cache = config.cache_control_for_vsn_requests
    if vsn_cache is not None and query_string.startswith(VSN_PREFIX):
        return CacheDecision(fresh=False, headers={"cache-control": vsn_cache})

    etag_cache = config.cache_control_for_etags
    if etag_cache is None:
        return CacheDecision(fresh=False)

    etag = etag_for(variant, config)
    fresh = matches(etag, headers)
    return CacheDecision(fresh=fresh, headers={"cache-control": etag_cache, "etag": etag})


def matches(etag: Optional[str], headers: Headers) -> bool:
    """Whether ``etag`` is exactly one of the ``if-none-match`` values."""
    return etag is not None and etag in headers.get_all("if-none-match")
