"""
=============================================================================
PRECOMPRESSED VARIANT SELECTION
=============================================================================

Given a request for FILE, pick which file on disk answers it:

    ┌──────────┬───────────────────────────────────────┬─────────────────┐
    │ Priority │ Condition                             │ Serves          │
    ├──────────┼───────────────────────────────────────┼─────────────────┤
    │    1     │ brotli on, client accepts br or *     │ FILE.br  (br)   │
    │    2     │ gzip on, client accepts gzip or *     │ FILE.gz  (gzip) │
    │    3     │ always                                │ FILE            │
    └──────────┴───────────────────────────────────────┴─────────────────┘

The first candidate that exists as a REGULAR file wins. If none exists the
asset is not ours and the request moves on down the pipeline.

A request carrying a Range header always gets the plain file: byte offsets
into a compressed stream mean nothing to a client that will decompress it.

Nothing is compressed on the fly. Variants are produced ahead of time by
the build (``gzip -k``, ``brotli -k``).

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from ..filesystem import FileInfo, regular_file_info
from ..http.headers import Headers, split_list


logger = logging.getLogger(__name__)

BROTLI = "br"
GZIP = "gzip"
WILDCARD = "*"

# encoding token → file suffix
SUFFIXES = {BROTLI: ".br", GZIP: ".gz"}


@dataclass(frozen=True)
class Variant:
    """The file picked to answer a request."""

    path: Path
    info: FileInfo
    encoding: Optional[str] = None


def accepts_encoding(headers: Headers, encoding: str) -> bool:
    """
    Whether any ``accept-encoding`` value lists ``encoding`` or ``*``.

    Elements are matched by substring, parameters included, so
    ``br;q=1.0`` accepts ``br``.
    """
    for value in headers.get_all("accept-encoding"):
        for element in split_list(value):
            if encoding in element or WILDCARD in element:
                return True
    return False


def _with_suffix(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


def select_variant(path: Path, headers: Headers, gzip: bool, brotli: bool) -> Optional[Variant]:
    """
    Check the candidates for ``path`` in priority order.

    Returns None when not even the plain file exists.
    """
    if headers.get_all("range"):
        gzip = brotli = False

    for enabled, encoding in ((brotli, BROTLI), (gzip, GZIP)):
        if not enabled or not accepts_encoding(headers, encoding):
            continue
        candidate = _with_suffix(path, SUFFIXES[encoding])
        info = regular_file_info(candidate)
        if info is not None:
            logger.debug(f"Serving {encoding} variant {candidate}")
            return Variant(path=candidate, info=info, encoding=encoding)

    info = regular_file_info(path)
    if info is None:
        return None
    return Variant(path=path, info=info)
