"""
=============================================================================
SINGLE BYTE-RANGE REQUESTS
=============================================================================

    Range: bytes=-500      last 500 bytes        start = size-500, end = size-1
    Range: bytes=9500-     from 9500 to the end  start = 9500,     end = size-1
    Range: bytes=0-499     explicit              start = 0,        end = 499

Anything else, including several comma-separated ranges, does not parse.
A parsed range is then rejected when:

    start < 0 | end >= size | start > end | it covers the whole file

Rejected or unparsable ranges are not an error for the client: the full
file is sent with a 200 instead. A "range" covering the entire file is
answered with a plain 200 rather than a 206.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import re

from ..http.headers import parse_params


_SUFFIX = re.compile(r"^-([0-9]+)$")
_START_END = re.compile(r"^([0-9]+)-([0-9]*)$")


@dataclass(frozen=True)
class ByteRange:
    """An inclusive, satisfiable byte range of a file of ``size`` bytes."""

    start: int
    end: int
    size: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.size}"


def start_and_end(spec: str, size: int) -> Optional[Tuple[int, int]]:
    """Translate one ``bytes=`` value into (start, end), without bounds checks."""
    match = _SUFFIX.match(spec)
    if match:
        last = int(match.group(1))
        return size - last, size - 1

    match = _START_END.match(spec)
    if match:
        first, last = match.groups()
        if not last:
            return int(first), size - 1
        return int(first), int(last)

    return None


def check_bounds(start: int, end: int, size: int) -> bool:
    if start < 0 or end >= size or start > end:
        return False
    # The whole file is served as a regular 200
    if start == 0 and end == size - 1:
        return False
    return True


def parse_range(value: str, size: int) -> Optional[ByteRange]:
    """
    Parse a ``Range`` header value against a file of ``size`` bytes.

    Returns None when the header is malformed or the range unsatisfiable.
    """
    spec = parse_params(value).get("bytes")
    if spec is None:
        return None

    bounds = start_and_end(spec, size)
    if bounds is None:
        return None

    start, end = bounds
    if not check_bounds(start, end, size):
        return None
    return ByteRange(start=start, end=end, size=size)


def requested_range(range_headers: Sequence[str], size: int) -> Optional[ByteRange]:
    """Only a request with exactly one Range header gets a partial response."""
    if len(range_headers) != 1:
        return None
    return parse_range(range_headers[0], size)
