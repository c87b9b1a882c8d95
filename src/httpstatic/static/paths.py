"""
=============================================================================
PATH DECODING AND VALIDATION
=============================================================================

Turns the raw, still-encoded URL segments of an eligible request into a
filesystem path under the configured root. This is the security boundary
of the static stage.

    ["images", "logo%20v2.png"]
        │ decode each segment (strict: "%zz" or invalid UTF-8 is an error)
        ▼
    ["images", "logo v2.png"]
        │ validate: no ".", "..", "" segments; no "/", "\\", ":" or NUL
        ▼
    ResolvedAsset(path=<root>/images/logo v2.png)

Validation happens BEFORE the path is built. A ``ResolvedAsset`` can only
be obtained through ``resolve()``, so holding one means the path stays
under the root. No canonicalization is attempted on top of that.

A failure raises ``InvalidPathError``: the request is rejected with a 400,
it is never passed along to the rest of the pipeline.

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple
from urllib.parse import unquote
import re

from ..http.status_codes import HTTPStatus


# A "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

DOT_SEGMENTS = frozenset({".", "..", ""})
FORBIDDEN_CHARACTERS = ("/", "\\", ":", "\0")


class InvalidPathError(Exception):
    """The request path can never name a static asset."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = "invalid path for static asset"):
        super().__init__(message)


def decode_segment(segment: str) -> str:
    """
    Percent-decode one segment.

    Raises:
        InvalidPathError: On a malformed escape or bytes that are not UTF-8.
    """
    if _BAD_ESCAPE.search(segment):
        raise InvalidPathError(f"malformed percent-escape in {segment!r}")
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidPathError(f"segment {segment!r} is not valid UTF-8") from e


def decode_segments(segments: Sequence[str]) -> List[str]:
    return [decode_segment(segment) for segment in segments]


def invalid_path(segments: Sequence[str]) -> bool:
    """
    True when any decoded segment is a dot-segment (``.``, ``..``), empty,
    or contains a path separator, a drive colon or a NUL byte.
    """
    for segment in segments:
        if segment in DOT_SEGMENTS:
            return True
        if any(char in segment for char in FORBIDDEN_CHARACTERS):
            return True
    return False


@dataclass(frozen=True)
class ResolvedAsset:
    """Decoded segments and the filesystem path they map to."""

    segments: Tuple[str, ...]
    path: Path

    @property
    def filename(self) -> str:
        """The last segment: the name used for content-type lookup."""
        return self.segments[-1]


def resolve(root: Path, raw_segments: Sequence[str]) -> ResolvedAsset:
    """
    Decode, validate and join ``raw_segments`` onto ``root``.

    Raises:
        InvalidPathError: If any segment fails decoding or validation.
    """
    if not raw_segments:
        raise InvalidPathError("empty static path")

    segments = decode_segments(raw_segments)
    if invalid_path(segments):
        raise InvalidPathError(f"invalid path segments: {'/'.join(raw_segments)!r}")

    return ResolvedAsset(segments=tuple(segments), path=root.joinpath(*segments))
