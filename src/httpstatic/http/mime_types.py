"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps a filename to the value of the Content-Type header.

Only the file EXTENSION is consulted, never the content. For assets whose
name carries no useful extension (``apple-app-site-association``,
``CNAME``, ...) the static stage accepts an explicit override mapping keyed
by filename; see ``content_type_for``.

Precompressed variants are looked up by the name the client ASKED for:
``app.js.gz`` is still served as ``text/javascript`` (with
``content-encoding: gzip``), so callers must pass the logical filename.

=============================================================================
"""

from pathlib import Path
from typing import Mapping, Optional, Union


MIME_TYPES = {
    # Text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".webmanifest": "application/manifest+json",

    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".bmp": "image/bmp",

    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".eot": "application/vnd.ms-fontobject",

    # Audio / video
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",

    # Documents and archives
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".tar": "application/x-tar",
    ".gz": "application/gzip",
    ".br": "application/x-brotli",

    # Other
    ".wasm": "application/wasm",
    ".map": "application/json",
}

# "I don't know what this is, treat as binary"
DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(path: Union[str, Path], default: Optional[str] = None) -> str:
    """
    Get the MIME type for a file based on its extension.

    Examples:
        >>> get_mime_type("logo.PNG")
        'image/png'

        >>> get_mime_type("unknown.xyz")
        'application/octet-stream'
    """
    if isinstance(path, str):
        path = Path(path)

    extension = path.suffix.lower()
    return MIME_TYPES.get(extension, default or DEFAULT_MIME_TYPE)


def content_type_for(filename: str, overrides: Mapping[str, str]) -> str:
    """
    Resolve the Content-Type for ``filename``.

    An exact filename match in ``overrides`` wins; otherwise fall back to
    the extension table.
    """
    content_type = overrides.get(filename)
    if content_type:
        return content_type
    return get_mime_type(filename)
