"""
=============================================================================
HTTP RESPONSE MODEL
=============================================================================

``HTTPResponse`` holds a status, a header mapping and a body. The body is
either literal bytes or a ``FileBody`` pointing at (a slice of) a file on
disk, so a static asset is only read when the response is serialized.

    Stage returns              to_bytes()                 Transport sends
    HTTPResponse    ─────►     status line + headers ───► raw bytes
      file=FileBody(...)       + file bytes (unless HEAD)

Header names set by the static stage are lowercase (``content-type``,
``etag``, ...). HTTP header names are case-insensitive, and
``get_header`` honours that.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
import json

from ..filesystem import FileBody
from .status_codes import HTTPStatus


SERVER_NAME = "httpstatic/1.0"


@dataclass
class HTTPResponse:
    """
    An HTTP response to hand back to the transport.

    Exactly one of ``body`` / ``file`` carries the payload; when ``file`` is
    set it wins.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    file: Optional[FileBody] = None
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """``HTTP/1.1 206 Partial Content``"""
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    @property
    def content_length(self) -> int:
        if self.file is not None:
            return self.file.size
        return len(self.body)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return default

    def has_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def read_body(self) -> bytes:
        """The payload as bytes, reading from disk if needed."""
        if self.file is not None:
            return self.file.read()
        return self.body

    def to_bytes(self, server_name: str = SERVER_NAME, include_body: bool = True) -> bytes:
        """
        Serialize for the wire.

        ``content-length``, ``date`` and ``server`` are filled in when
        missing. With ``include_body=False`` (HEAD requests) the headers,
        including the length, are identical but no payload follows.
        """
        response_headers = dict(self.headers)

        if not self.has_header("content-length"):
            response_headers["content-length"] = str(self.content_length)
        if not self.has_header("date"):
            response_headers["date"] = format_http_date(datetime.now(timezone.utc))
        if not self.has_header("server"):
            response_headers["server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        head = "\r\n".join(lines).encode("latin-1") + b"\r\n"
        if not include_body:
            return head
        return head + self.read_body()


class ResponseBuilder:
    """
    Fluent builder for small literal responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.BAD_REQUEST)
            .json({"error": "invalid path for static asset"})
            .build())
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = HTTPStatus(status)
        return self

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set a literal body; strings are encoded as UTF-8."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        return self

    def json(self, data: Any) -> "ResponseBuilder":
        self._headers["content-type"] = "application/json; charset=utf-8"
        return self.body(json.dumps(data, ensure_ascii=False))

    def build(self) -> HTTPResponse:
        return HTTPResponse(status=self._status, headers=self._headers, body=self._body)


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Example: ``Wed, 01 Jan 2026 12:00:00 GMT``. Always GMT.
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    """400 with a small JSON error body."""
    return ResponseBuilder().status(HTTPStatus.BAD_REQUEST).json({"error": message}).build()


def not_found(message: str = "Not Found") -> HTTPResponse:
    """404 with a small JSON error body."""
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).json({"error": message}).build()
