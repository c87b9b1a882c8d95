"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes a static asset stage can produce, plus the handful the
surrounding pipeline needs to answer for requests we pass along.

    ┌────────┬──────────────────────────────────────────────────────────┐
    │  200   │ Full file body                                           │
    │  206   │ Single byte range (Range: bytes=...)                     │
    │  304   │ Client's cached copy is still valid (If-None-Match)      │
    │  400   │ Path failed validation (traversal, bad escapes, ...)     │
    │  404   │ Not ours to send: the pipeline's final handler does it   │
    └────────┴──────────────────────────────────────────────────────────┘

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.PARTIAL_CONTENT == 206
        True
        >>> HTTPStatus.NOT_MODIFIED.phrase
        'Not Modified'
    """

    # 2xx SUCCESS
    OK = 200
    NO_CONTENT = 204
    PARTIAL_CONTENT = 206           # Range request fulfilled

    # 3xx REDIRECTION
    MOVED_PERMANENTLY = 301
    FOUND = 302
    NOT_MODIFIED = 304              # Cached version is still valid

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400               # Invalid static path
    FORBIDDEN = 403
    NOT_FOUND = 404
    RANGE_NOT_SATISFIABLE = 416

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Reason phrase used in the status line (``HTTP/1.1 200 OK``)."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        """Check if this is a 2xx status code."""
        return 200 <= self < 300

    @property
    def is_redirect(self) -> bool:
        """Check if this is a 3xx status code."""
        return 300 <= self < 400

    @property
    def is_client_error(self) -> bool:
        """Check if this is a 4xx status code."""
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a 5xx status code."""
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.PARTIAL_CONTENT: "Partial Content",
    HTTPStatus.MOVED_PERMANENTLY: "Moved Permanently",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.NOT_MODIFIED: "Not Modified",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.RANGE_NOT_SATISFIABLE: "Range Not Satisfiable",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
