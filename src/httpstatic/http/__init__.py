"""
=============================================================================
HTTP PRIMITIVES
=============================================================================

The request/response vocabulary shared by the static stage, the middleware
pipeline and the CLI:

    headers.py       Headers (multi-value), split_list, parse_params
    request.py       HTTPRequest, build_request, split_path
    response.py      HTTPResponse, ResponseBuilder, bad_request, not_found
    status_codes.py  HTTPStatus
    mime_types.py    get_mime_type, content_type_for

=============================================================================
"""

from .headers import Headers, split_list, parse_params
from .request import HTTPRequest, build_request, split_path
from .response import HTTPResponse, ResponseBuilder, bad_request, not_found, format_http_date
from .status_codes import HTTPStatus
from .mime_types import get_mime_type, content_type_for

__all__ = [
    "Headers",
    "split_list",
    "parse_params",
    "HTTPRequest",
    "build_request",
    "split_path",
    "HTTPResponse",
    "ResponseBuilder",
    "bad_request",
    "not_found",
    "format_http_date",
    "HTTPStatus",
    "get_mime_type",
    "content_type_for",
]
