"""
=============================================================================
HTTP REQUEST MODEL
=============================================================================

The request as the static stage sees it. The host server parses the wire
format; this module only describes the result.

Two details matter to the static stage:

1. THE PATH STAYS ENCODED.
   ``/public/a%2Fb.txt`` yields ``path_info == ["public", "a%2Fb.txt"]``.
   Decoding happens later, per segment, so that an encoded slash can be
   detected and rejected instead of silently becoming a separator.

2. REPEATED HEADERS STAY SEPARATE.
   Two ``Range`` lines are two values in ``request.headers.get_all("range")``,
   not one comma-joined string.

    GET /public/images/logo.png?vsn=3
    ─┬─ ──────────┬──────────── ──┬──
     │            │               └── query_string  "vsn=3"
     │            └── path_info     ["public", "images", "logo.png"]
     └── method

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from .headers import Headers


def split_path(path: str) -> List[str]:
    """
    Split a URL path into its segments, dropping empty ones.

        >>> split_path("/public//images/logo.png")
        ['public', 'images', 'logo.png']
        >>> split_path("/")
        []
    """
    return [segment for segment in path.split("/") if segment]


@dataclass
class HTTPRequest:
    """
    A request handed to the pipeline by the host server.

    ``path`` and ``path_info`` are still percent-encoded. ``path_info`` is
    derived from ``path`` when not given explicitly.
    """

    method: str
    path: str = "/"
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)
    client_address: Tuple[str, int] = ("", 0)
    path_info: Optional[List[str]] = None

    def __post_init__(self):
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        if self.path_info is None:
            self.path_info = split_path(self.path)

    @property
    def user_agent(self) -> str:
        return self.headers.get("user-agent", "")


def build_request(
    method: str,
    target: str,
    headers: Union[Headers, Iterable[Tuple[str, str]], dict, None] = None,
    client_address: Tuple[str, int] = ("", 0),
) -> HTTPRequest:
    """
    Build a request from a request-target such as ``/public/app.js?vsn=1``.

    Fragments are dropped; the query string is kept raw.
    """
    target = target.split("#", 1)[0]
    path, _, query_string = target.partition("?")
    return HTTPRequest(
        method=method.upper(),
        path=path or "/",
        query_string=query_string,
        headers=Headers(headers or []),
        client_address=client_address,
    )
