"""
=============================================================================
HEADER COLLECTION AND VALUE PARSING
=============================================================================

HTTP allows a header to appear more than once:

    Accept-Encoding: gzip
    Accept-Encoding: br
    If-None-Match: W/"1A2B"
    If-None-Match: W/"3C4D"

Folding these into one comma-joined string loses information the static
stage relies on. ``If-None-Match`` is compared value by value, and a
request carrying two ``Range`` headers must be told apart from one carrying
a single header. ``Headers`` therefore keeps every occurrence, in order.

Names are case-insensitive (RFC 7230) and are stored lowercase.

=============================================================================
VALUE PARSERS
=============================================================================

    split_list("gzip, br;q=0.9 ,")        → ["gzip", "br;q=0.9"]
    parse_params("bytes=0-499")           → {"bytes": "0-499"}
    parse_params('Bytes = "10-" ; x')     → {"bytes": "10-"}

=============================================================================
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class Headers:
    """
    Ordered, multi-value, case-insensitive header collection.

    Usage:
        headers = Headers([("Range", "bytes=0-9")])
        headers.add("accept-encoding", "gzip")
        headers.get("RANGE")            # "bytes=0-9"
        headers.get_all("range")        # ["bytes=0-9"]
        "Accept-Encoding" in headers    # True
    """

    def __init__(self, items: Optional[Iterable[Tuple[str, str]]] = None):
        self._items: List[Tuple[str, str]] = []
        if items is not None:
            if isinstance(items, dict):
                items = items.items()
            for name, value in items:
                self.add(name, value)

    def add(self, name: str, value: str) -> None:
        """Append a value, keeping any existing ones."""
        self._items.append((name.lower(), value))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value for ``name`` or ``default``."""
        name = name.lower()
        for key, value in self._items:
            if key == name:
                return value
        return default

    def get_all(self, name: str) -> List[str]:
        """Every value for ``name``, in the order received."""
        name = name.lower()
        return [value for key, value in self._items if key == name]

    def items(self) -> List[Tuple[str, str]]:
        return list(self._items)

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self._items!r})"


def split_list(value: str) -> List[str]:
    """
    Split a comma-separated header value into its trimmed, non-empty parts.

    Parameters (``;q=0.5``) stay attached to their element.
    """
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_params(value: str) -> Dict[str, str]:
    """
    Parse ``key=value`` pairs separated by ``;``.

    Keys are lowercased, values are trimmed and unquoted. Pairs without an
    ``=`` or with an empty key are discarded.
    """
    params: Dict[str, str] = {}
    for part in value.split(";"):
        if "=" not in part:
            continue
        key, _, raw = part.partition("=")
        key = key.strip().lower()
        if not key:
            continue
        raw = raw.strip()
        if len(raw) >= 2 and raw[0] == raw[-1] == '"':
            raw = raw[1:-1]
        params[key] = raw
    return params
