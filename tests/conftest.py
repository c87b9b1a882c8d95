"""
pytest configuration and fixtures.
"""

import os
from pathlib import Path
from typing import Callable

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpstatic.config import StaticConfig
from httpstatic.http import HTTPRequest, build_request


LOGO_SIZE = 10_000

# Fixed timestamp so etags are reproducible within a test run
MTIME = 1_700_000_000


def _write(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    os.utime(path, (MTIME, MTIME))
    return path


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """
    A small asset tree:

        images/logo.png     10 000 bytes
        app.js              plain
        app.js.gz           "gzipped" variant
        app.js.br           "brotli" variant
        style.css           plain, with a .gz only
        style.css.gz
        favicon.ico
        robots.txt
        apple-app-site-association
        docs/               a directory
        dir.gz/             a directory named like a variant
    """
    root = tmp_path / "static"
    _write(root / "images" / "logo.png", bytes(range(256)) * 39 + bytes(16))
    _write(root / "app.js", b"console.log('plain');\n")
    _write(root / "app.js.gz", b"GZIP-BYTES")
    _write(root / "app.js.br", b"BROTLI-BYTES")
    _write(root / "style.css", b"body { color: red; }\n")
    _write(root / "style.css.gz", b"GZIP-CSS")
    _write(root / "favicon.ico", b"\x00\x00\x01\x00")
    _write(root / "robots.txt", b"User-agent: *\n")
    _write(root / "apple-app-site-association", b"{}")
    (root / "docs").mkdir()
    (root / "dir.gz").mkdir()
    (root / "dir").mkdir()
    return root


@pytest.fixture
def make_config(asset_root: Path) -> Callable[..., StaticConfig]:
    """Build a config mounted at /public over ``asset_root``."""

    def factory(**options) -> StaticConfig:
        options.setdefault("at", "/public")
        options.setdefault("from_", asset_root)
        return StaticConfig.build(**options)

    return factory


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
    """``make_request("/public/app.js", ("Range", "bytes=0-1"), method="HEAD")``"""

    def factory(target: str, *headers, method: str = "GET") -> HTTPRequest:
        return build_request(method, target, list(headers))

    return factory
