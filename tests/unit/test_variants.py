"""
Unit tests for precompressed variant selection.
"""

from pathlib import Path

import pytest

from httpstatic.http.headers import Headers
from httpstatic.static.variants import accepts_encoding, select_variant


class TestAcceptsEncoding:
    """Tests for accept-encoding matching."""

    def test_missing_header(self):
        """Test that no Accept-Encoding accepts nothing."""
        assert accepts_encoding(Headers(), "gzip") is False

    def test_listed(self):
        """Test listed encodings."""
        headers = Headers([("Accept-Encoding", "gzip, deflate, br")])
        assert accepts_encoding(headers, "gzip") is True
        assert accepts_encoding(headers, "br") is True

    def test_not_listed(self):
        """Test an unlisted encoding."""
        headers = Headers([("Accept-Encoding", "deflate")])
        assert accepts_encoding(headers, "gzip") is False

    def test_wildcard(self):
        """Test the wildcard."""
        headers = Headers([("Accept-Encoding", "*")])
        assert accepts_encoding(headers, "br") is True

    def test_parameters(self):
        """Test encodings with q parameters."""
        headers = Headers([("Accept-Encoding", "br;q=1.0, gzip;q=0.8")])
        assert accepts_encoding(headers, "br") is True

    def test_several_header_lines(self):
        """Test several Accept-Encoding lines."""
        headers = Headers([("Accept-Encoding", "deflate"), ("Accept-Encoding", "gzip")])
        assert accepts_encoding(headers, "gzip") is True


class TestSelectVariant:
    """Tests for the br → gz → plain lookup order."""

    ACCEPT_ALL = Headers([("Accept-Encoding", "gzip, br")])

    def test_brotli_wins(self, asset_root: Path):
        """Test that brotli is preferred."""
        variant = select_variant(asset_root / "app.js", self.ACCEPT_ALL, gzip=True, brotli=True)

        assert variant.encoding == "br"
        assert variant.path == asset_root / "app.js.br"
        assert variant.info.size == len(b"BROTLI-BYTES")

    def test_gzip_when_brotli_disabled(self, asset_root: Path):
        """Test gzip when brotli is disabled."""
        variant = select_variant(asset_root / "app.js", self.ACCEPT_ALL, gzip=True, brotli=False)

        assert variant.encoding == "gzip"
        assert variant.path == asset_root / "app.js.gz"

    def test_gzip_when_br_file_missing(self, asset_root: Path):
        """Test gzip when no .br file exists."""
        variant = select_variant(asset_root / "style.css", self.ACCEPT_ALL, gzip=True, brotli=True)

        assert variant.encoding == "gzip"
        assert variant.path == asset_root / "style.css.gz"

    def test_gzip_when_client_lacks_br(self, asset_root: Path):
        """Test gzip when the client does not accept br."""
        headers = Headers([("Accept-Encoding", "gzip")])
        variant = select_variant(asset_root / "app.js", headers, gzip=True, brotli=True)

        assert variant.encoding == "gzip"

    def test_plain_when_nothing_accepted(self, asset_root: Path):
        """Test the plain file without Accept-Encoding."""
        variant = select_variant(asset_root / "app.js", Headers(), gzip=True, brotli=True)

        assert variant.encoding is None
        assert variant.path == asset_root / "app.js"

    def test_plain_when_disabled(self, asset_root: Path):
        """Test the plain file when compression is off."""
        variant = select_variant(asset_root / "app.js", self.ACCEPT_ALL, gzip=False, brotli=False)

        assert variant.encoding is None

    def test_range_forces_plain(self, asset_root: Path):
        """Test that a Range header forces the plain file."""
        headers = Headers([("Accept-Encoding", "gzip, br"), ("Range", "bytes=0-3")])
        variant = select_variant(asset_root / "app.js", headers, gzip=True, brotli=True)

        assert variant.encoding is None
        assert variant.path == asset_root / "app.js"

    def test_missing_file(self, asset_root: Path):
        """Test that a missing file has no variant."""
        assert select_variant(asset_root / "missing.js", self.ACCEPT_ALL, gzip=True, brotli=True) is None

    def test_directory_is_not_servable(self, asset_root: Path):
        """Test that a directory has no variant."""
        assert select_variant(asset_root / "docs", Headers(), gzip=False, brotli=False) is None

    def test_directory_variant_is_skipped(self, asset_root: Path):
        """Test that a directory named like a variant is skipped."""
        # dir.gz is a directory, and dir itself is too
        headers = Headers([("Accept-Encoding", "gzip")])
        assert select_variant(asset_root / "dir", headers, gzip=True, brotli=False) is None

    def test_compressed_variant_without_plain_file(self, asset_root: Path):
        """Test serving a variant whose plain file is missing."""
        (asset_root / "only.txt.gz").write_bytes(b"gz")
        headers = Headers([("Accept-Encoding", "gzip")])

        variant = select_variant(asset_root / "only.txt", headers, gzip=True, brotli=False)
        assert variant.encoding == "gzip"

        assert select_variant(asset_root / "only.txt", Headers(), gzip=True, brotli=False) is None

    def test_path_below_a_file(self, asset_root: Path):
        """Test a path below a regular file."""
        assert select_variant(asset_root / "app.js" / "x", Headers(), gzip=False, brotli=False) is None


@pytest.mark.parametrize("accept", ["identity", "compress", ""])
def test_unrelated_encodings_get_plain(asset_root: Path, accept):
    """Test that unrelated encodings get the plain file."""
    headers = Headers([("Accept-Encoding", accept)])
    variant = select_variant(asset_root / "app.js", headers, gzip=True, brotli=True)
    assert variant.encoding is None
