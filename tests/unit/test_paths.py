"""
Unit tests for path decoding and validation.
"""

from pathlib import Path

import pytest

from httpstatic.static.paths import (
    InvalidPathError,
    ResolvedAsset,
    decode_segment,
    invalid_path,
    resolve,
)


class TestDecodeSegment:
    """Tests for strict percent-decoding."""

    def test_plain(self):
        """Test a segment without escapes."""
        assert decode_segment("logo.png") == "logo.png"

    def test_escapes(self):
        """Test decoding percent escapes."""
        assert decode_segment("logo%20v2.png") == "logo v2.png"
        assert decode_segment("%E3%81%93%E3%82%93.png") == "こん.png"

    def test_plus_is_literal(self):
        """Test that a plus sign is not a space."""
        assert decode_segment("a+b.txt") == "a+b.txt"

    @pytest.mark.parametrize("segment", ["%", "%2", "%zz", "abc%g1", "100%"])
    def test_malformed_escape(self, segment):
        """Test that malformed escapes are rejected."""
        with pytest.raises(InvalidPathError):
            decode_segment(segment)

    def test_invalid_utf8(self):
        """Test that bytes that are not UTF-8 are rejected."""
        with pytest.raises(InvalidPathError):
            decode_segment("%FF%FE")


class TestInvalidPath:
    """Tests for segment validation."""

    @pytest.mark.parametrize("first", [".", "..", ""])
    def test_dot_and_empty_first_segment(self, first):
        """Test dot segments and empty names at the start."""
        assert invalid_path([first, "logo.png"]) is True

    @pytest.mark.parametrize("deeper", [".", ".."])
    def test_dot_segments_deeper(self, deeper):
        """Test dot segments further down the path."""
        assert invalid_path(["images", deeper, "logo.png"]) is True

    @pytest.mark.parametrize("char", ["/", "\\", ":", "\0"])
    def test_forbidden_characters_anywhere(self, char):
        """Test separators, colons and NUL inside a segment."""
        assert invalid_path([f"a{char}b"]) is True
        assert invalid_path(["images", f"logo{char}.png"]) is True

    def test_dots_inside_names_are_fine(self):
        """Test that names containing dots are allowed."""
        assert invalid_path(["..hidden", "a..b.txt", ".well-known"]) is False

    def test_valid(self):
        """Test an ordinary path."""
        assert invalid_path(["images", "logo.png"]) is False


class TestResolve:
    """Tests for path construction."""

    def test_joins_under_root(self, tmp_path: Path):
        """Test joining decoded segments under the root."""
        asset = resolve(tmp_path, ["images", "logo%20v2.png"])

        assert isinstance(asset, ResolvedAsset)
        assert asset.segments == ("images", "logo v2.png")
        assert asset.path == tmp_path / "images" / "logo v2.png"
        assert asset.filename == "logo v2.png"

    @pytest.mark.parametrize("segments", [
        ["..", "etc", "passwd"],
        ["images", "..", "..", "etc", "passwd"],
        ["%2e%2e", "secret"],
        ["images", "%2E%2E", "secret"],
        ["a%2Fb"],
        ["a%5Cb"],
        ["c%3A", "windows"],
        ["logo.png%00.txt"],
        ["%zz"],
    ])
    def test_rejects(self, tmp_path: Path, segments):
        """Test that unsafe segments are rejected."""
        with pytest.raises(InvalidPathError) as exc_info:
            resolve(tmp_path, segments)

        assert exc_info.value.status_code == 400

    def test_rejects_empty(self, tmp_path: Path):
        """Test that no segments are rejected."""
        with pytest.raises(InvalidPathError):
            resolve(tmp_path, [])
