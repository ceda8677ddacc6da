"""Tests for tsutsumi.boundary module."""

import pytest
from tsutsumi.boundary import (
    BOUNDARY_LENGTH,
    BOUNDARY_PREFIX,
    generate_boundary,
    validate_boundary,
)


class TestGenerateBoundary:
    """Tests for generate_boundary."""

    def test_prefix_and_fixed_length(self):
        """Boundary is the prefix plus ten digits."""
        boundary = generate_boundary()
        assert boundary.startswith(BOUNDARY_PREFIX)
        assert len(boundary) == BOUNDARY_LENGTH
        assert boundary[len(BOUNDARY_PREFIX):].isdigit()

    def test_zero_padded(self, mocker):
        """Small random values are zero padded to ten digits."""
        mocker.patch("tsutsumi.boundary.secrets.randbelow", return_value=1)
        assert generate_boundary() == f"{BOUNDARY_PREFIX}0000000001"

    def test_max_value_fits(self, mocker):
        """The largest 32-bit value still fits in ten digits."""
        mocker.patch("tsutsumi.boundary.secrets.randbelow", return_value=2**32 - 1)
        assert generate_boundary() == f"{BOUNDARY_PREFIX}4294967295"

    def test_draws_from_32_bit_range(self, mocker):
        """Random suffix is drawn below 2**32."""
        randbelow = mocker.patch("tsutsumi.boundary.secrets.randbelow", return_value=7)
        generate_boundary()
        randbelow.assert_called_once_with(2**32)

    def test_ascii_only(self):
        """Boundary is plain ASCII and valid as a multipart boundary."""
        boundary = generate_boundary()
        assert boundary.isascii()
        assert validate_boundary(boundary) == boundary

    def test_boundaries_differ(self):
        """Successive calls are not all equal."""
        assert len({generate_boundary() for _ in range(20)}) > 1


class TestValidateBoundary:
    """Tests for validate_boundary."""

    def test_accepts_rfc_characters(self):
        """Letters, digits and RFC 2046 punctuation are accepted."""
        assert validate_boundary("abc'()+_,-./:=?123") == "abc'()+_,-./:=?123"

    def test_rejects_empty(self):
        """Empty boundary raises."""
        with pytest.raises(ValueError, match="between 1 and 70"):
            validate_boundary("")

    def test_rejects_too_long(self):
        """Boundary longer than 70 characters raises."""
        with pytest.raises(ValueError, match="between 1 and 70"):
            validate_boundary("x" * 71)

    def test_rejects_crlf(self):
        """Line breaks are not allowed in a boundary."""
        with pytest.raises(ValueError, match="RFC 2046"):
            validate_boundary("abc\r\ndef")

    def test_rejects_non_ascii(self):
        """Non-ASCII characters are not allowed in a boundary."""
        with pytest.raises(ValueError, match="RFC 2046"):
            validate_boundary("grüße")

    def test_rejects_trailing_space(self):
        """A boundary may contain but not end with a space."""
        assert validate_boundary("a b") == "a b"
        with pytest.raises(ValueError, match="space"):
            validate_boundary("ab ")
