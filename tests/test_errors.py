"""Tests for tsutsumi.errors module."""

import pytest
from tsutsumi.errors import (
    TsutsumiError,
    UsageError,
    SourceReadError,
    LengthMismatchError,
)


class TestErrorHierarchy:
    """Tests for error class hierarchy."""

    def test_tsutsumi_error_is_exception(self):
        """Test TsutsumiError inherits from Exception."""
        assert issubclass(TsutsumiError, Exception)

    def test_usage_error_inherits_tsutsumi_error(self):
        """Test UsageError inherits from TsutsumiError and RuntimeError."""
        assert issubclass(UsageError, TsutsumiError)
        assert issubclass(UsageError, RuntimeError)

    def test_source_read_error_inherits_tsutsumi_error(self):
        """Test SourceReadError inherits from TsutsumiError."""
        assert issubclass(SourceReadError, TsutsumiError)

    def test_length_mismatch_error_inherits_source_read_error(self):
        """Test LengthMismatchError inherits from SourceReadError."""
        assert issubclass(LengthMismatchError, SourceReadError)
        assert issubclass(LengthMismatchError, TsutsumiError)


class TestErrorCatching:
    """Tests for catching errors at different hierarchy levels."""

    def test_catch_usage_error_as_runtime_error(self):
        """Test UsageError can be caught as RuntimeError."""
        with pytest.raises(RuntimeError, match="finalized"):
            raise UsageError("already finalized")

    def test_catch_length_mismatch_as_source_read_error(self):
        """Test LengthMismatchError can be caught as SourceReadError."""
        with pytest.raises(SourceReadError, match="declared"):
            raise LengthMismatchError("declared 3")

    def test_catch_all_as_tsutsumi_error(self):
        """Test all custom errors can be caught as TsutsumiError."""
        errors = [
            UsageError("usage"),
            SourceReadError("read"),
            LengthMismatchError("length"),
        ]
        for error in errors:
            with pytest.raises(TsutsumiError):
                raise error
