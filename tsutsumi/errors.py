class TsutsumiError(Exception):
    """Base error for Tsutsumi."""


class UsageError(TsutsumiError, RuntimeError):
    """Raised when a form or file source is used after it has been consumed."""


class SourceReadError(TsutsumiError):
    """Raised when a file source fails while its content is being streamed."""


class LengthMismatchError(SourceReadError):
    """Raised when a file source yields a byte count other than its declared length."""
