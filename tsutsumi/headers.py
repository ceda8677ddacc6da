from __future__ import annotations

import re

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def browser_encode(value: str) -> str:
    """
    Encode a field name or filename the way browsers do.

    RFC 2388 asks for a more involved encoding, but user agents only turn
    `\\r\\n`, `\\r` and `\\n` into `%0D%0A` and `"` into `%22`, leaving `%` and
    non-ASCII characters alone. Receivers expect that, so we match it.
    """
    return _NEWLINE_RE.sub("%0D%0A", value).replace('"', "%22")


def is_plain_ascii(value: str) -> bool:
    return value.isascii()


def _disposition(name: str, filename: str | None = None) -> str:
    header = f'content-disposition: form-data; name="{browser_encode(name)}"'
    if filename is not None:
        header = f'{header}; filename="{browser_encode(filename)}"'
    return header


def field_header(name: str, value: str) -> str:
    """
    Header block for a plain field, terminated by the blank line.
    Non-ASCII values are announced as UTF-8 with a binary transfer encoding.
    """
    lines = [_disposition(name)]
    if value and not is_plain_ascii(value):
        lines.append("content-type: text/plain; charset=utf-8")
        lines.append("content-transfer-encoding: binary")
    return "\r\n".join(lines) + "\r\n\r\n"


def file_header(name: str, filename: str | None, content_type: str) -> str:
    """Header block for a file part, terminated by the blank line."""
    return f"{_disposition(name, filename)}\r\ncontent-type: {content_type}\r\n\r\n"
