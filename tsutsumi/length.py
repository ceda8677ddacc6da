"""Exact size of an encoded multipart body, computed without reading file content."""

from __future__ import annotations

from collections.abc import Iterable

from .headers import field_header, file_header
from .parts import FieldPart, FilePart, Part

# "--" + boundary + "\r\n"
_DELIMITER_OVERHEAD = 4
# "\r\n" after each payload
_PAYLOAD_TRAILER = 2
# "--" + boundary + "--\r\n"
_CLOSE_OVERHEAD = 6


def part_length(boundary: str, part: Part) -> int:
    match part:
        case FieldPart(name, value):
            header = field_header(name, value)
            payload = len(value.encode("utf-8"))
        case FilePart(name, file):
            header = file_header(name, file.filename, file.content_type)
            payload = file.length
        case _:
            raise TypeError(f"Expected FieldPart or FilePart, got {type(part).__name__}")
    return (
        _DELIMITER_OVERHEAD
        + len(boundary)
        + len(header.encode("utf-8"))
        + payload
        + _PAYLOAD_TRAILER
    )


def closing_length(boundary: str) -> int:
    return _CLOSE_OVERHEAD + len(boundary)


def total_length(boundary: str, parts: Iterable[Part]) -> int:
    """
    Number of bytes the assembled body will contain.

    File parts contribute their declared length; their content is never read,
    so this is safe to call before, after, or instead of streaming.
    """
    return sum(part_length(boundary, part) for part in parts) + closing_length(boundary)
