"""
Flatten nested application data into ordered form parts.

    {"user": {"name": "a", "tags": ["x", "y"]}, "avatar": MultipartFile(...)}

becomes the parts `user[name]=a`, `user[tags]=x`, `user[tags]=y` and a file
part named `avatar` (with the default list format).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

from .files import ByteSource
from .parts import FieldPart, FilePart, Part


class ListFormat(Enum):
    """How list values are keyed."""

    MULTI = "multi"  # key=a&key=b
    MULTI_COMPATIBLE = "multi_compatible"  # key[]=a&key[]=b
    INDICES = "indices"  # key[0]=a&key[1]=b


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _list_key(key: str, index: int, list_format: ListFormat, nested: bool) -> str:
    if nested or list_format is ListFormat.INDICES:
        return f"{key}[{index}]"
    if list_format is ListFormat.MULTI_COMPATIBLE:
        return f"{key}[]"
    return key


def _walk(key: str, value: Any, list_format: ListFormat) -> Iterator[Part]:
    if value is None:
        return
    if isinstance(value, ByteSource):
        yield FilePart(key, value)
    elif isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _walk(f"{key}[{sub_key}]", sub_value, list_format)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            nested = isinstance(item, (Mapping, list, tuple))
            yield from _walk(_list_key(key, index, list_format, nested), item, list_format)
    else:
        yield FieldPart(key, _stringify(value))


def encode_map(
    data: Mapping[str, Any],
    list_format: ListFormat = ListFormat.MULTI,
) -> list[Part]:
    """
    Flatten `data` into parts in iteration order.

    `None` values are dropped, file sources become file parts and every other
    scalar is sent as its string form. Keys are used verbatim.
    """
    parts: list[Part] = []
    for key, value in data.items():
        parts.extend(_walk(str(key), value, list_format))
    return parts
