from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .files import ByteSource


@dataclass(frozen=True, slots=True)
class FieldPart:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class FilePart:
    name: str
    file: ByteSource

    @property
    def filename(self) -> str | None:
        return self.file.filename

    @property
    def content_type(self) -> str:
        return self.file.content_type


Part: TypeAlias = FieldPart | FilePart
