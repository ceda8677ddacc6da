from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import aclosing
from typing import Any

from .boundary import generate_boundary, validate_boundary
from .errors import LengthMismatchError, SourceReadError, UsageError
from .files import ByteSource
from .headers import field_header, file_header
from .length import total_length
from .mapping import ListFormat, encode_map
from .parts import FieldPart, FilePart, Part

logger = logging.getLogger(__name__)

_CRLF = b"\r\n"


async def _aclose(chunks: AsyncIterator[bytes]) -> None:
    aclose = getattr(chunks, "aclose", None)
    if aclose is not None:
        await aclose()


def _close(chunks: Iterator[bytes]) -> None:
    close = getattr(chunks, "close", None)
    if close is not None:
        close()


class FormData:
    """
    A `multipart/form-data` body built from ordered fields and files.

    The boundary is chosen once, at construction. Parts are emitted in the
    order they were added. The body can be streamed exactly once, with
    `finalize()` (async) or `iter_bytes()` (sync); `length` is available at
    any time and never reads file content.

    Args:
        boundary: Explicit boundary to use instead of a random one
    """

    def __init__(self, boundary: str | None = None) -> None:
        if boundary is None:
            boundary = generate_boundary()
        self._boundary = validate_boundary(boundary)
        self._parts: list[Part] = []
        self._finalized = False

    @classmethod
    def from_map(
        cls,
        data: Mapping[str, Any],
        list_format: ListFormat = ListFormat.MULTI,
        boundary: str | None = None,
    ) -> FormData:
        """Build a form from (possibly nested) mapping data; see `encode_map`."""
        form = cls(boundary=boundary)
        for part in encode_map(data, list_format):
            form.add(part)
        return form

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self._boundary}"

    @property
    def parts(self) -> tuple[Part, ...]:
        return tuple(self._parts)

    @property
    def fields(self) -> list[tuple[str, str]]:
        return [(p.name, p.value) for p in self._parts if isinstance(p, FieldPart)]

    @property
    def files(self) -> list[tuple[str, ByteSource]]:
        return [(p.name, p.file) for p in self._parts if isinstance(p, FilePart)]

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def length(self) -> int:
        """Total size of the encoded body in bytes."""
        return total_length(self._boundary, self._parts)

    def add(self, part: Part) -> None:
        if not isinstance(part, (FieldPart, FilePart)):
            raise TypeError(f"Expected FieldPart or FilePart, got {type(part).__name__}")
        if self._finalized:
            raise UsageError("Can't add parts to a finalized FormData")
        self._parts.append(part)

    def add_field(self, name: str, value: str) -> None:
        self.add(FieldPart(name, value))

    def add_file(self, name: str, file: ByteSource) -> None:
        self.add(FilePart(name, file))

    # -- framing -----------------------------------------------------------

    def _delimiter(self) -> bytes:
        return f"--{self._boundary}\r\n".encode("ascii")

    def _closing(self) -> bytes:
        return f"--{self._boundary}--\r\n".encode("ascii")

    def _field_chunk(self, part: FieldPart) -> bytes:
        header = field_header(part.name, part.value)
        return self._delimiter() + (header + part.value).encode("utf-8") + _CRLF

    def _file_head(self, part: FilePart) -> bytes:
        header = file_header(part.name, part.filename, part.content_type)
        return self._delimiter() + header.encode("utf-8")

    @staticmethod
    def _accept(part: FilePart, chunk: object, received: int) -> tuple[bytes, int]:
        """Validate one chunk from a file source and return it with the new byte count."""
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise SourceReadError(
                f"File part {part.name!r} yielded {type(chunk).__name__}, expected bytes"
            )
        data = bytes(chunk)
        received += len(data)
        if received > part.file.length:
            raise LengthMismatchError(
                f"File part {part.name!r} produced more than its declared "
                f"{part.file.length} bytes"
            )
        return data, received

    @staticmethod
    def _check_complete(part: FilePart, received: int) -> None:
        if received != part.file.length:
            raise LengthMismatchError(
                f"File part {part.name!r} produced {received} bytes, "
                f"declared {part.file.length}"
            )

    def _start(self) -> tuple[Part, ...]:
        if self._finalized:
            raise UsageError("Can't finalize a FormData that has already been finalized")
        self._finalized = True
        logger.debug(
            "Finalizing form with %d parts, boundary %s", len(self._parts), self._boundary
        )
        return tuple(self._parts)

    # -- async stream ------------------------------------------------------

    def finalize(self) -> AsyncIterator[bytes]:
        """
        Stream the encoded body.

        Fields are emitted from memory; file parts are drained chunk by chunk
        from their source without buffering. The closing boundary is emitted
        once, after the last part. A failing source ends the stream with
        `SourceReadError` and nothing after it is emitted.

        Raises:
            UsageError: If the form was already finalized
        """
        return self._aiter_body(self._start())

    async def _aiter_body(self, parts: tuple[Part, ...]) -> AsyncIterator[bytes]:
        done = 0
        try:
            for part in parts:
                match part:
                    case FieldPart():
                        yield self._field_chunk(part)
                    case FilePart():
                        yield self._file_head(part)
                        async with aclosing(self._adrain(part)) as chunks:
                            async for chunk in chunks:
                                yield chunk
                        yield _CRLF
                done += 1
            yield self._closing()
        except GeneratorExit:
            logger.debug("Form stream abandoned after %d of %d parts", done, len(parts))
            raise
        logger.debug("Form stream complete, %d parts", done)

    async def _adrain(self, part: FilePart) -> AsyncIterator[bytes]:
        try:
            chunks = part.file.aiter_chunks()
        except UsageError:
            raise
        except Exception as exc:
            raise SourceReadError(f"Failed opening file part {part.name!r}: {exc}") from exc
        received = 0
        try:
            while True:
                try:
                    chunk = await anext(chunks)
                except StopAsyncIteration:
                    break
                except Exception as exc:
                    raise SourceReadError(f"Failed reading file part {part.name!r}: {exc}") from exc
                data, received = self._accept(part, chunk, received)
                yield data
        finally:
            await _aclose(chunks)
        self._check_complete(part, received)

    async def read_as_bytes(self) -> bytes:
        """Finalize and collect the whole body in memory."""
        return b"".join([chunk async for chunk in self.finalize()])

    # -- sync stream -------------------------------------------------------

    def iter_bytes(self) -> Iterator[bytes]:
        """
        Blocking counterpart of `finalize()`, sharing its single-use guard.

        Raises:
            UsageError: If the form was already finalized, or a file source
                can only be read asynchronously
        """
        if not self._finalized:
            for part in self._parts:
                if isinstance(part, FilePart) and not getattr(
                    part.file, "supports_sync", hasattr(part.file, "iter_chunks")
                ):
                    raise UsageError(f"File part {part.name!r} can only be streamed with finalize()")
        return self._iter_body(self._start())

    def _iter_body(self, parts: tuple[Part, ...]) -> Iterator[bytes]:
        done = 0
        try:
            for part in parts:
                match part:
                    case FieldPart():
                        yield self._field_chunk(part)
                    case FilePart():
                        yield self._file_head(part)
                        yield from self._drain(part)
                        yield _CRLF
                done += 1
            yield self._closing()
        except GeneratorExit:
            logger.debug("Form stream abandoned after %d of %d parts", done, len(parts))
            raise
        logger.debug("Form stream complete, %d parts", done)

    def _drain(self, part: FilePart) -> Iterator[bytes]:
        try:
            chunks = part.file.iter_chunks()  # type: ignore[attr-defined]
        except UsageError:
            raise
        except Exception as exc:
            raise SourceReadError(f"Failed opening file part {part.name!r}: {exc}") from exc
        received = 0
        try:
            while True:
                try:
                    chunk = next(chunks)
                except StopIteration:
                    break
                except Exception as exc:
                    raise SourceReadError(f"Failed reading file part {part.name!r}: {exc}") from exc
                data, received = self._accept(part, chunk, received)
                yield data
        finally:
            _close(chunks)
        self._check_complete(part, received)

    def read(self) -> bytes:
        """Finalize synchronously and collect the whole body in memory."""
        return b"".join(self.iter_bytes())

    def __repr__(self) -> str:
        state = " finalized" if self._finalized else ""
        return f"<FormData boundary={self._boundary!r} {len(self._parts)} parts{state}>"
