"""
File sources for multipart uploads.

A file part never reads its content to size the body: it trusts the declared
`length` and pulls the bytes only while the body is being streamed.
"""

from __future__ import annotations

import asyncio
import mimetypes
import os
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from typing import Final, Protocol, runtime_checkable

from .errors import UsageError

DEFAULT_CONTENT_TYPE: Final = "application/octet-stream"
DEFAULT_CHUNK_SIZE: Final = 65536


@runtime_checkable
class ByteSource(Protocol):
    """
    Content of a file part.

    Sources that can also be drained without an event loop expose
    `iter_chunks()` as well; `FormData.iter_bytes()` requires it.
    """

    length: int
    content_type: str
    filename: str | None

    def aiter_chunks(self) -> AsyncIterator[bytes]: ...


def _read_path(path: str, chunk_size: int) -> Iterator[bytes]:
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


async def _aread_path(path: str, chunk_size: int) -> AsyncIterator[bytes]:
    f = await asyncio.to_thread(open, path, "rb")
    try:
        while chunk := await asyncio.to_thread(f.read, chunk_size):
            yield chunk
    finally:
        f.close()


async def _aiter_sync(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    it = iter(chunks)
    try:
        for chunk in it:
            yield chunk
    finally:
        close = getattr(it, "close", None)
        if close is not None:
            close()


class MultipartFile:
    """
    A single-use file source for a multipart body.

    Plain iterables are pulled on the event loop thread when streamed with
    `FormData.finalize()`, so they should not block; wrap blocking readers in
    an async iterable or use `from_path`, which reads in a worker thread.

    Args:
        chunks: Iterable or async iterable of byte chunks
        length: Total number of bytes `chunks` will produce
        filename: Filename sent in the content-disposition header, if any
        content_type: Content type of the part (default: application/octet-stream)
    """

    def __init__(
        self,
        chunks: Iterable[bytes] | AsyncIterable[bytes],
        length: int,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> None:
        if length < 0:
            raise ValueError("length must be non-negative")
        self.length = length
        self.filename = filename
        self.content_type = content_type or DEFAULT_CONTENT_TYPE
        self._consumed = False
        self._sync_factory: Callable[[], Iterator[bytes]] | None
        self._async_factory: Callable[[], AsyncIterator[bytes]]
        if isinstance(chunks, (str, bytes, bytearray, memoryview)):
            raise TypeError("chunks must be an iterable of byte chunks; use from_bytes() or from_string()")
        if isinstance(chunks, AsyncIterable):
            self._sync_factory = None
            self._async_factory = lambda: aiter(chunks)
        elif isinstance(chunks, Iterable):
            self._sync_factory = lambda: iter(chunks)
            self._async_factory = lambda: _aiter_sync(chunks)
        else:
            raise TypeError(f"chunks must be iterable, got {type(chunks).__name__}")

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MultipartFile:
        data = bytes(data)
        return cls([data], len(data), filename=filename, content_type=content_type)

    @classmethod
    def from_string(
        cls,
        text: str,
        filename: str | None = None,
        content_type: str | None = None,
        encoding: str = "utf-8",
    ) -> MultipartFile:
        if content_type is None:
            content_type = f"text/plain; charset={encoding}"
        return cls.from_bytes(text.encode(encoding), filename=filename, content_type=content_type)

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike[str],
        filename: str | None = None,
        content_type: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> MultipartFile:
        """
        File on disk, opened only when the body is streamed.

        The length is taken from the file size now; the filename defaults to
        the basename and the content type is guessed from it when not given.
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        path = os.fspath(path)
        length = os.stat(path).st_size
        if filename is None:
            filename = os.path.basename(path)
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0]
        source = cls([], length, filename=filename, content_type=content_type)
        source._sync_factory = lambda: _read_path(path, chunk_size)
        source._async_factory = lambda: _aread_path(path, chunk_size)
        return source

    @property
    def supports_sync(self) -> bool:
        return self._sync_factory is not None

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    def _claim(self) -> None:
        if self._consumed:
            raise UsageError("MultipartFile content has already been consumed")
        self._consumed = True

    def iter_chunks(self) -> Iterator[bytes]:
        if self._sync_factory is None:
            raise UsageError("MultipartFile wraps an async source and cannot be read synchronously")
        self._claim()
        return self._sync_factory()

    def aiter_chunks(self) -> AsyncIterator[bytes]:
        self._claim()
        return self._async_factory()

    def __repr__(self) -> str:
        return (
            f"<MultipartFile filename={self.filename!r} "
            f"content_type={self.content_type!r} {self.length} bytes>"
        )
