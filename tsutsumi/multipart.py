from __future__ import annotations

from .files import MultipartFile
from .form_data import FormData


def _file_source(field: str, val: bytes | tuple[str, bytes, str | None]) -> MultipartFile:
    if isinstance(val, bytes):
        return MultipartFile.from_bytes(val, filename=field)
    filename, content, ctype = val
    return MultipartFile.from_bytes(content, filename=filename, content_type=ctype)


def build_multipart(
    data: dict[str, str] | None,
    files: dict[str, bytes | tuple[str, bytes, str | None]],
    boundary: str | None = None,
) -> tuple[str, bytes]:
    """
    Build a complete multipart/form-data body in memory.
    `files` values can be bytes or (filename, bytes, content_type|None).
    Fields are written before files.
    """
    form = FormData(boundary=boundary)
    if data:
        for k, v in data.items():
            form.add_field(k, v)
    for field, val in files.items():
        form.add_file(field, _file_source(field, val))
    return form.content_type, form.read()
