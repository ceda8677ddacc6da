from tsutsumi.boundary import BOUNDARY_PREFIX, generate_boundary
from tsutsumi.errors import LengthMismatchError, SourceReadError, TsutsumiError, UsageError
from tsutsumi.files import ByteSource, MultipartFile
from tsutsumi.form_data import FormData
from tsutsumi.headers import browser_encode, field_header, file_header
from tsutsumi.length import total_length
from tsutsumi.mapping import ListFormat, encode_map
from tsutsumi.multipart import build_multipart
from tsutsumi.parts import FieldPart, FilePart, Part

__all__ = [
    "FormData",
    "MultipartFile",
    "ByteSource",
    "FieldPart",
    "FilePart",
    "Part",
    "ListFormat",
    "encode_map",
    "build_multipart",
    "total_length",
    "generate_boundary",
    "BOUNDARY_PREFIX",
    "browser_encode",
    "field_header",
    "file_header",
    "TsutsumiError",
    "UsageError",
    "SourceReadError",
    "LengthMismatchError",
]
