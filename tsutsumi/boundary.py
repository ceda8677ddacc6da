"""Boundary generation for multipart bodies."""

from __future__ import annotations

import secrets
from typing import Final

BOUNDARY_PREFIX: Final = "--tsutsumi-boundary-"
BOUNDARY_LENGTH: Final = len(BOUNDARY_PREFIX) + 10

# RFC 2046 bcharsnospace plus space, which may not end a boundary.
_BCHARS = frozenset(
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "'()+_,-./:=? "
)


def generate_boundary() -> str:
    """
    Return a fresh boundary: the fixed prefix followed by a zero-padded
    10-digit decimal of a random 32-bit unsigned integer.
    """
    return f"{BOUNDARY_PREFIX}{secrets.randbelow(2**32):010d}"


def validate_boundary(boundary: str) -> str:
    if not 1 <= len(boundary) <= 70:
        raise ValueError("Boundary must be between 1 and 70 characters")
    if not set(boundary) <= _BCHARS:
        raise ValueError(f"Boundary contains characters outside RFC 2046: {boundary!r}")
    if boundary.endswith(" "):
        raise ValueError("Boundary must not end with a space")
    return boundary
