"""Conversion between bytes and space-separated hexadecimal text."""

from __future__ import annotations

import string

__all__ = ["from_hex", "to_hex"]

_HEX_DIGITS = frozenset(string.hexdigits)


def from_hex(value: str) -> bytes:
    """Parse text like ``"AA BB CC"`` into bytes.  Spaces are ignored."""
    digits = value.replace(" ", "")
    bad = next((c for c in digits if c not in _HEX_DIGITS), None)
    if bad is not None:
        raise ValueError(f"invalid hexadecimal character {bad!r} in {value!r}")
    if len(digits) % 2:
        raise ValueError(f"hexadecimal string {value!r} has an odd number of digits")
    return bytes.fromhex(digits)


def to_hex(data: bytes) -> str:
    """Format bytes as upper-case hexadecimal pairs separated by spaces."""
    return " ".join(f"{b:02X}" for b in data)