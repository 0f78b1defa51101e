"""Binary-coded decimal helpers for DV pack fields."""

from __future__ import annotations

__all__ = ["BcdError", "from_bcd_tens", "from_bcd_hundreds"]


class BcdError(ValueError):
    """A binary-coded decimal digit was out of range."""


def _field_max(bits: int) -> int:
    if bits < 1:
        raise ValueError(f"bit width must be positive, got {bits}")
    return (1 << bits) - 1


def _check_width(name: str, value: int, bits: int) -> None:
    if not 0 <= value <= _field_max(bits):
        raise ValueError(f"{name} value {value} does not fit in {bits} bits")


def from_bcd_tens(tens: int, units: int, tens_bits: int = 4) -> int | None:
    """Decode a two-digit BCD number.

    ``tens_bits`` is the width of the tens field; the units field is always four
    bits wide.  When every bit of both fields is set the number is absent and
    ``None`` is returned.
    """
    _check_width("tens", tens, tens_bits)
    _check_width("units", units, 4)
    if tens == _field_max(tens_bits) and units == 0xF:
        return None
    if tens > 9:
        raise BcdError(f"tens place value of {tens} is greater than 9")
    if units > 9:
        raise BcdError(f"units place value of {units} is greater than 9")
    return tens * 10 + units


def from_bcd_hundreds(
    hundreds: int, tens: int, units: int, hundreds_bits: int = 4
) -> int | None:
    """Decode a three-digit BCD number.

    ``hundreds_bits`` is the width of the hundreds field; the tens and units
    fields are four bits wide.  When every bit of all fields is set the number
    is absent and ``None`` is returned.
    """
    _check_width("hundreds", hundreds, hundreds_bits)
    _check_width("tens", tens, 4)
    _check_width("units", units, 4)
    if hundreds == _field_max(hundreds_bits) and tens == 0xF and units == 0xF:
        return None
    if hundreds > 9:
        raise BcdError(f"hundreds place value of {hundreds} is greater than 9")
    if tens > 9:
        raise BcdError(f"tens place value of {tens} is greater than 9")
    if units > 9:
        raise BcdError(f"units place value of {units} is greater than 9")
    return hundreds * 100 + tens * 10 + units