"""VAUX source control pack: metadata about the video stream."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dvpack.context import DeserializationError, PackContext, PackValidationError

__all__ = [
    "VAUXRecordingMode",
    "FrameField",
    "FrameChange",
    "StillFieldPicture",
    "VAUXSourceControl",
]

_RAW_SIZE = 4
_NO_GENRE = 0x7F
_NO_INFO_2BIT = 0b11
_RESERVED_BITS = (11, 14, 31)


class VAUXRecordingMode(enum.IntEnum):
    """Recording mode of the video relative to its audio."""

    ORIGINAL = 0x0
    RESERVED = 0x1
    INSERT = 0x2
    INVALID_RECORDING = 0x3


class FrameField(enum.IntEnum):
    """Whether both fields are output, or only one of them twice, per frame."""

    ONLY_ONE = 0x0
    BOTH = 0x1


class FrameChange(enum.IntEnum):
    """Whether the picture differs from the previous frame."""

    SAME_AS_PREVIOUS = 0x0
    DIFFERENT_FROM_PREVIOUS = 0x1


class StillFieldPicture(enum.IntEnum):
    """Time difference between the two fields within a frame."""

    NO_GAP = 0x0
    HALF_FRAME_TIME = 0x1


def _check_raw(raw: bytes) -> bytes:
    data = bytes(raw)
    if len(data) != _RAW_SIZE:
        raise ValueError(f"pack data must be {_RAW_SIZE} bytes long, got {len(data)}")
    return data


def _field(word: int, low: int, width: int) -> int:
    return (word >> low) & ((1 << width) - 1)


def _range_error(value: int, low: int, high: int) -> str | None:
    if value < low:
        return f"lower than {low}"
    if value > high:
        return f"greater than {high}"
    return None


def _optional(value: int) -> int | None:
    return None if value == _NO_INFO_2BIT else value


@dataclass(frozen=True)
class VAUXSourceControl:
    """Metadata about the video stream.

    ``broadcast_system`` (2 bits), ``display_mode`` (3 bits) and ``reserved``
    (3 bits) are raw codes.  ``first_second`` is 1 or 2, the field output in
    the field 1 period.  The copy protection code is a raw 2-bit value; the
    source situation, input source and compression count are raw codes in
    ``0..2`` or ``None`` when there is no information.  ``genre_category`` is a
    7-bit genre code or ``None``.

    IEC 61834-4:1998 Section 9.2; SMPTE 306M-2002 Section 8.9.2.
    """

    broadcast_system: int
    display_mode: int
    frame_field: FrameField
    first_second: int
    frame_change: FrameChange
    interlaced: bool
    still_field_picture: StillFieldPicture
    still_camera_picture: bool
    copy_protection: int
    source_situation: int | None
    input_source: int | None
    compression_count: int | None
    recording_start_point: bool
    recording_mode: VAUXRecordingMode
    genre_category: int | None
    reserved: int

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> VAUXSourceControl:
        """Read and validate the four data bytes of the pack."""
        word = int.from_bytes(_check_raw(raw), "little")
        reserved = sum(
            ((word >> bit) & 1) << index for index, bit in enumerate(_RESERVED_BITS)
        )
        genre = _field(word, 24, 7)
        value = cls(
            broadcast_system=_field(word, 16, 2),
            display_mode=_field(word, 8, 3),
            frame_field=FrameField(_field(word, 23, 1)),
            first_second=1 if _field(word, 22, 1) else 2,
            frame_change=FrameChange(_field(word, 21, 1)),
            interlaced=bool(_field(word, 20, 1)),
            still_field_picture=StillFieldPicture(_field(word, 19, 1)),
            still_camera_picture=not _field(word, 18, 1),
            copy_protection=_field(word, 6, 2),
            source_situation=_optional(_field(word, 0, 2)),
            input_source=_optional(_field(word, 4, 2)),
            compression_count=_optional(_field(word, 2, 2)),
            recording_start_point=not _field(word, 15, 1),
            recording_mode=VAUXRecordingMode(_field(word, 12, 2)),
            genre_category=None if genre == _NO_GENRE else genre,
            reserved=reserved,
        )
        try:
            value.validate(ctx)
        except PackValidationError as err:
            raise DeserializationError() from err
        return value

    def to_raw(self, ctx: PackContext) -> bytes:
        """Validate and write the four data bytes of the pack."""
        self.validate(ctx)

        def raw_optional(value: int | None) -> int:
            return _NO_INFO_2BIT if value is None else value

        genre = _NO_GENRE if self.genre_category is None else self.genre_category
        word = (
            raw_optional(self.source_situation)
            | raw_optional(self.compression_count) << 2
            | raw_optional(self.input_source) << 4
            | self.copy_protection << 6
            | self.display_mode << 8
            | int(self.recording_mode) << 12
            | int(not self.recording_start_point) << 15
            | self.broadcast_system << 16
            | int(not self.still_camera_picture) << 18
            | int(self.still_field_picture) << 19
            | int(self.interlaced) << 20
            | int(self.frame_change) << 21
            | (1 if self.first_second == 1 else 0) << 22
            | int(self.frame_field) << 23
            | genre << 24
        )
        for index, bit in enumerate(_RESERVED_BITS):
            word |= ((self.reserved >> index) & 1) << bit
        return word.to_bytes(_RAW_SIZE, "little")

    def validate(self, ctx: PackContext) -> None:
        """Raise :class:`PackValidationError` listing every invalid field."""
        errors: list[tuple[str, str]] = []

        def check(name: str, value: int | None, low: int, high: int) -> None:
            if value is None:
                return
            message = _range_error(value, low, high)
            if message is not None:
                errors.append((name, message))

        check("broadcast_system", self.broadcast_system, 0, 0b11)
        check("display_mode", self.display_mode, 0, 0b111)
        check("first_second", self.first_second, 1, 2)
        check("copy_protection", self.copy_protection, 0, 0b11)
        check("source_situation", self.source_situation, 0, 0b10)
        check("input_source", self.input_source, 0, 0b10)
        check("compression_count", self.compression_count, 0, 0b10)
        if self.genre_category == _NO_GENRE:
            errors.append(
                (
                    "genre_category",
                    "instead of specifying Some(0x7F), use None to indicate "
                    "no information",
                )
            )
        else:
            check("genre_category", self.genre_category, 0, _NO_GENRE)
        check("reserved", self.reserved, 0, 0b111)
        if errors:
            raise PackValidationError(errors)