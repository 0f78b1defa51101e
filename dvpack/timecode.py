"""Title timecode and AAUX/VAUX recording time packs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dvpack.bcd import BcdError, from_bcd_tens
from dvpack.context import (
    DeserializationError,
    PackContext,
    PackValidationError,
    System,
)
from dvpack.timevalue import (
    BinaryGroupFlag,
    BlankFlag,
    ColorFrame,
    PolarityCorrection,
    TimeValue,
)

__all__ = ["Timecode", "TitleTimecode"]

_RAW_SIZE = 4

# The polarity correction and binary group flag bits are placed differently in
# the two systems; every other field shares the same position.
_PC_BIT = {System.SYS_525_60: 15, System.SYS_625_50: 31}
_BGF_BITS = {System.SYS_525_60: (23, 30, 31), System.SYS_625_50: (15, 30, 23)}


def _check_raw(raw: bytes) -> bytes:
    data = bytes(raw)
    if len(data) != _RAW_SIZE:
        raise ValueError(f"pack data must be {_RAW_SIZE} bytes long, got {len(data)}")
    return data


def _field(word: int, low: int, width: int) -> int:
    return (word >> low) & ((1 << width) - 1)


def _decode_bcd(what: str, tens: int, units: int, tens_bits: int) -> int | None:
    try:
        return from_bcd_tens(tens, units, tens_bits)
    except BcdError as err:
        raise DeserializationError(f"couldn't read the time's {what}") from err


def _digits(value: int | None, tens_bits: int) -> tuple[int, int]:
    """Split a number into BCD tens and units; ``None`` becomes all bits set."""
    if value is None:
        return (1 << tens_bits) - 1, 0xF
    return value // 10, value % 10


def _required(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _validated(value: Any, ctx: PackContext) -> Any:
    try:
        value.validate(ctx)
    except PackValidationError as err:
        raise DeserializationError() from err
    return value


@dataclass(frozen=True)
class Timecode:
    """Timecode fields shared by title timecode and recording time packs.

    As a recording time pack, both ``time`` and its frame number may be absent.
    When there is no associated binary group pack, the flag fields should have
    every bit set: synchronized color frame, odd polarity and the
    ``TIME_CLOCK_GROUP_PAGE_LINE`` binary group flag.
    """

    time: TimeValue | None
    color_frame: ColorFrame
    polarity_correction: PolarityCorrection
    binary_group_flag: BinaryGroupFlag

    @classmethod
    def _decode(cls, raw: bytes, ctx: PackContext) -> Timecode:
        word = int.from_bytes(_check_raw(raw), "little")
        system = ctx.system

        hour = _decode_bcd("hour", _field(word, 28, 2), _field(word, 24, 4), 2)
        minute = _decode_bcd("minute", _field(word, 20, 3), _field(word, 16, 4), 3)
        second = _decode_bcd("second", _field(word, 12, 3), _field(word, 8, 4), 3)
        frame = _decode_bcd("frame number", _field(word, 4, 2), _field(word, 0, 4), 2)

        parts = (hour, minute, second)
        time_absent = any(p is None for p in parts)
        time_present = any(p is not None for p in parts)
        if time_absent == time_present:
            raise DeserializationError(
                "hour/minute/second time fields must be fully present or fully absent"
            )
        if time_absent and frame is not None:
            raise DeserializationError(
                "frame number cannot be given if the rest of the time is missing"
            )

        bgf = sum(
            ((word >> bit) & 1) << index
            for index, bit in enumerate(_BGF_BITS[system])
        )
        time = (
            TimeValue(
                hour=hour,
                minute=minute,
                second=second,
                drop_frame=bool(_field(word, 6, 1)),
                frame=frame,
            )
            if time_present
            else None
        )
        return cls(
            time=time,
            color_frame=ColorFrame(_field(word, 7, 1)),
            polarity_correction=PolarityCorrection(_field(word, _PC_BIT[system], 1)),
            binary_group_flag=BinaryGroupFlag(bgf),
        )

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> Timecode:
        """Read and validate the four data bytes of a recording time pack."""
        return _validated(cls._decode(raw, ctx), ctx)

    def to_raw(self, ctx: PackContext) -> bytes:
        """Validate and write the four data bytes of the pack."""
        self.validate(ctx)
        system = ctx.system
        time = self.time
        hour_tens, hour_units = _digits(time.hour if time else None, 2)
        minute_tens, minute_units = _digits(time.minute if time else None, 3)
        second_tens, second_units = _digits(time.second if time else None, 3)
        frame_tens, frame_units = _digits(time.frame if time else None, 2)
        drop_frame = time.drop_frame if time else True

        word = (
            frame_units
            | frame_tens << 4
            | int(drop_frame) << 6
            | int(self.color_frame) << 7
            | second_units << 8
            | second_tens << 12
            | minute_units << 16
            | minute_tens << 20
            | hour_units << 24
            | hour_tens << 28
            | int(self.polarity_correction) << _PC_BIT[system]
        )
        bgf = int(self.binary_group_flag)
        for index, bit in enumerate(_BGF_BITS[system]):
            word |= ((bgf >> index) & 1) << bit
        return word.to_bytes(_RAW_SIZE, "little")

    def validate(self, ctx: PackContext) -> None:
        """Raise :class:`PackValidationError` if any field is invalid."""
        errors = self._errors(ctx)
        if errors:
            raise PackValidationError(errors)

    def _errors(self, ctx: PackContext) -> list[tuple[str, str]]:
        if self.time is None:
            return []
        try:
            self.time.validate(ctx)
        except PackValidationError as err:
            return [(f"time.{path}", msg) for path, msg in err.errors]
        return []

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping with the time as a string and enum labels."""
        return {
            "time": None if self.time is None else str(self.time),
            "color_frame": self.color_frame.label,
            "polarity_correction": self.polarity_correction.label,
            "binary_group_flag": self.binary_group_flag.label,
        }

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any], require_time: bool) -> Timecode:
        text = data.get("time")
        if text is None:
            if require_time:
                raise ValueError("input is missing a time value")
            time = None
        else:
            time = TimeValue.parse(text, require_frame=require_time)
        return cls(
            time=time,
            color_frame=ColorFrame.from_label(_required(data, "color_frame")),
            polarity_correction=PolarityCorrection.from_label(
                _required(data, "polarity_correction")
            ),
            binary_group_flag=BinaryGroupFlag.from_label(
                _required(data, "binary_group_flag")
            ),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Timecode:
        """Build a recording time from the mapping produced by :meth:`to_dict`."""
        return cls._from_mapping(data, require_time=False)


@dataclass(frozen=True)
class TitleTimecode:
    """Elapsed time in the title at the tape position of the pack.

    The time and its frame number are required.  ``blank_flag`` shares its bit
    with ``timecode.color_frame``, so both must hold the same integer value.
    """

    timecode: Timecode
    blank_flag: BlankFlag

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> TitleTimecode:
        """Read and validate the four data bytes of a title timecode pack."""
        data = _check_raw(raw)
        parsed = Timecode._decode(data, ctx)
        if parsed.time is None:
            raise DeserializationError("required timecode value is missing")
        if parsed.time.frame is None:
            raise DeserializationError("required frame number is missing")
        blank_flag = (
            BlankFlag.CONTINUOUS if (data[0] & 0x80) >> 7 == 1 else BlankFlag.DISCONTINUOUS
        )
        return _validated(cls(timecode=parsed, blank_flag=blank_flag), ctx)

    def to_raw(self, ctx: PackContext) -> bytes:
        """Validate and write the four data bytes of the pack."""
        # The blank flag is written through the color frame bit it shares.
        self.validate(ctx)
        return self.timecode.to_raw(ctx)

    def validate(self, ctx: PackContext) -> None:
        """Raise :class:`PackValidationError` if any field is invalid."""
        errors: list[tuple[str, str]] = []
        time = self.timecode.time
        if time is None:
            errors.append(("timecode.time", "required timecode value is missing"))
        elif time.frame is None:
            errors.append(("timecode.time.frame", "required frame number is missing"))
        errors.extend(
            (f"timecode.{path}", msg) for path, msg in self.timecode._errors(ctx)
        )
        blank = int(self.blank_flag)
        color = int(self.timecode.color_frame)
        if blank != color:
            errors.append(
                (
                    "blank_flag",
                    f"Blank flag integer value of {blank} must be equal to the color "
                    f"frame flag integer value of {color} because they occupy the "
                    "same physical bit positions on the tape.  Change one value to "
                    "match the other.",
                )
            )
        if errors:
            raise PackValidationError(errors)

    def to_dict(self) -> dict[str, Any]:
        """Return the timecode fields flattened together with the blank flag."""
        return {**self.timecode.to_dict(), "blank_flag": self.blank_flag.label}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TitleTimecode:
        """Build a title timecode from the mapping produced by :meth:`to_dict`."""
        return cls(
            timecode=Timecode._from_mapping(data, require_time=True),
            blank_flag=BlankFlag.from_label(_required(data, "blank_flag")),
        )