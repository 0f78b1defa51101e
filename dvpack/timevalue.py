"""Time addresses of frames and the timecode flag enumerations."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from dvpack.context import PackContext, PackValidationError, System

__all__ = [
    "TimeValue",
    "ColorFrame",
    "PolarityCorrection",
    "BinaryGroupFlag",
    "BlankFlag",
]


class _LabeledEnum(enum.IntEnum):
    """Integer enum whose members also carry a serialization label."""

    label: str

    def __new__(cls, value: int, label: str) -> _LabeledEnum:
        member = int.__new__(cls, value)
        member._value_ = value
        member.label = label
        return member

    @classmethod
    def from_label(cls, label: str) -> _LabeledEnum:
        """Return the member with the given serialization label."""
        for member in cls:
            if member.label == label:
                return member
        raise ValueError(f"unknown {cls.__name__} variant {label!r}")


class ColorFrame(_LabeledEnum):
    """Whether color frame identification was applied to the timecode.

    IEC 60461:2010 Section 7.3.3.
    """

    UNSYNCHRONIZED = (0x0, "Unsynchronized")
    SYNCHRONIZED = (0x1, "Synchronized")


class PolarityCorrection(_LabeledEnum):
    """Biphase mark polarity correction (LTC) or field mark flag (VITC)."""

    EVEN = (0x0, "Even")
    ODD = (0x1, "Odd")


class BinaryGroupFlag(_LabeledEnum):
    """Contents of the associated binary group pack (IEC 60461:2010 Section 7.4.1)."""

    TIME_UNSPECIFIED_GROUP_UNSPECIFIED = (0b000, "TimeUnspecifiedGroupUnspecified")
    TIME_UNSPECIFIED_GROUP_8BIT_CODES = (0b001, "TimeUnspecifiedGroup8BitCodes")
    TIME_UNSPECIFIED_GROUP_DATE_TIME_ZONE = (0b100, "TimeUnspecifiedGroupDateTimeZone")
    TIME_UNSPECIFIED_GROUP_PAGE_LINE = (0b101, "TimeUnspecifiedGroupPageLine")
    TIME_CLOCK_GROUP_UNSPECIFIED = (0b010, "TimeClockGroupUnspecified")
    TIME_UNASSIGNED_GROUP_RESERVED = (0b011, "TimeUnassignedGroupReserved")
    TIME_CLOCK_GROUP_DATE_TIME_ZONE = (0b110, "TimeClockGroupDateTimeZone")
    TIME_CLOCK_GROUP_PAGE_LINE = (0b111, "TimeClockGroupPageLine")


class BlankFlag(_LabeledEnum):
    """Whether a timecode discontinuity exists before the current tape position."""

    DISCONTINUOUS = (0x0, "Discontinuous")
    CONTINUOUS = (0x1, "Continuous")


_TIME_RE = re.compile(
    r"^(?P<hour>\d+):(?P<minute>\d+):(?P<second>\d+)"
    r"((?P<frame_separator>[:;])(?P<frame>\d+))?$"
)

_U8_MAX = 0xFF


def _parse_u8(text: str) -> int:
    if not text.isascii():
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _U8_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def _range_error(value: int, low: int, high: int) -> str | None:
    if value < low:
        return f"lower than {low}"
    if value > high:
        return f"greater than {high}"
    return None


@dataclass(frozen=True)
class TimeValue:
    """Time address of a frame, wrapping at 24 hours.

    ``frame`` is ``None`` when the frame number is absent.  With ``drop_frame``
    set, frames 00 and 01 are skipped in the first second of every minute that
    is not divisible by 10 (NTSC only).
    """

    hour: int
    minute: int
    second: int
    drop_frame: bool
    frame: int | None = None

    def validate(self, ctx: PackContext) -> None:
        """Raise :class:`PackValidationError` listing every invalid field."""
        errors: list[tuple[str, str]] = []
        for name, value, high in (
            ("hour", self.hour, 23),
            ("minute", self.minute, 59),
            ("second", self.second, 59),
        ):
            message = _range_error(value, 0, high)
            if message is not None:
                errors.append((name, message))
        frame_message = self._frame_error(ctx)
        if frame_message is not None:
            errors.append(("frame", frame_message))
        if errors:
            raise PackValidationError(errors)

    def _frame_error(self, ctx: PackContext) -> str | None:
        frame = self.frame
        if frame is None:
            return None
        if frame < 0:
            return "lower than 0"
        system = ctx.system
        maximum = 29 if system is System.SYS_525_60 else 24
        if frame > maximum:
            return (
                f"frame number {frame} is greater than {maximum}, which is the "
                f"maximum valid frame number for system {system}"
            )
        # IEC 60461:2010 Section 4.2.3: frames 0 and 1 are skipped at the start
        # of each minute except minutes divisible by 10.
        if (
            system is System.SYS_525_60
            and self.drop_frame
            and self.minute % 10 > 0
            and self.second == 0
            and frame < 2
        ):
            return (
                "the drop frame flag was set, but a dropped frame number "
                f"{frame} was provided"
            )
        return None

    def __str__(self) -> str:
        text = f"{self.hour:02}:{self.minute:02}:{self.second:02}"
        if self.frame is None:
            return text
        separator = ";" if self.drop_frame else ":"
        return f"{text}{separator}{self.frame:02}"

    @classmethod
    def parse(cls, text: str, require_frame: bool = False) -> TimeValue:
        """Parse ``hh:mm:ss``, ``hh:mm:ss:ff`` or ``hh:mm:ss;ff``.

        A missing frame number leaves drop frame set, matching what recorders
        write.  With ``require_frame`` a missing frame number is an error.
        """
        match = _TIME_RE.match(text)
        if match is None:
            raise ValueError(
                f'invalid value: string "{text}", expected a time with optional '
                "frame number"
            )
        separator = match.group("frame_separator")
        frame_text = match.group("frame")
        value = cls(
            hour=_parse_u8(match.group("hour")),
            minute=_parse_u8(match.group("minute")),
            second=_parse_u8(match.group("second")),
            drop_frame=separator != ":",
            frame=None if frame_text is None else _parse_u8(frame_text),
        )
        if require_frame and value.frame is None:
            raise ValueError("input is missing a frame number")
        return value