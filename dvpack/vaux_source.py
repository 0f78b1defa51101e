"""VAUX source pack: where the video came from and its basic format."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dvpack.bcd import BcdError, from_bcd_hundreds
from dvpack.context import (
    DeserializationError,
    PackContext,
    PackValidationError,
    check_field_count,
)

__all__ = ["SourceCode", "BlackAndWhiteFlag", "ColorFramesID", "VAUXSource"]

_RAW_SIZE = 4
_NO_TUNER_CATEGORY = 0xFF
_SOURCE_TYPE_MAX = 0x1F


class SourceCode(enum.Enum):
    """Input source of the original video signal."""

    CAMERA = "Camera"
    LINE_MUSE = "LineMUSE"
    LINE = "Line"
    CABLE = "Cable"
    TUNER = "Tuner"
    PRERECORDED_TAPE = "PrerecordedTape"


class BlackAndWhiteFlag(enum.IntEnum):
    """Whether the video is black and white."""

    BLACK_AND_WHITE = 0x0
    COLOR = 0x1


class ColorFramesID(enum.IntEnum):
    """Color frames ID code (ITU-R Report 624-4)."""

    CLF_COLOR_FRAME_A_OR_1_2_FIELD = 0x0
    CLF_COLOR_FRAME_B_OR_3_4_FIELD = 0x1
    CLF_5_6_FIELD = 0x2
    CLF_7_8_FIELD = 0x3


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


_CHANNEL_SOURCES = frozenset({SourceCode.CABLE, SourceCode.TUNER})


@dataclass(frozen=True)
class VAUXSource:
    """Information about the video stream.

    ``tv_channel`` is required exactly when the source is cable or a tuner, and
    ``tuner_category`` exactly when the source is a tuner.  ``source_type`` is
    the raw five-bit video system type.  ``field_count`` is 60 (525-60) or 50
    (625-50).

    IEC 61834-4:1998 Section 9.1; SMPTE 306M-2002 Section 8.9.1.
    """

    source_code: SourceCode | None
    tv_channel: int | None
    tuner_category: int | None
    source_type: int
    field_count: int
    bw_flag: BlackAndWhiteFlag
    color_frames_id: ColorFramesID | None

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> VAUXSource:
        """Read and validate the four data bytes of the pack."""
        word = int.from_bytes(_check_raw(raw), "little")
        units = _field(word, 0, 4)
        tens = _field(word, 4, 4)
        hundreds = _field(word, 8, 4)
        channel_is_e = hundreds == tens == units == 0xE
        channel_is_f = hundreds == tens == units == 0xF

        source_code = cls._decode_source_code(
            _field(word, 22, 2), channel_is_e, channel_is_f
        )
        if channel_is_e:
            tv_channel = None
        else:
            try:
                tv_channel = from_bcd_hundreds(hundreds, tens, units)
            except BcdError as err:
                raise DeserializationError(
                    "couldn't read the TV channel number"
                ) from err

        tuner_category = _field(word, 24, 8)
        value = cls(
            source_code=source_code,
            tv_channel=tv_channel,
            tuner_category=None if tuner_category == _NO_TUNER_CATEGORY else tuner_category,
            source_type=_field(word, 16, 5),
            field_count=50 if _field(word, 21, 1) else 60,
            bw_flag=BlackAndWhiteFlag(_field(word, 15, 1)),
            color_frames_id=(
                None if _field(word, 14, 1) else ColorFramesID(_field(word, 12, 2))
            ),
        )
        try:
            value.validate(ctx)
        except PackValidationError as err:
            raise DeserializationError() from err
        return value

    @staticmethod
    def _decode_source_code(
        code: int, channel_is_e: bool, channel_is_f: bool
    ) -> SourceCode | None:
        if code == 0b00:
            if not channel_is_f:
                raise DeserializationError(
                    "TV channel must be absent for source code Camera"
                )
            return SourceCode.CAMERA
        if code == 0b01:
            if channel_is_e:
                return SourceCode.LINE_MUSE
            if channel_is_f:
                return SourceCode.LINE
            raise DeserializationError(
                "invalid TV channel code specified for line-based source code"
            )
        if code == 0b10:
            return SourceCode.CABLE
        if channel_is_e:
            return SourceCode.PRERECORDED_TAPE
        if channel_is_f:
            return None
        return SourceCode.TUNER

    def to_raw(self, ctx: PackContext) -> bytes:
        """Validate and write the four data bytes of the pack."""
        self.validate(ctx)
        source_code = self.source_code
        if source_code in (SourceCode.LINE_MUSE, SourceCode.PRERECORDED_TAPE):
            hundreds = tens = units = 0xE
        elif source_code in _CHANNEL_SOURCES:
            channel = self.tv_channel
            hundreds, tens, units = channel // 100, channel // 10 % 10, channel % 10
        else:
            hundreds = tens = units = 0xF

        if source_code is SourceCode.CAMERA:
            code = 0b00
        elif source_code in (SourceCode.LINE_MUSE, SourceCode.LINE):
            code = 0b01
        elif source_code is SourceCode.CABLE:
            code = 0b10
        else:
            code = 0b11

        if self.color_frames_id is None:
            clf, en = int(ColorFramesID.CLF_7_8_FIELD), 1
        else:
            clf, en = int(self.color_frames_id), 0

        tuner = (
            _NO_TUNER_CATEGORY if self.tuner_category is None else self.tuner_category
        )
        word = (
            units
            | tens << 4
            | hundreds << 8
            | clf << 12
            | en << 14
            | int(self.bw_flag) << 15
            | self.source_type << 16
            | (1 if self.field_count == 50 else 0) << 21
            | code << 22
            | tuner << 24
        )
        return word.to_bytes(_RAW_SIZE, "little")

    def validate(self, ctx: PackContext) -> None:
        """Raise :class:`PackValidationError` listing every invalid field."""
        errors: list[tuple[str, str]] = []
        source_message = self._source_code_error()
        if source_message is not None:
            errors.append(("source_code", source_message))
        if self.tv_channel is not None:
            message = _range_error(self.tv_channel, 1, 999)
            if message is not None:
                errors.append(("tv_channel", message))
        if self.tuner_category is not None:
            if self.tuner_category == _NO_TUNER_CATEGORY:
                errors.append(
                    (
                        "tuner_category",
                        "instead of specifying Some(0xFF), use None to indicate "
                        "no information",
                    )
                )
            else:
                message = _range_error(self.tuner_category, 0, 0xFF)
                if message is not None:
                    errors.append(("tuner_category", message))
        message = _range_error(self.source_type, 0, _SOURCE_TYPE_MAX)
        if message is not None:
            errors.append(("source_type", message))
        try:
            check_field_count(self.field_count, ctx)
        except PackValidationError as err:
            errors.extend(err.errors)
        if errors:
            raise PackValidationError(errors)

    def _source_code_error(self) -> str | None:
        needs_channel = self.source_code in _CHANNEL_SOURCES
        if not needs_channel and self.tv_channel is not None:
            return "a TV channel number must not be provided for this source code value"
        if needs_channel and self.tv_channel is None:
            return "a TV channel number is required for this source code value"
        is_tuner = self.source_code is SourceCode.TUNER
        if not is_tuner and self.tuner_category is not None:
            return "a tuner category must not be provided if the source code is not a tuner"
        if is_tuner and self.tuner_category is None:
            return "a tuner category must be provided if the source code is a tuner"
        return None