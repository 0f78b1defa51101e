from dataclasses import replace

import pytest

from dvpack.context import DeserializationError, PackContext, PackValidationError
from dvpack.hexutil import from_hex
from dvpack.vaux_source import (
    BlackAndWhiteFlag,
    ColorFramesID,
    SourceCode,
    VAUXSource,
)

NTSC = PackContext.ntsc()
PAL = PackContext.pal()

COMPRESSED_CHROMA = 0
MORE_CHROMA = 4
RESERVED_14 = 14

CAMERA = VAUXSource(
    source_code=SourceCode.CAMERA,
    tv_channel=None,
    tuner_category=None,
    source_type=COMPRESSED_CHROMA,
    field_count=60,
    bw_flag=BlackAndWhiteFlag.COLOR,
    color_frames_id=None,
)


def _pack_data(text):
    data = from_hex(text)
    assert data[0] == 0x60
    return data[1:]


SUCCESS_CASES = {
    "basic_success": ("60 FF FF 00 FF", CAMERA, NTSC),
    "dvcpro50": ("60 FF FF 04 FF", replace(CAMERA, source_type=MORE_CHROMA), NTSC),
    "source_code_camera": ("60 FF FF 00 FF", CAMERA, NTSC),
    "source_code_line_muse": (
        "60 EE FE 40 FF",
        replace(CAMERA, source_code=SourceCode.LINE_MUSE),
        NTSC,
    ),
    "source_code_line": (
        "60 FF FF 40 FF",
        replace(CAMERA, source_code=SourceCode.LINE),
        NTSC,
    ),
    "source_code_cable": (
        "60 36 F4 80 FF",
        replace(CAMERA, source_code=SourceCode.CABLE, tv_channel=436),
        NTSC,
    ),
    "source_code_tuner": (
        "60 36 F4 C0 2B",
        replace(
            CAMERA, source_code=SourceCode.TUNER, tv_channel=436, tuner_category=0x2B
        ),
        NTSC,
    ),
    "source_code_prerecorded_tape": (
        "60 EE FE C0 FF",
        replace(CAMERA, source_code=SourceCode.PRERECORDED_TAPE),
        NTSC,
    ),
    "source_code_no_info": ("60 FF FF C0 FF", replace(CAMERA, source_code=None), NTSC),
    "max_bounds": (
        "60 99 F9 C0 2B",
        replace(
            CAMERA, source_code=SourceCode.TUNER, tv_channel=999, tuner_category=0x2B
        ),
        NTSC,
    ),
    "min_bounds": (
        "60 01 F0 C0 2B",
        replace(
            CAMERA, source_code=SourceCode.TUNER, tv_channel=1, tuner_category=0x2B
        ),
        NTSC,
    ),
    "misc_weird_fields": (
        "60 FF 1F EE FF",
        VAUXSource(
            source_code=None,
            tv_channel=None,
            tuner_category=None,
            source_type=RESERVED_14,
            field_count=50,
            bw_flag=BlackAndWhiteFlag.BLACK_AND_WHITE,
            color_frames_id=ColorFramesID.CLF_COLOR_FRAME_B_OR_3_4_FIELD,
        ),
        PAL,
    ),
}


@pytest.mark.parametrize("name", sorted(SUCCESS_CASES))
def test_vaux_source_binary_success(name):
    text, expected, ctx = SUCCESS_CASES[name]
    data = _pack_data(text)
    parsed = VAUXSource.from_raw(data, ctx)
    assert parsed == expected
    assert parsed.to_raw(ctx) == data


ERROR_CASES = {
    "source_code_camera_with_tv_channel": (
        "60 12 F3 00 FF",
        "Pack failed deserialization of raw bytes: TV channel must be "
        "absent for source code Camera",
    ),
    "source_code_line_with_tv_channel": (
        "60 12 F3 40 FF",
        "Pack failed deserialization of raw bytes: invalid TV channel code "
        "specified for line-based source code",
    ),
    "source_code_cable_without_tv_channel": (
        "60 FF FF 80 FF",
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n  "
        "-> source_code: a TV channel number is required for this source code value\n",
    ),
    "source_code_cable_tv_channel_is_e": (
        "60 EE FE 80 FF",
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n  "
        "-> source_code: a TV channel number is required for this source code value\n",
    ),
    "source_code_camera_with_tuner_category": (
        "60 FF FF 00 2B",
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n  "
        "-> source_code: a tuner category must not be provided if the source code "
        "is not a tuner\n",
    ),
    "source_code_tuner_without_tuner_category": (
        "60 12 F3 C0 FF",
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n  "
        "-> source_code: a tuner category must be provided if the source code is a tuner\n",
    ),
    "high_tv_channel_hundreds": (
        "60 36 FA 80 FF",
        "Pack failed deserialization of raw bytes: couldn't read the TV channel number\n"
        "Caused by:\n  "
        "-> hundreds place value of 10 is greater than 9",
    ),
    "high_tv_channel_tens": (
        "60 A6 F4 80 FF",
        "Pack failed deserialization of raw bytes: couldn't read the TV channel number\n"
        "Caused by:\n  "
        "-> tens place value of 10 is greater than 9",
    ),
    "high_tv_channel_units": (
        "60 3A F4 80 FF",
        "Pack failed deserialization of raw bytes: couldn't read the TV channel number\n"
        "Caused by:\n  "
        "-> units place value of 10 is greater than 9",
    ),
    "low_tv_channel": (
        "60 00 F0 80 FF",
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n  "
        "-> tv_channel: lower than 1\n",
    ),
}


@pytest.mark.parametrize("name", sorted(ERROR_CASES))
def test_vaux_source_binary_error(name):
    text, message = ERROR_CASES[name]
    with pytest.raises(DeserializationError) as info:
        VAUXSource.from_raw(_pack_data(text), NTSC)
    assert str(info.value) == message


VALIDATION_CASES = {
    "source_code_camera_with_tv_channel": (
        replace(CAMERA, tv_channel=5),
        "source_code: a TV channel number must not be provided for this source code value\n",
        NTSC,
    ),
    "source_code_line_muse_with_tv_channel": (
        replace(CAMERA, source_code=SourceCode.LINE_MUSE, tv_channel=5),
        "source_code: a TV channel number must not be provided for this source code value\n",
        NTSC,
    ),
    "source_code_line_with_tv_channel": (
        replace(CAMERA, source_code=SourceCode.LINE, tv_channel=5),
        "source_code: a TV channel number must not be provided for this source code value\n",
        NTSC,
    ),
    "source_code_cable_without_tv_channel": (
        replace(CAMERA, source_code=SourceCode.CABLE),
        "source_code: a TV channel number is required for this source code value\n",
        NTSC,
    ),
    "source_code_tuner_without_tv_channel": (
        replace(CAMERA, source_code=SourceCode.TUNER, tuner_category=0x2B),
        "source_code: a TV channel number is required for this source code value\n",
        NTSC,
    ),
    "source_code_prerecorded_tape_with_tv_channel": (
        replace(CAMERA, source_code=SourceCode.PRERECORDED_TAPE, tv_channel=5),
        "source_code: a TV channel number must not be provided for this source code value\n",
        NTSC,
    ),
    "source_code_no_info_with_tv_channel": (
        replace(CAMERA, source_code=None, tv_channel=5),
        "source_code: a TV channel number must not be provided for this source code value\n",
        NTSC,
    ),
    "tv_channel_high": (
        replace(CAMERA, source_code=SourceCode.CABLE, tv_channel=1000),
        "tv_channel: greater than 999\n",
        NTSC,
    ),
    "tuner_category_ff": (
        replace(
            CAMERA, source_code=SourceCode.TUNER, tv_channel=123, tuner_category=0xFF
        ),
        "tuner_category: instead of specifying Some(0xFF), use None to "
        "indicate no information\n",
        NTSC,
    ),
    "invalid_field_count_ntsc": (
        replace(CAMERA, field_count=50),
        "field_count: field count of 50 does not match the expected value of 60 "
        "for system 525-60\n",
        NTSC,
    ),
    "invalid_field_count_pal": (
        replace(CAMERA, field_count=60),
        "field_count: field count of 60 does not match the expected value of 50 "
        "for system 625-50\n",
        PAL,
    ),
}


@pytest.mark.parametrize("name", sorted(VALIDATION_CASES))
def test_vaux_source_validation(name):
    value, message, ctx = VALIDATION_CASES[name]
    with pytest.raises(PackValidationError) as info:
        value.validate(ctx)
    assert str(info.value) == message


def test_to_raw_rejects_invalid_value():
    with pytest.raises(PackValidationError) as info:
        replace(CAMERA, tv_channel=5).to_raw(NTSC)
    assert info.value.errors[0][0] == "source_code"


def test_from_raw_rejects_wrong_length():
    with pytest.raises(ValueError, match="4 bytes"):
        VAUXSource.from_raw(b"\xff\xff\x00", NTSC)


def test_multiple_errors_are_reported_in_field_order():
    value = replace(CAMERA, tv_channel=1000, field_count=50)
    with pytest.raises(PackValidationError) as info:
        value.validate(NTSC)
    assert [path for path, _ in info.value.errors] == [
        "source_code",
        "tv_channel",
        "field_count",
    ]