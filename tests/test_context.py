import pytest

from dvpack.bcd import BcdError
from dvpack.context import (
    DeserializationError,
    PackContext,
    PackValidationError,
    System,
    check_field_count,
)


def test_system_names():
    assert str(PackContext.ntsc().system) == "525-60"
    assert str(PackContext.pal().system) == "625-50"


def test_presets():
    assert PackContext.ntsc().system is System.SYS_525_60
    assert PackContext.pal().system is System.SYS_625_50
    assert PackContext.ntsc() == PackContext(System.SYS_525_60)


def test_field_count_matches_system():
    assert PackContext.ntsc().system.field_count == 60
    assert PackContext.pal().system.field_count == 50


def test_check_field_count_ntsc():
    ctx = PackContext.ntsc()
    check_field_count(ctx.system.field_count, ctx)
    with pytest.raises(PackValidationError) as excinfo:
        check_field_count(50, ctx)
    assert str(excinfo.value) == (
        "field_count: field count of 50 does not match the expected value of 60 "
        "for system 525-60\n"
    )


def test_check_field_count_pal():
    ctx = PackContext.pal()
    check_field_count(ctx.system.field_count, ctx)
    with pytest.raises(PackValidationError) as excinfo:
        check_field_count(60, ctx)
    assert str(excinfo.value) == (
        "field_count: field count of 60 does not match the expected value of 50 "
        "for system 625-50\n"
    )


def test_validation_error_lists_errors():
    err = PackValidationError([("tv_channel", "greater than 999")])
    assert err.errors == [("tv_channel", "greater than 999")]
    assert str(err) == "tv_channel: greater than 999\n"


def test_validation_error_requires_message_with_path():
    with pytest.raises(TypeError):
        PackValidationError("first_second")


def test_deserialization_error_with_cause():
    err = DeserializationError("couldn't read the time's frame number")
    err.__cause__ = BcdError("units place value of 10 is greater than 9")
    text = str(err)
    assert text == (
        "Pack failed deserialization of raw bytes: couldn't read the time's frame number\n"
        "Caused by:\n"
        "  -> units place value of 10 is greater than 9"
    )


def test_deserialization_error_without_cause():
    err = DeserializationError("required timecode value is missing")
    assert str(err) == (
        "Pack failed deserialization of raw bytes: required timecode value is missing"
    )
    assert err.message == "required timecode value is missing"


def test_deserialization_error_from_validation():
    err = DeserializationError()
    err.__cause__ = PackValidationError("timecode.time.hour", "greater than 23")
    text = str(err)
    assert text == (
        "Pack failed validation during deserialization of raw bytes\n"
        "Caused by:\n"
        "  -> timecode.time.hour: greater than 23\n"
    )