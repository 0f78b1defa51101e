# dvpack

`dvpack` reads, validates and writes the five-byte packs found in DV video
streams. It decodes title timecode, AAUX and VAUX recording time, VAUX source
and VAUX source control packs, and the "no information" pack. Packs it does not
decode, packs of unknown type and damaged packs keep their bytes, so they come
back out unchanged when written again.

## Installation

```
pip install dvpack
```

## Context

Decoding a pack depends on the video system in use, 525-60 (NTSC) or
625-50 (PAL/SECAM). That is carried in a `PackContext`:

```python
from dvpack.context import PackContext, System

ntsc = PackContext.ntsc()
pal = PackContext.pal()
assert pal.system is System.SYS_625_50
```

## Whole packs

`dvpack.types.Pack.from_raw` takes the five bytes of a pack (header byte and
four data bytes) and always returns a pair `(pack, error)`:

```python
from dvpack.hexutil import from_hex, to_hex
from dvpack.types import Pack, PackStatus, PackType

pack, error = Pack.from_raw(from_hex("13 D5 B4 D7 D3"), ntsc)
assert error is None
assert pack.pack_type() is PackType.TITLE_TIMECODE
assert pack.status is PackStatus.VALID
print(to_hex(pack.to_raw(ntsc)))  # 13 D5 B4 D7 D3
```

`pack.status` tells how the data was obtained:

- `VALID`: `pack.data` holds the decoded pack (`TitleTimecode`, `Timecode`,
  `VAUXSource`, `VAUXSourceControl` or `NoInfo`).
- `INVALID`: the type is known but the data failed decoding or validation;
  `pack.data` is an `Unparsed` holding the four data bytes, and the error is
  the second item of the pair.
- `UNKNOWN`: the header byte is not a known pack type; `pack.pack_type()`
  returns the raw `int`.
- `UNSUPPORTED`: the type is known but its data is not decoded by this package
  (see below); the data bytes are kept in an `Unparsed`.

```python
pack, error = Pack.from_raw(from_hex("13 1A 59 59 23"), ntsc)
assert pack.status is PackStatus.INVALID
print(error)
# Pack failed deserialization of raw bytes: couldn't read the time's frame number
# Caused by:
#   -> units place value of 10 is greater than 9
```

A `NoInfo` pack always writes its data as `FF FF FF FF`, whatever bytes it was
read from. `type_from_byte` and `type_to_byte` convert between header bytes and
`PackType` members (or plain `int`s for unknown types).

## Timecodes

`dvpack.timevalue.TimeValue` is a frame's time address. As text it is
`hh:mm:ss`, `hh:mm:ss:ff` (non-drop-frame) or `hh:mm:ss;ff` (drop-frame):

```python
from dvpack.timevalue import TimeValue

value = TimeValue.parse("01:23:45;12", require_frame=True)
print(value)  # 01:23:45;12
value.validate(ntsc)
```

A time parsed without a frame number has `drop_frame` set.

`dvpack.timecode.TitleTimecode` is the title timecode pack; its time and frame
number are required, and its `blank_flag` must equal the integer value of
`timecode.color_frame`, since both share one bit. `dvpack.timecode.Timecode`
is used for the AAUX and VAUX recording time packs, where the frame number or
the whole time may be absent.

```python
from dvpack.timecode import Timecode, TitleTimecode

title = TitleTimecode.from_raw(from_hex("D5 B4 D7 D3"), ntsc)
print(title.to_dict()["time"])  # 13:57:34;15
assert TitleTimecode.from_dict(title.to_dict()) == title

recording = Timecode.from_raw(from_hex("FF FF FF FF"), ntsc)
assert recording.time is None
```

`to_dict` gives the time as a string and the flags by their labels, such as
`"Synchronized"` or `"TimeClockGroupPageLine"`; `from_dict` reads that mapping
back.

## Video source packs

`dvpack.vaux_source.VAUXSource` and
`dvpack.vaux_source_control.VAUXSourceControl` decode and encode the VAUX
source and VAUX source control packs. In `VAUXSource`, `source_type` is the raw
five-bit system type code. In `VAUXSourceControl`, the copy protection, source
situation, input source and compression count fields are raw codes, with
`None` for "no information".

## Errors

Every pack class has `from_raw`, `to_raw` and `validate`. `validate` and
`to_raw` raise `PackValidationError`, which lists each failing field:

```python
from dvpack.context import PackValidationError
from dvpack.timevalue import BlankFlag

try:
    TitleTimecode(title.timecode, BlankFlag.DISCONTINUOUS).validate(ntsc)
except PackValidationError as err:
    print(err.errors[0][0])  # blank_flag
```

`from_raw` raises `DeserializationError` for bytes that cannot be decoded; when
the decoded pack fails validation, the `PackValidationError` is its cause. Both
are in `dvpack.context`. The BCD helpers in `dvpack.bcd` raise `BcdError`.

## What it does not do

- It works on single packs only; it does not read or write DV files, DIF
  blocks or frames.
- Binary group, AAUX source, AAUX source control and recording date packs are
  not decoded; they are kept as `UNSUPPORTED` packs with their bytes intact.
- There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```