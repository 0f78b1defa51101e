"""Pack types and dispatching between raw pack bytes and pack data."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union

from dvpack.context import DeserializationError, PackContext
from dvpack.timecode import Timecode, TitleTimecode
from dvpack.vaux_source import VAUXSource
from dvpack.vaux_source_control import VAUXSourceControl

__all__ = [
    "PackType",
    "PackStatus",
    "NoInfo",
    "Unparsed",
    "Pack",
    "type_from_byte",
    "type_to_byte",
]

_DATA_SIZE = 4
_PACK_SIZE = _DATA_SIZE + 1


class PackType(enum.IntEnum):
    """Known DV pack header values."""

    TITLE_TIMECODE = 0x13
    TITLE_BINARY_GROUP = 0x14
    AAUX_SOURCE = 0x50
    AAUX_SOURCE_CONTROL = 0x51
    AAUX_RECORDING_DATE = 0x52
    AAUX_RECORDING_TIME = 0x53
    AAUX_BINARY_GROUP = 0x54
    VAUX_SOURCE = 0x60
    VAUX_SOURCE_CONTROL = 0x61
    VAUX_RECORDING_DATE = 0x62
    VAUX_RECORDING_TIME = 0x63
    VAUX_BINARY_GROUP = 0x64
    NO_INFO = 0xFF


PackTypeCode = Union[PackType, int]


class PackStatus(enum.Enum):
    """How the data of a pack was obtained."""

    VALID = "valid"
    """The data was decoded and validated."""

    INVALID = "invalid"
    """The pack type is known, but its data failed decoding or validation."""

    UNKNOWN = "unknown"
    """The pack header byte is not a known pack type."""

    UNSUPPORTED = "unsupported"
    """The pack type is known, but its data is not decoded by this package."""


def type_from_byte(value: int) -> PackTypeCode:
    """Map a pack header byte to a :class:`PackType`, or keep it as an ``int``."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"pack header byte {value} is out of range")
    try:
        return PackType(value)
    except ValueError:
        return int(value)


def type_to_byte(pack_type: PackTypeCode) -> int:
    """Return the raw pack header byte for a pack type."""
    value = int(pack_type)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"pack header byte {value} is out of range")
    return value


@dataclass(frozen=True)
class NoInfo:
    """No information: an empty pack position or a dropout.

    IEC 61834-4:1998 Section 12.16.
    """

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> NoInfo:
        """Read the pack; any data bytes are discarded."""
        # After a dropout of the header only, other bytes may remain here; there
        # is no way to tell which pack they belonged to, so they are dropped.
        if len(bytes(raw)) != _DATA_SIZE:
            raise ValueError(f"pack data must be {_DATA_SIZE} bytes long")
        return cls()

    def to_raw(self, ctx: PackContext) -> bytes:
        """Write the four data bytes, all set to 0xFF."""
        return b"\xff" * _DATA_SIZE


@dataclass(frozen=True)
class Unparsed:
    """The raw data bytes of an invalid, unknown or unsupported pack."""

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != _DATA_SIZE:
            raise ValueError(
                f"pack data must be {_DATA_SIZE} bytes long, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    @classmethod
    def from_raw(cls, raw: bytes, ctx: PackContext) -> Unparsed:
        """Keep the data bytes as they are."""
        return cls(bytes(raw))

    def to_raw(self, ctx: PackContext) -> bytes:
        """Return the data bytes unchanged."""
        return self.data


_PARSERS: dict[PackType, Any] = {
    PackType.TITLE_TIMECODE: TitleTimecode,
    PackType.AAUX_RECORDING_TIME: Timecode,
    PackType.VAUX_SOURCE: VAUXSource,
    PackType.VAUX_SOURCE_CONTROL: VAUXSourceControl,
    PackType.VAUX_RECORDING_TIME: Timecode,
    PackType.NO_INFO: NoInfo,
}


@dataclass(frozen=True)
class Pack:
    """A DV pack of any type.

    ``type_code`` is a :class:`PackType` or, for unknown header bytes, the raw
    ``int``.  A ``VALID`` pack holds the decoded data for its type; every other
    status holds :class:`Unparsed` bytes so that they survive a round trip.
    """

    type_code: PackTypeCode
    data: Any
    status: PackStatus = PackStatus.VALID

    def __post_init__(self) -> None:
        code = type_from_byte(type_to_byte(self.type_code))
        object.__setattr__(self, "type_code", code)
        known = isinstance(code, PackType)
        status = self.status
        if status is PackStatus.VALID:
            parser = _PARSERS.get(code) if known else None
            if parser is None:
                raise ValueError(f"pack type {code!r} has no decoded data form")
            if not isinstance(self.data, parser):
                raise TypeError(
                    f"data for pack type {code.name} must be {parser.__name__}, "
                    f"got {type(self.data).__name__}"
                )
            return
        if not isinstance(self.data, Unparsed):
            raise TypeError(f"data of a {status.value} pack must be Unparsed")
        if status is PackStatus.UNKNOWN and known:
            raise ValueError(f"pack type {code.name} is known, not unknown")
        if status is PackStatus.UNSUPPORTED and (not known or code in _PARSERS):
            raise ValueError(f"pack type {code!r} is not an unsupported known type")

    @classmethod
    def from_raw(
        cls, raw: bytes, ctx: PackContext
    ) -> tuple[Pack, DeserializationError | None]:
        """Read a five-byte pack.

        A pack is always returned.  When its data cannot be decoded or
        validated, it is kept as an ``INVALID`` pack and the error is returned
        alongside it.
        """
        data = bytes(raw)
        if len(data) != _PACK_SIZE:
            raise ValueError(f"a pack must be {_PACK_SIZE} bytes long, got {len(data)}")
        code = type_from_byte(data[0])
        payload = data[1:]
        if not isinstance(code, PackType):
            return cls(code, Unparsed(payload), PackStatus.UNKNOWN), None
        parser = _PARSERS.get(code)
        if parser is None:
            return cls(code, Unparsed(payload), PackStatus.UNSUPPORTED), None
        try:
            value = parser.from_raw(payload, ctx)
        except DeserializationError as err:
            return cls(code, Unparsed(payload), PackStatus.INVALID), err
        return cls(code, value, PackStatus.VALID), None

    def to_raw(self, ctx: PackContext) -> bytes:
        """Write the pack as five bytes: the header followed by the data."""
        return bytes([type_to_byte(self.type_code)]) + self.data.to_raw(ctx)

    def pack_type(self) -> PackTypeCode:
        """Return the pack type."""
        return self.type_code