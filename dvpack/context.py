"""Context shared by pack parsing and validation, plus the pack error types."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "System",
    "PackContext",
    "DeserializationError",
    "PackValidationError",
    "check_field_count",
]


class System(enum.Enum):
    """Video system of a DV file."""

    SYS_525_60 = "525-60"
    SYS_625_50 = "625-50"

    def __str__(self) -> str:
        return self.value

    @property
    def field_count(self) -> int:
        """Number of fields per second for this system."""
        return 60 if self is System.SYS_525_60 else 50


@dataclass(frozen=True)
class PackContext:
    """Information about the file that packs are read from or written to."""

    system: System

    @classmethod
    def ntsc(cls) -> PackContext:
        """Context for a 525-60 (NTSC) file."""
        return cls(System.SYS_525_60)

    @classmethod
    def pal(cls) -> PackContext:
        """Context for a 625-50 (PAL/SECAM) file."""
        return cls(System.SYS_625_50)


class PackValidationError(ValueError):
    """One or more pack fields failed validation.

    Each error is a ``(path, message)`` pair where ``path`` names the field,
    such as ``"timecode.time.frame"``.
    """

    def __init__(
        self,
        path_or_errors: str | Iterable[tuple[str, str]],
        message: str | None = None,
    ) -> None:
        if isinstance(path_or_errors, str):
            if message is None:
                raise TypeError("a message is required together with a field path")
            errors = [(path_or_errors, message)]
        else:
            errors = [(str(path), str(msg)) for path, msg in path_or_errors]
        if not errors:
            raise ValueError("at least one validation error is required")
        self.errors: list[tuple[str, str]] = errors
        super().__init__(str(self))

    def __str__(self) -> str:
        return "".join(
            f"{path}: {msg}\n" if path else f"{msg}\n" for path, msg in self.errors
        )


class DeserializationError(ValueError):
    """A pack could not be read from raw bytes.

    Without a message the error means the bytes were decoded but the resulting
    pack failed validation; the validation error is then the cause.
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or "")

    @property
    def headline(self) -> str:
        if self.message is None:
            return "Pack failed validation during deserialization of raw bytes"
        return f"Pack failed deserialization of raw bytes: {self.message}"

    def __str__(self) -> str:
        text = self.headline
        causes = []
        cause = self.__cause__
        while cause is not None:
            causes.append(cause)
            cause = cause.__cause__
        if causes:
            text += "\nCaused by:" + "".join(f"\n  -> {c}" for c in causes)
        return text


def check_field_count(field_count: int, ctx: PackContext) -> None:
    """Check that the field count matches the system of the context."""
    expected = ctx.system.field_count
    if field_count != expected:
        raise PackValidationError(
            "field_count",
            f"field count of {field_count} does not match the expected value of "
            f"{expected} for system {ctx.system}",
        )