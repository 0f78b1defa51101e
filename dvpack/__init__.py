"""Read, validate and write DV timecode, recording time and VAUX source packs."""

__version__ = "0.1.0"