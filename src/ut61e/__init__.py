"""
pyUT61E: Python decoder for the UNI-T UT61E multimeter serial protocol.

This library turns the 14-byte telegrams sent by UT61E-family meters into
measurements with value, unit, mode and status flags. Reading the serial
port is left to the application.
"""

from __future__ import annotations

from .exceptions import (
    FrameLengthError,
    FrameParityError,
    UnknownModeOrUnitError,
    UT61EDecodeError,
    UT61EError,
)
from .protocol import CSV_HEADER, Measurement, Mode, Unit, decode_frame

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CSV_HEADER",
    "FrameLengthError",
    "FrameParityError",
    "Measurement",
    "Mode",
    "Unit",
    "UnknownModeOrUnitError",
    "UT61EDecodeError",
    "UT61EError",
    "decode_frame",
]
