"""Protocol layer components for UT61E telegram decoding.

This package contains all UT61E protocol layer functionality: frame
validation, field extraction, mode/range tables and measurement decoding.
"""

from .common import FRAME_LENGTH, InfoFlag, TypeFlag
from .frame import FrameFields, extract_fields, has_odd_parity, mask_frame, validate_frame
from .measurement import CSV_HEADER, CSV_SEPARATOR, Measurement, decode_frame, resolve_mode
from .mode import Mode, Unit, find_range

__all__ = [
    # Common types
    "FRAME_LENGTH",
    "InfoFlag",
    "TypeFlag",
    # Frame layer
    "FrameFields",
    "extract_fields",
    "has_odd_parity",
    "mask_frame",
    "validate_frame",
    # Modes and units
    "Mode",
    "Unit",
    "find_range",
    # Measurement
    "CSV_HEADER",
    "CSV_SEPARATOR",
    "Measurement",
    "decode_frame",
    "resolve_mode",
]
