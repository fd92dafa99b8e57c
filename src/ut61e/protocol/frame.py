"""Frame validation and field extraction for the UT61E telegram.

This module turns the 14 raw bytes received from the meter into the fields
carried in them. It provides:

Functions:
    - has_odd_parity: Parity check for a single byte
    - mask_frame: Clear the parity bit of every byte
    - validate_frame: Length and parity check, returns the masked frame
    - extract_fields: Pull range, digits, mode and flag nibbles from a masked frame

Classes:
    - FrameFields: The raw fields of one telegram, before any table lookup

Parity:
    Each byte is sent with odd parity in bit 7. The parity of a byte is
    found by XOR-folding it onto bit 0 (shift by 4, then 2, then 1).
"""

from __future__ import annotations

from typing import NamedTuple

from ..exceptions import FrameLengthError, FrameParityError
from .common import (
    DIGITS_COUNT,
    DIGITS_OFFSET,
    FRAME_DATA_BIT_MASK,
    FRAME_LENGTH,
    FRAME_NIBBLE_MASK,
    INFO_OFFSET,
    MODE_OFFSET,
    RANGE_BIT_MASK,
    RANGE_OFFSET,
    STATUS_OFFSET,
    STATUS_UNDERLOAD_BIT_MASK,
    TYPE_OFFSET,
    InfoFlag,
    TypeFlag,
)


class FrameFields(NamedTuple):
    """Fields of one telegram as encoded by the meter."""

    range_code: int  # Unit index within the mode's range table (0-7)
    digits: tuple[int, ...]  # Display digits, most significant first
    mode_code: int  # Function nibble (0-15), before frequency/duty override
    info: InfoFlag
    type: TypeFlag
    underload: bool


def has_odd_parity(byte: int) -> bool:
    """Check whether a byte has an odd number of set bits.

    Args:
        byte: Byte value (0x00-0xFF)

    Returns:
        True if the XOR of all 8 bits is 1
    """
    byte ^= byte >> 4
    byte ^= byte >> 2
    byte ^= byte >> 1
    return byte & 1 == 1


def mask_frame(frame: bytes | bytearray | memoryview) -> bytes:
    """Return the frame with bit 7 (parity) cleared in every byte."""
    return bytes(byte & FRAME_DATA_BIT_MASK for byte in frame)


def validate_frame(frame: bytes | bytearray | memoryview) -> bytes:
    """Check frame length and per-byte parity.

    Args:
        frame: Frame bytes as received from the meter

    Returns:
        The masked frame (parity bits cleared), ready for field extraction

    Raises:
        FrameLengthError: If the frame is not exactly FRAME_LENGTH bytes
        FrameParityError: If any byte fails the odd parity check. The masked
                          frame is attached to the exception.
    """
    if len(frame) != FRAME_LENGTH:
        raise FrameLengthError(len(frame), FRAME_LENGTH)

    raw = mask_frame(frame)

    failed = tuple(position for position, byte in enumerate(frame) if not has_odd_parity(byte))
    if failed:
        raise FrameParityError(raw, failed)

    return raw


def extract_fields(raw: bytes) -> FrameFields:
    """Extract the telegram fields from a masked frame.

    Args:
        raw: Masked frame as returned by validate_frame()

    Returns:
        FrameFields with all nibbles pulled from their fixed offsets
    """
    return FrameFields(
        range_code=raw[RANGE_OFFSET] & RANGE_BIT_MASK,
        digits=tuple(byte & FRAME_NIBBLE_MASK for byte in raw[DIGITS_OFFSET : DIGITS_OFFSET + DIGITS_COUNT]),
        mode_code=raw[MODE_OFFSET] & FRAME_NIBBLE_MASK,
        info=InfoFlag(raw[INFO_OFFSET] & FRAME_NIBBLE_MASK),
        type=TypeFlag(raw[TYPE_OFFSET] & FRAME_NIBBLE_MASK),
        underload=raw[STATUS_OFFSET] & STATUS_UNDERLOAD_BIT_MASK == STATUS_UNDERLOAD_BIT_MASK,
    )
