"""Common types and constants shared across protocol components.

This module contains the frame layout of the UT61E serial telegram and the
bit-flag types for the status nibbles carried in it.

The telegram is 14 bytes long. Every byte carries 7 data bits; bit 7 is a
parity bit making the total number of set bits in the byte odd.

    Offset  Content
    0       Range (bits 0-2)
    1-5     Display digits, most significant first (bits 0-3)
    6       Function / mode (bits 0-3)
    7       Status: sign, battery, overload, duty (bits 0-3)
    8       Option 1 (unused)
    9       Option 2: underload (bit 3)
    10      Option 3: DC, AC, auto range, frequency (bits 0-3)
    11      Option 4 (unused)
    12-13   CR LF terminator
"""

from enum import Flag

# =============================================================================
# Frame Constants
# =============================================================================

FRAME_LENGTH = 14  # Fixed telegram length in bytes

FRAME_DATA_BIT_MASK = 0b01111111  # Bits 0-6: data bits
FRAME_NIBBLE_MASK = 0b00001111  # Bits 0-3: digit or flag nibble

RANGE_OFFSET = 0
RANGE_BIT_MASK = 0b00000111  # Bits 0-2: range (unit index within mode)

DIGITS_OFFSET = 1
DIGITS_COUNT = 5  # Number of display digits

MODE_OFFSET = 6
INFO_OFFSET = 7
STATUS_OFFSET = 9
STATUS_UNDERLOAD_BIT_MASK = 0b00001000  # Bit 3: reading below range
TYPE_OFFSET = 10


# =============================================================================
# Status Flags
# =============================================================================


class TypeFlag(Flag):
    """Coupling and button flags from the option 3 byte (offset 10)."""

    FREQUENCY = 0b0001  # Hz button pressed
    AUTO = 0b0010  # Auto range active
    AC = 0b0100
    DC = 0b1000


class InfoFlag(Flag):
    """Status flags from the status byte (offset 7)."""

    OVERLOAD = 0b0001
    LOW_BATTERY = 0b0010
    NEGATIVE = 0b0100
    DUTY = 0b1000  # Duty cycle button pressed
