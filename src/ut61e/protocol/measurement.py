"""Measurement decoding for the UT61E telegram.

This module combines the frame, mode and range layers into the decoded
measurement. It provides:

Classes:
    - Measurement: Decoded reading with value, mode, unit and status flags

Functions:
    - decode_frame: Decode one 14-byte frame into a Measurement
    - resolve_mode: Apply the frequency/duty button override to the function code
    - decode_digits: Combine the 5 display digits into an integer

Decoding pipeline:
    validate_frame (length, parity) -> extract_fields -> resolve_mode
    -> find_range (unit, divisor) -> value = digits / divisor, negated if NEGATIVE

Output formats:
    str(measurement)      "225.8000 mV"
    measurement.to_csv()  "225.8000;mV;DC;OL"
    CSV_HEADER            "Value;Unit;Type;Overloaded"
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Self

from .common import FRAME_LENGTH, InfoFlag, TypeFlag
from .frame import FrameFields, extract_fields, validate_frame
from .mode import Mode, Unit, find_range

_LOGGER = logging.getLogger(__name__)

# =============================================================================
# Output Constants
# =============================================================================

CSV_SEPARATOR = ";"
CSV_HEADER = CSV_SEPARATOR.join(("Value", "Unit", "Type", "Overloaded"))

VALUE_FORMAT = "{:.4f}"  # Always 4 decimals, '.' as decimal separator

# =============================================================================
# Decoding Helpers
# =============================================================================


def _is_duty(info: InfoFlag) -> bool:
    # Both checks are kept: duty bit set, or duty bit alone
    return InfoFlag.DUTY in info or info == InfoFlag.DUTY


def resolve_mode(fields: FrameFields) -> int:
    """Resolve the effective function code of a frame.

    The Hz and duty buttons are reported in the flag nibbles and override
    the function nibble. Frequency takes precedence over duty.

    Args:
        fields: Extracted frame fields

    Returns:
        Function code to look up in the mode table (may be unknown)
    """
    if TypeFlag.FREQUENCY in fields.type:
        return Mode.FREQUENCY

    if _is_duty(fields.info):
        return Mode.DUTY

    return fields.mode_code


def decode_digits(digits: tuple[int, ...]) -> int:
    """Combine display digits (most significant first) into an integer.

    Nibbles are taken as-is; no check is made for values above 9.
    """
    result = 0

    for digit in digits:
        result = result * 10 + digit

    return result


# =============================================================================
# Measurement
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class Measurement:
    """One decoded UT61E reading.

    Attributes:
        value: Reading in the displayed unit, negative if the sign flag is set
        mode: Measurement mode after the frequency/duty override
        unit: Display unit (Unit.NONE for the unit-less frequency range)
        range_index: Range code within the mode's table
        type: Coupling and button flags (byte 10)
        info: Sign, battery, overload and duty flags (byte 7)
        underload: Reading below range (byte 9)
        raw: Frame with parity bits cleared
    """

    value: float
    mode: Mode
    unit: Unit
    range_index: int
    type: TypeFlag
    info: InfoFlag
    underload: bool
    raw: bytes

    @classmethod
    def from_bytes(cls, frame: bytes | bytearray | memoryview) -> Self:
        """Decode a Measurement from one frame.

        Args:
            frame: 14 bytes as received from the meter

        Returns:
            Decoded Measurement

        Raises:
            FrameLengthError: If the frame is not 14 bytes
            FrameParityError: If any byte fails the odd parity check
            UnknownModeOrUnitError: If mode or range has no table entry
        """
        raw = validate_frame(frame)
        fields = extract_fields(raw)

        mode, range_descriptor = find_range(resolve_mode(fields), fields.range_code)

        value = decode_digits(fields.digits) / range_descriptor.divisor
        if InfoFlag.NEGATIVE in fields.info:
            value = -value

        _LOGGER.debug(
            "Decoded frame %s: mode=%s range=%d digits=%s info=%s type=%s",
            raw.hex(" "),
            mode.name,
            fields.range_code,
            fields.digits,
            fields.info,
            fields.type,
        )

        return cls(
            value=value,
            mode=mode,
            unit=range_descriptor.unit,
            range_index=fields.range_code,
            type=fields.type,
            info=fields.info,
            underload=fields.underload,
            raw=raw,
        )

    @classmethod
    async def from_bytes_async(cls, get_next_bytes: Callable[[int], Awaitable[bytes]]) -> Self:
        """Read one frame from a byte source and decode it.

        Args:
            get_next_bytes: Async function to read the next n bytes from stream

        Returns:
            Decoded Measurement

        Raises:
            FrameLengthError: If the source returned fewer than 14 bytes
            FrameParityError: If any byte fails the odd parity check
            UnknownModeOrUnitError: If mode or range has no table entry
        """
        frame = await get_next_bytes(FRAME_LENGTH)

        return cls.from_bytes(frame)

    # =========================================================================
    # Status predicates
    # =========================================================================

    @property
    def is_negative(self) -> bool:
        return InfoFlag.NEGATIVE in self.info

    @property
    def is_overload(self) -> bool:
        return InfoFlag.OVERLOAD in self.info

    @property
    def is_underload(self) -> bool:
        return self.underload

    @property
    def is_low_battery(self) -> bool:
        return InfoFlag.LOW_BATTERY in self.info

    @property
    def is_frequency(self) -> bool:
        """Hz button active (frequency shown in voltage/current mode)."""
        return TypeFlag.FREQUENCY in self.type

    @property
    def is_duty(self) -> bool:
        """Duty cycle button active."""
        return _is_duty(self.info)

    @property
    def is_auto_range(self) -> bool:
        return TypeFlag.AUTO in self.type

    @property
    def is_dc(self) -> bool:
        return TypeFlag.DC in self.type

    @property
    def is_ac(self) -> bool:
        return TypeFlag.AC in self.type

    # =========================================================================
    # Output
    # =========================================================================

    def format_value(self) -> str:
        """Return the value with exactly 4 decimals."""
        return VALUE_FORMAT.format(self.value)

    def to_csv(self) -> str:
        """Return the measurement as a CSV line matching CSV_HEADER.

        Note:
            AC is tagged "DC" like DC, so AC and DC readings share a tag.
            Existing CSV logs depend on this output.
        """
        type_tags = "".join(
            (
                "DC" if self.is_dc else "",
                "DC" if self.is_ac else "",
                "Freq." if self.is_frequency else "",
                "Duty" if self.is_duty else "",
            )
        )
        range_tags = ("OL" if self.is_overload else "") + ("UL" if self.is_underload else "")

        return CSV_SEPARATOR.join((self.format_value(), self.unit, type_tags, range_tags))

    def __str__(self) -> str:
        return f"{self.format_value()} {self.unit}"


def decode_frame(frame: bytes | bytearray | memoryview) -> Measurement:
    """Decode one UT61E frame. See Measurement.from_bytes()."""
    return Measurement.from_bytes(frame)
