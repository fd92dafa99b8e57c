"""Measurement modes, units and range tables for the UT61E.

The function nibble (byte 6) selects the measurement mode and the range
bits (byte 0) select one of the mode's ranges. Each range fixes the unit
shown on the display and the position of the decimal point, expressed as
the divisor applied to the 5 display digits.

Classes:
    - Mode: Function codes known to the meter
    - Unit: Display units

Functions:
    - find_range: Bounds-checked range lookup for a (mode, range) pair

Only 10 of the 16 function codes are defined. Unknown codes and range
codes past the end of a mode's table raise UnknownModeOrUnitError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from functools import lru_cache

from ..exceptions import UnknownModeOrUnitError

# =============================================================================
# Modes and Units
# =============================================================================


class Mode(IntEnum):
    """Function codes (byte 6, bits 0-3)."""

    CURRENT_A = 0x0
    DIODE = 0x1
    FREQUENCY = 0x2
    RESISTANCE = 0x3
    CONTINUITY = 0x5
    CAPACITANCE = 0x6
    DUTY = 0x8
    VOLTAGE = 0xB
    CURRENT_UA = 0xD
    CURRENT_MA = 0xF


class Unit(StrEnum):
    """Units shown on the meter display."""

    # Voltage
    V = "V"
    MV = "mV"

    # Current
    A = "A"
    MA = "mA"
    UA = "µA"

    # Resistance
    OHM = "Ω"
    KOHM = "kΩ"
    MOHM = "MΩ"

    # Frequency
    HZ = "Hz"
    KHZ = "kHz"
    MHZ = "MHz"

    # Capacitance
    NF = "nF"
    UF = "µF"
    MF = "mF"

    PERCENT = "%"

    # Frequency range 2 carries no unit
    NONE = ""


# =============================================================================
# Range Descriptors
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class _RangeDescriptor:
    unit: Unit
    divisor: int  # Display digits are divided by this value


@dataclass(frozen=True, kw_only=True)
class _ModeDescriptor:
    mode: Mode
    ranges: tuple[_RangeDescriptor, ...]  # Indexed by range code


# =============================================================================
# Range Table
# =============================================================================


_ModeTable: tuple[_ModeDescriptor, ...] = (
    _ModeDescriptor(
        mode=Mode.VOLTAGE,
        ranges=(
            _RangeDescriptor(unit=Unit.V, divisor=10000),  # 2.2000 V
            _RangeDescriptor(unit=Unit.V, divisor=1000),  # 22.000 V
            _RangeDescriptor(unit=Unit.V, divisor=100),  # 220.00 V
            _RangeDescriptor(unit=Unit.V, divisor=10),  # 1000.0 V
            _RangeDescriptor(unit=Unit.MV, divisor=100),  # 220.00 mV
        ),
    ),
    _ModeDescriptor(
        mode=Mode.CURRENT_A,
        ranges=(_RangeDescriptor(unit=Unit.A, divisor=10000),),
    ),
    _ModeDescriptor(
        mode=Mode.CURRENT_MA,
        ranges=(
            _RangeDescriptor(unit=Unit.MA, divisor=1000),
            _RangeDescriptor(unit=Unit.MA, divisor=100),
        ),
    ),
    _ModeDescriptor(
        mode=Mode.CURRENT_UA,
        ranges=(
            _RangeDescriptor(unit=Unit.UA, divisor=100),
            _RangeDescriptor(unit=Unit.UA, divisor=10),
        ),
    ),
    _ModeDescriptor(
        mode=Mode.RESISTANCE,
        ranges=(
            _RangeDescriptor(unit=Unit.OHM, divisor=100),
            _RangeDescriptor(unit=Unit.KOHM, divisor=10000),
            _RangeDescriptor(unit=Unit.KOHM, divisor=1000),
            _RangeDescriptor(unit=Unit.KOHM, divisor=100),
            _RangeDescriptor(unit=Unit.MOHM, divisor=10000),
            _RangeDescriptor(unit=Unit.MOHM, divisor=1000),
            _RangeDescriptor(unit=Unit.MOHM, divisor=100),
        ),
    ),
    _ModeDescriptor(
        mode=Mode.FREQUENCY,
        ranges=(
            _RangeDescriptor(unit=Unit.HZ, divisor=100),
            _RangeDescriptor(unit=Unit.HZ, divisor=10),
            _RangeDescriptor(unit=Unit.NONE, divisor=1),
            _RangeDescriptor(unit=Unit.KHZ, divisor=1000),
            _RangeDescriptor(unit=Unit.KHZ, divisor=100),
            _RangeDescriptor(unit=Unit.MHZ, divisor=10000),
            _RangeDescriptor(unit=Unit.MHZ, divisor=1000),
            _RangeDescriptor(unit=Unit.MHZ, divisor=100),
        ),
    ),
    _ModeDescriptor(
        mode=Mode.CAPACITANCE,
        ranges=(
            _RangeDescriptor(unit=Unit.NF, divisor=1000),
            _RangeDescriptor(unit=Unit.NF, divisor=100),
            _RangeDescriptor(unit=Unit.UF, divisor=10000),
            _RangeDescriptor(unit=Unit.UF, divisor=1000),
            _RangeDescriptor(unit=Unit.UF, divisor=100),
            _RangeDescriptor(unit=Unit.MF, divisor=10000),
            _RangeDescriptor(unit=Unit.MF, divisor=1000),
            _RangeDescriptor(unit=Unit.MF, divisor=100),
        ),
    ),
    _ModeDescriptor(
        mode=Mode.DIODE,
        ranges=(_RangeDescriptor(unit=Unit.V, divisor=10000),),
    ),
    _ModeDescriptor(
        mode=Mode.CONTINUITY,
        ranges=(_RangeDescriptor(unit=Unit.OHM, divisor=100),),
    ),
    _ModeDescriptor(
        mode=Mode.DUTY,
        ranges=(
            _RangeDescriptor(unit=Unit.PERCENT, divisor=10),
            _RangeDescriptor(unit=Unit.PERCENT, divisor=10),
        ),
    ),
)


# =============================================================================
# Range Lookup
# =============================================================================


@lru_cache(maxsize=64)
def find_range(mode_code: int, range_code: int) -> tuple[Mode, _RangeDescriptor]:
    """Find the mode and range descriptor for a function code and range code.

    Cached with LRU cache (max 64 entries); the descriptors are immutable.

    Args:
        mode_code: Function nibble after frequency/duty override (0-15)
        range_code: Range bits (0-7)

    Returns:
        Tuple of (Mode, range descriptor)

    Raises:
        UnknownModeOrUnitError: If the function code is not a known mode, or
                                the range code is past the end of its table
    """
    for mode_descriptor in _ModeTable:
        if mode_descriptor.mode == mode_code:
            break
    else:
        raise UnknownModeOrUnitError(
            mode_code, range_code, f"Function code 0x{mode_code:X} not found in mode table"
        )

    if not 0 <= range_code < len(mode_descriptor.ranges):
        raise UnknownModeOrUnitError(
            mode_code,
            range_code,
            f"Range code {range_code} not found in range table for mode {mode_descriptor.mode.name}",
        )

    return mode_descriptor.mode, mode_descriptor.ranges[range_code]


def range_count(mode: Mode) -> int:
    """Return the number of ranges defined for a mode."""
    for mode_descriptor in _ModeTable:
        if mode_descriptor.mode is mode:
            return len(mode_descriptor.ranges)

    raise RuntimeError(f"Mode {mode.name} missing from mode table")
