"""Shared test fixtures for pyUT61E tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest


def _with_odd_parity(byte: int) -> int:
    """Set bit 7 where needed so the byte has odd parity."""
    return byte if bin(byte).count("1") % 2 == 1 else byte | 0x80


@pytest.fixture
def sample_ut61e_frame() -> dict[str, bytes]:
    """Frames captured from a UT61E."""
    return {
        # 225.80 mV DC, overload flag set
        "voltage_dc": bytes([0x34, 0x32, 0x32, 0xB5, 0x38, 0xB0, 0x3B, 0x31, 0xB0, 0xB0, 0x38, 0xB0, 0x0D, 0x8A]),
        # 0.320 nF, auto range
        "capacitance": bytes([0xB0, 0xB0, 0xB0, 0xB3, 0x32, 0xB0, 0xB6, 0xB0, 0xB0, 0xB0, 0x32, 0xB0, 0x0D, 0x8A]),
    }


@pytest.fixture
def frame_builder() -> Callable[..., bytes]:
    """Build a parity-correct frame from field values.

    Data bytes carry 0x3 in the high nibble, as sent by the meter.
    """

    def build(
        *,
        range_code: int = 0,
        digits: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0),
        mode_code: int = 0xB,
        info: int = 0,
        option2: int = 0,
        type_code: int = 0,
    ) -> bytes:
        data = [
            0x30 | range_code,
            *(0x30 | digit for digit in digits),
            0x30 | mode_code,
            0x30 | info,
            0x30,  # Option 1
            0x30 | option2,
            0x30 | type_code,
            0x30,  # Option 4
            0x0D,
            0x0A,
        ]
        return bytes(_with_odd_parity(byte) for byte in data)

    return build
