"""UT61E exception classes."""

from __future__ import annotations


class UT61EError(Exception):
    """Base exception for all UT61E errors."""


class UT61EDecodeError(UT61EError):
    """Frame could not be decoded into a measurement."""


class FrameLengthError(UT61EDecodeError):
    """Frame does not have the fixed telegram length."""

    length: int

    def __init__(self, length: int, expected: int) -> None:
        super().__init__(f"Expected a frame of {expected} bytes, got {length}")
        self.length = length


class FrameParityError(UT61EDecodeError):
    """One or more frame bytes failed the odd parity check.

    Attributes:
        raw: Frame bytes with the parity bit cleared (for diagnostics only)
        positions: Offsets of the bytes that failed the check
    """

    raw: bytes
    positions: tuple[int, ...]

    def __init__(self, raw: bytes, positions: tuple[int, ...]) -> None:
        offsets = ", ".join(str(position) for position in positions)
        super().__init__(f"Parity check failed for byte(s) at offset {offsets}")
        self.raw = raw
        self.positions = positions


class UnknownModeOrUnitError(UT61EDecodeError):
    """Mode code or range code has no entry in the range tables."""

    mode_code: int
    range_code: int

    def __init__(self, mode_code: int, range_code: int, reason: str) -> None:
        super().__init__(reason)
        self.mode_code = mode_code
        self.range_code = range_code
