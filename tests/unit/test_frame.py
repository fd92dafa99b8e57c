"""Unit tests for frame validation and field extraction."""

from collections.abc import Callable

import pytest

from ut61e.exceptions import FrameLengthError, FrameParityError, UT61EDecodeError
from ut61e.protocol.common import InfoFlag, TypeFlag
from ut61e.protocol.frame import (
    FrameFields,
    extract_fields,
    has_odd_parity,
    mask_frame,
    validate_frame,
)

# =============================================================================
# Test Constants - Duplicated from src for test isolation
# =============================================================================

TEST_FRAME_LENGTH = 14
TEST_PARITY_BIT = 0x80

# Masked capture of the voltage_dc sample frame
TEST_VOLTAGE_DC_RAW = bytes([0x34, 0x32, 0x32, 0x35, 0x38, 0x30, 0x3B, 0x31, 0x30, 0x30, 0x38, 0x30, 0x0D, 0x0A])

# =============================================================================
# Parity Tests
# =============================================================================


@pytest.mark.unit
class TestHasOddParity:
    """Tests for has_odd_parity helper function."""

    @pytest.mark.parametrize(
        ("byte", "expected"),
        [
            (0x00, False),
            (0x01, True),
            (0x03, False),
            (0x80, True),
            (0xFF, False),
            (0xFE, True),
            (0xB5, True),  # 0b10110101
            (0x35, False),  # 0b00110101
            (0x0D, True),
            (0x8A, True),
            (0x0A, False),
        ],
    )
    def test_parity(self, byte: int, expected: bool) -> None:
        """Test parity of individual bytes."""
        assert has_odd_parity(byte) is expected

    def test_every_byte_matches_bit_count(self) -> None:
        """Test XOR fold agrees with counting set bits for all byte values."""
        for byte in range(256):
            assert has_odd_parity(byte) is (bin(byte).count("1") % 2 == 1)


@pytest.mark.unit
class TestMaskFrame:
    """Tests for mask_frame helper function."""

    def test_clears_parity_bit(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test that bit 7 is cleared in every byte."""
        assert mask_frame(sample_ut61e_frame["voltage_dc"]) == TEST_VOLTAGE_DC_RAW

    def test_input_not_modified(self) -> None:
        """Test that a mutable input is left untouched."""
        frame = bytearray([0xFF] * TEST_FRAME_LENGTH)
        masked = mask_frame(frame)
        assert masked == bytes([0x7F] * TEST_FRAME_LENGTH)
        assert frame == bytearray([0xFF] * TEST_FRAME_LENGTH)


# =============================================================================
# Validation Tests
# =============================================================================


@pytest.mark.unit
class TestValidateFrame:
    """Tests for validate_frame."""

    def test_valid_frame_returns_masked_bytes(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test that a valid frame returns the masked frame."""
        assert validate_frame(sample_ut61e_frame["voltage_dc"]) == TEST_VOLTAGE_DC_RAW

    @pytest.mark.parametrize("length", [0, 1, 13, 15, 28])
    def test_wrong_length_raises(self, length: int) -> None:
        """Test that any length other than 14 raises FrameLengthError."""
        with pytest.raises(FrameLengthError, match=f"got {length}") as exc_info:
            validate_frame(bytes([0x01] * length))
        assert exc_info.value.length == length

    def test_length_checked_before_parity(self) -> None:
        """Test that a short frame with bad parity reports the length."""
        with pytest.raises(FrameLengthError):
            validate_frame(bytes(5))

    def test_single_parity_error(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test that one flipped parity bit raises FrameParityError."""
        frame = bytearray(sample_ut61e_frame["voltage_dc"])
        frame[3] ^= TEST_PARITY_BIT

        with pytest.raises(FrameParityError, match="offset 3") as exc_info:
            validate_frame(frame)

        assert exc_info.value.positions == (3,)
        assert exc_info.value.raw == TEST_VOLTAGE_DC_RAW

    def test_multiple_parity_errors(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test that all failing offsets are reported."""
        frame = bytearray(sample_ut61e_frame["voltage_dc"])
        for position in (0, 6, 13):
            frame[position] ^= TEST_PARITY_BIT

        with pytest.raises(FrameParityError) as exc_info:
            validate_frame(bytes(frame))

        assert exc_info.value.positions == (0, 6, 13)

    def test_data_bit_error_detected(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test that a flipped data bit is caught by the parity check."""
        frame = bytearray(sample_ut61e_frame["capacitance"])
        frame[4] ^= 0x01

        with pytest.raises(FrameParityError):
            validate_frame(frame)

    def test_errors_share_decode_base(self) -> None:
        """Test that frame errors can be caught as UT61EDecodeError."""
        with pytest.raises(UT61EDecodeError):
            validate_frame(b"")
        with pytest.raises(UT61EDecodeError):
            validate_frame(bytes(TEST_FRAME_LENGTH))


# =============================================================================
# Field Extraction Tests
# =============================================================================


@pytest.mark.unit
class TestExtractFields:
    """Tests for extract_fields."""

    def test_voltage_dc_fields(self) -> None:
        """Test field extraction from the voltage_dc capture."""
        fields = extract_fields(TEST_VOLTAGE_DC_RAW)

        assert isinstance(fields, FrameFields)
        assert fields.range_code == 4
        assert fields.digits == (2, 2, 5, 8, 0)
        assert fields.mode_code == 0xB
        assert fields.info == InfoFlag.OVERLOAD
        assert fields.type == TypeFlag.DC
        assert fields.underload is False

    def test_capacitance_fields(self, sample_ut61e_frame: dict[str, bytes]) -> None:
        """Test field extraction from the capacitance capture."""
        fields = extract_fields(mask_frame(sample_ut61e_frame["capacitance"]))

        assert fields.range_code == 0
        assert fields.digits == (0, 0, 3, 2, 0)
        assert fields.mode_code == 0x6
        assert not fields.info
        assert fields.type == TypeFlag.AUTO

    def test_underload_bit(self, frame_builder: Callable[..., bytes]) -> None:
        """Test that bit 3 of byte 9 sets underload."""
        fields = extract_fields(mask_frame(frame_builder(option2=0b1000)))
        assert fields.underload is True

    def test_other_option2_bits_ignored(self, frame_builder: Callable[..., bytes]) -> None:
        """Test that bits 0-2 of byte 9 do not set underload."""
        fields = extract_fields(mask_frame(frame_builder(option2=0b0111)))
        assert fields.underload is False

    def test_range_uses_three_bits(self, frame_builder: Callable[..., bytes]) -> None:
        """Test that only bits 0-2 of byte 0 form the range code."""
        fields = extract_fields(mask_frame(frame_builder(range_code=0b1101)))
        assert fields.range_code == 0b101

    def test_all_flags(self, frame_builder: Callable[..., bytes]) -> None:
        """Test that all info and type bits map to flags."""
        fields = extract_fields(mask_frame(frame_builder(info=0b1111, type_code=0b1111)))

        assert fields.info == InfoFlag.OVERLOAD | InfoFlag.LOW_BATTERY | InfoFlag.NEGATIVE | InfoFlag.DUTY
        assert fields.type == TypeFlag.FREQUENCY | TypeFlag.AUTO | TypeFlag.AC | TypeFlag.DC
