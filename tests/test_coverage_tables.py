# file: tests/test_coverage_tables.py

"""
Tests for the coverage tables.

The masks and the position table are derived from the interleaving rule;
these tests pin them against the literal reference constants of the (72, 64)
code and check that the consistency check rejects tampered tables.
"""

import numpy as np
import pytest

from secded_ecc import ECCTableError, coverage_mask, position_to_data_bit, verify_coverage_tables
from secded_ecc.coverage import (
    DATA_BITS,
    ECC_MASKS,
    HAMMING_TO_DATA,
    MAX_POSITION,
    NO_DATA_BIT,
    PARITY_BITS,
    data_positions,
    is_power_of_two,
)


REFERENCE_MASKS = [
    0xAB55555556AAAD5B,  # P0
    0xCD9999999B33366D,  # P1
    0xF1E1E1E1E3C3C78E,  # P2
    0x01FE01FE03FC07F0,  # P3
    0x01FFFE0003FFF800,  # P4
    0x01FFFFFFFC000000,  # P5
    0xFE00000000000000,  # P6
]


class TestDerivation:
    """Test the tables produced from the interleaving rule."""

    def test_masks_match_reference(self):
        """Test derived masks against the reference constants."""
        assert list(ECC_MASKS) == REFERENCE_MASKS

    def test_coverage_mask_accessor(self):
        """Test coverage_mask for every parity bit."""
        for k in range(PARITY_BITS):
            assert coverage_mask(k) == REFERENCE_MASKS[k]

    @pytest.mark.parametrize("k", [-1, 7])
    def test_coverage_mask_out_of_range(self, k):
        """Test that only parity bits 0..6 exist."""
        with pytest.raises(ECCTableError, match="Parity bit index"):
            coverage_mask(k)

    def test_data_positions(self):
        """Test data bit placement skips the power-of-two slots."""
        positions = data_positions()

        assert len(positions) == DATA_BITS
        assert positions[:8] == (3, 5, 6, 7, 9, 10, 11, 12)
        assert positions[-1] == MAX_POSITION
        assert list(positions) == sorted(positions)

    def test_parity_slots_hold_no_data(self):
        """Test that power-of-two positions map to no data bit."""
        for k in range(PARITY_BITS):
            assert position_to_data_bit(1 << k) == NO_DATA_BIT

    def test_position_lookup_matches_reference_rows(self):
        """Test a few rows of the position table."""
        assert position_to_data_bit(3) == 0
        assert position_to_data_bit(7) == 3
        assert position_to_data_bit(17) == 11
        assert position_to_data_bit(33) == 26
        assert position_to_data_bit(65) == 57
        assert position_to_data_bit(71) == 63

    def test_lookup_agrees_with_masks(self):
        """Test every data bit's mask pattern equals its position."""
        for position in range(1, MAX_POSITION + 1):
            bit = position_to_data_bit(position)
            if is_power_of_two(position):
                continue
            pattern = sum(1 << k for k in range(PARITY_BITS) if (ECC_MASKS[k] >> bit) & 1)
            assert pattern == position

    def test_positions_past_code_hold_no_data(self):
        """Test that table entries past position 71 are sentinels."""
        assert len(HAMMING_TO_DATA) == 128
        assert np.all(HAMMING_TO_DATA[MAX_POSITION + 1:] == NO_DATA_BIT)
        assert HAMMING_TO_DATA[0] == NO_DATA_BIT

    @pytest.mark.parametrize("position", [0, 72, 127])
    def test_position_lookup_out_of_range(self, position):
        """Test that positions outside the code are rejected."""
        with pytest.raises(ECCTableError, match="Position must be"):
            position_to_data_bit(position)

    def test_table_is_read_only(self):
        """Test that the shared table cannot be modified in place."""
        with pytest.raises(ValueError):
            HAMMING_TO_DATA[3] = 5

    def test_is_power_of_two(self):
        """Test the parity slot predicate."""
        assert [n for n in range(0, 130) if is_power_of_two(n)] == [1, 2, 4, 8, 16, 32, 64, 128]


class TestVerification:
    """Test the consistency check itself."""

    def test_shipped_tables_verify(self):
        """Test that the derived tables pass."""
        verify_coverage_tables(ECC_MASKS, HAMMING_TO_DATA)

    def test_rejects_flipped_mask_bit(self):
        """Test that a single wrong mask bit is caught."""
        masks = list(ECC_MASKS)
        masks[2] ^= 1 << 40

        with pytest.raises(ECCTableError, match="parity pattern"):
            verify_coverage_tables(masks, HAMMING_TO_DATA)

    def test_rejects_swapped_table_entries(self):
        """Test that two data bits swapped in the table are caught."""
        table = np.array(HAMMING_TO_DATA)
        table[3], table[5] = table[5], table[3]

        with pytest.raises(ECCTableError):
            verify_coverage_tables(ECC_MASKS, table)

    def test_rejects_data_in_parity_slot(self):
        """Test that a parity slot mapped to a data bit is caught."""
        table = np.array(HAMMING_TO_DATA)
        table[8] = 4

        with pytest.raises(ECCTableError, match="holds no data bit"):
            verify_coverage_tables(ECC_MASKS, table)

    def test_rejects_duplicate_data_bit(self):
        """Test that a data bit placed twice is caught."""
        table = np.array(HAMMING_TO_DATA)
        table[6] = table[5]

        with pytest.raises(ECCTableError):
            verify_coverage_tables(ECC_MASKS, table)

    def test_rejects_wrong_sizes(self):
        """Test shape checks on both tables."""
        with pytest.raises(ECCTableError, match="parity masks"):
            verify_coverage_tables(ECC_MASKS[:6], HAMMING_TO_DATA)
        with pytest.raises(ECCTableError, match="position table"):
            verify_coverage_tables(ECC_MASKS, HAMMING_TO_DATA[:72])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
