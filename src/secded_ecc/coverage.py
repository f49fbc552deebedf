# file: src/secded_ecc/coverage.py

"""
Coverage tables for the (72, 64) SECDED code.

Positions in the combined codeword are numbered from 1. Powers of two
(1, 2, 4, ..., 64) hold the Hamming parity bits P0..P6; every other position
up to 71 holds a data bit, assigned in ascending order. Parity bit k covers
every position whose binary representation has bit k set.

Both views of that rule are built here from the same position list:
    - ECC_MASKS[k]: 64-bit mask of the data bits covered by parity bit k
    - HAMMING_TO_DATA[p]: data bit index hosted at position p, or NO_DATA_BIT
"""

from typing import Sequence, Tuple

import numpy as np

from .errors import ECCTableError


DATA_BITS = 64
PARITY_BITS = 7
MAX_POSITION = DATA_BITS + PARITY_BITS  # 71
TABLE_SIZE = 1 << PARITY_BITS  # every value a 7-bit syndrome can take
NO_DATA_BIT = -1


def is_power_of_two(n: int) -> bool:
    """Return True if n is a positive power of two."""
    return n > 0 and n & (n - 1) == 0


def data_positions() -> Tuple[int, ...]:
    """
    Combined positions hosting data bits, indexed by data bit.

    Returns:
        Tuple of length 64; entry i is the position of data bit i.
    """
    return tuple(
        p for p in range(1, MAX_POSITION + 1) if not is_power_of_two(p)
    )


def _build_masks(positions: Sequence[int]) -> Tuple[int, ...]:
    masks = []
    for k in range(PARITY_BITS):
        mask = 0
        for bit, position in enumerate(positions):
            if (position >> k) & 1:
                mask |= 1 << bit
        masks.append(mask)
    return tuple(masks)


def _build_position_table(positions: Sequence[int]) -> np.ndarray:
    table = np.full(TABLE_SIZE, NO_DATA_BIT, dtype=np.int16)
    for bit, position in enumerate(positions):
        table[position] = bit
    table.flags.writeable = False
    return table


def verify_coverage_tables(masks: Sequence[int], table: np.ndarray) -> None:
    """
    Check that the parity masks and the position table describe one code.

    For every non-power-of-two position p in [1, 71], table[p] must name the
    data bit whose participation pattern across P0..P6 equals p. Parity slots
    and positions beyond 71 must map to NO_DATA_BIT, and every data bit must
    appear exactly once.

    Raises:
        ECCTableError: On the first inconsistency found
    """
    if len(masks) != PARITY_BITS:
        raise ECCTableError(f"Expected {PARITY_BITS} parity masks, got {len(masks)}")
    if len(table) != TABLE_SIZE:
        raise ECCTableError(f"Expected {TABLE_SIZE}-entry position table, got {len(table)}")

    seen = set()
    for position in range(TABLE_SIZE):
        bit = int(table[position])

        if position == 0 or position > MAX_POSITION or is_power_of_two(position):
            if bit != NO_DATA_BIT:
                raise ECCTableError(
                    f"Position {position} holds no data bit but maps to data bit {bit}"
                )
            continue

        if not 0 <= bit < DATA_BITS:
            raise ECCTableError(f"Position {position} maps to invalid data bit {bit}")
        if bit in seen:
            raise ECCTableError(f"Data bit {bit} is hosted at more than one position")
        seen.add(bit)

        pattern = 0
        for k, mask in enumerate(masks):
            if (mask >> bit) & 1:
                pattern |= 1 << k
        if pattern != position:
            raise ECCTableError(
                f"Data bit {bit} is covered by parity pattern {pattern:#09b}, "
                f"expected {position:#09b}"
            )

    if len(seen) != DATA_BITS:
        raise ECCTableError(f"Only {len(seen)} of {DATA_BITS} data bits are placed")


_POSITIONS = data_positions()

ECC_MASKS = _build_masks(_POSITIONS)
HAMMING_TO_DATA = _build_position_table(_POSITIONS)

verify_coverage_tables(ECC_MASKS, HAMMING_TO_DATA)


def coverage_mask(k: int) -> int:
    """Return the mask of data bits covered by parity bit k (0..6)."""
    if not 0 <= k < PARITY_BITS:
        raise ECCTableError(f"Parity bit index must be in [0, {PARITY_BITS - 1}], got {k}")
    return ECC_MASKS[k]


def position_to_data_bit(position: int) -> int:
    """
    Map a combined position back to the data bit it hosts.

    Args:
        position: Combined position in [1, 71]

    Returns:
        Data bit index in [0, 63], or NO_DATA_BIT for a parity slot

    Raises:
        ECCTableError: If position is outside [1, 71]
    """
    if not 1 <= position <= MAX_POSITION:
        raise ECCTableError(f"Position must be in [1, {MAX_POSITION}], got {position}")
    return int(HAMMING_TO_DATA[position])
