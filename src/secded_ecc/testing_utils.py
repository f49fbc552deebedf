# file: src/secded_ecc/testing_utils.py

"""
Fault injection for protected words.

Used by tests, the scenario table and the fault campaign. Stored bits are
indexed 0-71: indices 0-63 are data bits, 64-71 are ECC bits 0-7.
"""

from typing import Optional, Sequence

import numpy as np

from .coverage import DATA_BITS
from .word import ProtectedWord


STORED_BITS = DATA_BITS + 8


def flip_data_bits(word: ProtectedWord, mask: int) -> ProtectedWord:
    """XOR mask into the data field in place and return the word."""
    word.data ^= mask & ((1 << DATA_BITS) - 1)
    return word


def flip_ecc_bits(word: ProtectedWord, mask: int) -> ProtectedWord:
    """XOR mask into the ECC field in place and return the word."""
    word.ecc ^= mask & 0xFF
    return word


def flip_stored_bits(word: ProtectedWord, indices: Sequence[int]) -> ProtectedWord:
    """
    Flip the given stored-bit indices in place.

    Raises:
        ValueError: If an index is outside [0, 71]
    """
    for index in indices:
        index = int(index)
        if not 0 <= index < STORED_BITS:
            raise ValueError(f"Stored bit index must be in [0, {STORED_BITS - 1}], got {index}")
        if index < DATA_BITS:
            word.data ^= 1 << index
        else:
            word.ecc ^= 1 << (index - DATA_BITS)
    return word


def inject_bit_flips(
    word: ProtectedWord,
    num_flips: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Flip num_flips distinct stored bits chosen at random, in place.

    Args:
        word: Word to corrupt
        num_flips: Number of distinct bits to flip (0 to 72)
        seed: Seed for a fresh generator, ignored when rng is given
        rng: Generator to draw from, for reproducible sequences of calls

    Returns:
        Sorted array of the stored-bit indices that were flipped

    Example:
        >>> word = encode(0)
        >>> flipped = inject_bit_flips(word, num_flips=2, seed=42)
        >>> len(flipped)
        2
    """
    if not 0 <= num_flips <= STORED_BITS:
        raise ValueError(f"num_flips must be in [0, {STORED_BITS}], got {num_flips}")

    if rng is None:
        rng = np.random.default_rng(seed)

    indices = np.sort(rng.choice(STORED_BITS, size=num_flips, replace=False))
    flip_stored_bits(word, indices)
    return indices


def random_words(
    count: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Draw count uniformly random 64-bit data words.

    Returns:
        np.ndarray of shape (count,), dtype uint64
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    if rng is None:
        rng = np.random.default_rng(seed)

    return rng.integers(0, np.iinfo(np.uint64).max, size=count, dtype=np.uint64, endpoint=True)
