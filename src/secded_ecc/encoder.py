# file: src/secded_ecc/encoder.py

"""
SECDED encoding entry point.

Provides encode(), which simulates a memory write by attaching ECC bits to a
64-bit data word, and compute_ecc(), the parity computation behind it.
"""

import numpy as np

from .coverage import DATA_BITS, ECC_MASKS, PARITY_BITS
from .errors import ECCEncodingError
from .word import ProtectedWord


DATA_MASK = (1 << DATA_BITS) - 1
OVERALL_PARITY_BIT = 1 << PARITY_BITS


def popcount(value: int) -> int:
    """Number of set bits in a non-negative integer."""
    return bin(value).count('1')


def as_uint(value, width: int, error_cls, name: str) -> int:
    """
    Validate that value is an unsigned integer fitting in width bits.

    numpy integer scalars are accepted and converted to int; bools are not.

    Raises:
        error_cls: If value has the wrong type or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise error_cls(f"{name} must be an integer, got {type(value)}")
    value = int(value)
    if not 0 <= value < (1 << width):
        raise error_cls(f"{name} must fit in {width} unsigned bits, got {value:#x}")
    return value


def compute_ecc(data: int) -> int:
    """
    Calculate the 8 ECC bits for a 64-bit data word.

    Bits 0-6 are Hamming parity bits: bit k is set when data has an odd number
    of ones under coverage mask k. Bit 7 is then chosen so that the total number
    of ones across data and all 8 ECC bits is even.

    Args:
        data: Unsigned 64-bit value (any bit pattern)

    Returns:
        ECC byte in [0, 255]

    Raises:
        ECCEncodingError: If data is not a 64-bit unsigned integer

    Example:
        >>> hex(compute_ecc(0xDEADBEEFCAFEBABE))
        '0x3a'
    """
    data = as_uint(data, DATA_BITS, ECCEncodingError, "data")

    ecc = 0
    for k, mask in enumerate(ECC_MASKS):
        if popcount(data & mask) % 2:
            ecc |= 1 << k

    if (popcount(data) + popcount(ecc)) % 2:
        ecc |= OVERALL_PARITY_BIT

    return ecc


def encode(data: int) -> ProtectedWord:
    """
    Simulate a memory write.

    Args:
        data: Unsigned 64-bit payload

    Returns:
        New ProtectedWord holding data and its ECC byte

    Raises:
        ECCEncodingError: If data is not a 64-bit unsigned integer
    """
    data = as_uint(data, DATA_BITS, ECCEncodingError, "data")
    return ProtectedWord(data=data, ecc=compute_ecc(data))
