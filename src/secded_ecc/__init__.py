# file: src/secded_ecc/__init__.py

"""
SECDED memory word protection.

Software model of the (72, 64) Hamming SECDED code used by ECC memory: each
64-bit data word is stored with 8 ECC bits, which are enough to correct any
single flipped bit and to detect any two.

Public API:
    - encode(data: int) -> ProtectedWord
    - decode(word: ProtectedWord) -> ReadResult (raises ECCUncorrectableError)
    - compute_ecc(data: int) -> int
    - SECDEDCodec, ecc_encode(data, config), ecc_decode(word, config)
    - coverage_mask(k), position_to_data_bit(p)

Example usage:
    >>> from secded_ecc import encode, decode, ReadStatus
    >>> word = encode(0xDEADBEEFCAFEBABE)
    >>> word.ecc ^= 0x80
    >>> result = decode(word)
    >>> result.status is ReadStatus.CORRECTED_ECC
    True
"""

from .encoder import encode, compute_ecc
from .decoder import decode
from .codec import SECDEDCodec, ecc_encode, ecc_decode
from .coverage import coverage_mask, position_to_data_bit, verify_coverage_tables
from .word import ProtectedWord, ReadResult, ReadStatus
from .errors import (
    ECCError,
    ECCConfigurationError,
    ECCInvariantError,
    ECCEncodingError,
    ECCDecodingError,
    ECCTableError,
    ECCUncorrectableError,
)

__version__ = "1.0.0"

__all__ = [
    "encode",
    "decode",
    "compute_ecc",
    "SECDEDCodec",
    "ecc_encode",
    "ecc_decode",
    "coverage_mask",
    "position_to_data_bit",
    "verify_coverage_tables",
    "ProtectedWord",
    "ReadResult",
    "ReadStatus",
    "ECCError",
    "ECCConfigurationError",
    "ECCInvariantError",
    "ECCEncodingError",
    "ECCDecodingError",
    "ECCTableError",
    "ECCUncorrectableError",
]
