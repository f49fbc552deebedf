# file: src/secded_ecc/codec.py

"""
Config-driven codec facade.

SECDEDCodec wraps encode()/decode() with the code parameters, and
ecc_encode()/ecc_decode() dispatch on config['ecc']['type'].
"""

import functools
from typing import Any, Dict

from .coverage import DATA_BITS, ECC_MASKS, HAMMING_TO_DATA, PARITY_BITS, verify_coverage_tables
from .decoder import decode
from .encoder import encode
from .errors import ECCConfigurationError
from .word import ProtectedWord, ReadResult


ECC_BITS = PARITY_BITS + 1


@functools.lru_cache(maxsize=None)
def _check_tables() -> bool:
    # The tables are immutable, so one successful check holds for the process
    verify_coverage_tables(ECC_MASKS, HAMMING_TO_DATA)
    return True


class SECDEDCodec:
    """
    (72, 64) SECDED codec.

    Parameters:
        verify_tables (bool): Check coverage table consistency on first construction

    Invariants:
        - n = k + 8 (7 Hamming parity bits and one overall parity bit)
        - Corrects 1 flipped bit, detects 2
    """

    n = DATA_BITS + ECC_BITS
    k = DATA_BITS
    max_correctable_errors = 1
    max_detectable_errors = 2

    def __init__(self, verify_tables: bool = True):
        if verify_tables:
            _check_tables()
        self.verify_tables = verify_tables

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SECDEDCodec":
        """
        Build a codec from a configuration dictionary.

        Raises:
            ECCConfigurationError: If config is missing the 'ecc' section or
                names another code
        """
        try:
            ecc_config = config['ecc']
            ecc_type = ecc_config['type']
        except (KeyError, TypeError) as e:
            raise ECCConfigurationError(f"Missing required config key: {e}") from e

        if ecc_type != 'secded':
            raise ECCConfigurationError(f"Unknown ECC type: {ecc_type}")

        secded_config = ecc_config.get('secded') or {}
        return cls(verify_tables=bool(secded_config.get('verify_tables', True)))

    def encode(self, data: int) -> ProtectedWord:
        return encode(data)

    def decode(self, word: ProtectedWord) -> ReadResult:
        return decode(word)

    def get_redundancy_overhead(self) -> float:
        """
        Calculate redundancy overhead as a fraction.

        Returns:
            Overhead ratio: (n - k) / k
        """
        return (self.n - self.k) / self.k

    def get_code_rate(self) -> float:
        """
        Calculate code rate.

        Returns:
            Code rate: k / n
        """
        return self.k / self.n


def ecc_encode(data: int, config: Dict[str, Any]) -> ProtectedWord:
    """
    Encode a 64-bit word with the code named in config.

    Raises:
        ECCEncodingError: If data is not a 64-bit unsigned integer
        ECCConfigurationError: If configuration is invalid
    """
    return SECDEDCodec.from_config(config).encode(data)


def ecc_decode(word: ProtectedWord, config: Dict[str, Any]) -> ReadResult:
    """
    Decode a protected word with the code named in config.

    Raises:
        ECCDecodingError: If word is malformed
        ECCUncorrectableError: If the corruption cannot be corrected
        ECCConfigurationError: If configuration is invalid
    """
    return SECDEDCodec.from_config(config).decode(word)
