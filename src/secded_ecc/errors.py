# file: src/secded_ecc/errors.py

"""
SECDED-specific exception hierarchy.

All exceptions inherit from ECCError for unified handling. Precondition and
internal invariant failures (ECCInvariantError) are kept apart from the one
normal decode failure (ECCUncorrectableError).
"""


class ECCError(Exception):
    """Base exception for all ECC-related errors."""
    pass


class ECCConfigurationError(ECCError):
    """Raised when ECC configuration is invalid."""
    pass


class ECCInvariantError(ECCError):
    """Raised when a precondition or internal invariant is violated."""
    pass


class ECCEncodingError(ECCInvariantError):
    """Raised when encode is given something other than a 64-bit unsigned value."""
    pass


class ECCDecodingError(ECCInvariantError):
    """Raised when decode is given a malformed protected word."""
    pass


class ECCTableError(ECCInvariantError):
    """Raised when the coverage tables disagree, or are looked up out of range."""
    pass


class ECCUncorrectableError(ECCError):
    """Raised when a multi-bit error is detected that cannot be corrected."""

    def __init__(
        self,
        message: str,
        data: int = None,
        ecc: int = None,
        syndrome: int = None,
        parity_error: bool = None,
    ):
        super().__init__(message)
        self.data = data
        self.ecc = ecc
        self.syndrome = syndrome
        self.parity_error = parity_error
