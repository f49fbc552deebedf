# file: src/secded_ecc/decoder.py

"""
SECDED decoding entry point.

Provides decode(), which simulates a memory read: it recomputes the ECC of the
stored data, derives the syndrome, and either returns the data, repairs a
single flipped bit in place, or raises ECCUncorrectableError.
"""

from .coverage import DATA_BITS, HAMMING_TO_DATA, MAX_POSITION, NO_DATA_BIT, is_power_of_two
from .encoder import as_uint, compute_ecc, popcount
from .errors import ECCDecodingError, ECCTableError, ECCUncorrectableError
from .word import ProtectedWord, ReadResult, ReadStatus


HAMMING_SYNDROME_MASK = 0x7F


def decode(word: ProtectedWord) -> ReadResult:
    """
    Read a protected word, correcting a single flipped bit if there is one.

    Classification, in order:
        1. Hamming syndrome zero, overall parity even: clean read
        2. Overall parity odd, syndrome non-zero: one flipped bit at the
           combined position named by the syndrome. A power-of-two position
           is a Hamming parity slot; anything else is a data bit.
        3. Overall parity odd, syndrome zero: the overall parity bit flipped
        4. Overall parity even, syndrome non-zero: uncorrectable

    Only cases 2 and 3 rewrite the word; a correction regenerates the ECC byte
    from the repaired data.

    Args:
        word: Stored word, possibly with flipped bits in either field

    Returns:
        ReadResult with the (possibly corrected) data and a ReadStatus

    Raises:
        ECCDecodingError: If word is not a well-formed ProtectedWord
        ECCUncorrectableError: If the corruption is not a single-bit flip.
            The word is left untouched.
        ECCTableError: If a syndrome inside the code maps to no data bit

    Note:
        Three or more flipped bits can be reported as clean, as a wrong
        correction, or as uncorrectable. SECDED guarantees nothing past two.

    Example:
        >>> word = encode(0xDEADBEEFCAFEBABE)
        >>> word.data ^= 1 << 5
        >>> decode(word).status
        <ReadStatus.CORRECTED_DATA: 1>
    """
    if not isinstance(word, ProtectedWord):
        raise ECCDecodingError(f"Input must be a ProtectedWord, got {type(word)}")

    data = as_uint(word.data, DATA_BITS, ECCDecodingError, "word.data")
    ecc = as_uint(word.ecc, 8, ECCDecodingError, "word.ecc")

    syndrome = ecc ^ compute_ecc(data)
    hamming_syndrome = syndrome & HAMMING_SYNDROME_MASK

    # Overall parity of everything stored, data and all 8 ECC bits
    parity_error = (popcount(data) + popcount(ecc)) % 2 != 0

    if hamming_syndrome == 0 and not parity_error:
        return ReadResult(data=data, status=ReadStatus.CLEAN)

    if parity_error and hamming_syndrome != 0:
        if is_power_of_two(hamming_syndrome):
            word.ecc = compute_ecc(data)
            return ReadResult(data=data, status=ReadStatus.CORRECTED_ECC)

        if hamming_syndrome <= MAX_POSITION:
            data_bit = int(HAMMING_TO_DATA[hamming_syndrome])
            if not 0 <= data_bit < DATA_BITS:
                raise ECCTableError(
                    f"Syndrome {hamming_syndrome} names a data position but maps to "
                    f"{'no data bit' if data_bit == NO_DATA_BIT else data_bit}"
                )
            data ^= 1 << data_bit
            word.data = data
            word.ecc = compute_ecc(data)
            return ReadResult(data=data, status=ReadStatus.CORRECTED_DATA)

        # Past position 71: no single flip produces this, so at least three did
        raise ECCUncorrectableError(
            f"Uncorrectable multi-bit error: syndrome {hamming_syndrome} lies outside "
            f"the code (max position {MAX_POSITION})",
            data=data,
            ecc=ecc,
            syndrome=syndrome,
            parity_error=parity_error,
        )

    if parity_error:
        word.ecc = compute_ecc(data)
        return ReadResult(data=data, status=ReadStatus.CORRECTED_ECC)

    raise ECCUncorrectableError(
        f"Uncorrectable multi-bit error: syndrome {hamming_syndrome:#04x} with even parity",
        data=data,
        ecc=ecc,
        syndrome=syndrome,
        parity_error=parity_error,
    )
