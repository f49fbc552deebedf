# file: src/secded_ecc/word.py

"""
Value types shared by the encoder and decoder.
"""

import enum
import struct
from dataclasses import dataclass


WORD_STRUCT = struct.Struct('>QB')  # 64-bit data then 8-bit ECC, big-endian
WORD_SIZE = WORD_STRUCT.size  # 9 bytes, the 72-bit stored word


class ReadStatus(enum.Enum):
    """
    Outcome of a successful read.

        CLEAN           Data and ECC agree, nothing was rewritten.

        CORRECTED_DATA  One data bit had flipped and was flipped back.

        CORRECTED_ECC   One ECC bit had flipped; the data was intact and the
                        ECC byte was regenerated.
    """
    CLEAN = 0
    CORRECTED_DATA = 1
    CORRECTED_ECC = 2

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    def __str__(self):
        return self.description


_STATUS_DESCRIPTIONS = {
    ReadStatus.CLEAN: "OK",
    ReadStatus.CORRECTED_DATA: "Corrected single-bit data error",
    ReadStatus.CORRECTED_ECC: "Corrected single-bit ECC error",
}


@dataclass
class ProtectedWord:
    """
    An ECC-protected memory word: 64 bits of data plus 8 bits of ECC.

    ECC bits 0-6 are the Hamming parity bits P0..P6, bit 7 is overall parity.
    Only a correcting read rewrites the fields.
    """
    data: int
    ecc: int

    def __str__(self):
        return f"ECCWord data=0x{self.data:016X} ecc={self.ecc:08b}"

    def copy(self) -> "ProtectedWord":
        return ProtectedWord(self.data, self.ecc)

    def to_bytes(self) -> bytes:
        """Pack as the 9-byte stored form: [data:8][ecc:1]."""
        return WORD_STRUCT.pack(self.data, self.ecc)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "ProtectedWord":
        """
        Unpack a word produced by to_bytes().

        Raises:
            ValueError: If raw is not exactly 9 bytes
        """
        if len(raw) != WORD_SIZE:
            raise ValueError(f"Protected word must be {WORD_SIZE} bytes, got {len(raw)}")
        data, ecc = WORD_STRUCT.unpack(raw)
        return cls(data, ecc)


@dataclass(frozen=True)
class ReadResult:
    """Data returned by a successful read, with how it was obtained."""
    data: int
    status: ReadStatus

    @property
    def corrected(self) -> bool:
        return self.status is not ReadStatus.CLEAN
