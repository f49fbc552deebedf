# file: src/secded_ecc/metrics.py

"""
Decode outcome statistics.

Runs fault-injection campaigns against the codec and tallies what the decoder
made of each corrupted word. With one or two flips every outcome should be
'corrected' or 'detected'; with three or more, 'miscorrected' and
'silent_corruption' show up as well.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from .decoder import decode
from .encoder import encode
from .errors import ECCUncorrectableError
from .testing_utils import STORED_BITS, inject_bit_flips, random_words
from .word import ProtectedWord, ReadStatus


logger = logging.getLogger(__name__)


OUTCOME_CLEAN = 'clean'
OUTCOME_CORRECTED = 'corrected'
OUTCOME_MISCORRECTED = 'miscorrected'
OUTCOME_SILENT = 'silent_corruption'
OUTCOME_DETECTED = 'detected'

OUTCOMES = (
    OUTCOME_CLEAN,
    OUTCOME_CORRECTED,
    OUTCOME_MISCORRECTED,
    OUTCOME_SILENT,
    OUTCOME_DETECTED,
)


def classify_outcome(original: int, word: ProtectedWord) -> str:
    """
    Decode a (possibly corrupted) word and judge the result against the truth.

    Args:
        original: Data value that was originally encoded
        word: Stored word to decode; may be rewritten by a correction

    Returns:
        One of:
            - 'clean': clean read of the right data
            - 'corrected': a correction that recovered the right data
            - 'miscorrected': a correction that produced wrong data
            - 'silent_corruption': clean read of wrong data
            - 'detected': ECCUncorrectableError was raised
    """
    try:
        result = decode(word)
    except ECCUncorrectableError:
        return OUTCOME_DETECTED

    if result.status is ReadStatus.CLEAN:
        return OUTCOME_CLEAN if result.data == original else OUTCOME_SILENT
    return OUTCOME_CORRECTED if result.data == original else OUTCOME_MISCORRECTED


@dataclass
class FaultCampaignReport:
    """Tallies from one fault-injection campaign."""
    num_words: int
    num_flips: int
    seed: Optional[int]
    counts: Dict[str, int] = field(
        default_factory=lambda: {outcome: 0 for outcome in OUTCOMES}
    )

    def rate(self, outcome: str) -> float:
        if outcome not in self.counts:
            raise KeyError(f"Unknown outcome: {outcome}")
        if self.num_words == 0:
            return 0.0
        return self.counts[outcome] / self.num_words

    @property
    def undetected_failures(self) -> int:
        """Words that came back wrong without an error being raised."""
        return self.counts[OUTCOME_MISCORRECTED] + self.counts[OUTCOME_SILENT]

    def as_dict(self) -> dict:
        return {
            'num_words': self.num_words,
            'num_flips': self.num_flips,
            'seed': self.seed,
            'counts': dict(self.counts),
            'rates': {outcome: self.rate(outcome) for outcome in OUTCOMES},
        }


def run_fault_campaign(
    num_words: int,
    num_flips: int,
    seed: Optional[int] = None,
) -> FaultCampaignReport:
    """
    Encode random words, flip num_flips random stored bits in each, decode.

    Deterministic for a given seed.

    Args:
        num_words: Number of words to test
        num_flips: Distinct stored bits flipped per word (0 to 72)
        seed: Seed for word and fault generation

    Returns:
        FaultCampaignReport with per-outcome counts

    Example:
        >>> report = run_fault_campaign(500, num_flips=2, seed=7)
        >>> report.counts['detected']
        500
    """
    if num_words < 0:
        raise ValueError(f"num_words must be >= 0, got {num_words}")
    if not 0 <= num_flips <= STORED_BITS:
        raise ValueError(f"num_flips must be in [0, {STORED_BITS}], got {num_flips}")

    rng = np.random.default_rng(seed)
    words = random_words(num_words, rng=rng)
    report = FaultCampaignReport(num_words=num_words, num_flips=num_flips, seed=seed)

    for value in words:
        original = int(value)
        word = encode(original)
        inject_bit_flips(word, num_flips, rng=rng)
        report.counts[classify_outcome(original, word)] += 1

    logger.info(
        f"Fault campaign: {num_words} words, {num_flips} flips/word, seed={seed}"
    )
    for outcome in OUTCOMES:
        logger.info(
            f"  {outcome:<18} {report.counts[outcome]:>8} ({report.rate(outcome):.2%})"
        )
    if report.undetected_failures:
        logger.warning(
            f"{report.undetected_failures} words returned wrong data without an error"
        )

    return report
