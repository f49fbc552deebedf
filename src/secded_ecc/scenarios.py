# file: src/secded_ecc/scenarios.py

"""
Reference corruption scenarios.

A fixed table of write / corrupt / read cases covering every decode path,
used by the `demo` command and the tests.
"""

from dataclasses import dataclass
from typing import List, Optional

from .decoder import decode
from .encoder import encode
from .errors import ECCUncorrectableError
from .testing_utils import flip_data_bits, flip_ecc_bits
from .word import ProtectedWord, ReadStatus


REFERENCE_DATA = 0xDEADBEEFCAFEBABE


@dataclass(frozen=True)
class CorruptionScenario:
    name: str
    data: int
    data_xor: int = 0  # bits to flip in data
    ecc_xor: int = 0  # bits to flip in ECC


@dataclass
class ScenarioOutcome:
    scenario: CorruptionScenario
    original: ProtectedWord
    corrupted: ProtectedWord
    recovered: Optional[ProtectedWord]
    status: Optional[ReadStatus]
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return self.error is None


REFERENCE_SCENARIOS = [
    # No error
    CorruptionScenario("Clean read", REFERENCE_DATA),

    # Single-bit data errors
    CorruptionScenario("Single-bit data error (bit 0)", REFERENCE_DATA, data_xor=0x01),
    CorruptionScenario("Single-bit data error (bit 2)", REFERENCE_DATA, data_xor=0x04),
    CorruptionScenario("Single-bit data error (bit 63)", REFERENCE_DATA, data_xor=1 << 63),

    # Single-bit ECC errors
    CorruptionScenario("Single-bit ECC error (P0)", REFERENCE_DATA, ecc_xor=0x01),
    CorruptionScenario("Single-bit ECC error (P1)", REFERENCE_DATA, ecc_xor=0x02),
    CorruptionScenario("Single-bit ECC error (P2)", REFERENCE_DATA, ecc_xor=0x04),
    CorruptionScenario("Single-bit ECC error (P6)", REFERENCE_DATA, ecc_xor=0x40),
    CorruptionScenario("Single-bit ECC error (overall parity)", REFERENCE_DATA, ecc_xor=0x80),

    # Multi-bit errors
    CorruptionScenario("Multi-bit data error", REFERENCE_DATA, data_xor=0x05),
    CorruptionScenario("Multi-bit ECC error", REFERENCE_DATA, ecc_xor=0x03),
]


def run_scenario(scenario: CorruptionScenario) -> ScenarioOutcome:
    """Write scenario.data, apply its corruption, read it back."""
    word = encode(scenario.data)
    original = word.copy()

    flip_data_bits(word, scenario.data_xor)
    flip_ecc_bits(word, scenario.ecc_xor)
    corrupted = word.copy()

    try:
        result = decode(word)
    except ECCUncorrectableError as e:
        return ScenarioOutcome(scenario, original, corrupted, None, None, str(e))

    return ScenarioOutcome(scenario, original, corrupted, word, result.status, None)


def run_scenarios(scenarios: Optional[List[CorruptionScenario]] = None) -> List[ScenarioOutcome]:
    if scenarios is None:
        scenarios = REFERENCE_SCENARIOS
    return [run_scenario(scenario) for scenario in scenarios]


def format_outcome(outcome: ScenarioOutcome) -> str:
    lines = [
        f"[{outcome.scenario.name}]",
        f"\tOriginal: {outcome.original}",
        f"\tCorrupted: {outcome.corrupted}",
        "",
    ]
    if outcome.ok:
        lines.append(f"\tRecovered: {outcome.recovered}")
        lines.append(f"\tStatus: {outcome.status}")
    else:
        lines.append("\tRecovered: <invalid>")
        lines.append(f"\tError: {outcome.error}")
    return "\n".join(lines)
