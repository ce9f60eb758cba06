"""`cometproof`: Compound III utilization and supply rate from raw storage slots.

Two 32-byte storage words (slot 0 and slot 1 of a Comet market) go in; two
32-byte words (utilization, per-second supply rate) come out. The computation
is integer-only, matches the contract's truncation bit for bit, and resolves
every conditional by selection so it can be expressed as a circuit.

Public API:
- `compute_rates(slot0, slot1) -> RatesResult`
- `compute_output_words(slot0, slot1) -> (bytes, bytes)`
- `CometRatesCircuit`, `build_circuit_input`, `prove`, `RecomputeProofVerifier`
"""

from .integration.circuit import CometRatesCircuit, RatesResult, build_circuit_input, compute_output_words, compute_rates
from .integration.proof import RecomputeProofVerifier, prove

__all__ = [
    "CometRatesCircuit",
    "RatesResult",
    "build_circuit_input",
    "compute_output_words",
    "compute_rates",
    "RecomputeProofVerifier",
    "prove",
]
