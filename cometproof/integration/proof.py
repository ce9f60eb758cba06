"""
Proof artifact plumbing for the Comet rates circuit.

The artifact binds the public inputs (the two storage records) and the public
outputs (utilization and supply rate words) under one SHA-256 commitment over
canonical JSON. A real proving backend would attach its proof to the same
commitment; `RecomputeProofVerifier` is the reference check that needs no
backend: it re-runs the circuit and compares.

This is *not* a ZK system. Verification is deterministic and fail-closed:
any malformed field or mismatch rejects the artifact.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.errors import ConstraintViolation
from ..state.canonical import CANONICAL_ENCODING_VERSION, canonical_json_bytes, domain_sep_bytes, sha256_hex
from ..state.words import parse_word_hex, word_to_hex
from .circuit import CircuitInput, CircuitOutput, CometRatesCircuit, StorageData, build_circuit_input


logger = logging.getLogger(__name__)

ARTIFACT_SCHEMA = "cometproof_artifact"
ARTIFACT_SCHEMA_VERSION = 1
CIRCUIT_ID = "comet_rates_v1"


def _storage_record_dict(rec: StorageData) -> Dict[str, Any]:
    return {
        "address": rec.address,
        "block_num": rec.block_num,
        "slot": rec.slot,
        "value": word_to_hex(rec.value),
    }


def io_commitment(inputs: List[Dict[str, Any]], outputs: List[str]) -> str:
    payload = {
        "circuit": CIRCUIT_ID,
        "canonical_encoding_version": CANONICAL_ENCODING_VERSION,
        "inputs": inputs,
        "outputs": outputs,
    }
    return sha256_hex(domain_sep_bytes("comet_rates_io", version=1) + canonical_json_bytes(payload))


def build_proof_artifact(circuit_input: CircuitInput, output: CircuitOutput) -> Dict[str, Any]:
    inputs = [_storage_record_dict(rec) for rec in circuit_input.storage]
    outputs = [word_to_hex(w) for w in output.output_words]
    return {
        "schema": ARTIFACT_SCHEMA,
        "schema_version": ARTIFACT_SCHEMA_VERSION,
        "circuit": CIRCUIT_ID,
        "inputs": inputs,
        "outputs": outputs,
        "commitment": io_commitment(inputs, outputs),
    }


def prove(circuit_input: CircuitInput, circuit: Optional[CometRatesCircuit] = None) -> Dict[str, Any]:
    """Run the circuit and package its public inputs and outputs."""
    circuit = circuit or CometRatesCircuit()
    return build_proof_artifact(circuit_input, circuit.define(circuit_input))


# -- Verification ------------------------------------------------------------

def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be an object")
    return value


def _require_list(value: Any, *, name: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    return value


def _parse_storage_record(obj: Any, *, idx: int) -> StorageData:
    rec = _require_mapping(obj, name=f"inputs[{idx}]")
    for key in ("block_num", "slot"):
        v = rec.get(key)
        if not isinstance(v, int) or isinstance(v, bool):
            raise ValueError(f"inputs[{idx}].{key} must be an int")
    return StorageData(
        block_num=rec["block_num"],
        address=rec.get("address"),
        slot=rec["slot"],
        value=parse_word_hex(rec.get("value"), name=f"inputs[{idx}].value"),
    )


class ProofVerifier:
    """Interface for verifying a proof artifact."""

    def verify(self, payload: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
        raise NotImplementedError


class RecomputeProofVerifier(ProofVerifier):
    """Accept an artifact iff recomputing the circuit reproduces its outputs."""

    def __init__(self, circuit: Optional[CometRatesCircuit] = None) -> None:
        self._circuit = circuit or CometRatesCircuit()

    def violations(self, payload: Mapping[str, Any]) -> List[str]:
        if not isinstance(payload, Mapping):
            return ["payload must be an object"]
        if payload.get("schema") != ARTIFACT_SCHEMA:
            return ["unsupported schema"]
        if payload.get("schema_version") != ARTIFACT_SCHEMA_VERSION:
            return ["unsupported schema_version"]
        if payload.get("circuit") != CIRCUIT_ID:
            return ["unsupported circuit"]

        try:
            raw_inputs = _require_list(payload.get("inputs"), name="inputs")
            raw_outputs = _require_list(payload.get("outputs"), name="outputs")
            records = [_parse_storage_record(obj, idx=i) for i, obj in enumerate(raw_inputs)]
            circuit_input = build_circuit_input(records, self._circuit)
            claimed = tuple(parse_word_hex(o, name=f"outputs[{i}]") for i, o in enumerate(raw_outputs))
        except (TypeError, ValueError) as exc:
            return [f"malformed artifact: {exc}"]

        out: List[str] = []
        inputs = [_storage_record_dict(rec) for rec in circuit_input.storage]
        outputs = [word_to_hex(w) for w in claimed]
        if payload.get("commitment") != io_commitment(inputs, outputs):
            out.append("commitment mismatch")

        expected = self._circuit.define(circuit_input).output_words
        if len(claimed) != len(expected):
            out.append(f"expected {len(expected)} outputs, got {len(claimed)}")
        else:
            for name, got, want in zip(("utilization", "supplyRate"), claimed, expected):
                if got != want:
                    out.append(f"{name} mismatch: claimed {word_to_hex(got)}, computed {word_to_hex(want)}")
        return out

    def verify(self, payload: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
        violations = self.violations(payload)
        if violations:
            logger.warning("proof artifact rejected: %s", "; ".join(violations))
            return False, "; ".join(violations)
        return True, None


def require_valid_artifact(payload: Mapping[str, Any], verifier: Optional[RecomputeProofVerifier] = None) -> None:
    """Raise `ConstraintViolation` unless *payload* verifies."""
    verifier = verifier or RecomputeProofVerifier()
    violations = verifier.violations(payload)
    if violations:
        raise ConstraintViolation(violations)
