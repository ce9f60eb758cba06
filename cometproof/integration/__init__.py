"""
Circuit application, storage fetching and proof artifacts
"""

from .circuit import (
    CircuitInput,
    CircuitOutput,
    CometRatesCircuit,
    RatesResult,
    StorageData,
    build_circuit_input,
    compute_output_words,
    compute_rates,
)
from .proof import RecomputeProofVerifier, build_proof_artifact, prove, require_valid_artifact
from .storage_fetcher import (
    MarketRef,
    StaticStorageFetcher,
    StorageFetchConfig,
    StorageFetchError,
    Web3StorageFetcher,
    fetch_market_storage,
)

__all__ = [
    "CircuitInput",
    "CircuitOutput",
    "CometRatesCircuit",
    "RatesResult",
    "StorageData",
    "build_circuit_input",
    "compute_output_words",
    "compute_rates",
    "RecomputeProofVerifier",
    "build_proof_artifact",
    "prove",
    "require_valid_artifact",
    "MarketRef",
    "StaticStorageFetcher",
    "StorageFetchConfig",
    "StorageFetchError",
    "Web3StorageFetcher",
    "fetch_market_storage",
]
