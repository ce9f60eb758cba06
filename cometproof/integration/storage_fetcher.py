"""
Storage word fetching (imperative shell).

The rates pipeline never talks to a node itself; it is handed `StorageData`
records by a `StorageFetcher`. Two implementations are provided:
- `StaticStorageFetcher`: an in-memory table (tests, offline replays),
- `Web3StorageFetcher`: `eth_getStorageAt` at a pinned block over JSON-RPC.

The fetcher is trusted for the `(address, block, slot)` binding; nothing
downstream re-checks it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..state.slot_layout import COMET_SLOT0_LAYOUT, COMET_SLOT1_LAYOUT
from ..state.words import WORD_BYTES
from .circuit import StorageData, normalize_address

try:
    from web3 import Web3

    _WEB3_AVAILABLE = True
except Exception:  # pragma: no cover - optional dependency
    Web3 = None  # type: ignore[assignment]
    _WEB3_AVAILABLE = False


logger = logging.getLogger(__name__)

RPC_URL_ENV = "COMETPROOF_RPC_URL"
RPC_TIMEOUT_ENV = "COMETPROOF_RPC_TIMEOUT_S"


class StorageFetchError(RuntimeError):
    pass


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _env_float(name: str, default: float, *, lo: float, hi: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return float(default)
    try:
        v = float(raw.strip())
    except ValueError:
        return float(default)
    if v != v:
        return float(default)
    return float(min(max(v, lo), hi))


@dataclass(frozen=True)
class StorageFetchConfig:
    rpc_url: Optional[str] = None
    timeout_s: float = 10.0


def storage_fetch_config_from_env() -> StorageFetchConfig:
    return StorageFetchConfig(
        rpc_url=_env_str(RPC_URL_ENV, None),
        timeout_s=_env_float(RPC_TIMEOUT_ENV, 10.0, lo=0.5, hi=120.0),
    )


@dataclass(frozen=True)
class MarketRef:
    """A Comet deployment pinned at a block height."""

    address: str
    block_number: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address))
        if not isinstance(self.block_number, int) or isinstance(self.block_number, bool) or self.block_number < 0:
            raise ValueError(f"block_number must be a non-negative int: {self.block_number!r}")


class StorageFetcher:
    """Interface for reading one storage word at a block."""

    def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        raise NotImplementedError


class StaticStorageFetcher(StorageFetcher):
    def __init__(self, words: Mapping[Tuple[str, int, int], bytes]) -> None:
        self._words: Dict[Tuple[str, int, int], bytes] = {
            (normalize_address(addr), int(slot), int(block)): bytes(word)
            for (addr, slot, block), word in words.items()
        }

    def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        key = (normalize_address(address), slot, block_number)
        word = self._words.get(key)
        if word is None:
            raise StorageFetchError(f"no storage word for {key[0]} slot {slot} at block {block_number}")
        return word


class Web3StorageFetcher(StorageFetcher):
    def __init__(self, config: StorageFetchConfig) -> None:
        if not config.rpc_url:
            raise ValueError("rpc_url is required")
        if config.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
        if not _WEB3_AVAILABLE:
            raise StorageFetchError("web3 is required for RPC storage reads (pip install web3)")
        self._config = config
        self._w3 = Web3(Web3.HTTPProvider(config.rpc_url, request_kwargs={"timeout": config.timeout_s}))

    def get_storage_at(self, address: str, slot: int, block_number: int) -> bytes:
        checksum = Web3.to_checksum_address(normalize_address(address))
        try:
            raw = self._w3.eth.get_storage_at(checksum, slot, block_identifier=block_number)
        except Exception as exc:
            raise StorageFetchError(f"eth_getStorageAt failed: {type(exc).__name__}: {str(exc)[:200]}") from exc
        word = bytes(raw)
        if len(word) > WORD_BYTES:
            raise StorageFetchError(f"node returned {len(word)} bytes for a storage word")
        return word.rjust(WORD_BYTES, b"\x00")


def fetch_market_storage(fetcher: StorageFetcher, market: MarketRef) -> List[StorageData]:
    """Read slots 0 and 1 of *market* and wrap them as `StorageData` records."""
    records = []
    for layout in (COMET_SLOT0_LAYOUT, COMET_SLOT1_LAYOUT):
        word = fetcher.get_storage_at(market.address, layout.slot, market.block_number)
        logger.info("fetched slot %d of %s at block %d", layout.slot, market.address, market.block_number)
        records.append(
            StorageData(
                block_num=market.block_number,
                address=market.address,
                slot=layout.slot,
                value=word,
            )
        )
    return records
