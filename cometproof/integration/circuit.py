"""
Comet rates circuit application.

Binds the pure pipeline (decode -> utilization -> supply rate -> encode) to the
shape a storage-proof backend expects:
- `allocate()` declares how many receipts/slots/transactions the app consumes,
- `build_circuit_input()` checks and orders the storage records,
- `define()` runs the computation and emits the two public output words.

No IO happens here; storage records come from a `StorageFetcher` and the
artifact is handled by `proof.py`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from ..core.supply_rate import get_supply_rate
from ..core.utilization import UtilizationBreakdown, utilization_breakdown
from ..state.slot_layout import COMET_SLOT0_LAYOUT, COMET_SLOT1_LAYOUT, MarketFields, decode_market_fields
from ..state.words import encode_output_words, require_word


logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(address: str) -> str:
    if not isinstance(address, str) or not _ADDRESS_RE.fullmatch(address):
        raise ValueError(f"address must be 0x-prefixed 20-byte hex: {address!r}")
    return address.lower()


@dataclass(frozen=True)
class StorageData:
    """One storage word read at `(address, slot)` as of `block_num`."""

    block_num: int
    address: str
    slot: int
    value: bytes

    def __post_init__(self) -> None:
        for name, v in (("block_num", self.block_num), ("slot", self.slot)):
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise ValueError(f"{name} must be a non-negative int: {v!r}")
        object.__setattr__(self, "address", normalize_address(self.address))
        object.__setattr__(self, "value", require_word("value", self.value))


@dataclass(frozen=True)
class CircuitInput:
    storage: tuple[StorageData, ...]

    @property
    def slot0(self) -> bytes:
        return self.storage[0].value

    @property
    def slot1(self) -> bytes:
        return self.storage[1].value


@dataclass(frozen=True)
class RatesResult:
    fields: MarketFields
    breakdown: UtilizationBreakdown
    utilization: int
    supply_rate: int
    output_words: tuple[bytes, bytes]


@dataclass(frozen=True)
class CircuitOutput:
    rates: RatesResult

    @property
    def output_words(self) -> tuple[bytes, bytes]:
        return self.rates.output_words


def compute_rates(slot0: bytes, slot1: bytes) -> RatesResult:
    """Run the full pipeline over the two raw slot words."""
    fields = decode_market_fields(slot0, slot1)
    breakdown = utilization_breakdown(
        base_supply_index=fields.base_supply_index,
        base_borrow_index=fields.base_borrow_index,
        total_supply_base=fields.total_supply_base,
        total_borrow_base=fields.total_borrow_base,
    )
    supply_rate = get_supply_rate(breakdown.utilization)
    return RatesResult(
        fields=fields,
        breakdown=breakdown,
        utilization=breakdown.utilization,
        supply_rate=supply_rate,
        output_words=encode_output_words(breakdown.utilization, supply_rate),
    )


def compute_output_words(slot0: bytes, slot1: bytes) -> tuple[bytes, bytes]:
    return compute_rates(slot0, slot1).output_words


class CometRatesCircuit:
    """Storage-slot app circuit: two slots in, two bytes32 outputs."""

    MAX_RECEIPTS = 0
    MAX_SLOTS = 2
    MAX_TRANSACTIONS = 0

    SLOT_LAYOUTS = (COMET_SLOT0_LAYOUT, COMET_SLOT1_LAYOUT)

    def allocate(self) -> tuple[int, int, int]:
        return self.MAX_RECEIPTS, self.MAX_SLOTS, self.MAX_TRANSACTIONS

    def define(self, circuit_input: CircuitInput) -> CircuitOutput:
        rates = compute_rates(circuit_input.slot0, circuit_input.slot1)
        logger.debug("utilization %d", rates.utilization)
        logger.debug("supplyRate %d", rates.supply_rate)
        return CircuitOutput(rates=rates)


def build_circuit_input(storage: Sequence[StorageData], circuit: CometRatesCircuit | None = None) -> CircuitInput:
    """
    Order and check storage records for `circuit`.

    Requires one record per slot layout (slots 0 and 1), all read from the same
    contract at the same block. Record order in *storage* does not matter.
    """
    circuit = circuit or CometRatesCircuit()
    _, max_slots, _ = circuit.allocate()
    records = list(storage)
    if len(records) > max_slots:
        raise ValueError(f"too many storage records: {len(records)} > {max_slots}")

    by_slot: dict[int, StorageData] = {}
    for rec in records:
        if not isinstance(rec, StorageData):
            raise TypeError("storage records must be StorageData")
        if rec.slot in by_slot:
            raise ValueError(f"duplicate storage record for slot {rec.slot}")
        by_slot[rec.slot] = rec

    ordered = []
    for layout in circuit.SLOT_LAYOUTS:
        rec = by_slot.get(layout.slot)
        if rec is None:
            raise ValueError(f"missing storage record for slot {layout.slot}")
        ordered.append(rec)
    if len(by_slot) != len(ordered):
        extra = sorted(set(by_slot) - {layout.slot for layout in circuit.SLOT_LAYOUTS})
        raise ValueError(f"unexpected storage slots: {extra}")

    if len({rec.address for rec in ordered}) != 1:
        raise ValueError("storage records must come from a single contract address")
    if len({rec.block_num for rec in ordered}) != 1:
        raise ValueError("storage records must come from a single block")
    return CircuitInput(storage=tuple(ordered))
