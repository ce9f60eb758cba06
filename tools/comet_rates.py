#!/usr/bin/env python3
"""
Compute a Comet market's utilization and supply rate from slot 0 / slot 1.

Either pass both storage words directly:

    tools/comet_rates.py --slot0 0x... --slot1 0x... --address 0x... --block 255599800

or read them from a node at a pinned block:

    tools/comet_rates.py --rpc-url https://... --address 0x... --block 255599800

Prints a JSON report; `--artifact` also emits the proof artifact, and
`--verify PATH` checks a previously written artifact instead.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cometproof.integration.circuit import CometRatesCircuit, StorageData, build_circuit_input
from cometproof.integration.proof import RecomputeProofVerifier, build_proof_artifact
from cometproof.integration.storage_fetcher import (
    MarketRef,
    StorageFetchConfig,
    StorageFetchError,
    Web3StorageFetcher,
    fetch_market_storage,
    storage_fetch_config_from_env,
)
from cometproof.state.words import parse_word_hex, word_to_hex


logger = logging.getLogger("comet_rates")

_ZERO_ADDRESS = "0x" + "00" * 20


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Comet utilization / supply rate from raw storage slots")
    ap.add_argument("--slot0", type=str, default="", help="slot 0 word (32-byte hex)")
    ap.add_argument("--slot1", type=str, default="", help="slot 1 word (32-byte hex)")
    ap.add_argument("--address", type=str, default="", help="Comet proxy address")
    ap.add_argument("--block", type=int, default=0, help="block number the words were read at")
    ap.add_argument("--rpc-url", type=str, default="", help="JSON-RPC endpoint (or $COMETPROOF_RPC_URL)")
    ap.add_argument("--timeout-s", type=float, default=0.0)
    ap.add_argument("--artifact", action="store_true", help="include the proof artifact in the report")
    ap.add_argument("--verify", type=str, default="", help="verify an artifact JSON file and exit")
    ap.add_argument("--log-level", type=str, default="WARNING")
    return ap


def _parse_payload(path: str) -> dict:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ValueError(f"cannot read artifact: {exc}") from exc
    try:
        obj = json.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON input: {exc}") from exc
    if not isinstance(obj, dict):
        raise ValueError("payload must be an object")
    return obj


def _verify_file(path: str) -> int:
    try:
        payload = _parse_payload(path)
    except ValueError as exc:
        print(json.dumps({"ok": False, "error": str(exc)}, separators=(",", ":")))
        return 2
    ok, err = RecomputeProofVerifier().verify(payload)
    print(json.dumps({"ok": ok, "error": err}, separators=(",", ":")))
    return 0 if ok else 1


def _storage_from_args(args: argparse.Namespace) -> list[StorageData]:
    if args.slot0 or args.slot1:
        if not (args.slot0 and args.slot1):
            raise ValueError("--slot0 and --slot1 must be given together")
        address = args.address or _ZERO_ADDRESS
        return [
            StorageData(block_num=args.block, address=address, slot=0, value=parse_word_hex(args.slot0, name="slot0")),
            StorageData(block_num=args.block, address=address, slot=1, value=parse_word_hex(args.slot1, name="slot1")),
        ]

    env_cfg = storage_fetch_config_from_env()
    cfg = StorageFetchConfig(
        rpc_url=args.rpc_url or env_cfg.rpc_url,
        timeout_s=args.timeout_s if args.timeout_s > 0 else env_cfg.timeout_s,
    )
    if not cfg.rpc_url:
        raise ValueError("either --slot0/--slot1 or --rpc-url (or $COMETPROOF_RPC_URL) is required")
    if not args.address:
        raise ValueError("--address is required when reading from a node")
    return fetch_market_storage(Web3StorageFetcher(cfg), MarketRef(address=args.address, block_number=args.block))


def main() -> int:
    args = _build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.verify:
        return _verify_file(args.verify)

    try:
        storage = _storage_from_args(args)
        circuit = CometRatesCircuit()
        circuit_input = build_circuit_input(storage, circuit)
    except (ValueError, StorageFetchError) as exc:
        print(f"[comet-rates] FAIL: {exc}", file=sys.stderr)
        return 2

    output = circuit.define(circuit_input)
    rates = output.rates
    report = {
        "address": circuit_input.storage[0].address,
        "block": circuit_input.storage[0].block_num,
        "slot0": word_to_hex(circuit_input.slot0),
        "slot1": word_to_hex(circuit_input.slot1),
        "fields": {
            "base_supply_index": rates.fields.base_supply_index,
            "base_borrow_index": rates.fields.base_borrow_index,
            "total_supply_base": rates.fields.total_supply_base,
            "total_borrow_base": rates.fields.total_borrow_base,
        },
        "total_supply": rates.breakdown.total_supply,
        "total_borrow": rates.breakdown.total_borrow,
        "utilization": rates.utilization,
        "supply_rate": rates.supply_rate,
        "outputs": [word_to_hex(w) for w in output.output_words],
    }
    if args.artifact:
        report["artifact"] = build_proof_artifact(circuit_input, output)
    print(json.dumps(report, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
