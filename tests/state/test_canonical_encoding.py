# [TESTER] v1

from __future__ import annotations

import json

import pytest

from cometproof.state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex


def test_canonical_json_is_key_order_independent() -> None:
    a = {"outputs": ["0x01"], "inputs": [{"slot": 0, "block_num": 1}]}
    b = {"inputs": [{"block_num": 1, "slot": 0}], "outputs": ["0x01"]}
    assert canonical_json_bytes(a) == canonical_json_bytes(b)
    assert canonical_json_bytes(a) == b'{"inputs":[{"block_num":1,"slot":0}],"outputs":["0x01"]}'


def test_canonical_json_keeps_big_ints_exact() -> None:
    assert canonical_json_bytes({"u": 785320331907519211}) == b'{"u":785320331907519211}'


def test_canonical_json_rejects_floats() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"rate": 0.5})
    with pytest.raises(TypeError):
        canonical_json_bytes([1, [2.0]])


def test_domain_sep_bytes() -> None:
    assert domain_sep_bytes("comet_rates_io") == b"cometproof:comet_rates_io:v1\x00"
    with pytest.raises(ValueError):
        domain_sep_bytes("bad\x00label")
    with pytest.raises(ValueError):
        domain_sep_bytes("x", version=0)


def test_sha256_hex_prefix() -> None:
    digest = sha256_hex(b"")
    assert digest == "0xe3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_reserialized_fragment_hashes_identically() -> None:
    fragment = {"outputs": ["0x" + "00" * 32], "inputs": [{"value": "0x" + "ab" * 32, "slot": 1, "block_num": 9}]}
    pretty = json.loads(json.dumps(fragment, indent=4, sort_keys=False))
    prefix = domain_sep_bytes("comet_rates_io")
    assert sha256_hex(prefix + canonical_json_bytes(pretty)) == sha256_hex(prefix + canonical_json_bytes(fragment))
    assert sha256_hex(domain_sep_bytes("comet_rates_io", version=2) + canonical_json_bytes(fragment)) != sha256_hex(
        prefix + canonical_json_bytes(fragment)
    )
