# [TESTER] v1

from __future__ import annotations

import pytest

from cometproof.core.constants import UINT248_MAX
from cometproof.core.errors import Uint248OverflowError
from cometproof.state.words import encode_output_words, int_to_word, parse_word_hex, word_to_hex, word_to_int


def test_parse_word_hex_accepts_prefixed_and_bare() -> None:
    h = "00" * 31 + "2a"
    assert word_to_int(parse_word_hex("0x" + h)) == 42
    assert word_to_int(parse_word_hex(h.upper())) == 42


def test_parse_word_hex_rejects_short_values() -> None:
    # Short hex is not silently left-padded.
    with pytest.raises(ValueError):
        parse_word_hex("0x2a")


def test_parse_word_hex_rejects_whitespace_even_if_length_matches() -> None:
    bad = "0x" + ("aa" * 31) + " a"
    with pytest.raises(ValueError):
        parse_word_hex(bad, name="slot0")


def test_word_hex_round_trip(arbitrum_usdc) -> None:
    assert word_to_hex(parse_word_hex(arbitrum_usdc["slot1"])) == arbitrum_usdc["slot1"].lower()


def test_int_to_word_is_big_endian() -> None:
    assert int_to_word(1) == b"\x00" * 31 + b"\x01"
    with pytest.raises(ValueError):
        int_to_word(1 << 256)


def test_encode_output_words_order_and_width(arbitrum_usdc) -> None:
    util_word, rate_word = encode_output_words(arbitrum_usdc["utilization"], arbitrum_usdc["supply_rate"])
    assert len(util_word) == 32 and len(rate_word) == 32
    assert word_to_int(util_word) == 785320331907519211
    assert word_to_int(rate_word) == 971191429
    assert word_to_hex(rate_word) == "0x" + "00" * 28 + "39e33485"


def test_encode_output_words_rejects_values_wider_than_u248() -> None:
    # Fits a 32-byte word, but not the circuit's 248-bit output value.
    with pytest.raises(Uint248OverflowError):
        encode_output_words(UINT248_MAX + 1, 0)
    with pytest.raises(Uint248OverflowError):
        encode_output_words(0, -1)
    with pytest.raises(TypeError):
        encode_output_words(0, True)
    assert encode_output_words(UINT248_MAX, 0)[0] == b"\x00" + b"\xff" * 31
