"""
32-byte storage word helpers.

A storage word is a `bytes` object of exactly 32 bytes, read as a big-endian
unsigned integer. These helpers are the only place words are parsed from hex
or produced from integers, including the two public output words.
"""

from __future__ import annotations

import re

from ..core.uint248 import require_u248


WORD_BYTES = 32
WORD_BITS = WORD_BYTES * 8
WORD_MAX = (1 << WORD_BITS) - 1

_HEX_WORD_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def require_word(name: str, word: bytes) -> bytes:
    if not isinstance(word, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes")
    if len(word) != WORD_BYTES:
        raise ValueError(f"{name} must be {WORD_BYTES} bytes, got {len(word)}")
    return bytes(word)


def parse_word_hex(value: str, *, name: str = "word") -> bytes:
    """
    Parse a 0x-prefixed (or bare) 64-hex-digit string into a storage word.

    Shorter values are rejected rather than left-padded; whitespace is rejected
    because `bytes.fromhex()` would otherwise ignore it.
    """
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str")
    s = value[2:] if value[:2] in ("0x", "0X") else value
    if not _HEX_WORD_RE.fullmatch(s):
        raise ValueError(f"{name} must be 32-byte hex (64 hex digits)")
    return bytes.fromhex(s)


def word_to_hex(word: bytes) -> str:
    return "0x" + require_word("word", word).hex()


def word_to_int(word: bytes) -> int:
    return int.from_bytes(require_word("word", word), byteorder="big", signed=False)


def int_to_word(value: int) -> bytes:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be an int")
    if value < 0 or value > WORD_MAX:
        raise ValueError(f"value out of u256 range: {value}")
    return value.to_bytes(WORD_BYTES, byteorder="big", signed=False)


def encode_output_words(utilization: int, supply_rate: int) -> tuple[bytes, bytes]:
    """Pack the two public results, in order, as big-endian storage words."""
    require_u248("utilization", utilization)
    require_u248("supply_rate", supply_rate)
    return int_to_word(utilization), int_to_word(supply_rate)
