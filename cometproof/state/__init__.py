"""
Storage word layouts and encodings
"""

from .slot_layout import (
    COMET_SLOT0_LAYOUT,
    COMET_SLOT1_LAYOUT,
    MarketFields,
    PackedField,
    SlotLayout,
    decode_market_fields,
    decode_word,
    encode_fields,
)
from .words import encode_output_words, parse_word_hex, word_to_hex, word_to_int

__all__ = [
    "COMET_SLOT0_LAYOUT",
    "COMET_SLOT1_LAYOUT",
    "MarketFields",
    "PackedField",
    "SlotLayout",
    "decode_market_fields",
    "decode_word",
    "encode_fields",
    "encode_output_words",
    "parse_word_hex",
    "word_to_hex",
    "word_to_int",
]
