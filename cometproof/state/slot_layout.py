"""
Declarative packed-field layouts for Comet storage slots.

A layout is a fixed list of `(name, byte_offset, byte_width)` descriptors.
Offsets are counted from the least significant byte of the word, which is how
Solidity packs consecutive state variables into one slot: the first declared
variable occupies the low-order bytes.

Decoding goes through the word's bit decomposition (LSB first), the same view
a circuit gets from a bytes32 input. A field is the unsigned integer formed by
the contiguous run of bits ``[8 * offset, 8 * (offset + width))``; the layout
validator guarantees those runs are disjoint and inside the word, so decoding
is lossless and `encode_fields` is its exact inverse on the covered bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from ..core.errors import DecodeConfigurationError
from .words import WORD_BITS, WORD_BYTES, int_to_word, require_word, word_to_int


@dataclass(frozen=True)
class PackedField:
    name: str
    byte_offset: int
    byte_width: int

    @property
    def bit_offset(self) -> int:
        return self.byte_offset * 8

    @property
    def bit_width(self) -> int:
        return self.byte_width * 8

    @property
    def max_value(self) -> int:
        return (1 << self.bit_width) - 1

    def byte_slice(self) -> slice:
        """Slice of the big-endian 32-byte buffer holding this field."""
        end = WORD_BYTES - self.byte_offset
        return slice(end - self.byte_width, end)


@dataclass(frozen=True)
class SlotLayout:
    """
    Named field schema for one storage slot.

    Validation happens here, at construction: any bad descriptor is a
    configuration error, never a condition on live storage data.
    """

    slot: int
    fields: tuple[PackedField, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.slot, int) or isinstance(self.slot, bool) or self.slot < 0:
            raise DecodeConfigurationError(f"slot must be a non-negative int: {self.slot!r}")
        if not self.fields:
            raise DecodeConfigurationError("layout must declare at least one field")

        seen: set[str] = set()
        occupied = 0
        for f in self.fields:
            if not isinstance(f, PackedField):
                raise DecodeConfigurationError("layout fields must be PackedField")
            if not f.name:
                raise DecodeConfigurationError("field name must be non-empty")
            if f.name in seen:
                raise DecodeConfigurationError(f"duplicate field name: {f.name}")
            seen.add(f.name)
            for attr in ("byte_offset", "byte_width"):
                v = getattr(f, attr)
                if not isinstance(v, int) or isinstance(v, bool):
                    raise DecodeConfigurationError(f"{f.name}.{attr} must be an int")
            if f.byte_offset < 0 or f.byte_width <= 0:
                raise DecodeConfigurationError(
                    f"{f.name}: offset must be >= 0 and width > 0 (got {f.byte_offset}, {f.byte_width})"
                )
            if f.byte_offset + f.byte_width > WORD_BYTES:
                raise DecodeConfigurationError(
                    f"{f.name}: bytes [{f.byte_offset}, {f.byte_offset + f.byte_width}) exceed {WORD_BYTES}-byte word"
                )
            mask = f.max_value << f.bit_offset
            if occupied & mask:
                raise DecodeConfigurationError(f"{f.name}: overlaps another field")
            occupied |= mask

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> PackedField:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


def make_layout(slot: int, descriptors: Sequence[tuple[str, int, int]]) -> SlotLayout:
    return SlotLayout(
        slot=slot,
        fields=tuple(PackedField(name=n, byte_offset=o, byte_width=w) for n, o, w in descriptors),
    )


# -- Bit decomposition -------------------------------------------------------

def word_to_bits(word: bytes) -> list[int]:
    """256 bits of *word*, least significant first."""
    value = word_to_int(word)
    return [(value >> i) & 1 for i in range(WORD_BITS)]


def bits_to_uint(bits: Sequence[int]) -> int:
    """Recompose an unsigned integer from bits, least significant first."""
    out = 0
    for i, b in enumerate(bits):
        if b not in (0, 1) or isinstance(b, bool):
            raise ValueError(f"bit {i} must be 0 or 1, got {b!r}")
        out |= b << i
    return out


def field_bits(bits: Sequence[int], field: PackedField) -> Sequence[int]:
    if len(bits) != WORD_BITS:
        raise ValueError(f"expected {WORD_BITS} bits, got {len(bits)}")
    return bits[field.bit_offset : field.bit_offset + field.bit_width]


# -- Decode / encode ---------------------------------------------------------

def decode_word(word: bytes, layout: SlotLayout) -> Dict[str, int]:
    """Decode every field of *layout* from *word*."""
    bits = word_to_bits(require_word("word", word))
    return {f.name: bits_to_uint(field_bits(bits, f)) for f in layout.fields}


def encode_fields(
    values: Mapping[str, int],
    layout: SlotLayout,
    *,
    base: Optional[bytes] = None,
) -> bytes:
    """
    Pack field *values* into a word, starting from *base* (default: zero word).

    Bytes not covered by the layout are taken from *base* unchanged.
    """
    missing = [n for n in layout.names if n not in values]
    if missing:
        raise KeyError(f"missing field values: {', '.join(missing)}")
    extra = sorted(set(values) - set(layout.names))
    if extra:
        raise KeyError(f"unknown field values: {', '.join(extra)}")

    out = word_to_int(base) if base is not None else 0
    for f in layout.fields:
        v = values[f.name]
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{f.name} must be an int")
        if v < 0 or v > f.max_value:
            raise ValueError(f"{f.name} does not fit in {f.bit_width} bits: {v}")
        out &= ~(f.max_value << f.bit_offset)
        out |= v << f.bit_offset
    return int_to_word(out)


# -- Comet slot schema -------------------------------------------------------

# slot 0: uint64 baseSupplyIndex, uint64 baseBorrowIndex, then tracking indexes.
COMET_SLOT0_LAYOUT = make_layout(
    0,
    (
        ("base_supply_index", 0, 8),
        ("base_borrow_index", 8, 8),
    ),
)

# slot 1: uint104 totalSupplyBase, uint104 totalBorrowBase, then lastAccrualTime etc.
COMET_SLOT1_LAYOUT = make_layout(
    1,
    (
        ("total_supply_base", 0, 13),
        ("total_borrow_base", 13, 13),
    ),
)


@dataclass(frozen=True)
class MarketFields:
    """The four integers the rates pipeline consumes."""

    base_supply_index: int
    base_borrow_index: int
    total_supply_base: int
    total_borrow_base: int


def decode_market_fields(slot0: bytes, slot1: bytes) -> MarketFields:
    s0 = decode_word(slot0, COMET_SLOT0_LAYOUT)
    s1 = decode_word(slot1, COMET_SLOT1_LAYOUT)
    return MarketFields(
        base_supply_index=s0["base_supply_index"],
        base_borrow_index=s0["base_borrow_index"],
        total_supply_base=s1["total_supply_base"],
        total_borrow_base=s1["total_borrow_base"],
    )
