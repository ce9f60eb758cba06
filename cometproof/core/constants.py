"""
Fixed-point scales and rate-model coefficients for the Comet market.

Values mirror the deployed contract's immutables; they are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


UINT248_BITS: Final[int] = 248
UINT248_MAX: Final[int] = (1 << UINT248_BITS) - 1

BASE_INDEX_SCALE: Final[int] = 10**15
FACTOR_SCALE: Final[int] = 10**18


@dataclass(frozen=True)
class SupplyRateParams:
    """Two-segment supply curve: slope_low below the kink, slope_high above it."""

    kink: int
    rate_base: int
    slope_low: int
    slope_high: int

    def __post_init__(self) -> None:
        for name, v in (
            ("kink", self.kink),
            ("rate_base", self.rate_base),
            ("slope_low", self.slope_low),
            ("slope_high", self.slope_high),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if not (0 <= v <= UINT248_MAX):
                raise ValueError(f"{name} out of u248 range: {v}")


SUPPLY_KINK: Final[int] = 85 * 10**16
SUPPLY_PER_SECOND_INTEREST_RATE_BASE: Final[int] = 0
SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_LOW: Final[int] = 1236681887
SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_HIGH: Final[int] = 114155251141

COMET_SUPPLY_RATE: Final[SupplyRateParams] = SupplyRateParams(
    kink=SUPPLY_KINK,
    rate_base=SUPPLY_PER_SECOND_INTEREST_RATE_BASE,
    slope_low=SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_LOW,
    slope_high=SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_HIGH,
)
