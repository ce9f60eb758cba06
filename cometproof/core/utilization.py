"""
Utilization ratio of a Comet market.

Mirrors `Comet.getUtilization()`:

    totalSupply = presentValueSupply(baseSupplyIndex, totalSupplyBase)
    totalBorrow = presentValueBorrow(baseBorrowIndex, totalBorrowBase)
    utilization = totalSupply == 0 ? 0 : totalBorrow * FACTOR_SCALE / totalSupply

The zero-supply case is resolved by selection, not by skipping the division:
the divisor is swapped for 1 when supply is zero, the quotient is always
computed, and the mask then picks 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import uint248 as u
from .constants import BASE_INDEX_SCALE, FACTOR_SCALE


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UtilizationBreakdown:
    total_supply: int
    total_borrow: int
    supply_is_zero: int
    safe_divisor: int
    utilization: int


def present_value(principal_base: int, base_index: int) -> int:
    """Base-denominated principal to present value: ``principal * index / 1e15``."""
    return u.mul_div(principal_base, base_index, BASE_INDEX_SCALE)


def utilization_breakdown(
    *,
    base_supply_index: int,
    base_borrow_index: int,
    total_supply_base: int,
    total_borrow_base: int,
) -> UtilizationBreakdown:
    total_supply = present_value(total_supply_base, base_supply_index)
    total_borrow = present_value(total_borrow_base, base_borrow_index)

    supply_is_zero = u.is_zero(total_supply)
    safe_divisor = u.select(supply_is_zero, 1, total_supply)
    ratio = u.mul_div(total_borrow, FACTOR_SCALE, safe_divisor)
    utilization = u.select(supply_is_zero, 0, ratio)

    logger.debug(
        "utilization total_supply=%d total_borrow=%d utilization=%d",
        total_supply,
        total_borrow,
        utilization,
    )
    return UtilizationBreakdown(
        total_supply=total_supply,
        total_borrow=total_borrow,
        supply_is_zero=supply_is_zero,
        safe_divisor=safe_divisor,
        utilization=utilization,
    )


def get_utilization(
    *,
    base_supply_index: int,
    base_borrow_index: int,
    total_supply_base: int,
    total_borrow_base: int,
) -> int:
    return utilization_breakdown(
        base_supply_index=base_supply_index,
        base_borrow_index=base_borrow_index,
        total_supply_base=total_supply_base,
        total_borrow_base=total_borrow_base,
    ).utilization
