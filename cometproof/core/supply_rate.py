"""
Kinked per-second supply rate, as in `Comet.getSupplyRate(utilization)`.

Both segments are evaluated on every call and the result is chosen with
`select`; the high segment uses a clamped subtraction so it stays defined (and
equal to the kink value) when utilization is at or below the kink.
"""

from __future__ import annotations

import logging

from . import uint248 as u
from .constants import COMET_SUPPLY_RATE, SupplyRateParams


logger = logging.getLogger(__name__)


def low_segment_rate(utilization: int, params: SupplyRateParams = COMET_SUPPLY_RATE) -> int:
    """``base + slope_low * u / 1e18``."""
    return u.add(params.rate_base, u.mul_factor(params.slope_low, utilization))


def high_segment_rate(utilization: int, params: SupplyRateParams = COMET_SUPPLY_RATE) -> int:
    """``base + slope_low * kink / 1e18 + slope_high * (u - kink) / 1e18``, with ``u - kink`` floored at 0."""
    at_kink = u.add(params.rate_base, u.mul_factor(params.slope_low, params.kink))
    excess = u.sub_clamped(utilization, params.kink)
    return u.add(at_kink, u.mul_factor(params.slope_high, excess))


def get_supply_rate(utilization: int, params: SupplyRateParams = COMET_SUPPLY_RATE) -> int:
    low = low_segment_rate(utilization, params)
    high = high_segment_rate(utilization, params)
    above_kink = u.is_greater_than(utilization, params.kink)
    rate = u.select(above_kink, high, low)
    logger.debug("supply rate utilization=%d above_kink=%d rate=%d", utilization, above_kink, rate)
    return rate
