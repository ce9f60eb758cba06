# [TESTER] v1

"""Tests for cometproof/core/supply_rate.py — kinked supply curve."""

from __future__ import annotations

import pytest

from cometproof.core.constants import (
    COMET_SUPPLY_RATE,
    FACTOR_SCALE,
    SUPPLY_KINK,
    SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_HIGH,
    SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_LOW,
    SupplyRateParams,
)
from cometproof.core.supply_rate import get_supply_rate, high_segment_rate, low_segment_rate

RATE_AT_KINK = 1_051_179_603  # 1236681887 * 0.85, truncated


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------

class TestSegments:
    def test_low_at_zero(self):
        assert low_segment_rate(0) == 0

    def test_low_segment(self):
        u = 5 * 10**17
        assert low_segment_rate(u) == SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_LOW * u // FACTOR_SCALE

    def test_high_segment_above_kink(self):
        # 114155251141 * 0.05 = 5707762557.05
        assert high_segment_rate(9 * 10**17) == RATE_AT_KINK + 5_707_762_557

    def test_high_segment_is_defined_below_kink(self):
        # Evaluated unconditionally; the clamped excess keeps it at the kink value.
        assert high_segment_rate(0) == RATE_AT_KINK
        assert high_segment_rate(SUPPLY_KINK - 1) == RATE_AT_KINK


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class TestSupplyRate:
    def test_observed_market(self, arbitrum_usdc):
        assert get_supply_rate(arbitrum_usdc["utilization"]) == arbitrum_usdc["supply_rate"]

    def test_zero_utilization(self):
        assert get_supply_rate(0) == 0

    def test_continuity_at_kink(self):
        assert low_segment_rate(SUPPLY_KINK) == high_segment_rate(SUPPLY_KINK)
        assert get_supply_rate(SUPPLY_KINK) == RATE_AT_KINK

    def test_kink_is_strict(self):
        # At the kink the low segment is selected; one past it, the high one.
        assert get_supply_rate(SUPPLY_KINK) == low_segment_rate(SUPPLY_KINK)
        assert get_supply_rate(SUPPLY_KINK + 1) == high_segment_rate(SUPPLY_KINK + 1)

    def test_full_utilization(self):
        expected = RATE_AT_KINK + SUPPLY_PER_SECOND_INTEREST_RATE_SLOPE_HIGH * 15 * 10**16 // FACTOR_SCALE
        assert get_supply_rate(FACTOR_SCALE) == expected == 18_174_467_274

    def test_custom_params(self):
        params = SupplyRateParams(kink=FACTOR_SCALE // 2, rate_base=7, slope_low=FACTOR_SCALE, slope_high=2 * FACTOR_SCALE)
        assert get_supply_rate(FACTOR_SCALE // 4, params) == 7 + FACTOR_SCALE // 4
        assert get_supply_rate(FACTOR_SCALE, params) == 7 + FACTOR_SCALE // 2 + FACTOR_SCALE

    def test_params_are_validated(self):
        with pytest.raises(ValueError):
            SupplyRateParams(kink=-1, rate_base=0, slope_low=0, slope_high=0)
        with pytest.raises(TypeError):
            SupplyRateParams(kink=1, rate_base=0, slope_low=0.5, slope_high=0)

    def test_comet_params_are_frozen(self):
        with pytest.raises(AttributeError):
            COMET_SUPPLY_RATE.kink = 0  # type: ignore[misc]
