# [TESTER] v1

"""Tests for cometproof/core/uint248.py — u248 primitives."""

from __future__ import annotations

import pytest

from cometproof.core import uint248 as u
from cometproof.core.constants import FACTOR_SCALE, UINT248_MAX
from cometproof.core.errors import Uint248OverflowError


# ---------------------------------------------------------------------------
# Range checks
# ---------------------------------------------------------------------------

class TestRange:
    def test_accepts_bounds(self):
        assert u.require_u248("x", 0) == 0
        assert u.require_u248("x", UINT248_MAX) == UINT248_MAX

    def test_rejects_negative(self):
        with pytest.raises(Uint248OverflowError):
            u.require_u248("x", -1)

    def test_rejects_over_width(self):
        with pytest.raises(Uint248OverflowError, match="u248"):
            u.require_u248("x", UINT248_MAX + 1)

    def test_overflow_error_is_builtin_overflow(self):
        assert issubclass(Uint248OverflowError, OverflowError)

    def test_rejects_bool_and_float(self):
        with pytest.raises(TypeError):
            u.require_u248("x", True)
        with pytest.raises(TypeError):
            u.require_u248("x", 1.0)

    def test_product_over_width_raises(self):
        with pytest.raises(Uint248OverflowError):
            u.mul(1 << 124, 1 << 124)

    def test_add_over_width_raises(self):
        with pytest.raises(Uint248OverflowError):
            u.add(UINT248_MAX, 1)


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

class TestDiv:
    def test_quotient_and_remainder(self):
        assert u.div(17, 5) == (3, 2)

    def test_exact(self):
        assert u.div(10**18, 10**15) == (1000, 0)

    def test_zero_divisor_is_caller_error(self):
        with pytest.raises(ZeroDivisionError):
            u.div(1, 0)

    def test_mul_div_truncates(self):
        assert u.mul_div(7, 3, 2) == 10

    def test_mul_div_multiplies_first(self):
        # (1 * 3) // 2 == 1, whereas 1 // 2 * 3 == 0.
        assert u.mul_div(1, 3, 2) == 1

    def test_mul_div_full_width_product(self):
        a = (1 << 104) - 1
        b = (1 << 64) - 1
        assert u.mul_div(a, b, 10**15) == (a * b) // 10**15

    def test_mul_factor(self):
        assert u.mul_factor(1236681887, 85 * 10**16) == 1_051_179_603
        assert u.mul_factor(5, FACTOR_SCALE) == 5


# ---------------------------------------------------------------------------
# Subtraction
# ---------------------------------------------------------------------------

class TestSub:
    def test_sub_clamped_positive(self):
        assert u.sub_clamped(10, 3) == 7

    def test_sub_clamped_equal(self):
        assert u.sub_clamped(5, 5) == 0

    def test_sub_clamped_floors_at_zero(self):
        assert u.sub_clamped(3, 10) == 0


# ---------------------------------------------------------------------------
# Predicates / select
# ---------------------------------------------------------------------------

class TestSelect:
    def test_predicates_are_circuit_bits(self):
        assert u.is_zero(0) == 1 and u.is_zero(5) == 0
        assert u.is_greater_than(2, 1) == 1
        assert u.is_greater_than(1, 1) == 0
        assert u.is_greater_or_equal(1, 1) == 1
        assert type(u.is_zero(0)) is int

    def test_select_true(self):
        assert u.select(1, 11, 22) == 11

    def test_select_false(self):
        assert u.select(0, 11, 22) == 22

    def test_select_rejects_non_bit(self):
        with pytest.raises(ValueError):
            u.select(2, 11, 22)

    def test_select_range_checks_both_candidates(self):
        with pytest.raises(Uint248OverflowError):
            u.select(1, 11, UINT248_MAX + 1)
