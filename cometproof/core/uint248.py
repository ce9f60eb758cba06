"""
Unsigned 248-bit fixed-point arithmetic.

Every function is stateless and operates on plain Python ints. Inputs and
results are range-checked against the proving backend's native word, so a value
the circuit could not carry raises `Uint248OverflowError` instead of silently
wrapping.

Rounding is explicit: division uses `//` (truncation, since all operands are
non-negative). Products are formed before the division in every helper.

Predicates return circuit booleans (the ints 0 or 1) so they can feed `select`.
"""

from __future__ import annotations

from .constants import FACTOR_SCALE, UINT248_MAX
from .errors import Uint248OverflowError


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u248(name: str, value: int) -> int:
    """Return *value* unchanged if it is an int in ``[0, 2**248)``."""
    _require_int(name, value)
    if value < 0 or value > UINT248_MAX:
        raise Uint248OverflowError(f"{name} out of u248 range: {value}")
    return value


def _require_bit(name: str, value: int) -> None:
    _require_int(name, value)
    if value not in (0, 1):
        raise ValueError(f"{name} must be 0 or 1, got {value}")


# -- Basic ops ---------------------------------------------------------------

def add(a: int, b: int) -> int:
    require_u248("a", a)
    require_u248("b", b)
    return require_u248("a + b", a + b)


def sub_clamped(a: int, b: int) -> int:
    """``max(a - b, 0)`` without ever forming a negative intermediate."""
    require_u248("a", a)
    require_u248("b", b)
    return select(is_greater_or_equal(a, b), a, b) - b


def mul(a: int, b: int) -> int:
    require_u248("a", a)
    require_u248("b", b)
    return require_u248("a * b", a * b)


def div(a: int, b: int) -> tuple[int, int]:
    """
    Truncating division: ``(a // b, a - (a // b) * b)``.

    Defined only for ``b > 0``. Callers guarding a possibly-zero divisor must
    substitute a safe one with `select` before calling.
    """
    require_u248("a", a)
    require_u248("b", b)
    if b == 0:
        raise ZeroDivisionError("u248 division by zero")
    quotient = a // b
    return quotient, a - quotient * b


def mul_div(a: int, b: int, divisor: int) -> int:
    """``floor(a * b / divisor)`` using the full-width product."""
    quotient, _ = div(mul(a, b), divisor)
    return quotient


def mul_factor(n: int, factor: int) -> int:
    """Multiply *n* by a ``FACTOR_SCALE``-scaled *factor*, truncating."""
    return mul_div(n, factor, FACTOR_SCALE)


# -- Predicates / selection --------------------------------------------------

def is_zero(a: int) -> int:
    require_u248("a", a)
    return int(a == 0)


def is_greater_than(a: int, b: int) -> int:
    require_u248("a", a)
    require_u248("b", b)
    return int(a > b)


def is_greater_or_equal(a: int, b: int) -> int:
    require_u248("a", a)
    require_u248("b", b)
    return int(a >= b)


def select(cond: int, if_true: int, if_false: int) -> int:
    """
    Oblivious selection: ``cond * if_true + (1 - cond) * if_false``.

    Both candidates must already be computed; nothing is skipped.
    """
    _require_bit("cond", cond)
    require_u248("if_true", if_true)
    require_u248("if_false", if_false)
    return cond * if_true + (1 - cond) * if_false
