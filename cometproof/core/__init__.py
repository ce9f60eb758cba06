"""
Fixed-point arithmetic and rate models for the Comet rates circuit
"""

from .constants import (
    BASE_INDEX_SCALE,
    COMET_SUPPLY_RATE,
    FACTOR_SCALE,
    SUPPLY_KINK,
    SupplyRateParams,
)
from .errors import ConstraintViolation, DecodeConfigurationError, Uint248OverflowError
from .supply_rate import get_supply_rate, high_segment_rate, low_segment_rate
from .utilization import UtilizationBreakdown, get_utilization, utilization_breakdown

__all__ = [
    "BASE_INDEX_SCALE",
    "COMET_SUPPLY_RATE",
    "FACTOR_SCALE",
    "SUPPLY_KINK",
    "SupplyRateParams",
    "ConstraintViolation",
    "DecodeConfigurationError",
    "Uint248OverflowError",
    "get_supply_rate",
    "high_segment_rate",
    "low_segment_rate",
    "UtilizationBreakdown",
    "get_utilization",
    "utilization_breakdown",
]
