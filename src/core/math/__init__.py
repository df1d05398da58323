"""
Core math modules для bonding curve

Математические примитивы кривой и численные safeguards.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    SUPPLY_UNIT,
    clamp,
    is_close,
    is_valid_float,
    round_half_up,
    sanitize_float,
    validate_finite,
    validate_positive,
)

# Bonding Curve
from src.core.math.bonding_curve import (
    BondingCurve,
    InvalidInput,
    price,
    sample_prices,
    supply_for_price,
    total_funds,
    trade_funds,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "SUPPLY_UNIT",
    # Numerical Safeguards — Functions
    "clamp",
    "is_close",
    "is_valid_float",
    "round_half_up",
    "sanitize_float",
    "validate_finite",
    "validate_positive",
    # Bonding Curve — Exceptions
    "InvalidInput",
    # Bonding Curve — Types
    "BondingCurve",
    # Bonding Curve — Functions
    "price",
    "sample_prices",
    "supply_for_price",
    "total_funds",
    "trade_funds",
]
