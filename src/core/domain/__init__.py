"""
Domain models and value objects.

Contains the bonding curve parameters, the reconciled curve state and the
enumeration of user-editable inputs.
"""

from src.core.domain.curve import (
    DEFAULT_CURRENT_SUPPLY,
    DEFAULT_DELTA,
    DEFAULT_GROWTH_RATE,
    DEFAULT_INITIAL_PRICE,
    CurveInput,
    CurveParameters,
    CurveState,
)

__all__ = [
    # Defaults
    "DEFAULT_INITIAL_PRICE",
    "DEFAULT_GROWTH_RATE",
    "DEFAULT_CURRENT_SUPPLY",
    "DEFAULT_DELTA",
    # Curve models
    "CurveInput",
    "CurveParameters",
    "CurveState",
]
