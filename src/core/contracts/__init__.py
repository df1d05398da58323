"""
Contract Validation Module

Модуль для валидации JSON контрактов параметров и состояния кривой.
"""

from .validators import (
    ContractValidator,
    CurveParametersValidator,
    CurveStateValidator,
    SchemaLoader,
    validate_curve_parameters,
    validate_curve_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CurveParametersValidator",
    "CurveStateValidator",
    # Functions
    "validate_curve_parameters",
    "validate_curve_state",
]
