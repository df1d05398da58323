"""
Curve — Модели параметров и состояния bonding curve

Immutable Pydantic модели:
- CurveParameters: константы экспоненциальной кривой price(s) = P0 * e^(k * s)
- CurveState: согласованный снапшот supply / delta / new_supply / funds
- CurveInput: какое поле формы изменилось

CurveState никогда не обновляется частично: каждое изменение создаёт новый
экземпляр через reconcile (src.reconcile.state_machine).
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import is_close

# =============================================================================
# DEFAULTS
# =============================================================================

# Цена при нулевом supply (USDC)
DEFAULT_INITIAL_PRICE: Final[float] = 1.0

# Скорость роста k в e^(k * supply)
DEFAULT_GROWTH_RATE: Final[float] = 0.001

# Стартовое состояние виджета
DEFAULT_CURRENT_SUPPLY: Final[float] = 4000.0
DEFAULT_DELTA: Final[float] = 1000.0


# =============================================================================
# ENUMS
# =============================================================================


class CurveInput(str, Enum):
    """Поле, изменённое пользователем"""

    SUPPLY = "supply"
    DELTA = "delta"
    PRICE = "price"


# =============================================================================
# CURVE PARAMETERS
# =============================================================================


class CurveParameters(BaseModel):
    """
    Параметры экспоненциальной bonding curve.

    price(supply) = initial_price * e^(growth_rate * supply)

    growth_rate = 0 вырождается в постоянную цену, отрицательный growth_rate
    не моделируется, поэтому оба поля строго положительны.
    """

    initial_price: float = Field(
        DEFAULT_INITIAL_PRICE, gt=0, allow_inf_nan=False, description="Цена при supply = 0 (USDC)"
    )
    growth_rate: float = Field(
        DEFAULT_GROWTH_RATE, gt=0, allow_inf_nan=False, description="Скорость роста цены k"
    )

    model_config = {"frozen": True}


# =============================================================================
# CURVE STATE
# =============================================================================


class CurveState(BaseModel):
    """
    Согласованный снапшот состояния кривой.

    Инварианты:
    - current_supply >= 0, new_supply >= 0
    - new_supply = max(current_supply + delta, 0)
    - is_burn = delta < 0
    - все значения конечны (NaN/Inf запрещены)

    price/new_price/total_funds/trade_funds: производные величины, которые
    reconcile пересчитывает вместе с supply в одном шаге.
    """

    current_supply: float = Field(..., ge=0, allow_inf_nan=False, description="Текущий supply")
    delta: float = Field(
        ..., allow_inf_nan=False, description="Изменение supply (> 0 mint, < 0 burn)"
    )
    new_supply: float = Field(..., ge=0, allow_inf_nan=False, description="Supply после сделки")

    price: float = Field(..., gt=0, allow_inf_nan=False, description="Цена при current_supply")
    new_price: float = Field(..., gt=0, allow_inf_nan=False, description="Цена при new_supply")
    total_funds: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Стоимость mint от 0 до new_supply"
    )
    trade_funds: float = Field(
        ...,
        allow_inf_nan=False,
        description="Стоимость сделки (> 0 оплата за mint, < 0 возврат за burn)",
    )
    is_burn: bool = Field(..., description="True если delta < 0")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_consistency(self) -> "CurveState":
        """Проверка согласованности new_supply и is_burn с delta."""
        expected_new_supply = max(self.current_supply + self.delta, 0.0)
        if not is_close(self.new_supply, expected_new_supply):
            raise ValueError(
                f"new_supply {self.new_supply} inconsistent with "
                f"current_supply {self.current_supply} + delta {self.delta}"
            )
        if self.is_burn != (self.delta < 0):
            raise ValueError(f"is_burn={self.is_burn} inconsistent with delta {self.delta}")
        return self

    @property
    def is_mint(self) -> bool:
        """True если сделка увеличивает supply."""
        return self.delta > 0

    @property
    def effective_delta(self) -> float:
        """Фактическое изменение supply после clamp (burn не ниже нуля)."""
        return self.new_supply - self.current_supply
