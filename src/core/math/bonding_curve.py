"""
Bonding Curve — Exponential Price / Supply / Funds

Модуль реализует чистые функции экспоненциальной bonding curve:
- price(s): цена токена при supply s
- supply_for_price(p): обратная функция (не округляется)
- total_funds(s): интеграл цены от 0 до s (стоимость mint с пустого пула)
- trade_funds(s, d): стоимость (d > 0) или возврат (d < 0) перехода s → s + d

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. price > 0 и строго возрастает по supply
2. supply_for_price(price(s)) ≈ s
3. total_funds(0) == 0, total_funds строго возрастает
4. trade_funds(s, d) == -trade_funds(s + d, -d)
5. NaN/Inf никогда не возвращаются: overflow → InvalidInput

ФОРМУЛЫ:
    price(s)        = P0 * e^(k * s)
    supply(p)       = ln(p / P0) / k
    total_funds(s)  = (P0 / k) * (e^(k * s) - 1)
    trade_funds(s,d) = total_funds(s + d) - total_funds(s)
"""

import math
from typing import TYPE_CHECKING

import numpy as np

from src.core.math.numerical_safeguards import is_valid_float

if TYPE_CHECKING:
    from src.core.domain.curve import CurveParameters


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidInput(ValueError):
    """
    Вход вне домена кривой.

    Возникает при price <= 0 (логарифм не определён), NaN/Inf на входе,
    либо когда результат переполняет float. Политика вызывающей стороны:
    отклонить ввод и сохранить предыдущее валидное состояние.
    """

    pass


# =============================================================================
# HELPERS
# =============================================================================


def _require_finite(value: float, name: str) -> float:
    if not is_valid_float(value):
        raise InvalidInput(f"{name} must be a finite number, got {value}")
    return value


def _exp_scaled(params: "CurveParameters", supply: float, minus_one: bool = False) -> float:
    """e^(k * supply) или e^(k * supply) - 1 с переводом overflow в InvalidInput."""
    _require_finite(supply, "supply")
    exponent = params.growth_rate * supply
    try:
        result = math.expm1(exponent) if minus_one else math.exp(exponent)
    except OverflowError as e:
        raise InvalidInput(f"supply {supply} overflows the curve (k*s = {exponent:.3f})") from e
    return result


# =============================================================================
# CURVE FUNCTIONS
# =============================================================================


def price(params: "CurveParameters", supply: float) -> float:
    """
    Цена токена при заданном supply.

    price(s) = initial_price * e^(growth_rate * s)

    Вызывающая сторона клампит supply к >= 0 до вызова.

    Args:
        params: Параметры кривой
        supply: Circulating supply (токены)

    Returns:
        Цена (USDC), строго положительная

    Raises:
        InvalidInput: supply NaN/Inf либо цена переполняет float

    Examples:
        >>> price(CurveParameters(initial_price=1.0, growth_rate=0.001), 4000)
        54.598150033144236
    """
    result = params.initial_price * _exp_scaled(params, supply)
    return _require_finite(result, "price")


def supply_for_price(params: "CurveParameters", unit_price: float) -> float:
    """
    Обратная функция к price: supply, при котором достигается цена.

    supply(p) = ln(p / initial_price) / growth_rate

    Результат НЕ округляется; для цены ниже initial_price он отрицателен.

    Raises:
        InvalidInput: unit_price <= 0 или NaN/Inf, либо отношение
            unit_price / initial_price переполняет float или уходит в 0
    """
    _require_finite(unit_price, "price")
    if unit_price <= 0:
        raise InvalidInput(f"price must be positive, got {unit_price}")

    ratio = _require_finite(unit_price / params.initial_price, "price ratio")
    if ratio <= 0:
        raise InvalidInput(
            f"price {unit_price} underflows relative to initial_price {params.initial_price}"
        )

    supply = math.log(ratio) / params.growth_rate
    return _require_finite(supply, "supply")


def total_funds(params: "CurveParameters", supply: float) -> float:
    """
    Суммарная стоимость mint от пустого пула до supply.

    total_funds(s) = (P0 / k) * (e^(k * s) - 1), определённый интеграл price
    на [0, s]. expm1 сохраняет точность при малых k * s.

    Returns:
        Funds (USDC); 0 при supply = 0

    Examples:
        >>> round(total_funds(CurveParameters(initial_price=1.0, growth_rate=0.001), 4000), 2)
        53598.15
    """
    growth = _exp_scaled(params, supply, minus_one=True)
    result = (params.initial_price / params.growth_rate) * growth
    return _require_finite(result, "total_funds")


def trade_funds(params: "CurveParameters", from_supply: float, delta: float) -> float:
    """
    Денежный поток сделки: переход from_supply → from_supply + delta.

    trade_funds(s, d) = total_funds(s + d) - total_funds(s)

    Returns:
        > 0: стоимость mint (собрать с пользователя)
        < 0: возврат за burn (выплатить пользователю)
    """
    _require_finite(delta, "delta")
    return total_funds(params, from_supply + delta) - total_funds(params, from_supply)


def sample_prices(params: "CurveParameters", supplies: np.ndarray) -> np.ndarray:
    """
    Векторизованная оценка price по массиву supply (для построения графика).

    Raises:
        InvalidInput: если хотя бы одно значение не конечно
    """
    supplies = np.asarray(supplies, dtype=float)
    with np.errstate(over="ignore"):
        prices = params.initial_price * np.exp(params.growth_rate * supplies)
    if not np.all(np.isfinite(prices)):
        raise InvalidInput("sampled supply range overflows the curve")
    return prices


# =============================================================================
# CURVE OBJECT
# =============================================================================


class BondingCurve:
    """
    Экспоненциальная bonding curve с зафиксированными параметрами.

    Тонкая обёртка над функциями модуля; хранит только immutable
    CurveParameters и потому безопасна для совместного использования.
    """

    def __init__(self, params: "CurveParameters"):
        self.params = params

    def price(self, supply: float) -> float:
        return price(self.params, supply)

    def supply_for_price(self, unit_price: float) -> float:
        return supply_for_price(self.params, unit_price)

    def total_funds(self, supply: float) -> float:
        return total_funds(self.params, supply)

    def trade_funds(self, from_supply: float, delta: float) -> float:
        return trade_funds(self.params, from_supply, delta)

    def sample_prices(self, supplies: np.ndarray) -> np.ndarray:
        return sample_prices(self.params, supplies)

    def __repr__(self) -> str:
        return (
            f"BondingCurve(initial_price={self.params.initial_price}, "
            f"growth_rate={self.params.growth_rate})"
        )
