"""
Chart Series — данные для отрисовки bonding curve

Подготавливает серии, которые рендерер (любая библиотека графиков) рисует
без собственной математики:
- кривая price по окну supply
- impact area между current_supply и new_supply (NaN вне интервала)
- маркеры current_supply и new_supply
"""

from dataclasses import dataclass
from typing import Final

import numpy as np

from src.core.domain.curve import CurveParameters, CurveState
from src.core.math.bonding_curve import BondingCurve
from src.core.math.numerical_safeguards import validate_positive

# Ключи заливки impact area
FILL_MINT: Final[str] = "mint"
FILL_BURN: Final[str] = "burn"


@dataclass(frozen=True)
class ChartWindowConfig:
    """Видимое окно графика.

    max_supply: последняя точка выборки кривой, axis_max_*: границы осей.
    Модель supply сверху не ограничивает: маркер за окном просто не виден.
    """

    max_supply: float = 7000.0
    step: float = 1.0
    axis_max_supply: float = 7200.0
    axis_max_price: float = 1400.0

    def __post_init__(self):
        validate_positive(self.max_supply, "max_supply")
        validate_positive(self.step, "step")
        validate_positive(self.axis_max_supply, "axis_max_supply")
        validate_positive(self.axis_max_price, "axis_max_price")


@dataclass(frozen=True)
class MarkerPoint:
    """Точка на кривой."""

    supply: float
    price: float
    visible: bool


@dataclass(frozen=True)
class ChartSeries:
    """Серии одного кадра графика."""

    supplies: np.ndarray
    prices: np.ndarray
    impact_prices: np.ndarray
    current_marker: MarkerPoint
    new_marker: MarkerPoint
    is_minting: bool
    fill: str


def _marker(supply: float, unit_price: float, config: ChartWindowConfig) -> MarkerPoint:
    return MarkerPoint(
        supply=supply,
        price=unit_price,
        visible=supply <= config.axis_max_supply,
    )


def build_chart_series(
    params: CurveParameters,
    state: CurveState,
    config: ChartWindowConfig | None = None,
) -> ChartSeries:
    """
    Построение серий графика для текущего состояния.

    Args:
        params: Параметры кривой
        state: Согласованное состояние (из reconcile)
        config: Окно графика (default: ChartWindowConfig())

    Returns:
        ChartSeries; impact_prices совпадает с prices на
        [min(current, new), max(current, new)] и NaN вне его
    """
    config = config or ChartWindowConfig()

    supplies = np.arange(0.0, config.max_supply + config.step / 2, config.step)
    prices = BondingCurve(params).sample_prices(supplies)

    low = min(state.current_supply, state.new_supply)
    high = max(state.current_supply, state.new_supply)
    in_impact = (supplies >= low) & (supplies <= high)
    impact_prices = np.where(in_impact, prices, np.nan)

    is_minting = state.new_supply > state.current_supply

    return ChartSeries(
        supplies=supplies,
        prices=prices,
        impact_prices=impact_prices,
        current_marker=_marker(state.current_supply, state.price, config),
        new_marker=_marker(state.new_supply, state.new_price, config),
        is_minting=is_minting,
        fill=FILL_MINT if is_minting else FILL_BURN,
    )
