"""Curve Reconciliation — единственный переход состояния bonding curve.

Любое изменение поля формы (supply, delta или price) проходит через reconcile,
который заново выводит согласованный набор величин:
- new_supply = max(current_supply + delta, 0)
- total_funds(new_supply)
- trade_funds по фактическому (клампнутому) переходу current → new
- is_burn = delta < 0

Правило clamp-before-compute: supply и new_supply клампятся к >= 0 ДО расчёта
funds, поэтому отображаемые new_supply и trade_funds всегда описывают один и
тот же переход. Верхняя граница supply не вводится.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.curve import CurveInput, CurveParameters, CurveState
from src.core.math.bonding_curve import BondingCurve, InvalidInput
from src.core.math.numerical_safeguards import clamp, is_valid_float, round_half_up

logger = logging.getLogger(__name__)


# =============================================================================
# PURE FUNCTIONS
# =============================================================================


def derive_state(params: CurveParameters, current_supply: float, delta: float) -> CurveState:
    """Построение полностью согласованного CurveState из supply и delta.

    Args:
        params: параметры кривой
        current_supply: текущий supply (клампится к >= 0)
        delta: изменение supply (> 0 mint, < 0 burn)

    Returns:
        Новый CurveState со всеми производными величинами

    Raises:
        InvalidInput: NaN/Inf на входе или overflow производных величин
    """
    for name, value in (("current_supply", current_supply), ("delta", delta)):
        if not is_valid_float(value):
            raise InvalidInput(f"{name} must be a finite number, got {value}")

    current_supply = clamp(float(current_supply), min_value=0.0)
    delta = float(delta)
    new_supply = clamp(current_supply + delta, min_value=0.0)

    curve = BondingCurve(params)
    funds_before = curve.total_funds(current_supply)
    funds_after = curve.total_funds(new_supply)

    return CurveState(
        current_supply=current_supply,
        delta=delta,
        new_supply=new_supply,
        price=curve.price(current_supply),
        new_price=curve.price(new_supply),
        total_funds=funds_after,
        trade_funds=funds_after - funds_before,
        is_burn=delta < 0,
    )


def initial_state(
    params: CurveParameters,
    current_supply: float,
    delta: float = 0.0,
) -> CurveState:
    """Стартовое состояние виджета (например, supply=4000, delta=1000)."""
    return derive_state(params, current_supply, delta)


def reconcile(
    params: CurveParameters,
    state: CurveState,
    changed: CurveInput,
    new_value: float,
) -> CurveState:
    """Переход состояния по одному изменённому полю.

    - SUPPLY: current_supply = max(new_value, 0), delta сохраняется
    - DELTA: delta = new_value, current_supply сохраняется
    - PRICE: current_supply = round(supply_for_price(new_value)), клампится к >= 0;
      цена ниже initial_price соответствует supply 0

    Функция чистая: state не изменяется, повторный вызов с теми же
    аргументами возвращает равное состояние.

    Raises:
        InvalidInput: new_value NaN/Inf, price <= 0, либо overflow.
            Вызывающая сторона сохраняет предыдущее state.
    """
    changed = CurveInput(changed)

    if not is_valid_float(new_value):
        raise InvalidInput(f"{changed.value} must be a finite number, got {new_value}")

    if changed == CurveInput.SUPPLY:
        return derive_state(params, new_value, state.delta)

    if changed == CurveInput.DELTA:
        return derive_state(params, state.current_supply, new_value)

    # CurveInput.PRICE
    supply = round_half_up(BondingCurve(params).supply_for_price(new_value))
    return derive_state(params, supply, state.delta)


# =============================================================================
# RECONCILER
# =============================================================================


@dataclass(frozen=True)
class ReconcileResult:
    """Результат reconcile с диагностикой."""

    state: CurveState
    previous_state: CurveState
    changed: CurveInput
    new_value: float

    accepted: bool
    reason: str


class CurveReconciler:
    """Reconciler с фиксированными параметрами кривой.

    В отличие от reconcile() никогда не пробрасывает InvalidInput: отклонённый
    ввод возвращается как ReconcileResult(accepted=False) с прежним state.
    """

    def __init__(self, params: Optional[CurveParameters] = None):
        """
        Args:
            params: параметры кривой (default: CurveParameters())
        """
        self.params = params or CurveParameters()

    def initial_state(self, current_supply: float, delta: float = 0.0) -> CurveState:
        return initial_state(self.params, current_supply, delta)

    def apply(
        self,
        state: CurveState,
        changed: CurveInput,
        new_value: float,
    ) -> ReconcileResult:
        """Применение изменения одного поля.

        Args:
            state: текущее согласованное состояние
            changed: изменённое поле
            new_value: новое значение поля

        Returns:
            ReconcileResult; при отклонении result.state is state
        """
        changed = CurveInput(changed)

        try:
            new_state = reconcile(self.params, state, changed, new_value)
        except InvalidInput as e:
            logger.warning("Rejected %s=%r: %s", changed.value, new_value, e)
            return self._create_result(
                state=state,
                previous_state=state,
                changed=changed,
                new_value=new_value,
                accepted=False,
                reason=str(e),
            )

        logger.debug(
            "Reconciled %s=%r: supply %.4f -> %.4f, trade_funds=%.6f",
            changed.value,
            new_value,
            new_state.current_supply,
            new_state.new_supply,
            new_state.trade_funds,
        )
        return self._create_result(
            state=new_state,
            previous_state=state,
            changed=changed,
            new_value=new_value,
            accepted=True,
            reason=f"{changed.value}_changed",
        )

    def _create_result(
        self,
        state: CurveState,
        previous_state: CurveState,
        changed: CurveInput,
        new_value: float,
        accepted: bool,
        reason: str,
    ) -> ReconcileResult:
        """Создание результата перехода."""
        return ReconcileResult(
            state=state,
            previous_state=previous_state,
            changed=changed,
            new_value=new_value,
            accepted=accepted,
            reason=reason,
        )
