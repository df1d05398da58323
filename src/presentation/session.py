"""
Curve Session — владелец текущего CurveState для слоя представления

Сессия хранит единственное согласованное состояние кривой и заменяет его
целиком на каждое принятое изменение. Рендерер подписывается на изменения
и перерисовывает график декларативно.

Debounce частых событий (drag) делает рендерер, каждое событие
вызывает reconcile ровно один раз.
"""

import logging
import re
from typing import Any, Callable, Dict, Final, List, Optional

from src.core.contracts.validators import validate_curve_parameters, validate_curve_state
from src.core.domain.curve import (
    DEFAULT_CURRENT_SUPPLY,
    DEFAULT_DELTA,
    CurveInput,
    CurveParameters,
    CurveState,
)
from src.core.math.numerical_safeguards import round_half_up, sanitize_float
from src.reconcile.state_machine import CurveReconciler, ReconcileResult

logger = logging.getLogger(__name__)

Subscriber = Callable[[CurveState], None]

# Ведущее число в тексте поля ввода ("12abc" → 12, "abc" → нет совпадения)
_INT_PREFIX: Final = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX: Final = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# =============================================================================
# INPUT COERCION
# =============================================================================


def coerce_int(raw: str) -> float:
    """
    Разбор целого из текста поля: ведущие цифры, иначе 0.

    Examples:
        >>> coerce_int("1200")
        1200.0
        >>> coerce_int("12.7")
        12.0
        >>> coerce_int("abc")
        0.0
    """
    match = _INT_PREFIX.match(raw or "")
    if match is None:
        return 0.0
    return float(int(match.group(1)))


def coerce_float(raw: str) -> float:
    """
    Разбор float из текста поля: ведущее число, иначе 0. NaN/Inf → 0.

    Examples:
        >>> coerce_float("54.6 USDC")
        54.6
        >>> coerce_float("")
        0.0
    """
    match = _FLOAT_PREFIX.match(raw or "")
    if match is None:
        return 0.0
    return sanitize_float(float(match.group(1)), fallback=0.0)


def coerce_input(changed: CurveInput, raw: str) -> float:
    """Supply и delta вводятся в целых токенах, price в USDC с дробной частью."""
    if CurveInput(changed) == CurveInput.PRICE:
        return coerce_float(raw)
    return coerce_int(raw)


# =============================================================================
# SESSION
# =============================================================================


class CurveSession:
    """
    Состояние виджета bonding curve.

    Все обработчики (клик по графику, поля формы) проходят через один
    CurveReconciler; отклонённый ввод оставляет state без изменений и не
    уведомляет подписчиков.
    """

    def __init__(
        self,
        params: Optional[CurveParameters] = None,
        state: Optional[CurveState] = None,
    ):
        """
        Args:
            params: параметры кривой (default: CurveParameters())
            state: стартовое состояние (default: supply=4000, delta=1000)
        """
        self.reconciler = CurveReconciler(params)
        if state is None:
            state = self.reconciler.initial_state(DEFAULT_CURRENT_SUPPLY, DEFAULT_DELTA)
        self._state = state
        self._subscribers: List[Subscriber] = []
        self.last_result: Optional[ReconcileResult] = None

    @property
    def params(self) -> CurveParameters:
        return self.reconciler.params

    @property
    def state(self) -> CurveState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Подписка на принятые изменения состояния.

        Returns:
            Функция отписки
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def apply(self, changed: CurveInput, new_value: float) -> ReconcileResult:
        """Reconcile одного поля и уведомление подписчиков при успехе."""
        result = self.reconciler.apply(self._state, changed, new_value)
        self.last_result = result

        if result.accepted:
            self._state = result.state
            for callback in list(self._subscribers):
                callback(result.state)

        return result

    def set_supply(self, supply: float) -> ReconcileResult:
        return self.apply(CurveInput.SUPPLY, supply)

    def set_delta(self, delta: float) -> ReconcileResult:
        return self.apply(CurveInput.DELTA, delta)

    def set_price(self, unit_price: float) -> ReconcileResult:
        return self.apply(CurveInput.PRICE, unit_price)

    def select_supply(self, domain_x: float) -> ReconcileResult:
        """
        Клик/drag по графику.

        domain_x: координата в домене supply (рендерер уже перевёл пиксели
        через шкалу графика); значение привязывается к ближайшему целому токену.
        """
        snapped = round_half_up(sanitize_float(domain_x, fallback=0.0))
        return self.set_supply(snapped)

    def apply_text(self, changed: CurveInput, raw: str) -> ReconcileResult:
        """Изменение текстового поля формы; нечисловой ввод приводится к 0."""
        value = coerce_input(changed, raw)
        logger.debug("Coerced %s text %r -> %r", CurveInput(changed).value, raw, value)
        return self.apply(changed, value)

    def snapshot(self) -> Dict[str, Any]:
        """
        JSON-снапшот параметров и текущего состояния для рендерера.

        Оба раздела проверяются против curve_parameters / curve_state
        контрактов перед отдачей наружу.

        Raises:
            jsonschema.ValidationError: Если снапшот нарушает контракт
        """
        return {
            "params": validate_curve_parameters(self.params),
            "state": validate_curve_state(self._state),
        }
