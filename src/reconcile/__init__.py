"""Reconcile — переходы состояния bonding curve.

Единая функция reconcile для всех элементов управления (supply, delta, price)
и CurveReconciler, сохраняющий прежнее состояние при невалидном вводе.
"""

from .state_machine import (
    CurveReconciler,
    ReconcileResult,
    derive_state,
    initial_state,
    reconcile,
)

__all__ = [
    "CurveReconciler",
    "ReconcileResult",
    "derive_state",
    "initial_state",
    "reconcile",
]
