"""
Tests for Pydantic Curve Models

Покрывает:
- CurveParameters: defaults, строгая положительность, immutability
- CurveState: инварианты согласованности, запрет NaN/Inf, immutability
- CurveInput: enum значения
- JSON сериализация/десериализация
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    DEFAULT_GROWTH_RATE,
    DEFAULT_INITIAL_PRICE,
    CurveInput,
    CurveParameters,
    CurveState,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_state_data():
    """Согласованное состояние: supply 4000, mint 1000 (P0 = 1, k = 0.001)."""
    return {
        "current_supply": 4000.0,
        "delta": 1000.0,
        "new_supply": 5000.0,
        "price": 54.598150033144236,
        "new_price": 148.4131591025766,
        "total_funds": 147413.1591025766,
        "trade_funds": 93815.00906943346,
        "is_burn": False,
    }


# =============================================================================
# CURVE PARAMETERS
# =============================================================================


class TestCurveParameters:
    """Тесты CurveParameters."""

    def test_defaults(self):
        params = CurveParameters()
        assert params.initial_price == DEFAULT_INITIAL_PRICE == 1.0
        assert params.growth_rate == DEFAULT_GROWTH_RATE == 0.001

    @pytest.mark.parametrize(
        "field, value",
        [
            ("initial_price", 0.0),
            ("initial_price", -1.0),
            ("growth_rate", 0.0),
            ("growth_rate", -0.001),
            ("growth_rate", float("nan")),
            ("initial_price", float("inf")),
        ],
    )
    def test_non_positive_or_non_finite_rejected(self, field, value):
        with pytest.raises(ValidationError):
            CurveParameters(**{field: value})

    def test_frozen(self):
        params = CurveParameters()
        with pytest.raises(ValidationError):
            params.growth_rate = 0.002

    def test_hashable_and_equal(self):
        assert CurveParameters() == CurveParameters(initial_price=1.0, growth_rate=0.001)
        assert hash(CurveParameters()) == hash(CurveParameters())


# =============================================================================
# CURVE STATE
# =============================================================================


class TestCurveState:
    """Тесты CurveState."""

    def test_valid_state(self, valid_state_data):
        state = CurveState(**valid_state_data)
        assert state.new_supply == 5000.0
        assert state.is_mint
        assert not state.is_burn
        assert state.effective_delta == 1000.0

    def test_negative_supply_rejected(self, valid_state_data):
        valid_state_data["current_supply"] = -1.0
        with pytest.raises(ValidationError):
            CurveState(**valid_state_data)

    def test_inconsistent_new_supply_rejected(self, valid_state_data):
        valid_state_data["new_supply"] = 4500.0
        with pytest.raises(ValidationError, match="inconsistent"):
            CurveState(**valid_state_data)

    def test_inconsistent_is_burn_rejected(self, valid_state_data):
        valid_state_data["is_burn"] = True
        with pytest.raises(ValidationError, match="is_burn"):
            CurveState(**valid_state_data)

    def test_nan_rejected(self, valid_state_data):
        valid_state_data["trade_funds"] = float("nan")
        with pytest.raises(ValidationError):
            CurveState(**valid_state_data)

    def test_clamped_burn_effective_delta(self):
        state = CurveState(
            current_supply=500.0,
            delta=-800.0,
            new_supply=0.0,
            price=1.6487212707001282,
            new_price=1.0,
            total_funds=0.0,
            trade_funds=-648.7212707001282,
            is_burn=True,
        )
        assert state.effective_delta == -500.0
        assert not state.is_mint

    def test_frozen(self, valid_state_data):
        state = CurveState(**valid_state_data)
        with pytest.raises(ValidationError):
            state.delta = 0.0

    def test_json_round_trip(self, valid_state_data):
        state = CurveState(**valid_state_data)
        restored = CurveState.model_validate_json(state.model_dump_json())
        assert restored == state


class TestCurveInput:
    """Тесты CurveInput."""

    def test_values(self):
        assert CurveInput("supply") is CurveInput.SUPPLY
        assert CurveInput("delta") is CurveInput.DELTA
        assert CurveInput("price") is CurveInput.PRICE

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            CurveInput("volume")
