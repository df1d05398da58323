"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей, типов и constraints
- Интеграция с Pydantic моделями и reconcile
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    CurveParametersValidator,
    CurveStateValidator,
    SchemaLoader,
    validate_curve_parameters,
    validate_curve_state,
)
from src.core.domain import CurveInput, CurveParameters
from src.reconcile import initial_state, reconcile


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def params():
    return CurveParameters()


@pytest.fixture
def valid_curve_state(params):
    """Валидный curve_state из reconcile."""
    return initial_state(params, 4000.0, 1000.0).model_dump(mode="json")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    def test_loads_all_schemas(self):
        loader = SchemaLoader()
        for name in ("curve_parameters", "curve_state"):
            schema = loader.load_schema(name)
            assert schema["title"] == name

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("curve_state") is loader.load_schema("curve_state")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("market_state")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# CURVE PARAMETERS CONTRACT
# =============================================================================


class TestCurveParametersContract:
    """Тесты curve_parameters контракта."""

    def test_pydantic_dump_valid(self, params):
        validate_curve_parameters(params.model_dump(mode="json"))

    def test_zero_growth_rate_invalid(self):
        with pytest.raises(ValidationError):
            validate_curve_parameters({"initial_price": 1.0, "growth_rate": 0.0})

    def test_missing_field_invalid(self):
        assert not CurveParametersValidator().is_valid({"initial_price": 1.0})

    def test_model_dumped_and_validated(self, params):
        payload = validate_curve_parameters(params)
        assert payload == {"initial_price": 1.0, "growth_rate": 0.001}


# =============================================================================
# CURVE STATE CONTRACT
# =============================================================================


class TestCurveStateContract:
    """Тесты curve_state контракта."""

    def test_valid_state(self, valid_curve_state):
        validate_curve_state(valid_curve_state)

    def test_reconciled_states_valid(self, params):
        state = initial_state(params, 500.0, 0.0)
        for changed, value in (
            (CurveInput.SUPPLY, -100.0),
            (CurveInput.DELTA, -250.0),
            (CurveInput.PRICE, 54.6),
            (CurveInput.DELTA, 1000.0),
        ):
            state = reconcile(params, state, changed, value)
            validate_curve_state(state.model_dump(mode="json"))

    def test_missing_required_field(self, valid_curve_state):
        del valid_curve_state["trade_funds"]
        with pytest.raises(ValidationError, match="trade_funds"):
            validate_curve_state(valid_curve_state)

    def test_negative_supply(self, valid_curve_state):
        valid_curve_state["new_supply"] = -1.0
        with pytest.raises(ValidationError):
            validate_curve_state(valid_curve_state)

    def test_wrong_type(self, valid_curve_state):
        valid_curve_state["is_burn"] = "no"
        with pytest.raises(ValidationError):
            validate_curve_state(valid_curve_state)

    def test_additional_property(self, valid_curve_state):
        valid_curve_state["history"] = []
        with pytest.raises(ValidationError):
            validate_curve_state(valid_curve_state)

    def test_iter_errors_collects_all(self, valid_curve_state):
        valid_curve_state["price"] = 0.0
        valid_curve_state["current_supply"] = -5.0
        errors = list(CurveStateValidator().iter_errors(valid_curve_state))
        assert len(errors) == 2

    def test_model_payload_matches_dump(self, params):
        state = initial_state(params, 4000.0, -500.0)
        assert validate_curve_state(state) == state.model_dump(mode="json")

    def test_dump_validated_returns_json_payload(self, params):
        state = initial_state(params, 10.0, 0.0)
        payload = CurveStateValidator().dump_validated(state)
        assert payload["new_supply"] == 10.0
        assert payload["is_burn"] is False
