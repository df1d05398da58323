"""
JSON Schema Contract Validators

Модуль для валидации JSON представлений состояния кривой согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (src/core/contracts/schema/):
- curve_parameters.json
- curve_state.json
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат рядом с модулем (package data), поэтому находятся
    одинаково и в checkout, и в установленном пакете.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'curve_state')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)

    def dump_validated(self, model: BaseModel) -> Dict[str, Any]:
        """
        JSON-представление pydantic модели, проверенное против схемы.

        Pydantic гарантирует инварианты модели, схема гарантирует форму
        payload, который уходит рендереру.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует схеме
        """
        data = model.model_dump(mode="json")
        self.validate(data)
        return data


class CurveParametersValidator(ContractValidator):
    """Валидатор для curve_parameters контракта."""

    def __init__(self):
        super().__init__("curve_parameters")


class CurveStateValidator(ContractValidator):
    """Валидатор для curve_state контракта."""

    def __init__(self):
        super().__init__("curve_state")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


_VALIDATOR_CLASSES = {
    "curve_parameters": CurveParametersValidator,
    "curve_state": CurveStateValidator,
}


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> ContractValidator:
    """Один экземпляр валидатора на схему (Draft202012Validator переиспользуется)."""
    return _VALIDATOR_CLASSES[schema_name]()


def _check(schema_name: str, data: Dict[str, Any] | BaseModel) -> Dict[str, Any]:
    validator = _validator(schema_name)
    if isinstance(data, BaseModel):
        return validator.dump_validated(data)
    validator.validate(data)
    return data


def validate_curve_parameters(data: Dict[str, Any] | BaseModel) -> Dict[str, Any]:
    """
    Валидация curve_parameters данных (dict или CurveParameters).

    Returns:
        Проверенный JSON payload

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    return _check("curve_parameters", data)


def validate_curve_state(data: Dict[str, Any] | BaseModel) -> Dict[str, Any]:
    """
    Валидация curve_state данных (dict или CurveState).

    Returns:
        Проверенный JSON payload

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    return _check("curve_state", data)
