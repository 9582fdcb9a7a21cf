"""
JSON Schema Contract Validators

Модуль для валидации JSON представлений конфигурации и значений Decimal
согласно формальным JSON Schema контрактам (Draft 2020-12).

Схемы:
- decimal_config.json — DecimalConfig
- decimal_value.json — Decimal ({"kind", "value", "config"})
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются внутри пакета: fixdec/core/contracts/schema/.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'decimal_config')

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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый класс: валидация данных против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class DecimalConfigValidator(ContractValidator):
    def __init__(self):
        super().__init__("decimal_config")


class DecimalValueValidator(ContractValidator):
    def __init__(self):
        super().__init__("decimal_value")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Валидаторы создаются лениво: схема загружается при первом использовании
_VALIDATORS: Dict[str, ContractValidator] = {}


def _get_validator(schema_name: str) -> ContractValidator:
    if schema_name not in _VALIDATORS:
        if schema_name == "decimal_config":
            _VALIDATORS[schema_name] = DecimalConfigValidator()
        else:
            _VALIDATORS[schema_name] = DecimalValueValidator()
    return _VALIDATORS[schema_name]


def validate_decimal_config(data: Dict[str, Any]) -> None:
    """
    Валидация конфигурации Decimal.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _get_validator("decimal_config").validate(data)


def validate_decimal_value(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного значения Decimal.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _get_validator("decimal_value").validate(data)
