"""
Contract Validation Module

Валидация JSON контрактов конфигурации и значений Decimal.
"""

from .validators import (
    ContractValidator,
    DecimalConfigValidator,
    DecimalValueValidator,
    SchemaLoader,
    validate_decimal_config,
    validate_decimal_value,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalConfigValidator",
    "DecimalValueValidator",
    # Functions
    "validate_decimal_config",
    "validate_decimal_value",
]
