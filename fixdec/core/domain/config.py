"""
DecimalConfig — конфигурация точности и итерационных бюджетов

Immutable Pydantic модель. Каждый Decimal несёт собственную копию
конфигурации: глобального состояния точности нет, изменение конфигурации
одного значения никак не влияет на другие.

Бюджеты итераций — фиксированные значения, а не адаптивные границы ошибки:
каждая дополнительная итерация добавляет примерно ещё один корректный член
ряда, но динамической проверки сходимости нет.
"""

from typing import Any, Final

from pydantic import BaseModel, Field

from fixdec.core.contracts import validate_decimal_config


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Дополнительные дробные разряды для промежуточных вычислений
# трансцендентных функций; отбрасываются при возврате результата
GUARD_DIGITS: Final[int] = 5


# =============================================================================
# CONFIG MODEL
# =============================================================================


class DecimalConfig(BaseModel):
    """
    Точность и бюджеты итераций Decimal.

    decimals задаёт и глубину дробной части, и границу переполнения:
    любое |x| >= 10**decimals считается переполнением.
    """

    decimals: int = Field(
        default=40, ge=1, description="Количество дробных разрядов (точность)"
    )
    e_iterations: int = Field(
        default=40, ge=0, description="Члены ряда для e, exp и erf"
    )
    pi_iterations: int = Field(
        default=3, ge=0, description="Члены ряда Чудновского для 1/pi"
    )
    div_iterations: int = Field(
        default=5,
        ge=0,
        description="Раунды Newton-Raphson для обратной величины делителя (0 = грубая оценка)",
    )
    ln_iterations: int = Field(
        default=40, ge=0, description="Члены ряда натурального логарифма"
    )
    tanh_iterations: int = Field(
        default=40, ge=0, description="Члены ряда экспоненты для гиперболических функций"
    )
    sqrt_iterations: int = Field(
        default=40, ge=0, description="Раунды Newton для квадратного корня"
    )
    trig_iterations: int = Field(
        default=5,
        ge=0,
        description="Члены рядов sin/cos и раунды Newton обратных тригонометрических функций",
    )
    trunc_not_round: bool = Field(
        default=False,
        description="True: отбрасывать разряды; False: округление half away from zero",
    )
    throw_on_error: bool = Field(
        default=True,
        description="True: IllegalOperation; False: тихая деградация в NaN/Infinity",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_contract(cls, data: dict[str, Any]) -> "DecimalConfig":
        """
        Создание конфигурации из JSON-контракта.

        Сначала данные проверяются JSON Schema (decimal_config.json),
        затем валидируются Pydantic.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        validate_decimal_config(data)
        return cls.model_validate(data)

    def to_contract(self) -> dict[str, Any]:
        """Сериализация в dict, совместимый с decimal_config.json."""
        return self.model_dump()


DEFAULT_CONFIG: Final[DecimalConfig] = DecimalConfig()


def working_config(config: DecimalConfig, extra: int = GUARD_DIGITS) -> DecimalConfig:
    """Конфигурация с guard-разрядами для промежуточных вычислений."""
    return config.model_copy(update={"decimals": config.decimals + extra})
