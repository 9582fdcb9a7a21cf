"""
Numerical Safeguards — общие примитивы трансцендентного слоя

Модуль обеспечивает единообразное поведение всех функций core.math:
- Приведение аргументов (int / float / str) к Decimal на границе
- Guard-разряды: вычисление с decimals + GUARD_DIGITS и возврат к decimals
- Политика ошибок для области определения и деления на ноль
- Грубые оценки из float для начальных приближений Newton

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат функции всегда несёт конфигурацию аргумента
2. Ошибки области определения проходят через state machine
   (IllegalOperation или NaN по политике throw_on_error)
3. Float используется только для начальных приближений, никогда для
   результата
"""

import math
from typing import Any, Optional

from fixdec.core.domain import GUARD_DIGITS, Decimal, DecimalConfig, working_config
from fixdec.core.domain.digits import leading_exponent, significant_digits
from fixdec.core.kernel import arithmetic
from fixdec.special.state_machine import STATE_MACHINE

# Цифр мантиссы, которые имеет смысл передавать во float
FLOAT_DIGITS = 17


# =============================================================================
# ГРАНИЦА И GUARD-РАЗРЯДЫ
# =============================================================================


def as_decimal(value: Any, config: Optional[DecimalConfig] = None) -> Decimal:
    """
    Приведение аргумента к Decimal.

    Decimal возвращается как есть (config игнорируется), остальные типы
    конвертируются с config.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(value, config)


def guarded(x: Decimal, extra: int = GUARD_DIGITS) -> Decimal:
    """Копия x с рабочей конфигурацией (decimals + extra)."""
    return x.with_config(working_config(x.config, extra))


def restore(value: Decimal, config: DecimalConfig, operation: str) -> Decimal:
    """
    Возврат результата рабочей точности к config.

    Округление по политике config, нормализация и проверка переполнения
    (IllegalOperation / Infinity по политике).
    """
    if not value.is_finite():
        return value.with_config(config)
    template = Decimal(0, config)
    return arithmetic.finish(template, value.is_negative, value.magnitude, operation)


# =============================================================================
# ПОЛИТИКА ОШИБОК
# =============================================================================


def domain_error(x: Decimal, message: str, operation: str) -> Decimal:
    """
    Аргумент вне области определения.

    Raises:
        IllegalOperation: Если x.config.throw_on_error
    """
    resolution = STATE_MACHINE.degrade_domain_error(
        message, x.config.throw_on_error, operation
    )
    return x._from_resolution(resolution)


def division_by_zero(dividend: Decimal, operation: str) -> Decimal:
    """
    Полюс функции: ±Infinity по знаку dividend (0 → NaN).

    Raises:
        IllegalOperation: Если dividend.config.throw_on_error
    """
    resolution = STATE_MACHINE.degrade_division_by_zero(
        dividend.operand, dividend.config.throw_on_error, operation=operation
    )
    return dividend._from_resolution(resolution)


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ПРОВЕРКИ
# =============================================================================


def is_odd_integer(x: Decimal) -> bool:
    return x.is_int() and int(x.magnitude.int_part[-1]) % 2 == 1


def nearest_int(x: Decimal) -> int:
    """Ближайшее целое (половина — от нуля) для конечного x."""
    whole = int(x)
    remainder = abs(x - whole)
    if remainder * 2 >= 1:
        whole += -1 if x.is_negative else 1
    return whole


# =============================================================================
# ОЦЕНКИ ИЗ FLOAT
# =============================================================================


def log10_estimate(x: Decimal) -> float:
    """
    Оценка log10|x| для конечного ненулевого x.

    Мантисса и порядок берутся раздельно, поэтому оценка работает и
    за пределами диапазона float.
    """
    exponent = leading_exponent(x.magnitude)
    mantissa = float("0." + significant_digits(x.magnitude)[:FLOAT_DIGITS])
    return math.log10(mantissa) + exponent


def seed_from_float(value: float, exponent: int, config: DecimalConfig) -> Decimal:
    """
    Decimal из float-мантиссы и дополнительного десятичного порядка:
    value * 10**exponent, без переполнения float.
    """
    mantissa, _, power = ("%.*e" % (FLOAT_DIGITS - 1, value)).partition("e")
    return Decimal(f"{mantissa}e{int(power) + exponent}", config)


def result_digits_estimate(log10_value: float, config: DecimalConfig) -> int:
    """
    Количество разрядов целой части результата по оценке log10.

    Используется для дополнительных guard-разрядов, чтобы большие
    результаты сохраняли полную точность дробной части. Ограничено
    decimals + 1: больший результат — переполнение.
    """
    if log10_value <= 0:
        return 0
    return min(int(log10_value) + 1, config.decimals + 1)
