"""
Division — деление модулей через обратную величину Newton-Raphson

Деление НЕ выполняется "в столбик". Алгоритм:
1. Делитель масштабируется в мантиссу m ∈ [0.1, 1): d = m * 10**e
2. Начальное приближение 1/m — из float по старшим 17 цифрам (~15 верных разрядов)
3. div_iterations раундов уточнения x <- x * (2 - m * x); точность
   удваивается каждый раунд, рабочая ширина растёт вместе с ней
4. 1/d = x * 10**-e, частное = делимое * 1/d
5. При div_iterations > 0 — ограниченная коррекция по точному остатку
   (не более двух шагов в единицу последнего разряда в каждую сторону),
   после которой частное точно отброшено / округлено до precision разрядов

Алгоритм корректен для модулей любого размера (за пределами 64-битных
целых). div_iterations == 0 отключает уточнение и коррекцию: частное
пригодно, но точно лишь до ~15 значащих разрядов. Остаток от деления
и шестнадцатеричный экспорт больших чисел требуют div_iterations > 0.
"""

import logging
from typing import Final

from fixdec.core.domain.digits import (
    Magnitude,
    ZERO,
    lead_trim,
    leading_exponent,
    normalize,
    parse_digits,
    set_precision,
    shift,
    significant_digits,
)
from fixdec.core.kernel.magnitude import add, compare, multiply, subtract

logger = logging.getLogger(__name__)

# Верных значащих разрядов в начальном приближении из float
SEED_DIGITS: Final[int] = 15

# Дополнительные разряды рабочей ширины обратной величины
RECIPROCAL_GUARD: Final[int] = 4

# Максимум шагов коррекции частного в каждую сторону
MAX_CORRECTION_STEPS: Final[int] = 2

TWO = Magnitude("2", 0)


def reciprocal_seed(mantissa: Magnitude) -> Magnitude:
    """Начальное приближение 1/m для m ∈ [0.1, 1) из аппаратного float."""
    leading = significant_digits(mantissa)[:17]
    estimate = 1.0 / float("0." + leading)
    _, seed = parse_digits("%.*e" % (SEED_DIGITS - 1, estimate))
    return seed


def reciprocal(divisor: Magnitude, width: int, rounds: int) -> Magnitude:
    """
    Обратная величина модуля делителя.

    Args:
        divisor: Ненулевой модуль делителя
        width: Рабочая ширина (дробные разряды) обратной величины мантиссы
        rounds: Количество раундов Newton-Raphson

    Returns:
        Приближение 1/divisor
    """
    if divisor.is_zero():
        raise ZeroDivisionError("reciprocal of zero")

    exponent = leading_exponent(divisor)
    mantissa = shift(divisor, -exponent)
    x = reciprocal_seed(mantissa)

    known = SEED_DIGITS
    for _ in range(rounds):
        known *= 2
        step_width = min(width, known + RECIPROCAL_GUARD)
        t = set_precision(multiply(mantissa, x), step_width, truncate=True)
        x = set_precision(multiply(x, subtract(TWO, t)), step_width, truncate=True)
        if step_width == width and known >= width:
            break

    return shift(normalize(x), -exponent)


def divide(
    dividend: Magnitude,
    divisor: Magnitude,
    precision: int,
    rounds: int,
    truncate: bool = False,
) -> Magnitude:
    """
    Частное модулей с precision дробными разрядами.

    Args:
        dividend: Модуль делимого
        divisor: Ненулевой модуль делителя
        precision: Дробные разряды результата
        rounds: Раунды Newton-Raphson (div_iterations)
        truncate: Отбрасывание вместо округления half away from zero

    Raises:
        ZeroDivisionError: Если divisor == 0 (политику ошибок применяет вызывающий)
    """
    if divisor.is_zero():
        raise ZeroDivisionError("division of magnitude by zero")
    if dividend.is_zero():
        return ZERO

    dividend = lead_trim(dividend)
    exponent = leading_exponent(divisor)
    width = max(
        precision + RECIPROCAL_GUARD + max(dividend.ints, 1) - exponent + 1,
        SEED_DIGITS + 2,
    )
    inverse = reciprocal(divisor, width, rounds)
    quotient = multiply(dividend, inverse)

    if rounds == 0:
        return normalize(set_precision(quotient, precision, truncate))

    return normalize(_correct(dividend, divisor, quotient, precision, truncate))


def _correct(
    dividend: Magnitude,
    divisor: Magnitude,
    quotient: Magnitude,
    precision: int,
    truncate: bool,
) -> Magnitude:
    """Коррекция частного по точному остатку dividend - q * divisor."""
    ulp = lead_trim(Magnitude("1", precision))
    divisor_ulp = shift(divisor, -precision)

    q = set_precision(quotient, precision, truncate=True)
    product = multiply(q, divisor)

    steps = 0
    while compare(product, dividend) > 0:
        if steps == MAX_CORRECTION_STEPS or compare(q, ulp) < 0:
            logger.debug("quotient correction did not converge (too large)")
            return q
        q = subtract(q, ulp)
        product = subtract(product, divisor_ulp)
        steps += 1

    residual = subtract(dividend, product)
    steps = 0
    while compare(residual, divisor_ulp) >= 0:
        if steps == MAX_CORRECTION_STEPS:
            logger.debug("quotient correction did not converge (too small)")
            return q
        q = add(q, ulp)
        residual = subtract(residual, divisor_ulp)
        steps += 1

    if not truncate and compare(add(residual, residual), divisor_ulp) >= 0:
        q = add(q, ulp)

    return q
