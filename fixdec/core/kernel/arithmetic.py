"""
Arithmetic — знаковая арифметика Decimal

Связывает беззнаковое ядро (magnitude.py, division.py) с правилами
специальных значений (special.state_machine) и политикой ошибок.

Порядок каждой операции:
1. Правила NaN/Infinity (до любой арифметики над модулями)
2. Деление на ноль — по политике ошибок
3. Арифметика модулей
4. Точность результата (config.decimals, truncate или round half away from zero)
5. Проверка переполнения: |x| >= 10**decimals → Infinity / IllegalOperation

Результат наследует конфигурацию левого операнда. Функции модуля не
импортируют Decimal: новые значения строятся через фабрики операндов
(_derive, _from_resolution), поэтому слой ядра не зависит от типа значения.
"""

from typing import Any, Optional

from fixdec.core.domain.digits import Magnitude, normalize, set_precision
from fixdec.core.domain.kinds import NumKind
from fixdec.core.kernel import division, magnitude
from fixdec.special.state_machine import STATE_MACHINE


# =============================================================================
# ЗНАКОВЫЕ ОПЕРАЦИИ НАД МОДУЛЯМИ
# =============================================================================


def signed_sum(
    left_negative: bool, left: Magnitude, right_negative: bool, right: Magnitude
) -> tuple[bool, Magnitude]:
    """
    Сумма двух знаковых модулей.

    Одинаковые знаки: модули складываются, знак сохраняется.
    Разные знаки: из большего модуля вычитается меньший, знак — большего.
    Ноль всегда положительный.
    """
    if left_negative == right_negative:
        result = magnitude.add(left, right)
        negative = left_negative
    else:
        order = magnitude.compare(left, right)
        if order == 0:
            return False, Magnitude("0", 0)
        if order > 0:
            result = magnitude.subtract(left, right)
            negative = left_negative
        else:
            result = magnitude.subtract(right, left)
            negative = right_negative

    if result.is_zero():
        negative = False
    return negative, result


# =============================================================================
# ПУБЛИЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def add(left: Any, right: Any) -> Any:
    """left + right."""
    resolution = STATE_MACHINE.resolve_sum(left.operand, right.operand)
    if resolution.resolved:
        return left._from_resolution(resolution)

    negative, result = signed_sum(
        left.is_negative, left.magnitude, right.is_negative, right.magnitude
    )
    return finish(left, negative, result, "add")


def subtract(left: Any, right: Any) -> Any:
    """left - right (сложение с инвертированным знаком правого операнда)."""
    flipped = right.operand._replace(negative=not right.is_negative)
    resolution = STATE_MACHINE.resolve_sum(left.operand, flipped)
    if resolution.resolved:
        return left._from_resolution(resolution)

    negative, result = signed_sum(
        left.is_negative, left.magnitude, not right.is_negative, right.magnitude
    )
    return finish(left, negative, result, "subtract")


def multiply(left: Any, right: Any) -> Any:
    """left * right. Знак — XOR знаков операндов."""
    resolution = STATE_MACHINE.resolve_product(left.operand, right.operand)
    if resolution.resolved:
        return left._from_resolution(resolution)

    result = magnitude.multiply(left.magnitude, right.magnitude)
    return finish(left, left.is_negative != right.is_negative, result, "multiply")


def divide(left: Any, right: Any) -> Any:
    """
    left / right через обратную величину Newton-Raphson.

    Деление на ноль: IllegalOperation (throw_on_error) либо знаковая
    Infinity (знак делимого), 0/0 → NaN.
    """
    resolution = STATE_MACHINE.resolve_quotient(left.operand, right.operand)
    if resolution.resolved:
        return left._from_resolution(resolution)

    config = left.config
    if right.magnitude.is_zero():
        return left._from_resolution(
            STATE_MACHINE.degrade_division_by_zero(left.operand, config.throw_on_error)
        )

    result = division.divide(
        left.magnitude,
        right.magnitude,
        config.decimals,
        config.div_iterations,
        truncate=config.trunc_not_round,
    )
    return finish(left, left.is_negative != right.is_negative, result, "divide")


def mod(left: Any, right: Any) -> Any:
    """
    left % right = left - trunc(left / right) * right.

    Знак результата следует за делимым (как fmod). Для больших модулей
    требует div_iterations > 0.
    """
    resolution = STATE_MACHINE.resolve_modulo(left.operand, right.operand)
    if resolution.resolved:
        if resolution.kind == NumKind.NORMAL:
            return left
        return left._from_resolution(resolution)

    config = left.config
    if right.magnitude.is_zero():
        return left._from_resolution(
            STATE_MACHINE.degrade_division_by_zero(
                left.operand, config.throw_on_error, operation="mod"
            )
        )

    quotient = division.divide(
        left.magnitude, right.magnitude, config.decimals, config.div_iterations, truncate=True
    )
    whole = magnitude.truncate(quotient)
    product = magnitude.multiply(whole, right.magnitude)
    negative, result = signed_sum(False, left.magnitude, True, product)
    return finish(left, left.is_negative != negative, result, "mod")


def negate(value: Any) -> Any:
    """-value. Ноль остаётся положительным, NaN остаётся NaN."""
    if value.kind == NumKind.NAN:
        return value
    if value.kind == NumKind.INFINITY:
        return value._special(NumKind.INFINITY, not value.is_negative)
    if value.magnitude.is_zero():
        return value._derive(False, value.magnitude)
    return value._derive(not value.is_negative, value.magnitude)


def compare(left: Any, right: Any) -> Optional[int]:
    """
    Знаковое трёхстороннее сравнение.

    Returns:
        -1, 0, 1 либо None, если хотя бы один операнд NaN (неупорядочены)
    """
    if left.kind == NumKind.NAN or right.kind == NumKind.NAN:
        return None

    left_rank = _infinity_rank(left)
    right_rank = _infinity_rank(right)
    if left_rank or right_rank:
        return (left_rank > right_rank) - (left_rank < right_rank)

    left_zero = left.magnitude.is_zero()
    right_zero = right.magnitude.is_zero()
    if left_zero and right_zero:
        return 0

    left_negative = left.is_negative and not left_zero
    right_negative = right.is_negative and not right_zero
    if left_negative != right_negative:
        return -1 if left_negative else 1

    order = magnitude.compare(left.magnitude, right.magnitude)
    return -order if left_negative else order


# =============================================================================
# ЗАВЕРШЕНИЕ ОПЕРАЦИИ
# =============================================================================


def finish(left: Any, negative: bool, result: Magnitude, operation: str) -> Any:
    """
    Точность, нормализация и проверка переполнения результата.

    Переполнение: целая часть длиннее config.decimals разрядов.
    """
    config = left.config
    if result.frac > config.decimals:
        result = set_precision(result, config.decimals, config.trunc_not_round)
    result = normalize(result)

    if result.is_zero():
        return left._derive(False, result)

    if result.ints > config.decimals:
        return left._from_resolution(
            STATE_MACHINE.degrade_overflow(negative, config.throw_on_error, operation)
        )
    return left._derive(negative, result)


def _infinity_rank(value: Any) -> int:
    if value.kind != NumKind.INFINITY:
        return 0
    return -1 if value.is_negative else 1


__all__ = [
    "add",
    "compare",
    "divide",
    "finish",
    "mod",
    "multiply",
    "negate",
    "signed_sum",
    "subtract",
]
