"""
Magnitude Kernel — беззнаковая арифметика над цифровыми строками

Сравнение, сложение, вычитание и умножение модулей. Знак, специальные
значения и политика ошибок здесь не учитываются: этим занимаются
arithmetic.py и special.state_machine.

Умножение — школьная свёртка разрядов с единым проходом переноса:
стоимость O(n*m). Более быстрые алгоритмы сознательно не используются,
стоимость операций должна оставаться детерминированной.
"""

from fixdec.core.domain.digits import (
    Magnitude,
    ZERO,
    align,
    lead_trim,
    normalize,
    symbol_to_digit,
    symbols,
)


def compare(a: Magnitude, b: Magnitude) -> int:
    """
    Трёхстороннее сравнение модулей.

    Returns:
        -1 если |a| < |b|, 0 если равны, 1 если |a| > |b|
    """
    da, db, _ = align(a, b)
    # Строки одинаковой длины из '0'..'9' сравниваются поразрядно
    if da == db:
        return 0
    return -1 if da < db else 1


def add(a: Magnitude, b: Magnitude) -> Magnitude:
    """Сумма модулей с переносом."""
    da, db, frac = align(a, b)
    result = []
    carry = 0
    for i in range(len(da) - 1, -1, -1):
        total = symbol_to_digit(da[i]) + symbol_to_digit(db[i]) + carry
        if total >= 10:
            result.append(total - 10)
            carry = 1
        else:
            result.append(total)
            carry = 0
    if carry:
        result.append(carry)
    result.reverse()
    return normalize(Magnitude(symbols(result), frac))


def subtract(a: Magnitude, b: Magnitude) -> Magnitude:
    """
    Разность модулей с заёмом.

    Требует |a| >= |b| (обеспечивается вызывающей стороной через compare).
    """
    da, db, frac = align(a, b)
    result = []
    borrow = 0
    for i in range(len(da) - 1, -1, -1):
        diff = symbol_to_digit(da[i]) - symbol_to_digit(db[i]) - borrow
        if diff < 0:
            result.append(diff + 10)
            borrow = 1
        else:
            result.append(diff)
            borrow = 0
    if borrow:
        raise ArithmeticError("subtract() requires |a| >= |b|")
    result.reverse()
    return normalize(Magnitude(symbols(result), frac))


def multiply(a: Magnitude, b: Magnitude) -> Magnitude:
    """
    Произведение модулей (свёртка разрядов + перенос).

    Количество дробных разрядов результата = a.frac + b.frac.
    """
    if a.is_zero() or b.is_zero():
        return ZERO

    xs = [symbol_to_digit(c) for c in reversed(a.digits)]
    ys = [symbol_to_digit(c) for c in reversed(b.digits)]
    if len(xs) < len(ys):
        xs, ys = ys, xs

    acc = [0] * (len(xs) + len(ys))
    for j, y in enumerate(ys):
        if y == 0:
            continue
        for i, x in enumerate(xs):
            acc[i + j] += x * y

    carry = 0
    for k in range(len(acc)):
        total = acc[k] + carry
        acc[k] = total % 10
        carry = total // 10
    while carry:
        acc.append(carry % 10)
        carry //= 10

    acc.reverse()
    return normalize(Magnitude(symbols(acc), a.frac + b.frac))


def from_int(value: int) -> Magnitude:
    """Неотрицательное целое -> модуль."""
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    return Magnitude(str(value), 0)


def to_int(m: Magnitude) -> int:
    """Целая часть модуля (дробная отбрасывается)."""
    return int(lead_trim(m).int_part)


def truncate(m: Magnitude) -> Magnitude:
    """Отбрасывание дробной части."""
    if m.frac == 0:
        return m
    return lead_trim(Magnitude(m.int_part, 0))
