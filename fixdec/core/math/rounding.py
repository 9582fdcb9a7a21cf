"""
Rounding — семейство округления Decimal

floor / ceil / trunc / round_to работают над модулем числа без
арифметики с плавающей точкой. NaN и ±Infinity возвращаются без изменений.

ceil для целого аргумента возвращает сам аргумент: наивная формула
floor(x) + 1 неверна для целых x.
"""

from typing import Any

from fixdec.core.domain import Decimal
from fixdec.core.domain.digits import set_precision, shift
from fixdec.core.kernel import arithmetic, magnitude


def trunc(x: Decimal) -> Decimal:
    """Отбрасывание дробной части (к нулю)."""
    if not x.is_finite():
        return x
    return arithmetic.finish(x, x.is_negative, magnitude.truncate(x.magnitude), "trunc")


def floor(x: Decimal) -> Decimal:
    """
    Округление к минус бесконечности.

    Examples:
        >>> floor(Decimal("-1.5"))
        Decimal('-2')
        >>> floor(Decimal("2"))
        Decimal('2')
    """
    if not x.is_finite():
        return x
    whole = trunc(x)
    if x.is_negative and not x.is_int():
        return whole - 1
    return whole


def ceil(x: Decimal) -> Decimal:
    """
    Округление к плюс бесконечности.

    Examples:
        >>> ceil(Decimal("-1.5"))
        Decimal('-1')
        >>> ceil(Decimal("2"))
        Decimal('2')
    """
    if not x.is_finite():
        return x
    if x.is_int():
        return trunc(x)
    whole = trunc(x)
    if x.is_negative:
        return whole
    return whole + 1


def round_to(x: Decimal, places: int = 0) -> Decimal:
    """
    Округление до places дробных разрядов по политике конфигурации
    (trunc_not_round: отбрасывание; иначе half away from zero).

    Отрицательный places округляет целую часть: round_to(x, -2) — до сотен.
    """
    if not x.is_finite():
        return x
    scaled = shift(x.magnitude, places)
    rounded = set_precision(scaled, 0, x.config.trunc_not_round)
    return arithmetic.finish(x, x.is_negative, shift(rounded, -places), "round")


def abs_(x: Decimal) -> Decimal:
    return abs(x)


def sign(x: Decimal) -> Decimal:
    """-1, 0 или 1 как Decimal; NaN → NaN, ±Infinity → ±1."""
    if x.is_nan():
        return x
    if x.is_zero():
        return Decimal(0, x.config)
    return Decimal(-1 if x.is_negative else 1, x.config)


def inc(x: Any) -> Decimal:
    return x + 1 if isinstance(x, Decimal) else Decimal(x) + 1


def dec(x: Any) -> Decimal:
    return x - 1 if isinstance(x, Decimal) else Decimal(x) - 1
