"""
Special Functions — функция ошибок

erf(x), |x| < 3: ряд Маклорена
    erf(x) = 2/√π * Σ (-1)**n x**(2n+1) / (n! (2n+1))
erfc(x), |x| >= 3: цепная дробь
    erfc(x) = e**-x² / √π * 1 / (x + (1/2) / (x + 1 / (x + (3/2) / (x + ...))))
    вычисляется от последнего уровня к первому

Количество членов ряда и уровней дроби выводится из рабочей точности
(не меньше e_iterations): члены ряда суммируются, пока
|x|**(2n+1) / (n! (2n+1)) >= 10**-decimals; погрешность n уровней дроби
порядка e**(-2x√(2n)).

erf(±inf) = ±1, erfc(x) = 1 - erf(x). При x² > (decimals + 2) * ln(10)
erfc(|x|) < 10**-(decimals + 2), и erf насыщается до ±1.
"""

import math
from typing import Any, Final

from fixdec.core.domain import GUARD_DIGITS, Decimal
from fixdec.core.math.constants import pi_at
from fixdec.core.math.numerical_safeguards import as_decimal, guarded, restore
from fixdec.core.math.power import _exp, _sqrt

# Граница перехода от ряда к цепной дроби
SERIES_LIMIT: Final[int] = 3

# Знакопеременный ряд при |x| около 3 теряет ~4 разряда на сокращении
SERIES_EXTRA_DIGITS: Final[int] = 4

_LN10 = math.log(10)


# =============================================================================
# БЮДЖЕТ ИТЕРАЦИЙ
# =============================================================================


def series_terms(x: float, digits: int) -> int:
    """Количество членов ряда Маклорена для |x| < SERIES_LIMIT."""
    if x == 0:
        return 1
    log_x = math.log10(x)
    n = 1
    while (2 * n + 1) * log_x - math.lgamma(n + 1) / _LN10 - math.log10(2 * n + 1) > -digits:
        n += 1
    return n + 1


def fraction_levels(x: float, digits: int) -> int:
    """Количество уровней цепной дроби: e**(-2x√(2n)) < 10**-digits."""
    return math.ceil((digits * _LN10 / (2 * x)) ** 2 / 2) + 1


def _erf_saturates(x: Decimal) -> bool:
    limit = (x.config.decimals + 2) * _LN10
    return x.ints > 16 or float(x) ** 2 > limit


# =============================================================================
# РЯД И ЦЕПНАЯ ДРОБЬ (рабочая точность)
# =============================================================================


def _erf_series(x: Decimal) -> Decimal:
    config = x.config
    terms = max(config.e_iterations, series_terms(float(x), config.decimals))
    x2 = x * x
    # (-1)**n x**(2n+1) / n!
    coefficient = x
    total = x
    for n in range(1, terms):
        coefficient = -coefficient * x2 / n
        if coefficient.is_zero():
            break
        total = total + coefficient / (2 * n + 1)
    return total * 2 / _sqrt(pi_at(config))


def _erfc_continued_fraction(x: Decimal) -> Decimal:
    """erfc(x) для x >= SERIES_LIMIT."""
    config = x.config
    levels = max(config.e_iterations, fraction_levels(float(x), config.decimals + 2))
    tail = x
    for k in range(levels, 0, -1):
        tail = x + Decimal(k, config) / 2 / tail
    weight = _exp(-(x * x), config.e_iterations) / _sqrt(pi_at(config))
    return weight / tail


def _erf(w: Decimal) -> Decimal:
    """erf(w) для конечного w с рабочей конфигурацией w."""
    a = abs(w)
    if a < SERIES_LIMIT:
        value = _erf_series(a)
    else:
        value = 1 - _erfc_continued_fraction(a)
    return -value if w.is_negative else value


# =============================================================================
# ПУБЛИЧНЫЕ ФУНКЦИИ
# =============================================================================


def erf(x: Any) -> Decimal:
    """
    Функция ошибок.

    Examples:
        >>> erf(Decimal(0))
        Decimal('0')
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() or _erf_saturates(x):
        return Decimal(-1 if x.is_negative else 1, x.config)
    return restore(_erf(guarded(x, GUARD_DIGITS + SERIES_EXTRA_DIGITS)), x.config, "erf")


def erfc(x: Any) -> Decimal:
    """Дополнительная функция ошибок 1 - erf(x)."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() or _erf_saturates(x):
        return Decimal(2 if x.is_negative else 0, x.config)

    w = guarded(x, GUARD_DIGITS + SERIES_EXTRA_DIGITS)
    if not w.is_negative and w >= SERIES_LIMIT:
        return restore(_erfc_continued_fraction(w), x.config, "erfc")
    return restore(1 - _erf(w), x.config, "erfc")
