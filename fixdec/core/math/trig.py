"""
Trig — тригонометрические функции и обратные к ним

ТЕХНИКИ:
- trig_phase_correct: x -> [-π, π] (вычитание ближайшего кратного 2π)
- квадрант: r = q*(π/2) + t, |t| <= π/4, q ∈ {-2..2}
- половинные углы: t / 2**h, h выбирается так, чтобы trig_iterations
  членов рядов sin/cos давали полную рабочую точность; затем h удвоений
  sin(2a) = 2 sin a cos a, cos(2a) = 1 - 2 sin**2 a
- atan: Newton y <- y + (x*cos y - sin y)*cos y (trig_iterations раундов,
  начальное приближение из float); |x| > 1 через π/2 - atan(1/x)
- asin(x) = atan(x / √(1 - x**2)), acos = π/2 - asin

sin/cos/tan/... от ±Infinity возвращают NaN без IllegalOperation.
atan2 следует порядку аргументов и квадрантам math.atan2(y, x).
"""

import math
from typing import Any

from fixdec.core.domain import GUARD_DIGITS, Decimal, DecimalConfig, working_config
from fixdec.core.math.constants import pi_at
from fixdec.core.math.numerical_safeguards import (
    as_decimal,
    division_by_zero,
    domain_error,
    guarded,
    nearest_int,
    restore,
    seed_from_float,
)
from fixdec.core.math.power import LOG10_2, _sqrt

# log10(π/4): верхняя граница |t| после приведения по квадранту
_LOG10_QUARTER_PI = math.log10(math.pi / 4)


# =============================================================================
# ПРИВЕДЕНИЕ АРГУМЕНТА
# =============================================================================


def halvings(config: DecimalConfig) -> int:
    """
    Количество делений угла пополам перед суммированием рядов.

    Первый отброшенный член ряда cos имеет порядок 2n (n = trig_iterations):
    (π/4 / 2**h)**(2n) / (2n)! < 10**-decimals.
    """
    order = 2 * max(config.trig_iterations, 1)
    needed = (config.decimals - math.log10(math.factorial(order))) / order
    h = (needed + _LOG10_QUARTER_PI) / LOG10_2
    return max(0, math.ceil(h))


def _trig_guarded(x: Decimal) -> Decimal:
    """Рабочая копия x: guard-разряды плюс разряды, теряемые при удвоениях."""
    extra = GUARD_DIGITS + halvings(working_config(x.config))
    return guarded(x, extra)


def _wrap(x: Decimal) -> Decimal:
    two_pi = pi_at(x.config) * 2
    k = nearest_int(x / two_pi)
    if k == 0:
        return x
    return x - two_pi * k


def _series(t: Decimal, terms: int) -> tuple[Decimal, Decimal]:
    """Ряды sin(t) и cos(t), terms членов каждый."""
    t2 = t * t
    s_term = t
    c_term = Decimal(1, t.config)
    s_total = s_term
    c_total = c_term
    for n in range(1, terms):
        s_term = -s_term * t2 / ((2 * n) * (2 * n + 1))
        c_term = -c_term * t2 / ((2 * n - 1) * (2 * n))
        s_total = s_total + s_term
        c_total = c_total + c_term
    return s_total, c_total


def _sin_cos(x: Decimal) -> tuple[Decimal, Decimal]:
    """(sin x, cos x) для конечного x с рабочей конфигурацией x."""
    config = x.config
    half_pi = pi_at(config) / 2

    r = _wrap(x)
    q = nearest_int(r / half_pi)
    t = r - half_pi * q if q else r

    h = halvings(config)
    if h:
        t = t / (2**h)
    s, c = _series(t, max(config.trig_iterations, 1))
    for _ in range(h):
        s, c = s * c * 2, 1 - s * s * 2

    quadrant = q % 4
    if quadrant == 1:
        return c, -s
    if quadrant == 2:
        return -s, -c
    if quadrant == 3:
        return -c, s
    return s, c


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


def trig_phase_correct(x: Any) -> Decimal:
    """Приведение угла в [-π, π]."""
    x = as_decimal(x)
    if not x.is_finite():
        return Decimal.nan(x.config) if x.is_inf() else x
    return restore(_wrap(_trig_guarded(x)), x.config, "trig_phase_correct")


def _periodic(x: Any, operation: str, evaluate) -> Decimal:
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal.nan(x.config)
    s, c = _sin_cos(_trig_guarded(x))
    return restore(evaluate(s, c), x.config, operation)


def sin(x: Any) -> Decimal:
    return _periodic(x, "sin", lambda s, c: s)


def cos(x: Any) -> Decimal:
    return _periodic(x, "cos", lambda s, c: c)


def tan(x: Any) -> Decimal:
    """sin / cos; нулевой cos — полюс (политика деления на ноль)."""
    return _periodic(x, "tan", lambda s, c: _ratio(s, c, "tan"))


def cot(x: Any) -> Decimal:
    return _periodic(x, "cot", lambda s, c: _ratio(c, s, "cot"))


def sec(x: Any) -> Decimal:
    return _periodic(x, "sec", lambda s, c: _ratio(Decimal(1, c.config), c, "sec"))


def csc(x: Any) -> Decimal:
    return _periodic(x, "csc", lambda s, c: _ratio(Decimal(1, s.config), s, "csc"))


def _ratio(numerator: Decimal, denominator: Decimal, operation: str) -> Decimal:
    if denominator.is_zero():
        return division_by_zero(numerator, operation)
    return numerator / denominator


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


def _atan(x: Decimal) -> Decimal:
    """atan(x) для конечного x с рабочей конфигурацией x."""
    config = x.config
    if x.is_zero():
        return Decimal(0, config)
    if abs(x) > 1:
        half_pi = pi_at(config) / 2
        inner = _atan(Decimal(1, config) / x)
        return -half_pi - inner if x.is_negative else half_pi - inner

    y = seed_from_float(math.atan(float(x)), 0, config)
    for _ in range(max(config.trig_iterations, 1)):
        s, c = _sin_cos(y)
        nxt = y + (x * c - s) * c
        if nxt == y:
            break
        y = nxt
    return y


def _asin(x: Decimal) -> Decimal:
    """asin(x) для |x| <= 1 с рабочей конфигурацией x."""
    if abs(x) == 1:
        half_pi = pi_at(x.config) / 2
        return -half_pi if x.is_negative else half_pi
    root = _sqrt(1 - x * x)
    return _atan(x / root)


def _acos(x: Decimal) -> Decimal:
    return pi_at(x.config) / 2 - _asin(x)


def atan(x: Any) -> Decimal:
    """atan(±inf) = ±π/2."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        half_pi = pi_at(x.config) / 2
        return -half_pi if x.is_negative else half_pi
    return restore(_atan(_trig_guarded(x)), x.config, "atan")


def asin(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: |x| > 1 при throw_on_error (иначе NaN)
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() or abs(x) > 1:
        return domain_error(x, "asin argument outside [-1, 1]", "asin")
    return restore(_asin(_trig_guarded(x)), x.config, "asin")


def acos(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: |x| > 1 при throw_on_error (иначе NaN)
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() or abs(x) > 1:
        return domain_error(x, "acos argument outside [-1, 1]", "acos")
    return restore(_acos(_trig_guarded(x)), x.config, "acos")


def acot(x: Any) -> Decimal:
    """acot(x) = π/2 - atan(x), значения в (0, π)."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return pi_at(x.config) if x.is_negative else Decimal(0, x.config)
    w = _trig_guarded(x)
    return restore(pi_at(w.config) / 2 - _atan(w), x.config, "acot")


def asec(x: Any) -> Decimal:
    """asec(x) = acos(1/x), |x| >= 1."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return pi_at(x.config) / 2
    if abs(x) < 1:
        return domain_error(x, "asec argument inside (-1, 1)", "asec")
    w = _trig_guarded(x)
    return restore(_acos(Decimal(1, w.config) / w), x.config, "asec")


def acsc(x: Any) -> Decimal:
    """acsc(x) = asin(1/x), |x| >= 1."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal(0, x.config)
    if abs(x) < 1:
        return domain_error(x, "acsc argument inside (-1, 1)", "acsc")
    w = _trig_guarded(x)
    return restore(_asin(Decimal(1, w.config) / w), x.config, "acsc")


def atan2(y: Any, x: Any) -> Decimal:
    """
    Полярный угол точки (x, y) в [-π, π], как math.atan2(y, x).

    Первый аргумент задаёт ординату y, второй абсциссу x. Вызовы вида
    atan2(x, y) с абсциссой первой дают угол, отражённый относительно
    прямой y = x.

    Бесконечные аргументы: atan2(±inf, +inf) = ±π/4, atan2(±inf, -inf) = ±3π/4,
    atan2(y, +inf) = 0, atan2(y, -inf) = ±π.
    """
    y = as_decimal(y)
    x = as_decimal(x, y.config)
    config = y.config
    if y.is_nan() or x.is_nan():
        return Decimal.nan(config)

    pi = pi_at(config)
    if y.is_inf():
        if x.is_inf():
            angle = pi / 4 if not x.is_negative else pi * Decimal("0.75", config)
        else:
            angle = pi / 2
        return -angle if y.is_negative else angle
    if x.is_inf():
        if not x.is_negative:
            return Decimal(0, config)
        return -pi if y.is_negative else pi
    if x.is_zero():
        if y.is_zero():
            return pi if x.is_negative else Decimal(0, config)
        return -(pi / 2) if y.is_negative else pi / 2

    wy = _trig_guarded(y)
    wx = x.with_config(wy.config)
    angle = _atan(wy / wx)
    if x.is_negative:
        wpi = pi_at(wy.config)
        angle = angle - wpi if y.is_negative else angle + wpi
    return restore(angle, config, "atan2")
