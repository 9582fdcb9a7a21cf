"""
Hyperbolic — гиперболические функции и обратные к ним

Прямые функции строятся из e**x и e**-x (ряд экспоненты с
tanh_iterations членами):
    sinh = (e**x - e**-x) / 2,  cosh = (e**x + e**-x) / 2
    tanh = (1 - e**-2|x|) / (1 + e**-2|x|) со знаком x
tanh насыщается до ±1, когда e**-2|x| меньше 10**-(decimals + 2).

Обратные функции через ln и sqrt:
    asinh(x) = ln(|x| + √(x**2 + 1)) со знаком x
    acosh(x) = ln(x + √(x**2 - 1)),        x >= 1
    atanh(x) = ln((1 + x) / (1 - x)) / 2,  |x| < 1 (полюс в ±1)
    acoth(x) = ln((x + 1) / (x - 1)) / 2,  |x| > 1 (полюс в ±1)
    asech(x) = acosh(1/x),                 0 < x <= 1
    acsch(x) = asinh(1/x),                 x != 0
Для |x| >= 1 корни вычисляются в виде |x|*√(1 ± 1/x**2), чтобы x**2
не переполнял рабочую точность.
"""

from typing import Any

from fixdec.core.domain import Decimal
from fixdec.core.math.numerical_safeguards import (
    as_decimal,
    division_by_zero,
    domain_error,
    guarded,
    restore,
)
from fixdec.core.math.power import _exp, _exp_guard_digits, _ln, _sqrt

# Множитель порога насыщения tanh: e**-2|x| < 10**-(decimals + 2)
# при |x| > (decimals + 2) * ln(10) / 2 ≈ (decimals + 2) * 1.1513
TANH_SATURATION_FACTOR = 1.2


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


def _exp_pair(x: Decimal) -> tuple[Decimal, Decimal]:
    """(e**|x|, e**-|x|) с рабочей конфигурацией под величину результата."""
    magnitude = abs(x)
    w = guarded(magnitude, _exp_guard_digits(magnitude, x.config))
    grow = _exp(w, w.config.tanh_iterations)
    if not grow.is_finite():
        return grow, Decimal(0, w.config)
    return grow, Decimal(1, w.config) / grow


def sinh(x: Any) -> Decimal:
    x = as_decimal(x)
    if not x.is_finite():
        return x
    grow, shrink = _exp_pair(x)
    value = (grow - shrink) / 2
    return restore(-value if x.is_negative else value, x.config, "sinh")


def cosh(x: Any) -> Decimal:
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal.inf(False, x.config)
    grow, shrink = _exp_pair(x)
    return restore((grow + shrink) / 2, x.config, "cosh")


def _tanh_saturates(x: Decimal) -> bool:
    limit = (x.config.decimals + 2) * TANH_SATURATION_FACTOR
    return x.ints > 16 or abs(float(x)) > limit


def tanh(x: Any) -> Decimal:
    x = as_decimal(x)
    if x.is_nan():
        return x
    one = Decimal(1, x.config)
    if x.is_inf() or _tanh_saturates(x):
        return -one if x.is_negative else one

    w = guarded(abs(x))
    decay = _exp(-(w * 2), w.config.tanh_iterations)
    value = (1 - decay) / (1 + decay)
    return restore(-value if x.is_negative else value, x.config, "tanh")


def coth(x: Any) -> Decimal:
    """coth(0) — полюс."""
    x = as_decimal(x)
    if x.is_zero():
        return division_by_zero(Decimal(1, x.config), "coth")
    t = tanh(guarded(x))
    if not t.is_finite():
        return restore(t, x.config, "coth")
    return restore(Decimal(1, t.config) / t, x.config, "coth")


def sech(x: Any) -> Decimal:
    x = as_decimal(x)
    if x.is_inf():
        return Decimal(0, x.config)
    c = cosh(guarded(x))
    if not c.is_finite():
        return restore(c, x.config, "sech")
    return restore(Decimal(1, c.config) / c, x.config, "sech")


def csch(x: Any) -> Decimal:
    """csch(0) — полюс."""
    x = as_decimal(x)
    if x.is_inf():
        return Decimal(0, x.config)
    if x.is_zero():
        return division_by_zero(Decimal(1, x.config), "csch")
    s = sinh(guarded(x))
    if not s.is_finite():
        return restore(s, x.config, "csch")
    return restore(Decimal(1, s.config) / s, x.config, "csch")


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


def _asinh(w: Decimal) -> Decimal:
    """asinh(w) для конечного w с рабочей конфигурацией w."""
    a = abs(w)
    if a.is_zero():
        return a
    if a >= 1:
        inverse = Decimal(1, w.config) / a
        value = _ln(a) + _ln(1 + _sqrt(1 + inverse * inverse))
    else:
        value = _ln(a + _sqrt(a * a + 1))
    return -value if w.is_negative else value


def _acosh(w: Decimal) -> Decimal:
    """acosh(w) для конечного w >= 1 с рабочей конфигурацией w."""
    if w == 1:
        return Decimal(0, w.config)
    inverse = Decimal(1, w.config) / w
    return _ln(w) + _ln(1 + _sqrt(1 - inverse * inverse))


def asinh(x: Any) -> Decimal:
    x = as_decimal(x)
    if not x.is_finite():
        return x
    return restore(_asinh(guarded(x)), x.config, "asinh")


def acosh(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: x < 1 при throw_on_error (иначе NaN)
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() and not x.is_negative:
        return x
    if x < 1:
        return domain_error(x, "acosh argument below 1", "acosh")
    return restore(_acosh(guarded(x)), x.config, "acosh")


def atanh(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: |x| > 1 (вне области) или |x| == 1 (полюс)
            при throw_on_error
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() or abs(x) > 1:
        return domain_error(x, "atanh argument outside [-1, 1]", "atanh")
    if abs(x) == 1:
        return division_by_zero(x, "atanh")
    w = guarded(x)
    return restore(_ln((1 + w) / (1 - w)) / 2, x.config, "atanh")


def acoth(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: |x| < 1 (вне области) или |x| == 1 (полюс)
            при throw_on_error
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal(0, x.config)
    if abs(x) < 1:
        return domain_error(x, "acoth argument inside (-1, 1)", "acoth")
    if abs(x) == 1:
        return division_by_zero(x, "acoth")
    w = guarded(x)
    return restore(_ln((w + 1) / (w - 1)) / 2, x.config, "acoth")


def asech(x: Any) -> Decimal:
    """
    Raises:
        IllegalOperation: x вне (0, 1] при throw_on_error; полюс в x == 0
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_zero():
        return division_by_zero(Decimal(1, x.config), "asech")
    if x.is_inf() or x.is_negative or x > 1:
        return domain_error(x, "asech argument outside (0, 1]", "asech")
    w = guarded(x)
    return restore(_acosh(Decimal(1, w.config) / w), x.config, "asech")


def acsch(x: Any) -> Decimal:
    """acsch(0) — полюс, acsch(±inf) = 0."""
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal(0, x.config)
    if x.is_zero():
        return division_by_zero(Decimal(1, x.config), "acsch")
    w = guarded(x)
    return restore(_asinh(Decimal(1, w.config) / w), x.config, "acsch")
