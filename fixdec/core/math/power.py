"""
Power — экспонента, логарифмы, корни и степени

ТЕХНИКИ:
- exp: x = k*ln2 + r, |r| <= ln2/2; ряд Тейлора для r (e_iterations членов),
  затем масштабирование на 2**k
- ln: x = m * 2**k, m ∈ [0.75, 1.5); ln(m) = 2*atanh((m-1)/(m+1)),
  ряд atanh (ln_iterations членов); ln(x) = ln(m) + k*ln2
- ln2: формула типа Machin 18*atanh(1/26) - 2*atanh(1/4801) + 8*atanh(1/8749)
- sqrt: Newton (Heron) с начальным приближением из float
- pow: для целого показателя возведение в квадрат; иначе exp(y*ln(x))

Все функции вычисляются с guard-разрядами и возвращают результат
с конфигурацией аргумента. Количество итераций задаёт фиксированный бюджет
конфигурации, динамической проверки сходимости нет.
"""

import logging
import math
from functools import lru_cache
from typing import Any, Optional

from fixdec.core.domain import GUARD_DIGITS, Decimal, DecimalConfig, working_config
from fixdec.core.domain.digits import leading_exponent, significant_digits
from fixdec.core.math.numerical_safeguards import (
    FLOAT_DIGITS,
    as_decimal,
    division_by_zero,
    domain_error,
    guarded,
    is_odd_integer,
    log10_estimate,
    nearest_int,
    restore,
    result_digits_estimate,
    seed_from_float,
)
from fixdec.special.state_machine import STATE_MACHINE

logger = logging.getLogger(__name__)

# log10(2): оценка количества разрядов 2**k
LOG10_2 = math.log10(2)


# =============================================================================
# РЯДЫ (рабочая точность, конечные аргументы)
# =============================================================================


def atanh_series(z: Decimal, terms: int) -> Decimal:
    """Σ z**(2n+1) / (2n+1), n = 0..terms-1 (для |z| < 1)."""
    z2 = z * z
    power = z
    total = z
    for n in range(1, terms):
        power = power * z2
        if power.is_zero():
            break
        total = total + power / (2 * n + 1)
    return total


def exp_series(r: Decimal, terms: int) -> Decimal:
    """Σ r**n / n!, n = 0..terms."""
    term = Decimal(1, r.config)
    total = term
    for n in range(1, terms + 1):
        term = term * r / n
        if term.is_zero():
            break
        total = total + term
    return total


@lru_cache(maxsize=64)
def ln2_at(config: DecimalConfig) -> Decimal:
    """ln(2) с точностью config.decimals (мемоизация по конфигурации)."""
    terms = max(config.ln_iterations, 1)
    one = Decimal(1, config)
    value = (
        atanh_series(one / 26, terms) * 18
        - atanh_series(one / 4801, terms) * 2
        + atanh_series(one / 8749, terms) * 8
    )
    logger.debug("derived ln2 at %d decimals", config.decimals)
    return value


@lru_cache(maxsize=64)
def ln10_at(config: DecimalConfig) -> Decimal:
    """ln(10) = 3*ln2 + ln(1.25)."""
    value = _ln(Decimal(10, config))
    logger.debug("derived ln10 at %d decimals", config.decimals)
    return value


def _exp(x: Decimal, terms: int) -> Decimal:
    """e**x для конечного x с рабочей конфигурацией x."""
    config = x.config
    ln2 = ln2_at(config)
    k = nearest_int(x / ln2)

    # 2**k за пределами 10**decimals: переполнение либо ноль
    if k * LOG10_2 > config.decimals + 1:
        return x._from_resolution(
            STATE_MACHINE.degrade_overflow(False, config.throw_on_error, "exp")
        )
    if -k * LOG10_2 > config.decimals + 1:
        return Decimal(0, config)

    r = x - ln2 * k
    total = exp_series(r, terms)
    if k >= 0:
        return total * (2**k)
    return total / (2 ** (-k))


def _ln(x: Decimal) -> Decimal:
    """ln(x) для конечного x > 0 с рабочей конфигурацией x."""
    config = x.config
    k = math.floor(log10_estimate(x) / LOG10_2)
    if k > 0:
        m = x / (2**k)
    elif k < 0:
        m = x * (2 ** (-k))
    else:
        m = x

    while m >= 1.5:
        m = m / 2
        k += 1
    while m < 0.75:
        m = m * 2
        k -= 1

    z = (m - 1) / (m + 1)
    result = atanh_series(z, max(config.ln_iterations, 1)) * 2
    if k:
        result = result + ln2_at(config) * k
    return result


def _sqrt(x: Decimal) -> Decimal:
    """√x для конечного x > 0 с рабочей конфигурацией x."""
    config = x.config
    exponent = leading_exponent(x.magnitude)
    mantissa = float("0." + significant_digits(x.magnitude)[:FLOAT_DIGITS])
    if exponent % 2:
        mantissa *= 10
        exponent -= 1
    y = seed_from_float(math.sqrt(mantissa), exponent // 2, config)

    for _ in range(config.sqrt_iterations):
        nxt = (y + x / y) / 2
        # Неподвижная точка: дальнейшие раунды дают то же значение
        if nxt == y:
            break
        y = nxt
    return y


def _int_pow(x: Decimal, n: int) -> Decimal:
    """x**n для целого n >= 0 (возведение в квадрат)."""
    result = Decimal(1, x.config)
    base = x
    while n:
        if n & 1:
            result = result * base
        n >>= 1
        if n:
            base = base * base
    return result


# =============================================================================
# PUBLIC API
# =============================================================================


def exp(x: Any) -> Decimal:
    """
    e**x.

    exp(+inf) = +inf, exp(-inf) = 0.

    Raises:
        IllegalOperation: Переполнение при throw_on_error
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf():
        return Decimal(0, x.config) if x.is_negative else x

    wx = guarded(x, _exp_guard_digits(x, x.config))
    return restore(_exp(wx, wx.config.e_iterations), x.config, "exp")


def _exp_guard_digits(x: Decimal, config: DecimalConfig) -> int:
    """Guard-разряды для e**x плюс разряды целой части результата."""
    if x.is_negative or x.ints >= 16:
        return GUARD_DIGITS
    return GUARD_DIGITS + result_digits_estimate(float(x) / math.log(10), config)


def ln(x: Any) -> Decimal:
    """
    Натуральный логарифм.

    ln(+inf) = +inf. x <= 0 и -inf — вне области определения.

    Raises:
        IllegalOperation: x <= 0 при throw_on_error (иначе NaN)
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() and not x.is_negative:
        return x
    if x.is_inf() or x.is_negative or x.is_zero():
        return domain_error(x, "logarithm of non-positive number", "ln")

    return restore(_ln(guarded(x)), x.config, "ln")


def log(base: Any, x: Any) -> Decimal:
    """
    Логарифм x по основанию base: ln(x) / ln(base).

    base == 1: деление на ноль (политика ошибок).
    """
    base = as_decimal(base)
    x = as_decimal(x, base.config)
    if base.is_nan() or x.is_nan():
        return Decimal.nan(base.config)

    numerator = _guarded_ln(x)
    denominator = _guarded_ln(base)
    if not numerator.is_finite() or not denominator.is_finite():
        return restore(numerator / denominator, base.config, "log")
    if denominator.is_zero():
        return restore(division_by_zero(numerator, "log"), base.config, "log")
    return restore(numerator / denominator, base.config, "log")


def log10(x: Any) -> Decimal:
    return _log_with(x, ln10_at, "log10")


def log2(x: Any) -> Decimal:
    return _log_with(x, ln2_at, "log2")


def _log_with(x: Any, ln_base, operation: str) -> Decimal:
    x = as_decimal(x)
    value = _guarded_ln(x)
    if not value.is_finite():
        return restore(value, x.config, operation)
    return restore(value / ln_base(value.config), x.config, operation)


def _guarded_ln(x: Decimal) -> Decimal:
    """ln(x) с рабочей конфигурацией (специальные значения по правилам ln)."""
    wx = guarded(x)
    if not wx.is_finite() or wx.is_negative or wx.is_zero():
        return ln(wx)
    return _ln(wx)


def sqrt(x: Any) -> Decimal:
    """
    Квадратный корень.

    sqrt(+inf) = +inf; x < 0 — вне области определения.
    """
    x = as_decimal(x)
    if x.is_nan():
        return x
    if x.is_inf() and not x.is_negative:
        return x
    if x.is_negative:
        return domain_error(x, "square root of negative number", "sqrt")
    if x.is_zero():
        return Decimal(0, x.config)

    return restore(_sqrt(guarded(x)), x.config, "sqrt")


def hypot(x: Any, y: Any) -> Decimal:
    """sqrt(x**2 + y**2); бесконечность побеждает NaN (как math.hypot)."""
    x = as_decimal(x)
    y = as_decimal(y, x.config)
    if x.is_inf() or y.is_inf():
        return Decimal.inf(False, x.config)
    if x.is_nan() or y.is_nan():
        return Decimal.nan(x.config)

    wx = guarded(x)
    total = wx * wx + y * y
    if total.is_zero():
        return Decimal(0, x.config)
    return restore(_sqrt(total), x.config, "hypot")


def pow_(x: Any, y: Optional[Any] = None) -> Decimal:
    """
    x**y; pow_(x) без показателя — x**x.

    Правила:
    - целый y: возведение в квадрат (для отрицательного обратная величина)
    - иначе exp(y * ln(x)); x < 0 с нецелым y — вне области определения
    - 0**y при y < 0: деление на ноль
    - x**0 = 1 и 1**y = 1 даже для NaN (как в IEEE-754)
    - бесконечные основание/показатель по правилам IEEE-754 pow

    Examples:
        >>> pow_(Decimal(2), 10)
        Decimal('1024')
        >>> pow_(Decimal(3))
        Decimal('27')
    """
    x = as_decimal(x)
    y = x if y is None else as_decimal(y, x.config)
    config = x.config
    one = Decimal(1, config)

    if y.is_zero() or x == 1:
        return one
    if x.is_nan() or y.is_nan():
        return Decimal.nan(config)
    if y.is_inf():
        return _pow_infinite_exponent(x, y)
    if x.is_inf():
        return _pow_infinite_base(x, y)

    if x.is_zero():
        if y.is_negative:
            return division_by_zero(one, "pow")
        return Decimal(0, config)

    if y.is_int():
        n = int(y)
        negative = x.is_negative and n % 2 == 1
        # Оценка log10 |x**n|
        result_log = n * log10_estimate(x)
        if result_log > config.decimals + 1:
            return restore(_overflow_value(x, negative, config), config, "pow")
        if result_log < -(config.decimals + GUARD_DIGITS + 1):
            return Decimal(0, config)
        extra = GUARD_DIGITS + result_digits_estimate(abs(result_log), config)
        result = _int_pow(guarded(abs(x), extra), abs(n))
        if n < 0:
            result = Decimal(1, result.config) / result
        if negative:
            result = -result
        return restore(result, config, "pow")

    if x.is_negative:
        return domain_error(x, "negative base with non-integer exponent", "pow")

    wx = guarded(x)
    exponent = y.with_config(wx.config) * _ln(wx)
    wexp = exponent.with_config(working_config(config, _exp_guard_digits(exponent, config)))
    return restore(_exp(wexp, wexp.config.e_iterations), config, "pow")


def _overflow_value(x: Decimal, negative: bool, config: DecimalConfig) -> Decimal:
    resolution = STATE_MACHINE.degrade_overflow(negative, config.throw_on_error, "pow")
    return x._from_resolution(resolution)


def _pow_infinite_exponent(x: Decimal, y: Decimal) -> Decimal:
    config = x.config
    if x.is_inf():
        magnitude_order = 1
    else:
        magnitude_order = (abs(x) > 1) - (abs(x) < 1)
    if magnitude_order == 0:
        return Decimal(1, config)
    grows = (magnitude_order > 0) != y.is_negative
    return Decimal.inf(False, config) if grows else Decimal(0, config)


def _pow_infinite_base(x: Decimal, y: Decimal) -> Decimal:
    config = x.config
    odd = is_odd_integer(y)
    if y.is_negative:
        return Decimal(0, config)
    return Decimal.inf(x.is_negative and odd, config)
