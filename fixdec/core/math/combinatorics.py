"""
Combinatorics — факториал, размещения, сочетания, бином

Все функции определены для неотрицательных целых аргументов. Нецелый или
отрицательный аргумент — IllegalOperation (throw_on_error) либо NaN.

ncr использует мультипликативную формулу с делением на каждом шаге:
    C(n, k) = Π_{i=1..k} (n - k + i) / i
промежуточное значение после шага i равно C(n - k + i, i) и остаётся
целым. Произведение до деления на i превышает результат не более чем
в n раз, поэтому цикл идёт с len(str(n)) + 1 дополнительными разрядами
и возвращается к конфигурации n через restore.
"""

from typing import Any, Optional

from fixdec.core.domain import Decimal, working_config
from fixdec.core.math.numerical_safeguards import as_decimal, domain_error, restore
from fixdec.core.math.power import pow_
from fixdec.core.math.rounding import round_to


def _natural(x: Decimal, operation: str) -> Optional[Decimal]:
    """None для неотрицательного целого x, иначе результат политики ошибок."""
    if x.is_nan():
        return x
    if not x.is_finite() or x.is_negative or not x.is_int():
        return domain_error(x, f"{operation} requires a non-negative integer, got {x}", operation)
    return None


def factorial(x: Any) -> Decimal:
    """
    x! итерированным произведением.

    Examples:
        >>> factorial(Decimal(5))
        Decimal('120')

    Raises:
        IllegalOperation: Отрицательный или нецелый x при throw_on_error;
            переполнение при throw_on_error
    """
    x = as_decimal(x)
    invalid = _natural(x, "factorial")
    if invalid is not None:
        return invalid

    acc = Decimal(1, x.config)
    for i in range(2, int(x) + 1):
        acc = acc * i
        if not acc.is_finite():
            break
    return acc


def npr(n: Any, k: Any) -> Decimal:
    """
    Размещения n!/(n-k)! как убывающее произведение k множителей.

    k > n → 0.
    """
    n = as_decimal(n)
    k = as_decimal(k, n.config)
    invalid = _natural(n, "npr") or _natural(k, "npr")
    if invalid is not None:
        return invalid

    top, count = int(n), int(k)
    if count > top:
        return Decimal(0, n.config)
    acc = Decimal(1, n.config)
    for i in range(count):
        acc = acc * (top - i)
        if not acc.is_finite():
            break
    return acc


def ncr(n: Any, k: Any) -> Decimal:
    """
    Сочетания n!/(k!(n-k)!).

    k > n → 0; используется симметрия k = min(k, n - k).
    """
    n = as_decimal(n)
    k = as_decimal(k, n.config)
    invalid = _natural(n, "ncr") or _natural(k, "ncr")
    if invalid is not None:
        return invalid

    top, count = int(n), int(k)
    if count > top:
        return Decimal(0, n.config)
    count = min(count, top - count)

    acc = Decimal(1, working_config(n.config, len(str(top)) + 1))
    for i in range(1, count + 1):
        # Частное целое: точное деление, затем снятие хвоста округления
        acc = round_to(acc * (top - count + i) / i, 0)
        if not acc.is_finite():
            break
    return restore(acc, n.config, "ncr")


def binomial(x: Any, y: Any, n: Any) -> Decimal:
    """
    (x + y)**n, разложенное по биному Ньютона:
        Σ_{k=0..n} C(n, k) x**(n-k) y**k

    n — неотрицательное целое.
    """
    x = as_decimal(x)
    y = as_decimal(y, x.config)
    n = as_decimal(n, x.config)
    invalid = _natural(n, "binomial")
    if invalid is not None:
        return invalid
    if x.is_nan() or y.is_nan():
        return Decimal.nan(x.config)

    power = int(n)
    total = Decimal(0, x.config)
    for k in range(power + 1):
        total = total + ncr(n, k) * pow_(x, power - k) * pow_(y, k)
    return total
