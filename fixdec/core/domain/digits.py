"""
Digit Store & Normalizer — цифровое представление модуля числа

Модуль числа хранится как строка цифровых символов '0'..'9' (старший
разряд первым) и количество дробных разрядов в конце строки:

    Magnitude("123456", 3)  ->  123.456
    Magnitude("5", 0)       ->  5
    Magnitude("05", 2)      ->  0.05  (после lead_trim: "005")

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 0 <= frac <= len(digits), целая часть содержит хотя бы одну цифру
2. После нормализации нет лишних ведущих нулей и хвостовых дробных нулей
3. Функции работают только с модулем: знак здесь не существует
"""

import re
from typing import NamedTuple

from fixdec.core.errors import IllegalOperation

_SYMBOLS = "0123456789"

# [+-]digits[.digits][e[+-]digits] либо [+-].digits
_NUMBER_RE = re.compile(
    r"^(?P<sign>[+-])?(?:(?P<int>\d+)(?:\.(?P<frac>\d*))?|\.(?P<only_frac>\d+))"
    r"(?:[eE](?P<exp>[+-]?\d+))?$"
)


class Magnitude(NamedTuple):
    """Беззнаковый модуль числа: цифровые символы + число дробных разрядов."""

    digits: str
    frac: int

    @property
    def ints(self) -> int:
        """Количество разрядов целой части."""
        return len(self.digits) - self.frac

    @property
    def int_part(self) -> str:
        return self.digits[: self.ints]

    @property
    def frac_part(self) -> str:
        return self.digits[self.ints :]

    def is_zero(self) -> bool:
        return self.digits.strip("0") == ""


ZERO = Magnitude("0", 0)
ONE = Magnitude("1", 0)


# =============================================================================
# ПРЕОБРАЗОВАНИЕ ЦИФРА <-> СИМВОЛ
# =============================================================================


def digit_to_symbol(value: int) -> str:
    """
    Цифра -> символ.

    Защитная проверка инварианта: значение вне [0, 9] означает ошибку в ядре,
    поэтому IllegalOperation поднимается независимо от политики ошибок.
    """
    if value < 0 or value > 9:
        raise IllegalOperation(f'"{value}" is not a valid decimal digit.')
    return _SYMBOLS[value]


def symbol_to_digit(symbol: str) -> int:
    return ord(symbol) - 48


def symbols(values: list[int]) -> str:
    """Список цифр (старший разряд первым) -> строка символов."""
    return "".join([digit_to_symbol(v) for v in values])


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def lead_trim(m: Magnitude) -> Magnitude:
    """Удаление лишних ведущих нулей целой части (остаётся минимум одна цифра)."""
    digits = m.digits
    if m.ints <= 0:
        # Целая часть пуста: дописываем ведущий ноль
        return Magnitude("0" * (1 - m.ints) + digits, m.frac)

    limit = m.ints - 1
    i = 0
    while i < limit and digits[i] == "0":
        i += 1
    if i == 0:
        return m
    return Magnitude(digits[i:], m.frac)


def trail_trim(m: Magnitude) -> Magnitude:
    """Удаление хвостовых нулей дробной части (не дальше десятичной точки)."""
    if m.frac == 0:
        return m
    frac_part = m.frac_part.rstrip("0")
    removed = m.frac - len(frac_part)
    if removed == 0:
        return m
    return Magnitude(m.digits[: len(m.digits) - removed], m.frac - removed)


def normalize(m: Magnitude) -> Magnitude:
    return trail_trim(lead_trim(m))


def set_precision(m: Magnitude, precision: int, truncate: bool = False) -> Magnitude:
    """
    Приведение модуля к precision дробным разрядам.

    Если precision больше текущего количества дробных разрядов — дополнение
    нулями. Иначе отбрасывание лишних разрядов (truncate=True) либо
    округление half away from zero по первому отброшенному разряду.

    Идемпотентна для фиксированного precision.

    Examples:
        >>> set_precision(Magnitude("12345", 3), 2)
        Magnitude(digits='1235', frac=2)
        >>> set_precision(Magnitude("12345", 3), 2, truncate=True)
        Magnitude(digits='1234', frac=2)
        >>> set_precision(Magnitude("15", 1), 3)
        Magnitude(digits='1500', frac=3)
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    if precision >= m.frac:
        pad = precision - m.frac
        if pad == 0:
            return m
        return Magnitude(m.digits + "0" * pad, precision)

    keep = len(m.digits) - (m.frac - precision)
    kept = Magnitude(m.digits[:keep], precision)
    if truncate or m.digits[keep] < "5":
        return lead_trim(kept)

    return lead_trim(increment_last(kept))


def increment_last(m: Magnitude) -> Magnitude:
    """Прибавление единицы к последнему хранимому разряду (с переносом)."""
    values = [symbol_to_digit(c) for c in m.digits]
    i = len(values) - 1
    while i >= 0:
        if values[i] < 9:
            values[i] += 1
            break
        values[i] = 0
        i -= 1
    if i < 0:
        values.insert(0, 1)
    return Magnitude(symbols(values), m.frac)


# =============================================================================
# СДВИГ И ВЫРАВНИВАНИЕ
# =============================================================================


def shift(m: Magnitude, places: int) -> Magnitude:
    """
    Точное умножение модуля на 10**places (перенос десятичной точки).

    places > 0 сдвигает точку вправо, places < 0 — влево.
    """
    if places == 0:
        return m
    if places > 0:
        if places <= m.frac:
            return lead_trim(Magnitude(m.digits, m.frac - places))
        return lead_trim(Magnitude(m.digits + "0" * (places - m.frac), 0))
    return lead_trim(Magnitude(m.digits, m.frac - places))


def align(a: Magnitude, b: Magnitude) -> tuple[str, str, int]:
    """
    Выравнивание двух модулей до одинаковой длины.

    Дробные части дополняются хвостовыми нулями, целые — ведущими.

    Returns:
        (digits_a, digits_b, frac) одинаковой длины с общим frac
    """
    frac = max(a.frac, b.frac)
    ints = max(a.ints, b.ints)
    da = "0" * (ints - a.ints) + a.digits + "0" * (frac - a.frac)
    db = "0" * (ints - b.ints) + b.digits + "0" * (frac - b.frac)
    return da, db, frac


def leading_exponent(m: Magnitude) -> int:
    """
    Десятичный порядок e такой, что модуль = 0.d1d2... * 10**e, d1 != 0.

    Для нуля возвращает 0.
    """
    stripped = m.digits.lstrip("0")
    if not stripped:
        return 0
    return len(stripped) - m.frac


def significant_digits(m: Magnitude) -> str:
    """Цифры без ведущих нулей (мантисса)."""
    return m.digits.lstrip("0") or "0"


# =============================================================================
# РАЗБОР СТРОКИ
# =============================================================================


def parse_digits(text: str) -> tuple[bool, Magnitude]:
    """
    Строгий разбор десятичной строки.

    Формат: [+-]digits[.digits][e[+-]digits]

    Returns:
        (negative, magnitude) — нормализованный модуль

    Raises:
        IllegalOperation: Если строка не является десятичным числом
    """
    match = _NUMBER_RE.match(text.strip())
    if match is None:
        raise IllegalOperation(f'"{text}" is not a valid decimal number.', operation="parse")

    negative = match.group("sign") == "-"
    if match.group("only_frac") is not None:
        int_part, frac_part = "0", match.group("only_frac")
    else:
        int_part, frac_part = match.group("int"), match.group("frac") or ""

    m = Magnitude(int_part + frac_part, len(frac_part))
    exponent = match.group("exp")
    if exponent is not None:
        m = shift(m, int(exponent))

    return negative, normalize(m)
