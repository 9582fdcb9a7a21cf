"""
Decimal — десятичное число произвольной точности с фиксированной точкой

Значение состоит из:
- вида (NumKind: NORMAL / INFINITY / NAN)
- знака (для NaN не определён)
- модуля: строка цифр '0'..'9' + количество дробных разрядов
- собственной конфигурации (DecimalConfig) — глобальной точности нет

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значения неизменяемы: каждая операция возвращает новый Decimal
2. NaN и Infinity имеют пустой модуль
3. Ноль, полученный арифметикой, положительный; единственный знаковый
   ноль — результат finite ÷ Infinity (он равен нулю при сравнении)
4. Конструирование не теряет разрядов: если у источника больше дробных
   разрядов, чем config.decimals, decimals конфигурации увеличивается

Операнды int / float / str приводятся к Decimal один раз на границе
(_coerce); результат бинарной операции получает конфигурацию левого
операнда Decimal.

Examples:
    >>> Decimal("123.456") + "0.544"
    Decimal('124')
    >>> Decimal(1) / 4
    Decimal('0.25')
    >>> Decimal.inf() - Decimal.inf()
    Decimal('nan')
"""

import logging
import math
import struct
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Union

from fixdec.core.contracts import validate_decimal_value
from fixdec.core.domain.config import DEFAULT_CONFIG, DecimalConfig
from fixdec.core.domain.digits import (
    Magnitude,
    ZERO,
    parse_digits,
    set_precision,
    symbol_to_digit,
)
from fixdec.core.domain.kinds import NumKind
from fixdec.core.errors import IllegalOperation
from fixdec.core.kernel import arithmetic, magnitude as kernel
from fixdec.special.state_machine import Operand, SpecialResolution

logger = logging.getLogger(__name__)

_EMPTY = Magnitude("", 0)
_HEX_SYMBOLS = "0123456789ABCDEF"

Numeric = Union["Decimal", int, float, str]


class NativeType(str, Enum):
    """Нативные типы фиксированной ширины для fits() / to_native()."""

    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


_INT_RANGES: dict[NativeType, tuple[int, int]] = {
    NativeType.INT8: (-(2**7), 2**7 - 1),
    NativeType.UINT8: (0, 2**8 - 1),
    NativeType.INT16: (-(2**15), 2**15 - 1),
    NativeType.UINT16: (0, 2**16 - 1),
    NativeType.INT32: (-(2**31), 2**31 - 1),
    NativeType.UINT32: (0, 2**32 - 1),
    NativeType.INT64: (-(2**63), 2**63 - 1),
    NativeType.UINT64: (0, 2**64 - 1),
}


def _widen(config: DecimalConfig, frac: int) -> DecimalConfig:
    """Увеличение decimals до frac, чтобы значение не теряло разрядов."""
    if frac > config.decimals:
        return config.model_copy(update={"decimals": frac})
    return config


class Decimal:
    """
    Десятичное число с фиксированной точкой и специальными значениями IEEE-754.

    Args:
        value: None (NaN), int, float, str или Decimal
        config: Конфигурация точности; по умолчанию конфигурация value
            (для Decimal) либо DEFAULT_CONFIG

    Raises:
        IllegalOperation: Невалидная строка при throw_on_error=True
            (при throw_on_error=False: NaN)
        TypeError: Неподдерживаемый тип value
    """

    __slots__ = ("_kind", "_negative", "_magnitude", "_config")

    def __init__(self, value: Any = None, config: Optional[DecimalConfig] = None):
        if isinstance(value, Decimal):
            config = config or value._config
            self._set(value._kind, value._negative, value._magnitude, config)
            return

        config = config or DEFAULT_CONFIG

        if value is None:
            self._set(NumKind.NAN, False, _EMPTY, config)
        elif isinstance(value, int):
            self._set(NumKind.NORMAL, value < 0, Magnitude(str(abs(int(value))), 0), config)
        elif isinstance(value, float):
            self._init_from_float(value, config)
        elif isinstance(value, str):
            self._init_from_string(value, config)
        else:
            raise TypeError(f"cannot convert {type(value).__name__} to Decimal")

    def _set(
        self, kind: NumKind, negative: bool, mag: Magnitude, config: DecimalConfig
    ) -> None:
        self._kind = kind
        self._negative = negative if kind != NumKind.NAN else False
        self._magnitude = mag if kind == NumKind.NORMAL else _EMPTY
        self._config = _widen(config, mag.frac) if kind == NumKind.NORMAL else config

    def _init_from_float(self, value: float, config: DecimalConfig) -> None:
        if math.isnan(value):
            self._set(NumKind.NAN, False, _EMPTY, config)
        elif math.isinf(value):
            self._set(NumKind.INFINITY, value < 0, _EMPTY, config)
        else:
            # repr даёт кратчайшее десятичное представление float
            negative, mag = parse_digits(repr(value))
            self._set(NumKind.NORMAL, negative and not mag.is_zero(), mag, config)

    def _init_from_string(self, value: str, config: DecimalConfig) -> None:
        text = value.strip().lower()
        unsigned = text[1:] if text[:1] in ("+", "-") else text
        if unsigned in ("nan", "inf", "infinity"):
            if unsigned == "nan":
                self._set(NumKind.NAN, False, _EMPTY, config)
            else:
                self._set(NumKind.INFINITY, text.startswith("-"), _EMPTY, config)
            return

        try:
            negative, mag = parse_digits(value)
        except IllegalOperation:
            if config.throw_on_error:
                raise
            logger.warning("invalid decimal string %r degraded to NaN", value)
            self._set(NumKind.NAN, False, _EMPTY, config)
            return
        self._set(NumKind.NORMAL, negative and not mag.is_zero(), mag, config)

    # =========================================================================
    # ФАБРИКИ
    # =========================================================================

    @classmethod
    def _create(
        cls, kind: NumKind, negative: bool, mag: Magnitude, config: DecimalConfig
    ) -> "Decimal":
        instance = object.__new__(cls)
        instance._set(kind, negative, mag, config)
        return instance

    @classmethod
    def nan(cls, config: Optional[DecimalConfig] = None) -> "Decimal":
        return cls._create(NumKind.NAN, False, _EMPTY, config or DEFAULT_CONFIG)

    @classmethod
    def inf(cls, negative: bool = False, config: Optional[DecimalConfig] = None) -> "Decimal":
        """Бесконечность — только через эту фабрику или правила деградации."""
        return cls._create(NumKind.INFINITY, negative, _EMPTY, config or DEFAULT_CONFIG)

    @classmethod
    def from_hex(cls, text: str, config: Optional[DecimalConfig] = None) -> "Decimal":
        """
        Целое из шестнадцатеричной строки (без префикса 0x).

        Raises:
            IllegalOperation: Невалидный символ при throw_on_error=True
        """
        config = config or DEFAULT_CONFIG
        body = text.strip()
        negative = body.startswith("-")
        body = body[1:] if body[:1] in ("+", "-") else body

        if not body or any(_HEX_SYMBOLS.find(s) < 0 for s in body.upper()):
            if config.throw_on_error:
                raise IllegalOperation(
                    f'"{text}" is not a valid hexadecimal number.', operation="from_hex"
                )
            logger.warning("invalid hexadecimal string %r degraded to NaN", text)
            return cls.nan(config)

        acc = ZERO
        sixteen = kernel.from_int(16)
        for symbol in body.upper():
            digit = kernel.from_int(_HEX_SYMBOLS.index(symbol))
            acc = kernel.add(kernel.multiply(acc, sixteen), digit)

        return cls._create(NumKind.NORMAL, negative and not acc.is_zero(), acc, config)

    @classmethod
    def from_contract(cls, data: dict[str, Any]) -> "Decimal":
        """
        Значение из JSON-контракта decimal_value.json.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        validate_decimal_value(data)
        config = DecimalConfig.from_contract(data["config"]) if "config" in data else None
        kind = NumKind(data["kind"])
        if kind == NumKind.NAN:
            return cls.nan(config)
        if kind == NumKind.INFINITY:
            return cls.inf(data["value"].startswith("-"), config)
        return cls(data["value"], config)

    def _derive(self, negative: bool, mag: Magnitude) -> "Decimal":
        """Новое конечное значение с конфигурацией self."""
        return Decimal._create(NumKind.NORMAL, negative, mag, self._config)

    def _special(self, kind: NumKind, negative: bool) -> "Decimal":
        if kind == NumKind.NORMAL:
            return Decimal._create(NumKind.NORMAL, negative, ZERO, self._config)
        return Decimal._create(kind, negative, _EMPTY, self._config)

    def _from_resolution(self, resolution: SpecialResolution) -> "Decimal":
        # NORMAL в разрешении означает знаковый ноль (finite ÷ Infinity)
        return self._special(resolution.kind, resolution.negative)

    def _coerce(self, other: Any) -> "Decimal":
        if isinstance(other, Decimal):
            return other
        if isinstance(other, (int, float, str)):
            return Decimal(other, self._config)
        return NotImplemented

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def kind(self) -> NumKind:
        return self._kind

    @property
    def is_negative(self) -> bool:
        return self._negative

    @property
    def sign(self) -> Optional[int]:
        """+1, -1 либо None для NaN."""
        if self._kind == NumKind.NAN:
            return None
        return -1 if self._negative else 1

    @property
    def magnitude(self) -> Magnitude:
        return self._magnitude

    @property
    def config(self) -> DecimalConfig:
        return self._config

    @property
    def decimals(self) -> int:
        """Фактическое количество дробных разрядов."""
        return self._magnitude.frac

    @property
    def ints(self) -> int:
        """Количество разрядов целой части."""
        return self._magnitude.ints if self._kind == NumKind.NORMAL else 0

    @property
    def operand(self) -> Operand:
        return Operand(self._kind, self._negative, self.is_zero())

    def is_nan(self) -> bool:
        return self._kind == NumKind.NAN

    def is_inf(self) -> bool:
        return self._kind == NumKind.INFINITY

    def is_finite(self) -> bool:
        return self._kind == NumKind.NORMAL

    def is_zero(self) -> bool:
        return self._kind == NumKind.NORMAL and self._magnitude.is_zero()

    def is_int(self) -> bool:
        return self._kind == NumKind.NORMAL and self._magnitude.frac_part.strip("0") == ""

    # =========================================================================
    # КОНФИГУРАЦИЯ И ТОЧНОСТЬ
    # =========================================================================

    def with_config(self, config: DecimalConfig) -> "Decimal":
        """Копия значения с явно привязанной конфигурацией."""
        return Decimal._create(self._kind, self._negative, self._magnitude, config)

    def with_throw_on_error(self, throw_on_error: bool) -> "Decimal":
        return self.with_config(
            self._config.model_copy(update={"throw_on_error": throw_on_error})
        )

    def set_precision(self, precision: int) -> "Decimal":
        """
        Ровно precision дробных разрядов (дополнение нулями, отбрасывание
        или округление по политике конфигурации). Знак не меняется.
        """
        if self._kind != NumKind.NORMAL:
            return self
        mag = set_precision(self._magnitude, precision, self._config.trunc_not_round)
        negative = self._negative and not mag.is_zero()
        return Decimal._create(NumKind.NORMAL, negative, mag, self._config)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def __add__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.add(self, other)

    def __radd__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.add(other, self)

    def __sub__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.subtract(self, other)

    def __rsub__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.subtract(other, self)

    def __mul__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.multiply(self, other)

    def __rmul__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.multiply(other, self)

    def __truediv__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.divide(self, other)

    def __rtruediv__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.divide(other, self)

    def __mod__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.mod(self, other)

    def __rmod__(self, other: Numeric) -> "Decimal":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return arithmetic.mod(other, self)

    def __pow__(self, other: Numeric) -> "Decimal":
        # power.py импортирует Decimal, поэтому импорт отложен
        from fixdec.core.math.power import pow_

        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return pow_(self, other)

    def __rpow__(self, other: Numeric) -> "Decimal":
        from fixdec.core.math.power import pow_

        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return pow_(other, self)

    def __neg__(self) -> "Decimal":
        return arithmetic.negate(self)

    def __pos__(self) -> "Decimal":
        return self

    def __abs__(self) -> "Decimal":
        if self._negative:
            return arithmetic.negate(self)
        return self

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def _compare(self, other: Any) -> Optional[int]:
        if isinstance(other, Decimal):
            return arithmetic.compare(self, other)
        if isinstance(other, (int, float)):
            return arithmetic.compare(self, Decimal(other, self._config))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        order = self._compare(other)
        if order is NotImplemented:
            return NotImplemented
        return order == 0

    def __lt__(self, other: Numeric) -> bool:
        order = self._compare(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order < 0

    def __le__(self, other: Numeric) -> bool:
        order = self._compare(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order <= 0

    def __gt__(self, other: Numeric) -> bool:
        order = self._compare(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order > 0

    def __ge__(self, other: Numeric) -> bool:
        order = self._compare(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order >= 0

    def __hash__(self) -> int:
        if self._kind == NumKind.NAN:
            return object.__hash__(self)
        if self._kind == NumKind.INFINITY:
            return hash(-math.inf if self._negative else math.inf)
        # Совпадает с hash(int) / hash(float) / hash(Fraction) для равных значений
        return hash(self._as_fraction())

    def __bool__(self) -> bool:
        return not self.is_zero()

    # =========================================================================
    # ПРЕОБРАЗОВАНИЯ
    # =========================================================================

    def _as_fraction(self) -> Fraction:
        numerator = int(self._magnitude.digits)
        if self._negative:
            numerator = -numerator
        return Fraction(numerator, 10**self._magnitude.frac)

    def __int__(self) -> int:
        """Целая часть (отбрасывание к нулю)."""
        if self._kind == NumKind.NAN:
            raise ValueError("cannot convert NaN to integer")
        if self._kind == NumKind.INFINITY:
            raise OverflowError("cannot convert Infinity to integer")
        value = kernel.to_int(self._magnitude)
        return -value if self._negative else value

    def __float__(self) -> float:
        if self._kind == NumKind.NAN:
            return math.nan
        if self._kind == NumKind.INFINITY:
            return -math.inf if self._negative else math.inf
        return float(str(self))

    def __round__(self, ndigits: Optional[int] = None) -> Any:
        from fixdec.core.math.rounding import round_to

        if ndigits is None:
            return int(round_to(self, 0))
        return round_to(self, ndigits)

    def __floor__(self) -> int:
        from fixdec.core.math.rounding import floor

        return int(floor(self))

    def __ceil__(self) -> int:
        from fixdec.core.math.rounding import ceil

        return int(ceil(self))

    def __trunc__(self) -> int:
        return int(self)

    def fits(self, native: Union[NativeType, str]) -> bool:
        """
        Проверка, представимо ли значение нативным типом без потерь.

        Целые типы: значение целое и в диапазоне.
        Float-типы: значение конечно и точно восстанавливается из float.
        """
        native = NativeType(native)
        if self._kind != NumKind.NORMAL:
            return False

        if native in _INT_RANGES:
            low, high = _INT_RANGES[native]
            return self.is_int() and low <= int(self) <= high

        value = self._to_float(native)
        return math.isfinite(value) and Decimal(value, self._config) == self

    def to_native(self, native: Union[NativeType, str]) -> Union[int, float]:
        """
        Преобразование в нативный тип.

        Целые типы: дробная часть отбрасывается к нулю; значение вне
        диапазона, NaN и Infinity → ValueError (без насыщения).
        Float-типы: ближайший float (float32 — через struct).

        Raises:
            ValueError: Значение не помещается в целый тип
        """
        native = NativeType(native)
        if native in _INT_RANGES:
            if self._kind != NumKind.NORMAL:
                raise ValueError(f"{self} does not fit {native.value}")
            low, high = _INT_RANGES[native]
            value = int(self)
            if not low <= value <= high:
                raise ValueError(f"{self} does not fit {native.value}")
            return value
        return self._to_float(native)

    def _to_float(self, native: NativeType) -> float:
        value = float(self)
        if native == NativeType.FLOAT32 and math.isfinite(value):
            try:
                return struct.unpack("f", struct.pack("f", value))[0]
            except OverflowError:
                return -math.inf if value < 0 else math.inf
        return value

    # =========================================================================
    # ТЕКСТОВЫЙ / HEX / JSON ЭКСПОРТ
    # =========================================================================

    def __str__(self) -> str:
        if self._kind == NumKind.NAN:
            return "nan"
        if self._kind == NumKind.INFINITY:
            return "-inf" if self._negative else "inf"
        m = self._magnitude
        text = m.int_part
        if m.frac:
            text += "." + m.frac_part
        return ("-" if self._negative else "") + text

    def __repr__(self) -> str:
        return f"Decimal('{self}')"

    def to_fixed_string(self) -> str:
        """Строка ровно с config.decimals дробными разрядами."""
        if self._kind != NumKind.NORMAL:
            return str(self)
        return str(self.set_precision(self._config.decimals))

    def to_hex(self, lowercase: bool = False) -> str:
        """
        Целая часть в шестнадцатеричном виде (через divide/mod на 16).

        Для модулей за пределами 64-битных целых корректность зависит от
        div_iterations > 0.
        """
        if self._kind != NumKind.NORMAL:
            return str(self)

        whole = kernel.truncate(self._magnitude)
        config = _widen(self._config, whole.ints + 1)
        n = Decimal._create(NumKind.NORMAL, False, whole, config)
        sixteen = Decimal(16, config)

        symbols = []
        while not n.is_zero():
            quotient = arithmetic.divide(n, sixteen)
            quotient = quotient._derive(False, kernel.truncate(quotient.magnitude))
            remainder = arithmetic.subtract(n, arithmetic.multiply(quotient, sixteen))
            symbols.append(_HEX_SYMBOLS[int(remainder)])
            n = quotient

        text = "".join(reversed(symbols)) or "0"
        if lowercase:
            text = text.lower()
        return ("-" if self._negative and text != "0" else "") + text

    def to_contract(self) -> dict[str, Any]:
        """Сериализация в dict, совместимый с decimal_value.json."""
        return {
            "kind": self._kind.value,
            "value": str(self),
            "config": self._config.to_contract(),
        }

    def digit_at(self, index: int) -> int:
        """Цифра модуля по индексу (старший разряд первым)."""
        return symbol_to_digit(self._magnitude.digits[index])
