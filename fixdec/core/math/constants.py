"""
Constants — математические константы с точностью конфигурации

Порядок вывода (каждая следующая использует предыдущие):
    e        = Σ 1/n!, n = 0..e_iterations
    1/π      = ряд Чудновского, pi_iterations членов (~14 разрядов на член)
    π        = 1 / (1/π)
    π/2, π/4
    ln2, ln10 — через логарифм (power.ln2_at / power.ln10_at)
    2/π, 2/√π, log2(e) = 1/ln2, log10(e) = 1/ln10, √2, 1/√2

Все константы вычисляются с guard-разрядами и округляются до
config.decimals. Набор мемоизирован по конфигурации (lru_cache по
неизменяемому DecimalConfig): изменение конфигурации требует явного
повторного вывода через DecimalConstants.set_config().
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Final, Optional

from fixdec.core.domain import DEFAULT_CONFIG, Decimal, DecimalConfig, working_config
from fixdec.core.math.numerical_safeguards import restore
from fixdec.core.math.power import _sqrt, exp_series, ln10_at, ln2_at

logger = logging.getLogger(__name__)

# Ряд Чудновского: 1/π = 12 * Σ t_k (A + B*k) / (C * √C)
CHUDNOVSKY_A: Final[int] = 13591409
CHUDNOVSKY_B: Final[int] = 545140134
CHUDNOVSKY_C: Final[int] = 640320
# C**3 / 24: знаменатель отношения соседних членов t_k / t_{k-1}
CHUDNOVSKY_RATIO_DENOMINATOR: Final[int] = 10939058860032000


@dataclass(frozen=True)
class ConstantSet:
    """Набор констант одной конфигурации."""

    e: Decimal
    pi: Decimal
    inv_pi: Decimal
    half_pi: Decimal
    quarter_pi: Decimal
    ln2: Decimal
    ln10: Decimal
    two_over_pi: Decimal
    two_over_sqrt_pi: Decimal
    log2_e: Decimal
    log10_e: Decimal
    sqrt2: Decimal
    inv_sqrt2: Decimal


# =============================================================================
# ВЫВОД (рабочая точность)
# =============================================================================


def e_series(config: DecimalConfig) -> Decimal:
    return exp_series(Decimal(1, config), config.e_iterations)


def inv_pi_chudnovsky(config: DecimalConfig) -> Decimal:
    """1/π по ряду Чудновского (не менее одного члена)."""
    term = Decimal(1, config)
    total = term * CHUDNOVSKY_A
    for k in range(1, max(config.pi_iterations, 1)):
        numerator = -(6 * k - 5) * (2 * k - 1) * (6 * k - 1)
        term = term * numerator / (k**3 * CHUDNOVSKY_RATIO_DENOMINATOR)
        total = total + term * (CHUDNOVSKY_A + CHUDNOVSKY_B * k)

    root = _sqrt(Decimal(CHUDNOVSKY_C, config))
    return total * 12 / (root * CHUDNOVSKY_C)


@lru_cache(maxsize=64)
def pi_at(config: DecimalConfig) -> Decimal:
    """π с точностью config.decimals (для внутренних вычислений trig)."""
    wc = working_config(config)
    return restore(Decimal(1, wc) / inv_pi_chudnovsky(wc), config, "pi")


@lru_cache(maxsize=32)
def constants_for(config: DecimalConfig) -> ConstantSet:
    """
    Полный набор констант для конфигурации (мемоизирован).

    Args:
        config: Конфигурация точности и бюджетов итераций

    Returns:
        ConstantSet со значениями, округлёнными до config.decimals
    """
    logger.debug(
        "deriving constants: decimals=%d e_iterations=%d pi_iterations=%d",
        config.decimals,
        config.e_iterations,
        config.pi_iterations,
    )
    wc = working_config(config)
    one = Decimal(1, wc)

    e = e_series(wc)
    inv_pi = inv_pi_chudnovsky(wc)
    pi = one / inv_pi
    ln2 = ln2_at(wc)
    ln10 = ln10_at(wc)
    sqrt2 = _sqrt(Decimal(2, wc))

    def back(value: Decimal, name: str) -> Decimal:
        return restore(value, config, name)

    return ConstantSet(
        e=back(e, "e"),
        pi=back(pi, "pi"),
        inv_pi=back(inv_pi, "inv_pi"),
        half_pi=back(pi / 2, "half_pi"),
        quarter_pi=back(pi * Decimal("0.25", wc), "quarter_pi"),
        ln2=back(ln2, "ln2"),
        ln10=back(ln10, "ln10"),
        two_over_pi=back(inv_pi * 2, "two_over_pi"),
        two_over_sqrt_pi=back(Decimal(2, wc) / _sqrt(pi), "two_over_sqrt_pi"),
        log2_e=back(one / ln2, "log2_e"),
        log10_e=back(one / ln10, "log10_e"),
        sqrt2=back(sqrt2, "sqrt2"),
        inv_sqrt2=back(sqrt2 / 2, "inv_sqrt2"),
    )


# =============================================================================
# DECIMAL CONSTANTS
# =============================================================================


class DecimalConstants:
    """
    Константы, привязанные к одной конфигурации.

    Значения стабильны между вызовами set_config(); set_config() с новой
    конфигурацией выводит весь набор заново.

    Examples:
        >>> constants = DecimalConstants(DecimalConfig(decimals=10))
        >>> str(constants.pi)
        '3.1415926536'
    """

    def __init__(self, config: Optional[DecimalConfig] = None):
        self._config = config or DEFAULT_CONFIG
        self._values = constants_for(self._config)

    def set_config(self, config: DecimalConfig) -> None:
        """Применение новой конфигурации с явным выводом всех констант."""
        self._config = config
        self._values = constants_for(config)

    @property
    def config(self) -> DecimalConfig:
        return self._config

    @property
    def values(self) -> ConstantSet:
        return self._values

    @property
    def e(self) -> Decimal:
        return self._values.e

    @property
    def pi(self) -> Decimal:
        return self._values.pi

    @property
    def inv_pi(self) -> Decimal:
        return self._values.inv_pi

    @property
    def half_pi(self) -> Decimal:
        return self._values.half_pi

    @property
    def quarter_pi(self) -> Decimal:
        return self._values.quarter_pi

    @property
    def ln2(self) -> Decimal:
        return self._values.ln2

    @property
    def ln10(self) -> Decimal:
        return self._values.ln10

    @property
    def two_over_pi(self) -> Decimal:
        return self._values.two_over_pi

    @property
    def two_over_sqrt_pi(self) -> Decimal:
        return self._values.two_over_sqrt_pi

    @property
    def log2_e(self) -> Decimal:
        return self._values.log2_e

    @property
    def log10_e(self) -> Decimal:
        return self._values.log10_e

    @property
    def sqrt2(self) -> Decimal:
        return self._values.sqrt2

    @property
    def inv_sqrt2(self) -> Decimal:
        return self._values.inv_sqrt2


# =============================================================================
# MODULE HELPERS
# =============================================================================


def pi(config: Optional[DecimalConfig] = None) -> Decimal:
    return constants_for(config or DEFAULT_CONFIG).pi


def e(config: Optional[DecimalConfig] = None) -> Decimal:
    return constants_for(config or DEFAULT_CONFIG).e


def ln2(config: Optional[DecimalConfig] = None) -> Decimal:
    return constants_for(config or DEFAULT_CONFIG).ln2


def ln10(config: Optional[DecimalConfig] = None) -> Decimal:
    return constants_for(config or DEFAULT_CONFIG).ln10


def sqrt2(config: Optional[DecimalConfig] = None) -> Decimal:
    return constants_for(config or DEFAULT_CONFIG).sqrt2
