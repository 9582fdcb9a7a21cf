"""
Bernoulli — числа Бернулли B_n

Замкнутая конечная двойная сумма (без приближения Стирлинга):

    B_n = Σ_{k=0..n} 1/(k+1) Σ_{j=0..k} (-1)**j C(k, j) j**n

с соглашением 0**0 = 1. Внутренние суммы — точные целые, их разрядность
растёт как n*log10(n+1), поэтому рабочая точность увеличивается на эту
величину, чтобы промежуточные значения не переполняли 10**decimals.

Соглашение о знаке: B_1 = -1/2.
"""

import logging
import math
from typing import Any, Optional

from fixdec.core.domain import DEFAULT_CONFIG, GUARD_DIGITS, Decimal, DecimalConfig, working_config
from fixdec.core.math.numerical_safeguards import as_decimal, domain_error, restore
from fixdec.core.math.power import pow_
from fixdec.core.math.rounding import round_to

logger = logging.getLogger(__name__)

# log10(2): оценка разрядности биномиальных коэффициентов C(k, j) <= 2**k
_LOG10_2 = math.log10(2)


class BernoulliSequence:
    """
    Генератор чисел Бернулли B_n (не B_2n).

    Examples:
        >>> BernoulliSequence().term(1)
        Decimal('-0.5')
        >>> BernoulliSequence().term(3)
        Decimal('0')
    """

    def __init__(self, config: Optional[DecimalConfig] = None):
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> DecimalConfig:
        return self._config

    def term(self, n: Any) -> Decimal:
        """
        B_n.

        Raises:
            IllegalOperation: Отрицательный или нецелый n при throw_on_error
        """
        n = as_decimal(n, self._config).with_config(self._config)
        if n.is_nan():
            return n
        if not n.is_finite() or n.is_negative or not n.is_int():
            return domain_error(
                n, f"bernoulli index must be a non-negative integer, got {n}", "bernoulli"
            )

        index = int(n)
        extra = GUARD_DIGITS + math.ceil(index * (math.log10(index + 1) + _LOG10_2))
        wc = working_config(self._config, extra)
        logger.debug("bernoulli B_%d at %d working decimals", index, wc.decimals)

        total = Decimal(0, wc)
        for k in range(index + 1):
            total = total + self._inner_sum(k, index, wc) / (k + 1)
        return restore(total, self._config, "bernoulli")

    @staticmethod
    def _inner_sum(k: int, index: int, config: DecimalConfig) -> Decimal:
        """Σ_{j=0..k} (-1)**j C(k, j) j**index (точное целое)."""
        inner = Decimal(0, config)
        coefficient = Decimal(1, config)
        for j in range(k + 1):
            if j:
                coefficient = round_to(coefficient * (k - j + 1) / j, 0)
            contribution = coefficient * pow_(Decimal(j, config), index)
            inner = inner - contribution if j % 2 else inner + contribution
        return inner


def bernoulli(n: Any, config: Optional[DecimalConfig] = None) -> Decimal:
    """B_n для конфигурации config."""
    return BernoulliSequence(config).term(n)
