"""Special-Value State Machine — распространение NaN/Infinity и политика ошибок.

Правила применяются до любой арифметики над модулями:
- NaN в любом операнде → NaN (всегда, независимо от политики ошибок)
- Infinity ± finite → Infinity со знаком бесконечного операнда
- Infinity + Infinity одного знака → Infinity; разных знаков → NaN
- Infinity × 0 → NaN; Infinity × nonzero → Infinity (знак XOR)
- Infinity ÷ Infinity → NaN; Infinity ÷ finite → Infinity; finite ÷ Infinity → знаковый ноль
- переполнение → Infinity (silent) либо IllegalOperation (throw_on_error)

Переходов между экземплярами нет: каждый результат независимо вычисляет
свой вид по входам. Ошибки никогда не поднимаются повторно для уже
специальных операндов ("sticky" propagation).
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from fixdec.core.domain.kinds import NumKind
from fixdec.core.errors import IllegalOperation

logger = logging.getLogger(__name__)


class Operand(NamedTuple):
    """Срез операнда, достаточный для правил специальных значений."""

    kind: NumKind
    negative: bool
    is_zero: bool


@dataclass(frozen=True)
class SpecialResolution:
    """Результат применения правил специальных значений.

    resolved=False означает, что оба операнда конечны и результат должен
    вычислить арифметическое ядро.
    """

    resolved: bool
    kind: Optional[NumKind]
    negative: bool
    reason: str


_UNRESOLVED = SpecialResolution(
    resolved=False, kind=None, negative=False, reason="finite_operands"
)


class SpecialValueStateMachine:
    """Таблица распространения NaN/Infinity для бинарных операций.

    Также реализует политику throw-on-error / silent-degrade для
    неопределённых операций над конечными аргументами.
    """

    def resolve_sum(self, left: Operand, right: Operand) -> SpecialResolution:
        """Сложение (вычитание сводится к сложению с инвертированным знаком)."""
        nan = self._resolve_nan(left, right, "sum")
        if nan is not None:
            return nan

        left_inf = left.kind == NumKind.INFINITY
        right_inf = right.kind == NumKind.INFINITY

        if left_inf and right_inf:
            if left.negative == right.negative:
                return self._create_result(
                    NumKind.INFINITY, left.negative, "inf_plus_inf_same_sign"
                )
            return self._create_result(NumKind.NAN, False, "inf_plus_inf_opposite_sign")
        if left_inf:
            return self._create_result(NumKind.INFINITY, left.negative, "inf_plus_finite")
        if right_inf:
            return self._create_result(NumKind.INFINITY, right.negative, "finite_plus_inf")

        return _UNRESOLVED

    def resolve_product(self, left: Operand, right: Operand) -> SpecialResolution:
        nan = self._resolve_nan(left, right, "product")
        if nan is not None:
            return nan

        left_inf = left.kind == NumKind.INFINITY
        right_inf = right.kind == NumKind.INFINITY
        if not (left_inf or right_inf):
            return _UNRESOLVED

        if (left_inf and right.is_zero) or (right_inf and left.is_zero):
            return self._create_result(NumKind.NAN, False, "inf_times_zero")

        return self._create_result(
            NumKind.INFINITY, left.negative != right.negative, "inf_times_nonzero"
        )

    def resolve_quotient(self, left: Operand, right: Operand) -> SpecialResolution:
        """Деление. Деление конечного на ноль решается в degrade_division_by_zero."""
        nan = self._resolve_nan(left, right, "quotient")
        if nan is not None:
            return nan

        left_inf = left.kind == NumKind.INFINITY
        right_inf = right.kind == NumKind.INFINITY
        negative = left.negative != right.negative

        if left_inf and right_inf:
            return self._create_result(NumKind.NAN, False, "inf_div_inf")
        if left_inf:
            return self._create_result(NumKind.INFINITY, negative, "inf_div_finite")
        if right_inf:
            return self._create_result(NumKind.NORMAL, negative, "finite_div_inf")

        return _UNRESOLVED

    def resolve_modulo(self, left: Operand, right: Operand) -> SpecialResolution:
        """Остаток от деления: inf % x → NaN, finite % inf → делимое."""
        nan = self._resolve_nan(left, right, "modulo")
        if nan is not None:
            return nan

        if left.kind == NumKind.INFINITY:
            return self._create_result(NumKind.NAN, False, "inf_mod_any")
        if right.kind == NumKind.INFINITY:
            return self._create_result(NumKind.NORMAL, left.negative, "finite_mod_inf")

        return _UNRESOLVED

    # -------------------------------------------------------------------------
    # Политика ошибок
    # -------------------------------------------------------------------------

    def degrade_division_by_zero(
        self, dividend: Operand, throw_on_error: bool, operation: str = "divide"
    ) -> SpecialResolution:
        """Деление конечного числа на ноль.

        Raises:
            IllegalOperation: если throw_on_error
        """
        if throw_on_error:
            raise IllegalOperation("division by zero", operation=operation)

        if dividend.is_zero:
            resolution = self._create_result(NumKind.NAN, False, "zero_div_zero")
        else:
            resolution = self._create_result(
                NumKind.INFINITY, dividend.negative, "finite_div_zero"
            )
        logger.warning(
            "%s by zero degraded to %s", operation, resolution.kind.value
        )
        return resolution

    def degrade_overflow(
        self, negative: bool, throw_on_error: bool, operation: str
    ) -> SpecialResolution:
        """Переполнение модуля (|x| >= 10**decimals).

        Raises:
            IllegalOperation: если throw_on_error
        """
        if throw_on_error:
            raise IllegalOperation("magnitude overflow", operation=operation)

        logger.warning("%s overflow degraded to %sInfinity", operation, "-" if negative else "+")
        return self._create_result(NumKind.INFINITY, negative, "overflow")

    def degrade_domain_error(
        self, message: str, throw_on_error: bool, operation: str
    ) -> SpecialResolution:
        """Аргумент вне области определения функции.

        Raises:
            IllegalOperation: если throw_on_error
        """
        if throw_on_error:
            raise IllegalOperation(message, operation=operation)

        logger.warning("%s: %s, degraded to NaN", operation, message)
        return self._create_result(NumKind.NAN, False, "domain_error")

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _resolve_nan(
        self, left: Operand, right: Operand, operation: str
    ) -> Optional[SpecialResolution]:
        if left.kind == NumKind.NAN or right.kind == NumKind.NAN:
            return self._create_result(NumKind.NAN, False, f"nan_operand_{operation}")
        return None

    def _create_result(self, kind: NumKind, negative: bool, reason: str) -> SpecialResolution:
        logger.debug("special value resolution: %s -> %s", reason, kind.value)
        return SpecialResolution(
            resolved=True,
            kind=kind,
            negative=negative if kind != NumKind.NAN else False,
            reason=reason,
        )


# Правила не имеют состояния: один экземпляр на процесс
STATE_MACHINE = SpecialValueStateMachine()
