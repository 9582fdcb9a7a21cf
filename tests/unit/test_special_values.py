"""
Тесты для Special-Value State Machine

Проверяет:
1. Таблицу правил NaN / Infinity для сложения, умножения, деления, остатка
2. Политику ошибок: IllegalOperation vs тихая деградация
3. Отсутствие повторных ошибок для уже специальных операндов
"""

import pytest

from fixdec.core.domain.kinds import NumKind
from fixdec.core.errors import IllegalOperation
from fixdec.special.state_machine import STATE_MACHINE, Operand

NAN = Operand(NumKind.NAN, False, False)
POS_INF = Operand(NumKind.INFINITY, False, False)
NEG_INF = Operand(NumKind.INFINITY, True, False)
ONE = Operand(NumKind.NORMAL, False, False)
MINUS_ONE = Operand(NumKind.NORMAL, True, False)
ZERO = Operand(NumKind.NORMAL, False, True)


# =============================================================================
# СЛОЖЕНИЕ
# =============================================================================


class TestResolveSum:
    def test_finite_operands_unresolved(self):
        """Конечные операнды передаются арифметическому ядру."""
        resolution = STATE_MACHINE.resolve_sum(ONE, MINUS_ONE)
        assert resolution.resolved is False

    @pytest.mark.parametrize("left,right", [(NAN, ONE), (ONE, NAN), (NAN, POS_INF)])
    def test_nan_wins(self, left, right):
        resolution = STATE_MACHINE.resolve_sum(left, right)
        assert resolution.resolved
        assert resolution.kind == NumKind.NAN

    def test_same_sign_infinities(self):
        resolution = STATE_MACHINE.resolve_sum(NEG_INF, NEG_INF)
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is True

    def test_opposite_sign_infinities(self):
        resolution = STATE_MACHINE.resolve_sum(POS_INF, NEG_INF)
        assert resolution.kind == NumKind.NAN
        assert resolution.reason == "inf_plus_inf_opposite_sign"

    def test_infinity_keeps_its_sign(self):
        resolution = STATE_MACHINE.resolve_sum(ONE, NEG_INF)
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is True


# =============================================================================
# УМНОЖЕНИЕ И ДЕЛЕНИЕ
# =============================================================================


class TestResolveProduct:
    def test_infinity_times_zero(self):
        assert STATE_MACHINE.resolve_product(POS_INF, ZERO).kind == NumKind.NAN
        assert STATE_MACHINE.resolve_product(ZERO, NEG_INF).kind == NumKind.NAN

    def test_sign_xor(self):
        resolution = STATE_MACHINE.resolve_product(NEG_INF, MINUS_ONE)
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is False

    def test_finite_operands_unresolved(self):
        assert not STATE_MACHINE.resolve_product(ONE, ZERO).resolved


class TestResolveQuotient:
    def test_infinity_by_infinity(self):
        assert STATE_MACHINE.resolve_quotient(POS_INF, NEG_INF).kind == NumKind.NAN

    def test_infinity_by_finite(self):
        resolution = STATE_MACHINE.resolve_quotient(POS_INF, MINUS_ONE)
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is True

    def test_finite_by_infinity_is_signed_zero(self):
        resolution = STATE_MACHINE.resolve_quotient(MINUS_ONE, POS_INF)
        assert resolution.kind == NumKind.NORMAL
        assert resolution.negative is True

    def test_division_by_finite_zero_left_to_policy(self):
        assert not STATE_MACHINE.resolve_quotient(ONE, ZERO).resolved


class TestResolveModulo:
    def test_infinity_modulo(self):
        assert STATE_MACHINE.resolve_modulo(POS_INF, ONE).kind == NumKind.NAN

    def test_modulo_infinity(self):
        resolution = STATE_MACHINE.resolve_modulo(MINUS_ONE, POS_INF)
        assert resolution.kind == NumKind.NORMAL
        assert resolution.negative is True


# =============================================================================
# ПОЛИТИКА ОШИБОК
# =============================================================================


class TestErrorPolicy:
    def test_division_by_zero_throws(self):
        with pytest.raises(IllegalOperation) as exc_info:
            STATE_MACHINE.degrade_division_by_zero(ONE, throw_on_error=True)
        assert exc_info.value.to_dict()["operation"] == "divide"

    def test_division_by_zero_silent(self):
        resolution = STATE_MACHINE.degrade_division_by_zero(MINUS_ONE, throw_on_error=False)
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is True

    def test_zero_by_zero_silent(self):
        resolution = STATE_MACHINE.degrade_division_by_zero(ZERO, throw_on_error=False)
        assert resolution.kind == NumKind.NAN

    def test_overflow(self):
        with pytest.raises(IllegalOperation):
            STATE_MACHINE.degrade_overflow(False, throw_on_error=True, operation="multiply")
        resolution = STATE_MACHINE.degrade_overflow(True, throw_on_error=False, operation="multiply")
        assert resolution.kind == NumKind.INFINITY
        assert resolution.negative is True

    def test_domain_error(self):
        with pytest.raises(IllegalOperation, match=r"\[ln\]"):
            STATE_MACHINE.degrade_domain_error("bad argument", True, "ln")
        resolution = STATE_MACHINE.degrade_domain_error("bad argument", False, "ln")
        assert resolution.kind == NumKind.NAN

    def test_nan_resolution_has_no_sign(self):
        resolution = STATE_MACHINE.resolve_sum(Operand(NumKind.NAN, True, False), ONE)
        assert resolution.negative is False
