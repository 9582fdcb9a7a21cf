"""
Тесты для знаковой арифметики Decimal

Проверяет:
1. Сложение / вычитание / умножение / деление / остаток
2. Таблицу распространения NaN и Infinity
3. Политику ошибок: throw_on_error и тихую деградацию
4. Переполнение |x| >= 10**decimals
5. Правило конфигурации левого операнда
"""

import logging

import pytest

from fixdec.core.domain import Decimal, DecimalConfig
from fixdec.core.errors import IllegalOperation

SILENT = DecimalConfig(throw_on_error=False)


# =============================================================================
# БАЗОВАЯ АРИФМЕТИКА
# =============================================================================


class TestBasicArithmetic:
    def test_sum_drops_trailing_zeros(self):
        assert str(Decimal("123.456") + "0.544") == "124"

    def test_subtract_changes_sign(self):
        assert Decimal("1.5") - Decimal("2.25") == Decimal("-0.75")

    def test_add_opposite_signs_gives_positive_zero(self):
        result = Decimal("-2.5") + Decimal("2.5")
        assert result.is_zero()
        assert not result.is_negative

    def test_multiply_sign_is_xor(self):
        assert Decimal("-1.5") * Decimal("-2") == 3
        assert Decimal("-1.5") * 2 == Decimal("-3")

    def test_divide(self):
        assert Decimal(1) / 4 == Decimal("0.25")
        assert str(Decimal(1, DecimalConfig(decimals=10)) / 3) == "0.3333333333"

    def test_divide_rounds_half_away_from_zero(self):
        config = DecimalConfig(decimals=10)
        assert str(Decimal(-2, config) / 3) == "-0.6666666667"

    def test_divide_truncates_when_configured(self):
        config = DecimalConfig(decimals=10, trunc_not_round=True)
        assert str(Decimal(2, config) / 3) == "0.6666666666"

    def test_reflected_operators(self):
        assert 1 + Decimal("0.5") == Decimal("1.5")
        assert 1 - Decimal("0.5") == Decimal("0.5")
        assert 3 * Decimal("0.5") == Decimal("1.5")
        assert 1 / Decimal(8) == Decimal("0.125")

    def test_negate_and_abs(self):
        assert -Decimal("2.5") == Decimal("-2.5")
        assert abs(Decimal("-2.5")) == Decimal("2.5")
        assert not (-Decimal(0)).is_negative

    def test_unsupported_operand_type(self):
        with pytest.raises(TypeError):
            Decimal(1) + [1]


class TestModulo:
    def test_positive(self):
        assert Decimal(7) % 3 == 1

    def test_sign_follows_dividend(self):
        assert Decimal(-7) % 3 == -1
        assert Decimal(7) % -3 == 1

    def test_fractional(self):
        assert Decimal("5.5") % 2 == Decimal("1.5")

    def test_exact_multiple(self):
        assert Decimal(21) % 7 == 0

    def test_modulo_by_infinity_returns_dividend(self):
        assert Decimal(7) % Decimal.inf() == 7

    def test_infinity_modulo_is_nan(self):
        assert (Decimal.inf() % 3).is_nan()

    def test_modulo_by_zero_throws(self):
        with pytest.raises(IllegalOperation):
            Decimal(5) % 0

    def test_modulo_by_zero_silent(self):
        result = Decimal(5, SILENT) % 0
        assert result.is_inf() and not result.is_negative


# =============================================================================
# СПЕЦИАЛЬНЫЕ ЗНАЧЕНИЯ
# =============================================================================


class TestSpecialValuePropagation:
    def test_nan_is_sticky(self):
        nan = Decimal.nan()
        for result in (nan + 1, 1 - nan, nan * 0, nan / 2, Decimal.inf() * nan):
            assert result.is_nan()

    def test_nan_never_raises(self):
        """NaN распространяется без исключения даже при throw_on_error."""
        assert (Decimal.nan() / 0).is_nan()

    def test_infinity_plus_finite(self):
        assert (Decimal.inf() + 5).is_inf()
        assert (Decimal(5) - Decimal.inf()) == Decimal.inf(True)

    def test_infinity_plus_infinity(self):
        assert Decimal.inf() + Decimal.inf() == Decimal.inf()
        assert (Decimal.inf() - Decimal.inf()).is_nan()

    def test_infinity_times_zero(self):
        assert (Decimal.inf() * 0).is_nan()
        assert (0 * Decimal.inf(True)).is_nan()

    def test_infinity_times_nonzero(self):
        assert Decimal.inf() * -2 == Decimal.inf(True)
        assert Decimal.inf(True) * Decimal.inf(True) == Decimal.inf()

    def test_infinity_divided(self):
        assert (Decimal.inf() / Decimal.inf()).is_nan()
        assert Decimal.inf(True) / 4 == Decimal.inf(True)

    def test_finite_divided_by_infinity_is_signed_zero(self):
        result = Decimal(-1) / Decimal.inf()
        assert result.is_zero()
        assert result.is_negative
        assert result == 0


class TestDivisionByZero:
    def test_throw_on_error(self):
        with pytest.raises(IllegalOperation) as exc_info:
            Decimal(5) / 0
        assert exc_info.value.operation == "divide"

    @pytest.mark.parametrize(
        "dividend,expected",
        [(5, Decimal.inf()), (-5, Decimal.inf(True))],
    )
    def test_silent_gives_signed_infinity(self, dividend, expected):
        assert Decimal(dividend, SILENT) / 0 == expected

    def test_silent_zero_by_zero_is_nan(self):
        assert (Decimal(0, SILENT) / 0).is_nan()

    def test_silent_degradation_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            Decimal(5, SILENT) / 0
        assert "degraded" in caplog.text


class TestOverflow:
    def test_throw_on_error(self):
        with pytest.raises(IllegalOperation):
            Decimal(99, DecimalConfig(decimals=2)) * 2

    def test_silent_gives_infinity(self):
        config = DecimalConfig(decimals=2, throw_on_error=False)
        assert Decimal(-99, config) * 2 == Decimal.inf(True)

    def test_boundary_value_is_finite(self):
        assert (Decimal(9, DecimalConfig(decimals=2)) * 11) == 99


# =============================================================================
# КОНФИГУРАЦИЯ РЕЗУЛЬТАТА
# =============================================================================


class TestResultConfig:
    def test_left_operand_config_wins(self):
        left = Decimal(1, DecimalConfig(decimals=10))
        right = Decimal(1, DecimalConfig(decimals=20))
        assert (left + right).config.decimals == 10
        assert (right / left).config.decimals == 20

    def test_reflected_operand_uses_decimal_config(self):
        config = DecimalConfig(decimals=10)
        assert (1 + Decimal(1, config)).config == config

    def test_precision_limits_result(self):
        config = DecimalConfig(decimals=3)
        assert Decimal("0.001", config) * Decimal("0.5", config) == Decimal("0.001")
