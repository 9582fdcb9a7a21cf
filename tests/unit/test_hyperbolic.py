"""
Тесты для гиперболических функций

Проверяет:
1. sinh / cosh / tanh / coth / sech / csch против эталонных значений
2. Насыщение tanh до ±1
3. Обратные функции, полюсы и области определения
"""

import pytest

from fixdec.core.domain import Decimal, DecimalConfig
from fixdec.core.errors import IllegalOperation
from fixdec.core.math import (
    acosh,
    acoth,
    acsch,
    asech,
    asinh,
    atanh,
    cosh,
    coth,
    csch,
    sech,
    sinh,
    tanh,
)

CONFIG = DecimalConfig(decimals=20)
SILENT = DecimalConfig(decimals=20, throw_on_error=False)
TOLERANCE = Decimal("1e-18")


def d(value) -> Decimal:
    return Decimal(value, CONFIG)


def assert_close(actual: Decimal, expected: str, tolerance: Decimal = TOLERANCE) -> None:
    assert abs(actual - Decimal(expected)) <= tolerance, f"{actual} != {expected}"


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


class TestDirect:
    def test_at_zero(self):
        assert sinh(d(0)) == 0
        assert cosh(d(0)) == 1
        assert tanh(d(0)) == 0
        assert sech(d(0)) == 1

    def test_at_one(self):
        assert_close(sinh(d(1)), "1.17520119364380145688")
        assert_close(cosh(d(1)), "1.54308063481524377848")
        assert_close(tanh(d(1)), "0.76159415595576488812")
        assert_close(coth(d(1)), "1.31303528549933130364")
        assert_close(sech(d(1)), "0.64805427366388539957")
        assert_close(csch(d(1)), "0.85091812823932154513")

    def test_odd_functions(self):
        assert_close(sinh(d(-1)), "-1.17520119364380145688")
        assert_close(tanh(d(-1)), "-0.76159415595576488812")

    def test_cosh_identity(self):
        x = d("2.5")
        c, s = cosh(x), sinh(x)
        assert_close(c * c - s * s, "1", Decimal("1e-16"))

    def test_tanh_saturates(self):
        assert tanh(d(100)) == 1
        assert tanh(d(-100)) == -1

    def test_infinities(self):
        inf = Decimal.inf(False, CONFIG)
        assert sinh(-inf) == -inf
        assert cosh(-inf) == inf
        assert tanh(-inf) == -1
        assert sech(inf) == 0
        assert csch(inf) == 0

    def test_poles(self):
        with pytest.raises(IllegalOperation):
            coth(d(0))
        assert csch(Decimal(0, SILENT)).is_inf()

    def test_sinh_overflow(self):
        with pytest.raises(IllegalOperation):
            sinh(d(100))


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


class TestInverse:
    def test_asinh(self):
        assert asinh(d(0)) == 0
        assert_close(asinh(d(1)), "0.88137358701954302523")
        assert_close(asinh(d(-1)), "-0.88137358701954302523")

    def test_asinh_large_argument(self):
        """asinh(10**15) = ln(2*10**15) + O(10**-31)"""
        assert_close(asinh(d(10**15)), "35.23192357547063056969", Decimal("1e-17"))

    def test_acosh(self):
        assert acosh(d(1)) == 0
        assert_close(acosh(d(2)), "1.31695789692481670862")

    def test_acosh_domain(self):
        with pytest.raises(IllegalOperation):
            acosh(d("0.5"))
        assert acosh(Decimal("0.5", SILENT)).is_nan()

    def test_atanh(self):
        assert_close(atanh(d("0.5")), "0.54930614433405484570")
        assert_close(atanh(d("-0.5")), "-0.54930614433405484570")

    def test_atanh_pole_and_domain(self):
        with pytest.raises(IllegalOperation):
            atanh(d(1))
        with pytest.raises(IllegalOperation):
            atanh(d(2))
        assert atanh(Decimal(-1, SILENT)) == Decimal.inf(True)
        assert atanh(Decimal(2, SILENT)).is_nan()

    def test_acoth(self):
        assert_close(acoth(d(2)), "0.54930614433405484570")
        assert acoth(Decimal.inf(False, CONFIG)) == 0
        with pytest.raises(IllegalOperation):
            acoth(d("0.5"))

    def test_asech(self):
        assert asech(d(1)) == 0
        assert_close(asech(d("0.5")), "1.31695789692481670862")
        with pytest.raises(IllegalOperation):
            asech(d(2))
        with pytest.raises(IllegalOperation):
            asech(d(0))

    def test_acsch(self):
        assert_close(acsch(d(1)), "0.88137358701954302523")
        assert acsch(Decimal.inf(False, CONFIG)) == 0
        with pytest.raises(IllegalOperation):
            acsch(d(0))

    def test_round_trip(self):
        assert_close(asinh(sinh(d("1.5"))), "1.5", Decimal("1e-17"))
        assert_close(atanh(tanh(d("0.25"))), "0.25", Decimal("1e-17"))
