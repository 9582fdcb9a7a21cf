"""
Тесты для тригонометрических функций

Проверяет:
1. sin / cos / tan / cot / sec / csc против эталонных значений
2. Приведение аргумента (большие углы, отрицательные углы)
3. Обратные функции и их области определения
4. atan2 по квадрантам (порядок аргументов как у math.atan2)
5. Infinity -> NaN без IllegalOperation
"""

import pytest

from fixdec.core.domain import Decimal, DecimalConfig
from fixdec.core.errors import IllegalOperation
from fixdec.core.math import (
    acos,
    acot,
    acsc,
    asec,
    asin,
    atan,
    atan2,
    cos,
    cot,
    csc,
    pi,
    sec,
    sin,
    tan,
    trig_phase_correct,
)

CONFIG = DecimalConfig(decimals=20)
SILENT = DecimalConfig(decimals=20, throw_on_error=False)
TOLERANCE = Decimal("1e-18")

PI = "3.14159265358979323846"
HALF_PI = "1.57079632679489661923"
QUARTER_PI = "0.78539816339744830962"


def d(value) -> Decimal:
    return Decimal(value, CONFIG)


def assert_close(actual: Decimal, expected: str, tolerance: Decimal = TOLERANCE) -> None:
    assert abs(actual - Decimal(expected)) <= tolerance, f"{actual} != {expected}"


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


class TestSinCos:
    def test_zero(self):
        assert sin(d(0)) == 0
        assert cos(d(0)) == 1

    def test_one_radian(self):
        assert_close(sin(d(1)), "0.84147098480789650665")
        assert_close(cos(d(1)), "0.54030230586813971740")

    def test_odd_even_symmetry(self):
        assert_close(sin(d(-1)), "-0.84147098480789650665")
        assert_close(cos(d(-1)), "0.54030230586813971740")

    def test_special_angles(self):
        p = pi(CONFIG)
        assert_close(sin(p / 6), "0.5")
        assert_close(cos(p / 3), "0.5")
        assert_close(sin(p / 2), "1")
        assert_close(cos(p), "-1")

    def test_argument_reduction(self):
        """sin(100) = -0.50636564110975879365..."""
        assert_close(sin(d(100)), "-0.50636564110975879366")

    def test_pythagorean_identity(self):
        x = d("2.5")
        s, c = sin(x), cos(x)
        assert_close(s * s + c * c, "1")

    def test_infinity_is_nan_without_error(self):
        """Infinity не поднимает IllegalOperation даже при throw_on_error."""
        assert sin(Decimal.inf(False, CONFIG)).is_nan()
        assert cos(Decimal.inf(True, CONFIG)).is_nan()

    def test_nan_propagates(self):
        assert sin(Decimal.nan(CONFIG)).is_nan()


class TestRatios:
    def test_tan(self):
        assert_close(tan(d(1)), "1.55740772465490223051")
        assert_close(tan(pi(CONFIG) / 4), "1")

    def test_cot(self):
        assert_close(cot(d(1)), "0.64209261593433070301")

    def test_sec_csc(self):
        assert sec(d(0)) == 1
        assert_close(csc(pi(CONFIG) / 2), "1")

    def test_poles(self):
        with pytest.raises(IllegalOperation):
            cot(d(0))
        with pytest.raises(IllegalOperation):
            csc(d(0))
        assert csc(Decimal(0, SILENT)).is_inf()


class TestPhaseCorrect:
    def test_reduces_into_range(self):
        assert_close(trig_phase_correct(d(7)), "0.71681469282041352307")

    def test_small_angle_unchanged(self):
        assert trig_phase_correct(d("1.5")) == Decimal("1.5")

    def test_infinity(self):
        assert trig_phase_correct(Decimal.inf(False, CONFIG)).is_nan()


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


class TestInverse:
    def test_atan(self):
        assert atan(d(0)) == 0
        assert_close(atan(d(1)), QUARTER_PI)
        assert_close(atan(d("0.5")), "0.46364760900080611621")
        assert_close(atan(d(-2)), "-1.10714871779409050302")

    def test_atan_infinity(self):
        assert_close(atan(Decimal.inf(False, CONFIG)), HALF_PI)
        assert_close(atan(Decimal.inf(True, CONFIG)), "-" + HALF_PI)

    def test_asin_acos(self):
        assert_close(asin(d("0.5")), "0.52359877559829887308")
        assert_close(asin(d(1)), HALF_PI)
        assert_close(acos(d("0.5")), "1.04719755119659774615")
        assert_close(acos(d(-1)), PI)

    def test_asin_domain(self):
        with pytest.raises(IllegalOperation):
            asin(d(2))
        assert acos(Decimal(2, SILENT)).is_nan()

    def test_acot(self):
        assert_close(acot(d(1)), QUARTER_PI)
        assert_close(acot(d(-1)), "2.35619449019234492885")
        assert acot(Decimal.inf(False, CONFIG)) == 0

    def test_asec_acsc(self):
        assert_close(asec(d(2)), "1.04719755119659774615")
        assert_close(acsc(d(2)), "0.52359877559829887308")
        with pytest.raises(IllegalOperation):
            asec(d("0.5"))

    def test_sin_asin_round_trip(self):
        assert_close(sin(asin(d("0.3"))), "0.3")


class TestAtan2:
    @pytest.mark.parametrize(
        "y,x,expected",
        [
            (1, 1, QUARTER_PI),
            (1, -1, "2.35619449019234492885"),
            (-1, -1, "-2.35619449019234492885"),
            (-1, 1, "-" + QUARTER_PI),
            (0, -1, PI),
            (1, 0, HALF_PI),
            (-1, 0, "-" + HALF_PI),
            (0, 1, "0"),
        ],
    )
    def test_quadrants(self, y, x, expected):
        assert_close(atan2(d(y), d(x)), expected)

    def test_ordinate_first(self):
        """atan2(y, x): перестановка аргументов отражает угол относительно y = x."""
        assert_close(atan2(d(1), d(0)), HALF_PI)
        assert atan2(d(0), d(1)) == 0
        assert_close(atan2(d(2), d(1)) + atan2(d(1), d(2)), HALF_PI)

    def test_infinite_arguments(self):
        inf = Decimal.inf(False, CONFIG)
        assert_close(atan2(inf, inf), QUARTER_PI)
        assert_close(atan2(d(1), -inf), PI)
        assert atan2(d(1), inf) == 0

    def test_nan(self):
        assert atan2(Decimal.nan(CONFIG), d(1)).is_nan()
