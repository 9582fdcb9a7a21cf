"""
Тесты для семейства округления

floor / ceil / trunc / round_to / sign / inc / dec.
"""

import pytest

from fixdec.core.domain import Decimal, DecimalConfig
from fixdec.core.math import abs_, ceil, dec, floor, inc, round_to, sign, trunc


class TestFloorCeil:
    @pytest.mark.parametrize(
        "value,expected_floor,expected_ceil",
        [
            ("-1.5", -2, -1),
            ("1.5", 1, 2),
            ("2", 2, 2),
            ("-2", -2, -2),
            ("2.1", 2, 3),
            ("-0.5", -1, 0),
            ("0", 0, 0),
        ],
    )
    def test_cases(self, value, expected_floor, expected_ceil):
        assert floor(Decimal(value)) == expected_floor
        assert ceil(Decimal(value)) == expected_ceil

    def test_ceil_of_integer_is_unchanged(self):
        """ceil(x) для целого x — сам x, а не floor(x) + 1."""
        assert ceil(Decimal(7)) == 7

    def test_specials_pass_through(self):
        assert floor(Decimal.inf(True)) == Decimal.inf(True)
        assert ceil(Decimal.nan()).is_nan()

    def test_zero_result_is_positive(self):
        assert not ceil(Decimal("-0.5")).is_negative


class TestTrunc:
    def test_toward_zero(self):
        assert trunc(Decimal("-2.7")) == -2
        assert trunc(Decimal("2.7")) == 2


class TestRoundTo:
    def test_half_away_from_zero(self):
        assert round_to(Decimal("1.25"), 1) == Decimal("1.3")
        assert round_to(Decimal("-1.25"), 1) == Decimal("-1.3")

    def test_truncation_policy(self):
        value = Decimal("1.29", DecimalConfig(trunc_not_round=True))
        assert round_to(value, 1) == Decimal("1.2")

    def test_negative_places(self):
        assert round_to(Decimal("1234.5"), -2) == 1200
        assert round_to(Decimal("1250"), -2) == 1300

    def test_default_places(self):
        assert round_to(Decimal("2.5")) == 3


class TestSignHelpers:
    def test_sign(self):
        assert sign(Decimal(-3)) == -1
        assert sign(Decimal(0)) == 0
        assert sign(Decimal.inf()) == 1
        assert sign(Decimal.nan()).is_nan()

    def test_abs(self):
        assert abs_(Decimal("-0.5")) == Decimal("0.5")

    def test_inc_dec(self):
        assert inc(Decimal(1)) == 2
        assert dec(Decimal("0.5")) == Decimal("-0.5")
        assert inc(1) == 2
