"""
Тесты для математических констант

Проверяет:
1. Значения констант с точностью конфигурации
2. Мемоизацию набора по конфигурации
3. Явный повторный вывод через DecimalConstants.set_config()
4. Влияние pi_iterations на точность π
"""

import pytest

from fixdec.core.domain import Decimal, DecimalConfig
from fixdec.core.math import DecimalConstants, constants_for, e, ln2, ln10, pi, sqrt2

CONFIG = DecimalConfig(decimals=30)
TOLERANCE = Decimal("1e-29")

REFERENCE = {
    "pi": "3.141592653589793238462643383280",
    "e": "2.718281828459045235360287471353",
    "ln2": "0.693147180559945309417232121458",
    "ln10": "2.302585092994045684017991454684",
    "sqrt2": "1.414213562373095048801688724210",
    "inv_sqrt2": "0.707106781186547524400844362105",
    "half_pi": "1.570796326794896619231321691640",
    "quarter_pi": "0.785398163397448309615660845820",
    "inv_pi": "0.318309886183790671537767526745",
    "two_over_pi": "0.636619772367581343075535053490",
    "two_over_sqrt_pi": "1.128379167095512573896158903122",
    "log2_e": "1.442695040888963407359924681002",
    "log10_e": "0.434294481903251827651128918917",
}


class TestConstantValues:
    @pytest.mark.parametrize("name", sorted(REFERENCE))
    def test_reference_value(self, name):
        value = getattr(DecimalConstants(CONFIG), name)
        assert abs(value - Decimal(REFERENCE[name])) <= TOLERANCE, f"{name}: {value}"

    def test_values_carry_config(self):
        assert DecimalConstants(CONFIG).pi.config == CONFIG

    def test_low_precision_pi(self):
        assert str(DecimalConstants(DecimalConfig(decimals=10)).pi) == "3.1415926536"

    def test_module_helpers(self):
        assert pi(CONFIG) == DecimalConstants(CONFIG).pi
        assert e(CONFIG) == DecimalConstants(CONFIG).e
        assert ln2(CONFIG) == DecimalConstants(CONFIG).ln2
        assert ln10(CONFIG) == DecimalConstants(CONFIG).ln10
        assert sqrt2(CONFIG) == DecimalConstants(CONFIG).sqrt2


class TestConstantSet:
    def test_memoized_per_config(self):
        assert constants_for(CONFIG) is constants_for(DecimalConfig(decimals=30))

    def test_set_config_rederives(self):
        constants = DecimalConstants(DecimalConfig(decimals=10))
        coarse = constants.pi
        constants.set_config(CONFIG)
        assert constants.config == CONFIG
        assert constants.pi != coarse
        assert constants.values.pi == constants.pi

    def test_values_stable_between_calls(self):
        constants = DecimalConstants(CONFIG)
        assert constants.e is constants.e


class TestPiIterations:
    def test_fewer_terms_are_coarser(self):
        """Один член ряда Чудновского даёт ~14 верных разрядов."""
        reference = Decimal(REFERENCE["pi"])
        coarse = pi(DecimalConfig(decimals=30, pi_iterations=1))
        fine = pi(CONFIG)
        assert abs(coarse - reference) < Decimal("1e-12")
        assert abs(coarse - reference) > abs(fine - reference)
