"""
Виды значений Decimal.

Отрицательный ноль / отрицательная бесконечность различаются знаком,
а не отдельным видом.
"""

from enum import Enum


class NumKind(str, Enum):
    """Вид значения: конечное число, бесконечность или NaN."""

    NORMAL = "NORMAL"
    INFINITY = "INFINITY"
    NAN = "NAN"
