"""
Core math modules для fixdec

Трансцендентные функции, округление, комбинаторика и константы,
вычисляемые итерационными алгоритмами поверх арифметического ядра.
"""

# Rounding family
from fixdec.core.math.rounding import (
    abs_,
    ceil,
    dec,
    floor,
    inc,
    round_to,
    sign,
    trunc,
)

# Power / logarithm / roots
from fixdec.core.math.power import (
    exp,
    hypot,
    ln,
    log,
    log2,
    log10,
    pow_,
    sqrt,
)

# Constants
from fixdec.core.math.constants import (
    ConstantSet,
    DecimalConstants,
    constants_for,
    e,
    ln2,
    ln10,
    pi,
    sqrt2,
)

# Trigonometric
from fixdec.core.math.trig import (
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
    sec,
    sin,
    tan,
    trig_phase_correct,
)

# Hyperbolic
from fixdec.core.math.hyperbolic import (
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

# Error function
from fixdec.core.math.special_functions import erf, erfc

# Combinatorics
from fixdec.core.math.combinatorics import binomial, factorial, ncr, npr

__all__ = [
    # Rounding
    "floor",
    "ceil",
    "trunc",
    "round_to",
    "abs_",
    "sign",
    "inc",
    "dec",
    # Power
    "exp",
    "ln",
    "log",
    "log10",
    "log2",
    "sqrt",
    "hypot",
    "pow_",
    # Constants
    "ConstantSet",
    "DecimalConstants",
    "constants_for",
    "pi",
    "e",
    "ln2",
    "ln10",
    "sqrt2",
    # Trigonometric
    "trig_phase_correct",
    "sin",
    "cos",
    "tan",
    "cot",
    "sec",
    "csc",
    "atan",
    "asin",
    "acos",
    "acot",
    "asec",
    "acsc",
    "atan2",
    # Hyperbolic
    "sinh",
    "cosh",
    "tanh",
    "coth",
    "sech",
    "csch",
    "asinh",
    "acosh",
    "atanh",
    "acoth",
    "asech",
    "acsch",
    # Error function
    "erf",
    "erfc",
    # Combinatorics
    "factorial",
    "npr",
    "ncr",
    "binomial",
]
