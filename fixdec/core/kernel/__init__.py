"""
Elementary arithmetic kernel.

magnitude — беззнаковые compare/add/subtract/multiply над цифровыми строками
division  — деление через обратную величину Newton-Raphson
arithmetic — знаковые операции, правила специальных значений, переполнение
"""

from fixdec.core.kernel import arithmetic, division, magnitude

__all__ = [
    "arithmetic",
    "division",
    "magnitude",
]
