"""
Core value type, arithmetic kernel, and mathematical function layer.

This module contains the building blocks of fixed-point decimal arithmetic:
the digit store, the Decimal value type with its configuration, the
magnitude kernel, and the transcendental functions built on top of it.
"""
