"""
Sequences — генераторы членов последовательностей.
"""

from fixdec.sequences.base import TermGenerator, take
from fixdec.sequences.bernoulli import BernoulliSequence, bernoulli

__all__ = [
    "TermGenerator",
    "take",
    "BernoulliSequence",
    "bernoulli",
]
