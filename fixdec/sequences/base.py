"""
Sequence Framework — генераторы членов последовательностей

TermGenerator — capability-интерфейс с одним методом term(n): индекс
(Decimal, ожидается целый) отображается в член последовательности.
Реализации не наследуют общий базовый класс.
"""

from typing import Any, Iterator, Protocol, runtime_checkable

from fixdec.core.domain import Decimal


@runtime_checkable
class TermGenerator(Protocol):
    """Генератор членов последовательности по индексу."""

    def term(self, n: Any) -> Decimal:
        ...


def take(generator: TermGenerator, count: int) -> Iterator[Decimal]:
    """Первые count членов последовательности (индексы 0..count-1)."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    for index in range(count):
        yield generator.term(index)
