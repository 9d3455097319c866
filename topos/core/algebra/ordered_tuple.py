"""
OrderedTuple — упорядоченный кортеж как множество (определение Куратовского)

    (a, b)       ≔ {{a}, {a, b}}
    (a, b, c)    ≔ ((a, b), c)

Кортеж является полноценным Set: равенство и hash определяются его
Kuratowski-раскрытием, поэтому OrderedTuple(1, 2) == Set(Set(1), Set(1, 2)).
Позиционный доступ (project, [], length, components) хранится отдельно.

Компоненты-кортежи разворачиваются на месте: ((1, 2), 3) == (1, 2, 3).
OrderedTuple.pair строит пару без разворачивания (элементы отношений).
"""

from typing import Optional, Sequence, Tuple

from topos.core.algebra.sets import Set
from topos.core.domain.values import MathObject
from topos.core.errors import ArityError


def _kuratowski(components: Sequence[MathObject]) -> Tuple[Set, Set]:
    """Два элемента Kuratowski-множества для кортежа длины ≥ 2."""
    if len(components) == 2:
        a, b = components
    else:
        inner_first, inner_second = _kuratowski(components[:-1])
        a, b = Set(inner_first, inner_second), components[-1]
    return Set(a), Set(a, b)


class OrderedTuple(Set):
    """
    Неизменяемый упорядоченный кортеж длины ≥ 2.

    Как множество: cardinality, итерация и `in` относятся к
    Kuratowski-элементам. Как последовательность: length, project(i),
    t[i], components.

    Examples:
        >>> t = OrderedTuple(1, 2)
        >>> t[0], t.length
        (1, 2)
        >>> str(OrderedTuple(t, 3))
        '(1, 2, 3)'
    """

    def __init__(self, *components: MathObject):
        flattened = []
        for component in components:
            if isinstance(component, OrderedTuple):
                flattened.extend(component.components)
            else:
                flattened.append(component)

        if len(flattened) < 2:
            raise ArityError("OrderedTuple", received=len(flattened))

        self._build(flattened)

    def _build(self, components: Sequence[MathObject]) -> None:
        super().__init__(*_kuratowski(components))
        self._components: Tuple[MathObject, ...] = tuple(components)
        self._hash: Optional[int] = None

    @classmethod
    def pair(cls, first: MathObject, second: MathObject) -> "OrderedTuple":
        """
        Пара (first, second) без разворачивания компонент-кортежей.

        Пары ((1, 2), 3) и (1, (2, 3)) различны, тогда как конструктор
        развернул бы обе в (1, 2, 3).
        """
        pair = cls.__new__(cls)
        pair._build((first, second))
        return pair

    # =========================================================================
    # TUPLE ACCESS
    # =========================================================================

    @property
    def components(self) -> Tuple[MathObject, ...]:
        return self._components

    @property
    def length(self) -> int:
        """Длина кортежа (не путать с cardinality Kuratowski-множества)."""
        return len(self._components)

    def project(self, index: int) -> MathObject:
        """Проекция на index-ю координату (0-индексация)."""
        return self._components[index]

    def __getitem__(self, index: int) -> MathObject:
        return self._components[index]

    def inverse(self) -> "OrderedTuple":
        """Кортеж в обратном порядке; для пары (a, b) → (b, a)."""
        if self.length == 2:
            return OrderedTuple.pair(self._components[1], self._components[0])
        return OrderedTuple(*reversed(self._components))

    # =========================================================================
    # IMMUTABILITY
    # =========================================================================

    def add(self, element: MathObject) -> None:
        raise TypeError("OrderedTuple is immutable")

    def remove(self, element: MathObject) -> bool:
        raise TypeError("OrderedTuple is immutable")

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = super().__hash__()
        return self._hash

    def __str__(self) -> str:
        return "(" + ", ".join(str(c) for c in self._components) + ")"

    def __repr__(self) -> str:
        return f"OrderedTuple({', '.join(repr(c) for c in self._components)})"
