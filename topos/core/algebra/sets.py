"""
Set — конечное множество с алгеброй множеств

Элементы — любые hashable значения (числа, Indeterminate, Exponential,
вложенные Set и OrderedTuple). Равенство структурное и не зависит от
порядка добавления:

    S1 == S2  ⟺  ∀x: x ∈ S1 ⟺ x ∈ S2
    hash(S)   =  XOR всех hash(x), x ∈ S

ИНВАРИАНТЫ:
1. В множестве нет двух равных элементов
2. union / intersection / exclusion / cartesian_product работают на копиях
   и возвращают новый Set, операнды не изменяются
3. Set, добавленный как элемент другого Set, не должен изменяться
   (hash вычисляется по текущему содержимому)

Внутреннее хранилище — dict с порядком вставки: итерация и строковое
представление детерминированы, равенство от порядка не зависит.
"""

from functools import reduce
from operator import xor
from typing import Any, Dict, Iterable, Iterator, List

from topos.core.domain.values import MathObject, is_number
from topos.core.errors import ArityError
from topos.core.logging_config import get_logger

logger = get_logger(__name__)

EMPTY_SET_SYMBOL = "Ø"


class Set:
    """
    Конечное неупорядоченное множество без повторов.

    Examples:
        >>> s = Set(1, 2, 3)
        >>> s.add(2)
        >>> s.cardinality
        3
        >>> print(Set.union(s, Set(4)))
        {1, 2, 3, 4}
    """

    def __init__(self, *elements: MathObject):
        self._elements: Dict[MathObject, None] = dict.fromkeys(elements)

    @classmethod
    def from_iterable(cls, elements: Iterable[MathObject]) -> "Set":
        """Создать множество (или подкласс) из произвольного iterable."""
        return cls(*elements)

    @staticmethod
    def copy_from(s: "Set") -> "Set":
        """
        Независимая копия множества (поверхностная, как у встроенного set).

        Копия OrderedTuple — обычный Set с той же Kuratowski-структурой.
        """
        copy = Set()
        copy._elements = dict(s._elements)
        return copy

    def copy(self) -> "Set":
        return Set.copy_from(self)

    # =========================================================================
    # COLLECTION OPERATIONS
    # =========================================================================

    @property
    def cardinality(self) -> int:
        """Мощность множества |S|."""
        return len(self._elements)

    def add(self, element: MathObject) -> None:
        """Добавить элемент (повторное добавление ничего не меняет)."""
        self._elements[element] = None

    def remove(self, element: MathObject) -> bool:
        """
        Удалить элемент.

        Returns:
            True если элемент был удалён, False если его не было
        """
        if element in self._elements:
            del self._elements[element]
            return True
        return False

    def to_list(self) -> List[MathObject]:
        return list(self._elements)

    def to_sorted_list(self) -> List[MathObject]:
        """Элементы по возрастанию (элементы должны быть сравнимы)."""
        return sorted(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[MathObject]:
        return iter(self._elements)

    def __contains__(self, element: Any) -> bool:
        try:
            return element in self._elements
        except TypeError:
            # unhashable значения не могут быть элементами
            return False

    # =========================================================================
    # BINARY / N-ARY OPERATIONS
    # =========================================================================

    @staticmethod
    def union(*sets: "Set") -> "Set":
        """
        Объединение S₁ ∪ S₂ ∪ ... ∪ Sₙ.

        Raises:
            ArityError: если передано меньше 2 множеств
        """
        if len(sets) < 2:
            raise ArityError("Set.union", received=len(sets))

        result = Set.copy_from(sets[0])
        for s in sets[1:]:
            result._elements.update(s._elements)
        return result

    @staticmethod
    def intersection(*sets: "Set") -> "Set":
        """
        Пересечение S₁ ∩ S₂ ∩ ... ∩ Sₙ.

        Raises:
            ArityError: если передано меньше 2 множеств
        """
        if len(sets) < 2:
            raise ArityError("Set.intersection", received=len(sets))

        result = Set.copy_from(sets[0])
        for s in sets[1:]:
            result._elements = {x: None for x in result._elements if x in s._elements}
        return result

    @staticmethod
    def exclusion(*sets: "Set") -> "Set":
        """
        Разность S₁ − S₂ − ... − Sₙ (левая свёртка).

        Raises:
            ArityError: если передано меньше 2 множеств
        """
        if len(sets) < 2:
            raise ArityError("Set.exclusion", received=len(sets))

        result = Set.copy_from(sets[0])
        for s in sets[1:]:
            result._elements = {x: None for x in result._elements if x not in s._elements}
        return result

    # =========================================================================
    # POWER SET
    # =========================================================================

    def power_set(self) -> "Set":
        """
        Булеан P(S), |P(S)| = 2ⁿ.

        Каждое подмножество соответствует n-битному счётчику от 0 до 2ⁿ − 1:
        бит i установлен ⇒ i-й элемент входит в подмножество.
        Сложность экспоненциальная.
        """
        members = self.to_list()
        n = len(members)
        logger.debug("power set of cardinality %d: enumerating %d subsets", n, 1 << n)

        power = Set()
        for mask in range(1 << n):
            power.add(Set(*(members[i] for i in range(n) if (mask >> i) & 1)))
        return power

    # =========================================================================
    # CARTESIAN PRODUCT
    # =========================================================================

    @staticmethod
    def cartesian_product(*sets: "Set") -> "Set":
        """
        Декартово произведение A₁ × A₂ × ... × Aₙ.

        Бинарный случай даёт пары OrderedTuple(a, b); n-арный — левая свёртка,
        вложенные пары разворачиваются в n-ки: ((a, b), c) = (a, b, c).

        Raises:
            ArityError: если передано меньше 2 множеств
        """
        if len(sets) < 2:
            raise ArityError("Set.cartesian_product", received=len(sets))
        return reduce(_cartesian_pair, sets)

    # =========================================================================
    # LOGICAL CHECKS
    # =========================================================================

    def is_empty(self) -> bool:
        return not self._elements

    def is_singleton(self) -> bool:
        return len(self._elements) == 1

    def contains(self, element: MathObject) -> bool:
        return element in self

    def is_subset_of(self, superset: "Set") -> bool:
        """S ⊆ T (включая тривиальный случай S = T)."""
        return all(x in superset._elements for x in self._elements)

    def is_proper_subset_of(self, superset: "Set") -> bool:
        """S ⊂ T и S ≠ T."""
        return len(self) < len(superset) and self.is_subset_of(superset)

    def is_superset_of(self, subset: "Set") -> bool:
        return subset.is_subset_of(self)

    def is_proper_superset_of(self, subset: "Set") -> bool:
        return subset.is_proper_subset_of(self)

    def is_number_collection(self) -> bool:
        """Все элементы — числа."""
        return all(is_number(x) for x in self._elements)

    def is_finite(self) -> bool:
        return True

    def is_countable(self) -> bool:
        # Любое конечное множество счётно
        return True

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __or__(self, other: "Set") -> "Set":
        if not isinstance(other, Set):
            return NotImplemented
        return Set.union(self, other)

    def __and__(self, other: "Set") -> "Set":
        if not isinstance(other, Set):
            return NotImplemented
        return Set.intersection(self, other)

    def __sub__(self, other: "Set") -> "Set":
        if not isinstance(other, Set):
            return NotImplemented
        return Set.exclusion(self, other)

    def __le__(self, other: "Set") -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_subset_of(other)

    def __lt__(self, other: "Set") -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_proper_subset_of(other)

    def __ge__(self, other: "Set") -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_superset_of(other)

    def __gt__(self, other: "Set") -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_proper_superset_of(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self._elements.keys() == other._elements.keys()

    def __hash__(self) -> int:
        # Порядок элементов не влияет на XOR
        return reduce(xor, (hash(x) for x in self._elements), 0)

    def __str__(self) -> str:
        if not self._elements:
            return EMPTY_SET_SYMBOL
        return "{" + ", ".join(str(x) for x in self._elements) + "}"

    def __repr__(self) -> str:
        return f"Set({', '.join(repr(x) for x in self._elements)})"


def _cartesian_pair(a: Set, b: Set) -> Set:
    from topos.core.algebra.ordered_tuple import OrderedTuple

    product = Set()
    for x in a:
        for y in b:
            product.add(OrderedTuple(x, y))
    return product
