"""
BinaryRelation — бинарное отношение R ⊆ A × B

Отношение владеет множеством пар OrderedTuple и независимыми копиями
Domain (A) и Codomain (B). Отношение НЕ является подклассом Set:
после построения оно неизменяемо, поэтому вычисленные свойства
(рефлексивность, симметричность, ...) кэшируются на весь срок жизни
экземпляра. Добавление пары возвращает новый экземпляр (with_mapping).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Для каждой пары (x, y): x ∈ Domain, y ∈ Codomain. Невалидные пары
   при построении молча отбрасываются (best-effort построение, не ошибка)
2. Domain/Codomain копируются при построении и не разделяются с вызывающим
3. Замыкания гетерогенного отношения возвращают его без изменений
4. transitive_closure — неподвижная точка r ← r ∪ r∘r; завершается,
   так как Domain × Domain конечно
5. Пары строятся через OrderedTuple.pair: (x, y) с кортежем в x или y
   не разворачивается, поэтому _pairs и индексы _forward/_backward
   содержат одни и те же пары

ФОРМУЛЫ:
    S∘R = {(a, c) : ∃b, (a, b) ∈ R ∧ (b, c) ∈ S}
    R⁻¹ = {(b, a) : (a, b) ∈ R}
    Δ(A) = {(a, a) : a ∈ A}
    equivalence_closure(R) = t(s(r(R)))
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from topos.core.algebra.ordered_tuple import OrderedTuple
from topos.core.algebra.sets import Set
from topos.core.domain.values import MathObject
from topos.core.errors import ComputationLimitError
from topos.core.logging_config import get_logger

logger = get_logger(__name__)

Pair = Tuple[MathObject, MathObject]


@dataclass(frozen=True)
class RelationProperties:
    """Снимок всех свойств отношения."""

    homogeneous: bool
    universal: bool
    reflexive: bool
    irreflexive: bool
    symmetric: bool
    antisymmetric: bool
    transitive: bool
    equivalence: bool
    partial_order: bool


def _as_pair(mapping: Any) -> Optional[Pair]:
    """Пара из tuple/list длины 2 или OrderedTuple длины 2, иначе None."""
    if isinstance(mapping, OrderedTuple):
        return (mapping[0], mapping[1]) if mapping.length == 2 else None
    if isinstance(mapping, (tuple, list)) and len(mapping) == 2:
        return mapping[0], mapping[1]
    return None


class BinaryRelation:
    """
    Бинарное отношение между Domain и Codomain.

    Examples:
        >>> s = Set(0, 1, 2)
        >>> r = BinaryRelation(s, mappings=[(0, 0), (1, 1), (0, 2), (2, 0)])
        >>> r.is_reflexive(), r.is_symmetric(), r.is_transitive()
        (False, True, False)
    """

    _label = "BinaryRelation"

    def __init__(
        self,
        domain: Set,
        codomain: Optional[Set] = None,
        mappings: Iterable[Any] = (),
    ):
        """
        Args:
            domain: множество A (копируется)
            codomain: множество B (копируется); None → однородное отношение A → A
            mappings: пары (x, y) как tuple или OrderedTuple
        """
        self._domain = Set.copy_from(domain)
        self._codomain = Set.copy_from(codomain if codomain is not None else domain)
        # Исходный domain нужен для with_mapping/restriction у Function
        self._declared_domain = self._domain

        self._pairs = Set()
        self._forward: Dict[MathObject, Dict[MathObject, None]] = {}
        self._backward: Dict[MathObject, Dict[MathObject, None]] = {}
        self._property_cache: Dict[str, bool] = {}
        self._hash: Optional[int] = None

        dropped = 0
        for mapping in mappings:
            pair = _as_pair(mapping)
            if pair is None or not self._admits(*pair):
                dropped += 1
                continue
            self._insert(*pair)

        if dropped:
            logger.debug("%s: dropped %d invalid mappings", self._label, dropped)

    def _admits(self, x: MathObject, y: MathObject) -> bool:
        return x in self._domain and y in self._codomain

    def _insert(self, x: MathObject, y: MathObject) -> None:
        self._pairs.add(OrderedTuple.pair(x, y))
        self._forward.setdefault(x, {})[y] = None
        self._backward.setdefault(y, {})[x] = None

    # =========================================================================
    # SPECIAL RELATIONS
    # =========================================================================

    @classmethod
    def empty(cls, a: Set, b: Optional[Set] = None) -> "BinaryRelation":
        """Пустое отношение ∅ ⊆ A × B."""
        return cls(a, b)

    @classmethod
    def universal(cls, a: Set, b: Optional[Set] = None) -> "BinaryRelation":
        """Универсальное отношение A × B."""
        b = b if b is not None else a
        return cls(a, b, ((x, y) for x in a for y in b))

    @classmethod
    def diagonal(cls, a: Set) -> "BinaryRelation":
        """Диагональ Δ(A) = {(a, a) : a ∈ A} (отношение равенства)."""
        return cls(a, a, ((x, x) for x in a))

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def domain(self) -> Set:
        return Set.copy_from(self._domain)

    @property
    def codomain(self) -> Set:
        return Set.copy_from(self._codomain)

    @property
    def range(self) -> Set:
        """Образ Domain: элементы Codomain, связанные хотя бы с одним x."""
        return self.image_of(self._domain)

    @property
    def pre_image(self) -> Set:
        """Прообраз Codomain: элементы Domain, связанные хотя бы с одним y."""
        return self.pre_image_of(self._codomain)

    @property
    def pairs(self) -> Set:
        """Множество пар OrderedTuple (копия)."""
        return Set.copy_from(self._pairs)

    @property
    def cardinality(self) -> int:
        return self._pairs.cardinality

    def mappings(self) -> List[Pair]:
        """Пары как обычные tuple в порядке добавления."""
        return [(x, y) for x, ys in self._forward.items() for y in ys]

    def with_mapping(self, x: MathObject, y: MathObject) -> "BinaryRelation":
        """
        Новое отношение того же типа с дополнительной парой (x, y).

        Пара проверяется так же, как при построении: невалидная пара
        даёт равную копию исходного отношения.
        """
        return type(self)(self._declared_domain, self._codomain, self.mappings() + [(x, y)])

    def __len__(self) -> int:
        return self._pairs.cardinality

    def __iter__(self) -> Iterator[OrderedTuple]:
        return iter(self._pairs)

    def __contains__(self, pair: Any) -> bool:
        as_pair = _as_pair(pair)
        return as_pair is not None and self.is_related(*as_pair)

    # =========================================================================
    # MAPPING
    # =========================================================================

    def map(self, x: MathObject) -> Set:
        """
        {y : (x, y) ∈ R}. Для невалидного x — пустое множество.

        Для отношения эквивалентности — класс эквивалентности x.
        """
        return Set(*self._forward.get(x, ()))

    def inverse_map(self, y: MathObject) -> Set:
        """{x : (x, y) ∈ R}. Для невалидного y — пустое множество."""
        return Set(*self._backward.get(y, ()))

    def image_of(self, s: Set) -> Set:
        """R[S] = ⋃ map(x), x ∈ S."""
        image = Set()
        for x in s:
            image = Set.union(image, self.map(x))
        return image

    def pre_image_of(self, s: Set) -> Set:
        """R⁻¹[S] = ⋃ inverse_map(y), y ∈ S."""
        pre_image = Set()
        for y in s:
            pre_image = Set.union(pre_image, self.inverse_map(y))
        return pre_image

    def is_related(self, x: MathObject, y: MathObject) -> bool:
        """xRy."""
        try:
            return y in self._forward.get(x, ())
        except TypeError:
            return False

    def converse(self) -> "BinaryRelation":
        """Обратное отношение R⁻¹ ⊆ B × A."""
        return BinaryRelation(self._codomain, self._domain, [(y, x) for x, y in self.mappings()])

    @staticmethod
    def composition(s: "BinaryRelation", r: "BinaryRelation") -> "BinaryRelation":
        """
        Композиция S∘R = {(a, c) : ∃b, (a, b) ∈ R ∧ (b, c) ∈ S}.

        Domain = R.domain, Codomain = S.codomain.
        """
        composed: Dict[Pair, None] = {}
        for a, b in r.mappings():
            for c in s._forward.get(b, ()):
                composed[(a, c)] = None
        return BinaryRelation(r._domain, s._codomain, composed)

    def compose(self, other: "BinaryRelation") -> "BinaryRelation":
        """self∘other."""
        return BinaryRelation.composition(self, other)

    def __matmul__(self, other: "BinaryRelation") -> "BinaryRelation":
        if not isinstance(other, BinaryRelation):
            return NotImplemented
        return self.compose(other)

    def restriction(self, s: Set, t: Optional[Set] = None) -> "BinaryRelation":
        """
        Сужение R на S × T, где S ⊆ Domain и T ⊆ Codomain.

        Если условие подмножеств нарушено — пустое отношение над (S, T).
        t=None означает T = S.
        """
        t = t if t is not None else s
        if s.is_subset_of(self._declared_domain) and t.is_subset_of(self._codomain):
            return type(self)(s, t, self.mappings())
        return type(self)(s, t)

    # =========================================================================
    # PROPERTIES (memoized)
    # =========================================================================

    def _memoized(self, name: str, compute: Callable[[], bool]) -> bool:
        if name not in self._property_cache:
            self._property_cache[name] = compute()
        return self._property_cache[name]

    def is_homogeneous(self) -> bool:
        """Domain == Codomain."""
        return self._memoized("homogeneous", lambda: self._domain == self._codomain)

    def is_universal(self) -> bool:
        """R = A × B, т.е. |R| = |A|·|B|."""
        return self._memoized(
            "universal",
            lambda: self.cardinality == self._domain.cardinality * self._codomain.cardinality,
        )

    def is_reflexive(self) -> bool:
        """∀x ∈ Domain: xRx. False для гетерогенного отношения."""
        return self._memoized(
            "reflexive",
            lambda: self.is_homogeneous() and all(self.is_related(x, x) for x in self._domain),
        )

    def is_irreflexive(self) -> bool:
        """∀x ∈ Domain: ¬xRx. False для гетерогенного отношения."""
        return self._memoized(
            "irreflexive",
            lambda: self.is_homogeneous() and not any(self.is_related(x, x) for x in self._domain),
        )

    def is_symmetric(self) -> bool:
        """xRy ⇒ yRx. False для гетерогенного отношения."""
        return self._memoized(
            "symmetric",
            lambda: self.is_homogeneous()
            and all(self.is_related(y, x) for x, y in self.mappings()),
        )

    def is_antisymmetric(self) -> bool:
        """xRy ∧ yRx ⇒ x = y. False для гетерогенного отношения."""
        return self._memoized(
            "antisymmetric",
            lambda: self.is_homogeneous()
            and all(x == y or not self.is_related(y, x) for x, y in self.mappings()),
        )

    def is_transitive(self) -> bool:
        """
        xRy ∧ yRz ⇒ xRz. False для гетерогенного отношения.

        Перебор всех пар (x, y) и продолжений (y, z): O(|R|·deg),
        в худшем случае O(|R|²) для плотных отношений.
        """
        return self._memoized("transitive", self._compute_transitive)

    def _compute_transitive(self) -> bool:
        if not self.is_homogeneous():
            return False
        for x, y in self.mappings():
            for z in self._forward.get(y, ()):
                if not self.is_related(x, z):
                    return False
        return True

    def is_equivalence_relation(self) -> bool:
        """Однородное, рефлексивное, симметричное и транзитивное."""
        return self._memoized(
            "equivalence",
            lambda: self.is_homogeneous()
            and self.is_reflexive()
            and self.is_symmetric()
            and self.is_transitive(),
        )

    def is_partial_order(self) -> bool:
        """Рефлексивное, антисимметричное и транзитивное."""
        return self._memoized(
            "partial_order",
            lambda: self.is_reflexive() and self.is_antisymmetric() and self.is_transitive(),
        )

    def properties(self) -> RelationProperties:
        return RelationProperties(
            homogeneous=self.is_homogeneous(),
            universal=self.is_universal(),
            reflexive=self.is_reflexive(),
            irreflexive=self.is_irreflexive(),
            symmetric=self.is_symmetric(),
            antisymmetric=self.is_antisymmetric(),
            transitive=self.is_transitive(),
            equivalence=self.is_equivalence_relation(),
            partial_order=self.is_partial_order(),
        )

    # =========================================================================
    # CLOSURES
    # =========================================================================

    def _as_relation(self) -> "BinaryRelation":
        if type(self) is BinaryRelation:
            return self
        return BinaryRelation(self._domain, self._codomain, self.mappings())

    def _union(self, other: "BinaryRelation") -> "BinaryRelation":
        return BinaryRelation(self._domain, self._codomain, self.mappings() + other.mappings())

    def reflexive_closure(self) -> "BinaryRelation":
        """r(R) = R ∪ Δ(Domain)."""
        if not self.is_homogeneous():
            return self
        return self._union(BinaryRelation.diagonal(self._domain))

    def symmetric_closure(self) -> "BinaryRelation":
        """s(R) = R ∪ R⁻¹."""
        if not self.is_homogeneous():
            return self
        return self._union(self.converse())

    def transitive_closure(self, max_iterations: Optional[int] = None) -> "BinaryRelation":
        """
        t(R): наименьшее транзитивное отношение, содержащее R.

        Итерация до неподвижной точки: r ← r ∪ r∘r, пока шаг что-то добавляет.
        Каждый шаг удваивает длину учтённых путей, поэтому шагов
        не больше ⌈log₂|Domain|⌉ + 1.

        Args:
            max_iterations: лимит итераций (None = без лимита)

        Raises:
            ComputationLimitError: лимит итераций исчерпан до сходимости
        """
        if not self.is_homogeneous():
            return self

        current = self._as_relation()
        iterations = 0
        while True:
            step = current._union(BinaryRelation.composition(current, current))
            iterations += 1
            if step == current:
                break
            if max_iterations is not None and iterations >= max_iterations:
                raise ComputationLimitError(
                    "BinaryRelation.transitive_closure", iterations, max_iterations
                )
            current = step

        logger.debug(
            "transitive closure converged after %d iterations (%d -> %d pairs)",
            iterations,
            self.cardinality,
            current.cardinality,
        )
        return current

    def equivalence_closure(self) -> "BinaryRelation":
        """
        Наименьшее отношение эквивалентности, содержащее R: t(s(r(R))).

        Транзитивное замыкание применяется последним: добавление
        рефлексивных или симметричных пар может нарушить транзитивность.
        """
        if not self.is_homogeneous():
            return self
        return self.reflexive_closure().symmetric_closure().transitive_closure()

    def equivalence_classes(self) -> Set:
        """
        Разбиение Domain на классы эквивалентности.

        Классы попарно не пересекаются, поэтому элементы найденного класса
        сразу удаляются из пула: вычисляется ровно по одному map на класс.

        Returns:
            Set классов (каждый класс — Set); пустое множество, если R
            не является отношением эквивалентности
        """
        classes = Set()
        if not self.is_equivalence_relation():
            return classes

        pool = Set.copy_from(self._domain)
        while not pool.is_empty():
            representative = next(iter(pool))
            equivalence_class = self.map(representative)
            classes.add(equivalence_class)
            pool = Set.exclusion(pool, equivalence_class)
        return classes

    # =========================================================================
    # OVERRIDES
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BinaryRelation):
            return NotImplemented
        return (
            self._domain == other._domain
            and self._codomain == other._codomain
            and self._pairs == other._pairs
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((hash(self._domain), hash(self._codomain), hash(self._pairs)))
        return self._hash

    def __str__(self) -> str:
        return (
            f"[{self._label}]\n"
            f"[Domain]: {self._domain}\n"
            f"[Codomain]: {self._codomain}\n"
            f"[Mappings]: {self._pairs}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self._domain!r}, codomain={self._codomain!r}, mappings={self.mappings()!r})"
