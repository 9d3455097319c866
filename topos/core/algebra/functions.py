"""
Function — однозначное отношение f: A → B

Функция — бинарное отношение, в котором каждому x соответствует не более
одного y. При построении из пар с повторяющимся x сохраняется только
первая пара, остальные молча отбрасываются.

По определению Domain функции — прообраз Codomain, т.е. множество x,
для которых f(x) определено.

Свойства is_injective / is_surjective вычисляются один раз и кэшируются.
"""

from typing import Any, Dict, Optional

from topos.core.algebra.relations import BinaryRelation, Pair
from topos.core.algebra.sets import Set
from topos.core.domain.values import MathObject
from topos.core.errors import UndefinedDomainError


class Function(BinaryRelation):
    """
    Функция f: A → B.

    Examples:
        >>> f = Function(Set(1, 2, 3), Set("a", "b"), [(1, "a"), (2, "b"), (1, "b")])
        >>> f(1)
        'a'
        >>> f.is_injective(), f.is_surjective()
        (True, True)
    """

    _label = "Function"

    def __init__(self, domain: Set, codomain: Optional[Set] = None, mappings: Any = ()):
        super().__init__(domain, codomain, mappings)
        self._domain = self.pre_image_of(self._codomain)

    def _admits(self, x: MathObject, y: MathObject) -> bool:
        # Если aRx и aRy, то x = y: более поздние пары игнорируются
        return super()._admits(x, y) and x not in self._forward

    @classmethod
    def identity(cls, a: Set) -> "Function":
        """Тождественная функция I: A → A, I(x) = x."""
        return cls.diagonal(a)

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def evaluate(self, x: MathObject) -> MathObject:
        """
        Значение f(x).

        Raises:
            UndefinedDomainError: f(x) не определено
        """
        try:
            images = self._forward.get(x)
        except TypeError:
            images = None
        if not images:
            raise UndefinedDomainError(f"Function is undefined at {x}")
        return next(iter(images))

    def __call__(self, x: MathObject) -> MathObject:
        return self.evaluate(x)

    # =========================================================================
    # COMPOSITION / INVERSE
    # =========================================================================

    @staticmethod
    def composition(f: BinaryRelation, g: BinaryRelation) -> BinaryRelation:
        """
        Композиция f∘g, (f∘g)(x) = f(g(x)).

        Для двух функций результат — Function над (g.domain, f.codomain);
        x, для которых g(x) вне области определения f, отбрасываются.
        Если хотя бы один аргумент — не функция, применяется композиция
        отношений.
        """
        if not (isinstance(f, Function) and isinstance(g, Function)):
            return BinaryRelation.composition(f, g)

        mappings: Dict[Pair, None] = {}
        for x, y in g.mappings():
            if y in f._forward:
                mappings[(x, f.evaluate(y))] = None
        return Function(g._domain, f._codomain, mappings)

    def compose(self, other: BinaryRelation) -> BinaryRelation:
        """self∘other."""
        return Function.composition(self, other)

    def inverse(self) -> "Function":
        """
        Обратная функция f⁻¹: B → A.

        Raises:
            UndefinedDomainError: f не является биекцией
        """
        if not self.is_bijective():
            raise UndefinedDomainError("Only a bijective function has an inverse")
        return Function(self._codomain, self._domain, [(y, x) for x, y in self.mappings()])

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    def is_injective(self) -> bool:
        """
        f(x) = f(y) ⇒ x = y.

        Эквивалентно: прообраз каждого y ∈ Codomain содержит не более
        одного элемента.
        """
        return self._memoized(
            "injective",
            lambda: all(len(self._backward.get(y, ())) <= 1 for y in self._codomain),
        )

    def is_surjective(self) -> bool:
        """Range == Codomain."""
        return self._memoized("surjective", lambda: self.range == self._codomain)

    def is_bijective(self) -> bool:
        return self.is_injective() and self.is_surjective()
