"""
Тесты для Function

Проверяемые инварианты:
1. Для каждого x сохраняется только первая пара
2. Domain функции — прообраз Codomain
3. f(x) вне области определения → UndefinedDomainError
4. inverse() существует только у биекции
"""

import pytest

from topos.core.algebra import BinaryRelation, Function, Set
from topos.core.errors import UndefinedDomainError


@pytest.fixture
def letters():
    """f: {1, 2, 3} → {a, b}, пара (1, b) отбрасывается, 3 не отображается."""
    return Function(Set(1, 2, 3), Set("a", "b"), [(1, "a"), (2, "b"), (1, "b")])


class TestFunctionConstruction:
    """Тесты построения функции."""

    def test_first_pair_wins(self, letters):
        assert letters.mappings() == [(1, "a"), (2, "b")]
        assert letters(1) == "a"

    def test_domain_is_pre_image(self, letters):
        assert letters.domain == Set(1, 2)
        assert letters.codomain == Set("a", "b")

    def test_map_keeps_relation_semantics(self, letters):
        assert letters.map(1) == Set("a")
        assert letters.map(3) == Set()

    def test_identity(self):
        identity = Function.identity(Set(1, 2))
        assert isinstance(identity, Function)
        assert identity(2) == 2
        assert identity.is_bijective()

    def test_with_mapping(self, letters):
        extended = letters.with_mapping(3, "a")
        assert isinstance(extended, Function)
        assert extended(3) == "a"
        # x уже отображён: новая пара игнорируется
        assert letters.with_mapping(1, "b") == letters

    def test_str_label(self, letters):
        assert str(letters).startswith("[Function]\n[Domain]: {1, 2}")


class TestFunctionEvaluation:
    """Тесты вычисления f(x)."""

    def test_evaluate(self, letters):
        assert letters.evaluate(2) == "b"

    def test_undefined_input(self, letters):
        with pytest.raises(UndefinedDomainError, match="undefined at 3"):
            letters(3)
        with pytest.raises(ValueError):
            letters.evaluate("zzz")

    def test_unhashable_input(self, letters):
        with pytest.raises(UndefinedDomainError):
            letters([1])


class TestFunctionComposition:
    """Тесты композиции f∘g."""

    def test_compose_functions(self):
        g = Function(Set(1, 2), Set("a", "b"), [(1, "a"), (2, "b")])
        f = Function(Set("a", "b"), Set(10, 20), [("a", 10)])

        h = Function.composition(f, g)

        assert isinstance(h, Function)
        assert h(1) == 10
        # g(2) = b вне области определения f
        assert h.domain == Set(1)
        assert f.compose(g) == h

    def test_relation_fallback(self):
        g = Function(Set(1), Set("a"), [(1, "a")])
        r = BinaryRelation(Set("a"), Set("x", "y"), [("a", "x"), ("a", "y")])

        composed = Function.composition(r, g)

        assert type(composed) is BinaryRelation
        assert composed.mappings() == [(1, "x"), (1, "y")]


class TestFunctionProperties:
    """Тесты инъективности / сюръективности / биективности."""

    def test_bijection(self, letters):
        assert letters.is_injective()
        assert letters.is_surjective()
        assert letters.is_bijective()

    def test_not_injective(self):
        f = Function(Set(1, 2), Set(0), [(1, 0), (2, 0)])
        assert not f.is_injective()
        assert f.is_surjective()
        assert not f.is_bijective()

    def test_not_surjective(self):
        f = Function(Set(1), Set(0, 1), [(1, 0)])
        assert f.is_injective()
        assert not f.is_surjective()

    def test_inverse(self, letters):
        inverse = letters.inverse()
        assert inverse("a") == 1
        assert inverse("b") == 2
        assert inverse.inverse() == letters

    def test_inverse_of_non_bijection(self):
        f = Function(Set(1, 2), Set(0), [(1, 0), (2, 0)])
        with pytest.raises(UndefinedDomainError, match="bijective"):
            f.inverse()
