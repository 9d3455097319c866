"""
Тесты для BinaryRelation

Проверяемые инварианты:
1. Невалидные пары молча отбрасываются
2. Domain/Codomain копируются, отношение неизменяемо
3. Замыкания идемпотентны; гетерогенное отношение не меняется
4. Классы эквивалентности — разбиение Domain
5. Свойства гетерогенного отношения ложны
"""

import dataclasses
import logging

import pytest

from topos.core.algebra import BinaryRelation, OrderedTuple, RelationProperties, Set
from topos.core.errors import ComputationLimitError


@pytest.fixture
def s012():
    """Множество {0, 1, 2}."""
    return Set(0, 1, 2)


@pytest.fixture
def symmetric_relation(s012):
    """{(0,0), (1,1), (0,2), (2,0)} на {0, 1, 2}: симметрично, но (2,2) отсутствует."""
    return BinaryRelation(s012, mappings=[(0, 0), (1, 1), (0, 2), (2, 0)])


@pytest.fixture
def chain():
    """Цепочка 1 → 2 → 3 → 4."""
    return BinaryRelation(Set(1, 2, 3, 4), mappings=[(1, 2), (2, 3), (3, 4)])


@pytest.fixture
def less_equal():
    """Отношение ≤ на {1, 2, 3}."""
    s = Set(1, 2, 3)
    return BinaryRelation(s, mappings=[(a, b) for a in s for b in s if a <= b])


# =============================================================================
# ТЕСТЫ: Construction
# =============================================================================


class TestRelationConstruction:
    """Тесты построения отношения."""

    def test_homogeneous_by_default(self, s012):
        r = BinaryRelation(s012)
        assert r.codomain == s012
        assert r.is_homogeneous()
        assert r.cardinality == 0

    def test_invalid_pairs_dropped(self, caplog):
        """Пары вне A × B и не-пары отбрасываются без ошибки."""
        caplog.set_level(logging.DEBUG, logger="topos")
        r = BinaryRelation(Set(1, 2), mappings=[(1, 2), (3, 1), (1,), "ab", (2, 5)])

        assert r.mappings() == [(1, 2)]
        assert "dropped 4 invalid mappings" in caplog.text

    def test_accepts_ordered_tuples(self):
        r = BinaryRelation(Set(1, 2), mappings=[OrderedTuple(1, 2), OrderedTuple(1, 2, 2)])
        assert r.mappings() == [(1, 2)]

    def test_domain_copied(self):
        source = Set(1, 2)
        r = BinaryRelation(source, mappings=[(1, 2)])
        source.add(3)
        r.domain.add(4)
        assert r.domain == Set(1, 2)

    def test_pairs_is_copy(self):
        r = BinaryRelation(Set(1, 2), mappings=[(1, 2)])
        r.pairs.add(OrderedTuple(2, 2))
        assert r.cardinality == 1

    def test_with_mapping(self, s012):
        r = BinaryRelation(s012, mappings=[(0, 1)])
        extended = r.with_mapping(1, 2)

        assert extended.mappings() == [(0, 1), (1, 2)]
        assert r.mappings() == [(0, 1)]
        # Невалидная пара → равная копия
        assert r.with_mapping(0, 9) == r

    def test_special_relations(self, s012):
        assert BinaryRelation.empty(s012).cardinality == 0
        assert BinaryRelation.universal(s012).cardinality == 9
        assert BinaryRelation.universal(s012).is_universal()
        assert BinaryRelation.diagonal(s012).mappings() == [(0, 0), (1, 1), (2, 2)]
        assert BinaryRelation.universal(Set(1), Set("a", "b")).cardinality == 2


# =============================================================================
# ТЕСТЫ: Mapping
# =============================================================================


class TestRelationMapping:
    """Тесты map / image / pre-image."""

    def test_map(self, symmetric_relation):
        assert symmetric_relation.map(0) == Set(0, 2)
        assert symmetric_relation.map(9) == Set()

    def test_inverse_map(self, symmetric_relation):
        assert symmetric_relation.inverse_map(0) == Set(0, 2)
        assert symmetric_relation.inverse_map(1) == Set(1)

    def test_image_and_pre_image(self):
        r = BinaryRelation(Set(1, 2, 3), Set("a", "b", "c"), [(1, "a"), (2, "a"), (2, "b")])
        assert r.image_of(Set(2)) == Set("a", "b")
        assert r.pre_image_of(Set("a")) == Set(1, 2)
        assert r.range == Set("a", "b")
        assert r.pre_image == Set(1, 2)

    def test_is_related_and_contains(self, symmetric_relation):
        assert symmetric_relation.is_related(0, 2)
        assert not symmetric_relation.is_related(2, 2)
        assert (0, 2) in symmetric_relation
        assert OrderedTuple(2, 0) in symmetric_relation
        assert (1, 2) not in symmetric_relation
        assert "x" not in symmetric_relation

    def test_iteration_yields_pairs(self, chain):
        assert Set(*chain) == Set(OrderedTuple(1, 2), OrderedTuple(2, 3), OrderedTuple(3, 4))
        assert len(chain) == 3


# =============================================================================
# ТЕСТЫ: Algebra
# =============================================================================


class TestRelationAlgebra:
    """Тесты converse / composition / restriction."""

    def test_converse(self):
        r = BinaryRelation(Set(1, 2), Set("a"), [(1, "a")])
        converse = r.converse()
        assert converse.domain == Set("a")
        assert converse.codomain == Set(1, 2)
        assert converse.mappings() == [("a", 1)]
        assert converse.converse() == r

    def test_composition(self):
        """S∘R: сначала R: A → B, затем S: B → C."""
        r = BinaryRelation(Set(1, 2), Set("a", "b"), [(1, "a"), (2, "b")])
        s = BinaryRelation(Set("a", "b"), Set("x", "y"), [("a", "x"), ("a", "y")])

        composed = BinaryRelation.composition(s, r)

        assert composed.domain == Set(1, 2)
        assert composed.codomain == Set("x", "y")
        assert composed.mappings() == [(1, "x"), (1, "y")]
        assert s.compose(r) == composed
        assert (s @ r) == composed

    def test_restriction(self, chain):
        restricted = chain.restriction(Set(1, 2, 3))
        assert restricted.mappings() == [(1, 2), (2, 3)]
        assert restricted.domain == Set(1, 2, 3)

    def test_restriction_outside_domain(self, chain):
        restricted = chain.restriction(Set(1, 9))
        assert restricted.cardinality == 0
        assert restricted.domain == Set(1, 9)


# =============================================================================
# ТЕСТЫ: Properties
# =============================================================================


class TestRelationProperties:
    """Тесты свойств отношения."""

    def test_symmetric_without_reflexivity(self, symmetric_relation):
        """(2, 2) отсутствует: отношение не рефлексивно и не транзитивно."""
        assert not symmetric_relation.is_reflexive()
        assert symmetric_relation.is_symmetric()
        assert not symmetric_relation.is_transitive()
        assert not symmetric_relation.is_equivalence_relation()
        assert not symmetric_relation.is_antisymmetric()

    def test_partial_order(self, less_equal):
        assert less_equal.is_reflexive()
        assert less_equal.is_antisymmetric()
        assert less_equal.is_transitive()
        assert less_equal.is_partial_order()
        assert not less_equal.is_symmetric()

    def test_irreflexive(self, chain):
        assert chain.is_irreflexive()
        assert not chain.is_reflexive()

    def test_diagonal_is_equivalence(self, s012):
        assert BinaryRelation.diagonal(s012).is_equivalence_relation()

    def test_empty_domain_vacuous(self):
        r = BinaryRelation(Set())
        assert r.is_reflexive()
        assert r.is_symmetric()
        assert r.is_transitive()

    def test_heterogeneous_properties_false(self):
        r = BinaryRelation(Set(1), Set(1, 2), [(1, 1)])
        assert not r.is_homogeneous()
        assert not r.is_reflexive()
        assert not r.is_symmetric()
        assert not r.is_transitive()
        assert not r.is_antisymmetric()

    def test_properties_snapshot(self, less_equal):
        props = less_equal.properties()
        assert isinstance(props, RelationProperties)
        assert props.partial_order
        assert not props.equivalence
        with pytest.raises(dataclasses.FrozenInstanceError):
            props.reflexive = False


# =============================================================================
# ТЕСТЫ: Closures
# =============================================================================


class TestClosures:
    """Тесты замыканий."""

    def test_reflexive_closure(self, symmetric_relation):
        closure = symmetric_relation.reflexive_closure()
        assert closure.is_reflexive()
        assert closure.cardinality == 5

    def test_symmetric_closure(self, chain):
        closure = chain.symmetric_closure()
        assert closure.is_symmetric()
        assert closure.is_related(2, 1)
        assert closure.cardinality == 6

    def test_transitive_closure(self, chain):
        closure = chain.transitive_closure()
        assert closure.is_transitive()
        assert closure.cardinality == 6
        assert closure.is_related(1, 4)

    def test_closures_idempotent(self, chain, symmetric_relation):
        for r in (chain, symmetric_relation):
            assert r.reflexive_closure().reflexive_closure() == r.reflexive_closure()
            assert r.symmetric_closure().symmetric_closure() == r.symmetric_closure()
            assert r.transitive_closure().transitive_closure() == r.transitive_closure()

    def test_closures_contain_original(self, chain):
        for closure in (
            chain.reflexive_closure(),
            chain.symmetric_closure(),
            chain.transitive_closure(),
            chain.equivalence_closure(),
        ):
            assert chain.pairs.is_subset_of(closure.pairs)

    def test_equivalence_closure(self, symmetric_relation):
        closure = symmetric_relation.equivalence_closure()
        assert closure.is_equivalence_relation()
        assert closure.cardinality == 5

    def test_equivalence_closure_of_chain_is_universal(self, chain):
        assert chain.equivalence_closure().is_universal()

    def test_heterogeneous_unchanged(self):
        r = BinaryRelation(Set(1, 2), Set("a"), [(1, "a")])
        assert r.reflexive_closure() is r
        assert r.symmetric_closure() is r
        assert r.transitive_closure() is r
        assert r.equivalence_closure() is r

    def test_transitive_closure_iteration_limit(self, chain):
        with pytest.raises(ComputationLimitError, match="transitive_closure"):
            chain.transitive_closure(max_iterations=1)

    def test_transitive_closure_within_limit(self, chain):
        assert chain.transitive_closure(max_iterations=10) == chain.transitive_closure()


# =============================================================================
# ТЕСТЫ: Equivalence classes
# =============================================================================


class TestEquivalenceClasses:
    """Тесты разбиения на классы эквивалентности."""

    def test_classes(self, symmetric_relation):
        classes = symmetric_relation.equivalence_closure().equivalence_classes()
        assert classes == Set(Set(0, 2), Set(1))

    def test_partition(self):
        """Классы покрывают Domain и попарно не пересекаются."""
        s = Set(*range(10))
        r = BinaryRelation(s, mappings=[(a, b) for a in s for b in s if a % 3 == b % 3])
        classes = r.equivalence_classes().to_list()

        assert classes and len(classes) == 3
        assert Set.union(*classes) == s
        for i, a in enumerate(classes):
            for b in classes[i + 1:]:
                assert Set.intersection(a, b).is_empty()

    def test_not_equivalence(self, chain):
        assert chain.equivalence_classes() == Set()


# =============================================================================
# ТЕСТЫ: Equality & rendering
# =============================================================================


class TestRelationEquality:
    """Тесты равенства и представления."""

    def test_equality_ignores_pair_order(self, s012):
        a = BinaryRelation(s012, mappings=[(0, 1), (1, 2)])
        b = BinaryRelation(s012, mappings=[(1, 2), (0, 1)])
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_domain_matters(self):
        assert BinaryRelation(Set(1)) != BinaryRelation(Set(1, 2))

    def test_str(self):
        r = BinaryRelation(Set(0, 1), mappings=[(0, 1)])
        assert str(r) == "[BinaryRelation]\n[Domain]: {0, 1}\n[Codomain]: {0, 1}\n[Mappings]: {(0, 1)}"

    def test_str_empty(self):
        assert str(BinaryRelation(Set())).endswith("[Mappings]: Ø")


# =============================================================================
# ТЕСТЫ: Tuple-valued elements
# =============================================================================


class TestTupleValuedElements:
    """Тесты отношений, элементы которых сами являются кортежами."""

    @pytest.fixture
    def mixed_sets(self):
        """A = {1, (1, 2)}, B = {3, (2, 3)}."""
        return Set(1, OrderedTuple(1, 2)), Set(3, OrderedTuple(2, 3))

    def test_nested_pairs_stay_distinct(self, mixed_sets):
        """((1, 2), 3) и (1, (2, 3)) — разные пары отношения."""
        a, b = mixed_sets
        both = BinaryRelation(a, b, [(OrderedTuple(1, 2), 3), (1, OrderedTuple(2, 3))])
        one = BinaryRelation(a, b, [(OrderedTuple(1, 2), 3)])

        assert len(both) == 2
        assert len(both.mappings()) == 2
        assert both != one
        assert both.is_related(1, OrderedTuple(2, 3))
        assert not one.is_related(1, OrderedTuple(2, 3))

    def test_pairs_match_mappings(self, mixed_sets):
        a, b = mixed_sets
        r = BinaryRelation(a, b, [(OrderedTuple(1, 2), 3), (1, OrderedTuple(2, 3))])

        assert Set(*r) == Set(
            OrderedTuple.pair(OrderedTuple(1, 2), 3),
            OrderedTuple.pair(1, OrderedTuple(2, 3)),
        )
        assert OrderedTuple.pair(1, OrderedTuple(2, 3)) in r
        assert r.converse().cardinality == 2

    def test_equality_ignores_pair_order(self, mixed_sets):
        a, b = mixed_sets
        first = BinaryRelation(a, b, [(OrderedTuple(1, 2), 3), (1, OrderedTuple(2, 3))])
        second = BinaryRelation(a, b, [(1, OrderedTuple(2, 3)), (OrderedTuple(1, 2), 3)])
        assert first == second
        assert hash(first) == hash(second)

    def test_plain_tuple_elements(self):
        r = BinaryRelation(Set(1, (1, 2)), Set(3, (2, 3)), [((1, 2), 3), (1, (2, 3))])
        assert len(r) == len(r.mappings()) == 2
