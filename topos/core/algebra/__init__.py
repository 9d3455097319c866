"""
Algebra: конечные множества, кортежи, отношения и функции.
"""

from topos.core.algebra.functions import Function
from topos.core.algebra.ordered_tuple import OrderedTuple
from topos.core.algebra.relations import BinaryRelation, RelationProperties
from topos.core.algebra.sets import EMPTY_SET_SYMBOL, Set

__all__ = [
    # Sets
    "EMPTY_SET_SYMBOL",
    "Set",
    "OrderedTuple",
    # Relations
    "BinaryRelation",
    "RelationProperties",
    "Function",
]
