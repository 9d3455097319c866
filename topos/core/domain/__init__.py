"""
Domain values: атомарные элементы множеств и явные числовые конструкторы.
"""

from topos.core.domain.values import (
    MAX_EXACT_BITS,
    Exponential,
    Indeterminate,
    MathObject,
    Real,
    integer,
    is_number,
    is_real,
    rational,
)

__all__ = [
    # Constants
    "MAX_EXACT_BITS",
    # Types
    "MathObject",
    "Real",
    # Value objects
    "Indeterminate",
    "Exponential",
    # Constructors
    "integer",
    "rational",
    # Predicates
    "is_number",
    "is_real",
]
