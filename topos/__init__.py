"""
topos — алгебра конечных множеств и модульная арифметика.

Пакеты:
- topos.core.algebra   : Set, OrderedTuple, BinaryRelation, Function
- topos.core.domain    : атомарные значения (Indeterminate, Exponential)
- topos.number_theory  : простые числа, делители, IntegerCongruence
"""

import logging

# Библиотека не настраивает handlers сама (см. topos.core.logging_config)
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.3.0"
