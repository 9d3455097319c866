"""
Division — делимость, НОД/НОК и делители

ИНВАРИАНТЫ:
1. gcd/lcm всегда неотрицательны и не зависят от знаков аргументов
2. divisors(n) — положительные делители |n| по возрастанию
3. divisors(0) не определено (бесконечное множество) → DivisionByZeroError
"""

import math
from functools import reduce

from topos.core.algebra.sets import Set
from topos.core.domain.values import integer
from topos.core.errors import ArityError, DivisionByZeroError


def is_divisible_by(a: int, b: int) -> bool:
    """
    b | a (знаки игнорируются).

    Raises:
        DivisionByZeroError: если b == 0
    """
    if b == 0:
        raise DivisionByZeroError(f"Divisibility of {a} by zero is undefined")
    return abs(a) % abs(b) == 0


def gcd(*numbers: int) -> int:
    """
    Наибольший общий делитель двух и более целых.

    gcd(a, 0) = |a|; вычисляется слева направо.

    Raises:
        ArityError: если передано меньше 2 чисел

    Examples:
        >>> gcd(12, 18, 27)
        3
    """
    if len(numbers) < 2:
        raise ArityError("gcd", received=len(numbers))
    return reduce(math.gcd, (integer(n) for n in numbers))


def _lcm_pair(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // math.gcd(a, b)


def lcm(*numbers: int) -> int:
    """
    Наименьшее общее кратное двух и более целых.

    Raises:
        ArityError: если передано меньше 2 чисел
    """
    if len(numbers) < 2:
        raise ArityError("lcm", received=len(numbers))
    return reduce(_lcm_pair, (integer(n) for n in numbers))


def is_relatively_prime(*numbers: int) -> bool:
    """gcd(numbers) == 1."""
    return gcd(*numbers) == 1


def divisors(n: int) -> Set:
    """
    Положительные делители |n| по возрастанию.

    Пробное деление до √|n|: каждый найденный d даёт пару (d, |n|/d).

    Raises:
        DivisionByZeroError: если n == 0 (множество делителей бесконечно)
    """
    n = abs(integer(n))
    if n == 0:
        raise DivisionByZeroError("Divisors of 0 form an infinite set")

    small, large = [], []
    for d in range(1, math.isqrt(n) + 1):
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)

    return Set(*small, *reversed(large))
