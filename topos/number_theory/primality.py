"""
Primality — простые числа и разложение на множители

Решето Эратосфена работает на изменяемом Set: в него кладутся 2 и все
нечётные кандидаты до n, затем удаляются нечётные кратные до √n.

Разложение возвращает множество Exponential(p, e):
    factorize(360) == Set(Exponential(2, 3), Exponential(3, 2), Exponential(5, 1))
"""

import math
from typing import List, Tuple

from topos.core.algebra.sets import Set
from topos.core.domain.values import Exponential, integer
from topos.core.errors import UndefinedDomainError


def primes_up_to(n: int) -> Set:
    """
    Все простые p ≤ n, по возрастанию.

    Raises:
        UndefinedDomainError: если n < 0

    Examples:
        >>> print(primes_up_to(20))
        {2, 3, 5, 7, 11, 13, 17, 19}
    """
    n = integer(n)
    if n < 0:
        raise UndefinedDomainError(f"Prime sieve bound must be non-negative, got {n}")
    if n < 2:
        return Set()

    # Единственное чётное простое: 2
    sieve = Set(2, *range(3, n + 1, 2))

    for i in range(3, math.isqrt(n) + 1, 2):
        if i not in sieve:
            continue
        # Меньшие кратные уже удалены меньшими простыми
        for j in range(i, n // i + 1, 2):
            sieve.remove(i * j)

    return sieve


def _prime_exponents(n: int) -> List[Tuple[int, int]]:
    """Пары (p, e) разложения n ≥ 1 по возрастанию p."""
    exponents = []
    remainder = n
    for p in primes_up_to(math.isqrt(n)):
        if remainder % p:
            continue
        e = 0
        while remainder % p == 0:
            remainder //= p
            e += 1
        exponents.append((p, e))
    # Остаток > 1 является простым делителем больше √n
    if remainder > 1:
        exponents.append((remainder, 1))
    return exponents


def factorize(n: int) -> Set:
    """
    Каноническое разложение n на простые множители.

    Returns:
        Set из Exponential(p, e); для n == 1 — пустое множество

    Raises:
        UndefinedDomainError: если n < 1
    """
    n = integer(n)
    if n < 1:
        raise UndefinedDomainError(f"Prime factorization requires a positive integer, got {n}")
    return Set(*(Exponential(p, e) for p, e in _prime_exponents(n)))


def factorize_unique(n: int) -> Set:
    """
    Различные простые делители n (без показателей).

    Raises:
        UndefinedDomainError: если n < 1
    """
    n = integer(n)
    if n < 1:
        raise UndefinedDomainError(f"Prime factorization requires a positive integer, got {n}")
    return Set(*(p for p, _ in _prime_exponents(n)))


def is_prime(p: int) -> bool:
    """Простое ли p (пробное деление по 6k ± 1)."""
    p = integer(p)
    if p < 2:
        return False
    if p < 4:
        return True
    if p % 2 == 0 or p % 3 == 0:
        return False
    i = 5
    while i * i <= p:
        if p % i == 0 or p % (i + 2) == 0:
            return False
        i += 6
    return True


def is_prime_power(n: int) -> bool:
    """n = pᵏ для простого p и k ≥ 1."""
    n = integer(n)
    if n <= 1:
        return False
    if is_prime(n):
        return True
    return factorize_unique(n).is_singleton()


def is_composite(n: int) -> bool:
    """0 и 1 не являются ни простыми, ни составными."""
    n = integer(n)
    return n > 1 and not is_prime(n)
