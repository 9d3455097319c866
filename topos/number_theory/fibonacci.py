"""
Fibonacci — числа Фибоначчи, Люка и представление Цекендорфа

Вычисления точные (целочисленные), через fast doubling:
    F(2k)   = F(k) · (2F(k+1) − F(k))
    F(2k+1) = F(k)² + F(k+1)²

Отрицательные индексы: F(−n) = (−1)ⁿ⁺¹ F(n).
"""

from typing import List, Tuple

from topos.core.domain.values import integer
from topos.core.errors import UndefinedDomainError


def _fibonacci_pair(n: int) -> Tuple[int, int]:
    """(F(n), F(n + 1)) для n ≥ 0."""
    if n == 0:
        return 0, 1
    a, b = _fibonacci_pair(n >> 1)
    even = a * (2 * b - a)
    odd = a * a + b * b
    if n & 1:
        return odd, even + odd
    return even, odd


def fibonacci(n: int) -> int:
    """
    n-е число Фибоначчи для любого целого n.

    Examples:
        >>> [fibonacci(i) for i in range(-3, 8)]
        [2, -1, 1, 0, 1, 1, 2, 3, 5, 8, 13]
    """
    n = integer(n)
    if n < 0:
        value = _fibonacci_pair(-n)[0]
        return value if (-n) % 2 == 1 else -value
    return _fibonacci_pair(n)[0]


def lucas(n: int) -> int:
    """n-е число Люка, L(n) = F(n − 1) + F(n + 1)."""
    n = integer(n)
    return fibonacci(n - 1) + fibonacci(n + 1)


def zeckendorf(n: int) -> List[int]:
    """
    Представление Цекендорфа: n как сумма несоседних чисел Фибоначчи.

    Жадный алгоритм: на каждом шаге берётся наибольшее F(k) ≤ остатка.
    Представление единственно с точностью до порядка.

    Returns:
        Слагаемые по убыванию

    Raises:
        UndefinedDomainError: если n < 1

    Examples:
        >>> zeckendorf(100)
        [89, 8, 3]
    """
    n = integer(n)
    if n < 1:
        raise UndefinedDomainError(f"Zeckendorf representation requires a positive integer, got {n}")

    fibs = [1, 2]
    while fibs[-1] + fibs[-2] <= n:
        fibs.append(fibs[-1] + fibs[-2])

    terms = []
    remainder = n
    for fib in reversed(fibs):
        if fib <= remainder:
            terms.append(fib)
            remainder -= fib
            if remainder == 0:
                break
    return terms


def zeckendorf_repr(n: int) -> str:
    """Строка вида "89 + 8 + 3"."""
    return " + ".join(str(term) for term in zeckendorf(n))
