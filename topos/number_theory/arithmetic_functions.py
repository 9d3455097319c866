"""
Arithmetic Functions — теоретико-числовые функции

- euler_totient(n)        : φ(n), число 1 ≤ k ≤ n с gcd(k, n) = 1
- divisor_tau(n)          : τ(n) = σ₀(n), число делителей
- divisor_sigma(n)        : σ(n) = σ₁(n), сумма делителей
- divisor_function(n, x)  : σₓ(n) = Σ dˣ, d | n
- moebius_mu(n)           : μ(n) ∈ {−1, 0, 1}

ФОРМУЛЫ:
    φ(n) = n · Π (1 − 1/p),  p | n
    τ(n) = Π (eᵢ + 1),       n = Π pᵢ^eᵢ
    μ(n) = 0 если n не свободно от квадратов, иначе (−1)ᵏ
"""

import math
from fractions import Fraction
from typing import Union

from topos.core.domain.values import Real, integer
from topos.core.errors import UndefinedDomainError
from topos.number_theory.division import divisors
from topos.number_theory.primality import factorize


def euler_totient(n: int) -> int:
    """
    Функция Эйлера φ(n).

    Без решета: для каждого делителя i ≤ √n он полностью вычёркивается из n,
    а из счётчика взаимно простых вычитаются его кратные. Остаток > 1 —
    последний простой делитель.

    Raises:
        UndefinedDomainError: если n < 0

    Examples:
        >>> euler_totient(360)
        96
    """
    n = integer(n)
    if n < 0:
        raise UndefinedDomainError(f"Euler totient requires a non-negative integer, got {n}")
    if n < 2:
        return n

    count = n
    i = 2
    while i * i <= n:
        if n % i == 0:
            while n % i == 0:
                n //= i
            count -= count // i
        i += 1

    if n > 1:
        count -= count // n
    return count


def _require_positive(n: int, name: str) -> int:
    n = integer(n)
    if n <= 0:
        raise UndefinedDomainError(f"{name} requires a positive integer, got {n}")
    return n


def divisor_tau(n: int) -> int:
    """τ(n) — количество положительных делителей n."""
    n = _require_positive(n, "Divisor function")
    return math.prod(factor.index + 1 for factor in factorize(n))


def divisor_sigma(n: int) -> int:
    """σ(n) — сумма положительных делителей n."""
    return divisor_function(n, 1)


def divisor_function(n: int, x: Real) -> Union[int, Fraction, float]:
    """
    σₓ(n) = Σ dˣ по всем положительным делителям d.

    Целое x ≥ 0 → точный int, целое x < 0 → точный Fraction,
    иначе float.

    Raises:
        UndefinedDomainError: если n ≤ 0
    """
    n = _require_positive(n, "Divisor function")

    if isinstance(x, int) and not isinstance(x, bool):
        if x == 0:
            return divisor_tau(n)
        if x > 0:
            return sum(d ** x for d in divisors(n))
        return sum(Fraction(1, d ** -x) for d in divisors(n))

    return math.fsum(float(d) ** float(x) for d in divisors(n))


def moebius_mu(n: int) -> int:
    """
    Функция Мёбиуса μ(n).

    Raises:
        UndefinedDomainError: если n ≤ 0
    """
    n = _require_positive(n, "Moebius function")
    if n == 1:
        return 1

    factors = factorize(n)
    if any(factor.index > 1 for factor in factors):
        return 0
    return -1 if factors.cardinality % 2 else 1
