"""
Number theory: простые числа, делители, арифметические функции и
модульная арифметика поверх topos.core.algebra.Set.
"""

from topos.number_theory.arithmetic_functions import (
    divisor_function,
    divisor_sigma,
    divisor_tau,
    euler_totient,
    moebius_mu,
)
from topos.number_theory.congruence import (
    Congruence,
    CongruenceConfig,
    IntegerCongruence,
)
from topos.number_theory.division import (
    divisors,
    gcd,
    is_divisible_by,
    is_relatively_prime,
    lcm,
)
from topos.number_theory.fibonacci import (
    fibonacci,
    lucas,
    zeckendorf,
    zeckendorf_repr,
)
from topos.number_theory.primality import (
    factorize,
    factorize_unique,
    is_composite,
    is_prime,
    is_prime_power,
    primes_up_to,
)

__all__ = [
    # Division
    "divisors",
    "gcd",
    "is_divisible_by",
    "is_relatively_prime",
    "lcm",
    # Primality
    "factorize",
    "factorize_unique",
    "is_composite",
    "is_prime",
    "is_prime_power",
    "primes_up_to",
    # Arithmetic functions
    "divisor_function",
    "divisor_sigma",
    "divisor_tau",
    "euler_totient",
    "moebius_mu",
    # Fibonacci
    "fibonacci",
    "lucas",
    "zeckendorf",
    "zeckendorf_repr",
    # Congruence
    "Congruence",
    "CongruenceConfig",
    "IntegerCongruence",
]
