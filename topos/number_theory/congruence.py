"""
IntegerCongruence — модульная арифметика в ℤ/nℤ

Объект хранит только модуль n = base > 0 (и лениво вычисленное φ(n));
все операции — чистые функции над этим модулем.

Операции:
- mod / mod_exponential / power : приведение и возведение в степень
- multiplicative_inverse, order  : обратный элемент и порядок (None если не определены)
- primitive_roots, index         : первообразные корни и дискретный логарифм
- solve_linear                   : ax ≡ b (mod n)
- legendre, jacobi               : символы Лежандра/Якоби
- is_quadratic_residue           : разрешимость x² ≡ a (mod n)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат mod(·) всегда в [0, n)
2. При gcd(a, n) = 1 показатель приводится по модулю φ(n) (теорема Эйлера)
3. Отсутствие обратного элемента / порядка — не ошибка: возвращается None
4. Переборные алгоритмы ограничиваются через CongruenceConfig

ТЕОРЕМЫ:
    a^φ(n) ≡ 1 (mod n)                     при gcd(a, n) = 1
    ord(a) | φ(n)                          (Лагранж)
    первообразные корни есть ⟺ n ∈ {1, 2, 4, pᵏ, 2pᵏ}, p нечётное простое
    (p/q)(q/p) = (−1)^((p−1)/2 · (q−1)/2)  (квадратичный закон взаимности)
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from topos.core.algebra.sets import Set
from topos.core.domain.values import Exponential, integer
from topos.core.errors import ComputationLimitError, UndefinedDomainError
from topos.core.logging_config import get_logger
from topos.number_theory.arithmetic_functions import euler_totient
from topos.number_theory.division import divisors
from topos.number_theory.primality import factorize, is_prime, is_prime_power

logger = get_logger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CongruenceConfig:
    """
    Лимиты переборных алгоритмов.

    None — без лимита. При превышении лимита операция поднимает
    ComputationLimitError до начала вычислений.
    """

    # O(n) перебор в is_quadratic_residue (gcd(a, n) ≠ 1) и quadratic_residues
    max_brute_force_modulus: Optional[int] = None

    # O(√n) память и время baby-step/giant-step в index
    max_discrete_log_modulus: Optional[int] = None


# =============================================================================
# LEGENDRE SYMBOL (нечётный простой модуль)
# =============================================================================


def _legendre_prime(a: int, p: int) -> int:
    """
    Символ Лежандра (a/p) для нечётного простого p.

    Базовые случаи a ∈ {−1, 1, 2, 3}, для остальных a — мультипликативность
    по простым делителям с нечётным показателем.
    """
    a %= p
    if a == 0:
        return 0
    if a == 1:
        return 1
    if a == p - 1:
        # (−1/p) = 1 ⟺ p ≡ 1 (mod 4)
        return 1 if p % 4 == 1 else -1
    if a == 2:
        return 1 if p % 8 in (1, 7) else -1
    if a == 3:
        return 1 if p % 12 in (1, 11) else -1

    result = 1
    for factor in factorize(a):
        if factor.index % 2 == 1:
            result *= _legendre_of_prime(factor.base, p)
    return result


def _legendre_of_prime(q: int, p: int) -> int:
    """(q/p) для простого q < p через закон взаимности."""
    if q in (2, 3):
        return _legendre_prime(q, p)
    # Модуль строго убывает: рекурсия конечна
    flipped = _legendre_prime(p, q)
    if p % 4 == 1 or q % 4 == 1:
        return flipped
    return -flipped


# =============================================================================
# CONGRUENCE
# =============================================================================


class Congruence(ABC):
    """Отношение сравнения по модулю на числовой структуре."""

    @property
    @abstractmethod
    def base(self) -> Any:
        """Модуль сравнения."""

    @abstractmethod
    def is_congruent(self, a: Any, b: Any) -> bool:
        """a ≡ b (mod base)."""

    @abstractmethod
    def mod(self, a: Any) -> Any:
        """Каноничный представитель класса вычетов a."""


class IntegerCongruence(Congruence):
    """
    Сравнения по целому модулю n > 0.

    Examples:
        >>> z7 = IntegerCongruence(7)
        >>> z7.multiplicative_inverse(3), z7.order(3)
        (5, 6)
        >>> print(z7.primitive_roots())
        {3, 5}
    """

    def __init__(self, base: int, config: Optional[CongruenceConfig] = None):
        """
        Args:
            base: модуль n > 0
            config: лимиты переборных алгоритмов (default: без лимитов)

        Raises:
            UndefinedDomainError: если base ≤ 0
        """
        base = integer(base)
        if base <= 0:
            raise UndefinedDomainError(f"Congruence base must be positive, got {base}")
        self._base = base
        self.config = config or CongruenceConfig()
        self._phi: Optional[int] = None

    @property
    def base(self) -> int:
        return self._base

    @property
    def phi(self) -> int:
        """φ(n) — порядок группы обратимых вычетов."""
        if self._phi is None:
            self._phi = euler_totient(self._base)
        return self._phi

    def _check_limit(self, operation: str, limit: Optional[int]) -> None:
        if limit is not None and self._base > limit:
            raise ComputationLimitError(operation, self._base, limit)

    def _is_unit(self, a: int) -> bool:
        return math.gcd(a, self._base) == 1

    # =========================================================================
    # REDUCTION
    # =========================================================================

    def mod(self, a: Any) -> int:
        """
        Приведение по модулю, результат в [0, n).

        Exponential приводится через mod_exponential.
        """
        if isinstance(a, Exponential):
            return self.mod_exponential(a)
        # % в Python уже возвращает остаток со знаком делителя
        return integer(a) % self._base

    def is_congruent(self, a: Any, b: Any) -> bool:
        return self.mod(a) == self.mod(b)

    def additive_inverse(self, x: int) -> int:
        """−x mod n."""
        return self.mod(-integer(x))

    def mod_exponential(self, exp: Exponential) -> int:
        """
        base^index mod n для Exponential с целыми частями.

        Raises:
            UnsupportedValueError: нецелое, комплексное или символьное основание/показатель
            UndefinedDomainError: отрицательный показатель при необратимом основании
        """
        return self.power(integer(exp.base), integer(exp.index))

    def power(self, a: int, k: int) -> int:
        """
        aᵏ mod n.

        1. k < 0: a заменяется обратным элементом, k → −k
        2. gcd(a, n) = 1: k приводится по модулю φ(n)
        3. Возведение в степень возведением в квадрат и умножением

        Raises:
            UndefinedDomainError: k < 0 и a необратим по модулю n
        """
        a, k = integer(a), integer(k)

        if k < 0:
            inverse = self.multiplicative_inverse(a)
            if inverse is None:
                raise UndefinedDomainError(
                    f"{a} has no multiplicative inverse modulo {self._base}; "
                    f"negative index {k} is undefined"
                )
            a, k = inverse, -k

        if self._is_unit(a):
            k %= self.phi

        if k == 0:
            return self.mod(1)
        return pow(self.mod(a), k, self._base)

    # =========================================================================
    # INVERSE / ORDER
    # =========================================================================

    def multiplicative_inverse(self, a: int) -> Optional[int]:
        """
        a⁻¹ mod n = a^(φ(n) − 1) mod n.

        Returns:
            Обратный элемент или None, если gcd(a, n) ≠ 1
        """
        a = integer(a)
        if not self._is_unit(a):
            return None
        return self.power(a, self.phi - 1)

    def order(self, a: int) -> Optional[int]:
        """
        Мультипликативный порядок a: наименьшее d > 0 с aᵈ ≡ 1.

        Перебираются только делители φ(n) по возрастанию (теорема Лагранжа).

        Returns:
            Порядок или None, если gcd(a, n) ≠ 1
        """
        a = integer(a)
        if not self._is_unit(a):
            return None

        one = self.mod(1)
        for d in divisors(self.phi).to_sorted_list():
            if self.power(a, d) == one:
                return d
        return self.phi

    # =========================================================================
    # PRIMITIVE ROOTS
    # =========================================================================

    def has_primitive_roots(self) -> bool:
        """n ∈ {1, 2, 4} или n = pᵏ, 2pᵏ для нечётного простого p."""
        n = self._base
        if n in (1, 2, 4):
            return True
        if n % 2 == 1:
            return is_prime_power(n)
        half = n // 2
        return half % 2 == 1 and is_prime_power(half)

    def count_primitive_roots(self) -> int:
        """φ(φ(n)) при наличии первообразных корней, иначе 0."""
        if not self.has_primitive_roots():
            return 0
        return euler_totient(self.phi)

    def is_primitive_root(self, r: int) -> bool:
        """ord(r) == φ(n)."""
        return self.order(r) == self.phi

    def primitive_roots(self) -> Set:
        """
        Все первообразные корни по возрастанию.

        Первый корень r ищется линейно; остальные — rⁱ mod n для всех
        1 ≤ i ≤ φ(n) с gcd(i, φ(n)) = 1.

        Returns:
            Set корней; пустое множество, если корней нет; {0} для n = 1
        """
        if self._base == 1:
            return Set(0)
        if not self.has_primitive_roots():
            return Set()

        r = 1
        while not self.is_primitive_root(r):
            r += 1

        phi = self.phi
        roots = {self.power(r, i) for i in range(1, phi + 1) if math.gcd(i, phi) == 1}
        return Set(*sorted(roots))

    # =========================================================================
    # LINEAR CONGRUENCE
    # =========================================================================

    def solve_linear(self, a: int, b: int) -> Set:
        """
        Все решения ax ≡ b (mod n) в [0, n).

        d = gcd(a, n): решений нет, если d ∤ b; иначе решается приведённое
        сравнение (a/d)x ≡ b/d (mod n/d) и решения x₀ + i·(n/d), 0 ≤ i < d.

        Examples:
            >>> print(IntegerCongruence(10).solve_linear(4, 6))
            {4, 9}
        """
        a, b = integer(a), integer(b)
        d = math.gcd(a, self._base)
        if b % d != 0:
            return Set()

        step = self._base // d
        reduced = IntegerCongruence(step)
        x0 = reduced.mod(reduced.multiplicative_inverse(a // d) * (b // d))
        return Set(*(x0 + i * step for i in range(d)))

    # =========================================================================
    # DISCRETE LOGARITHM
    # =========================================================================

    def index(self, a: int, r: int) -> int:
        """
        Дискретный логарифм: наименьшее x ≥ 0 с rˣ ≡ a (mod n).

        Baby-step/giant-step, m = ⌈√n⌉:
        - baby steps: таблица rʲ → j, 0 ≤ j < m
        - giant steps: a·r^(−m·i) ищется в таблице, ответ i·m + j
        Время и память O(√n).

        Raises:
            UndefinedDomainError: r не первообразный корень; a ≡ 0 или a необратим
            ComputationLimitError: n превышает max_discrete_log_modulus
        """
        a, r = integer(a), integer(r)
        if not self.is_primitive_root(r):
            raise UndefinedDomainError(f"{r} is not a primitive root modulo {self._base}")
        if self.mod(a) == 0:
            raise UndefinedDomainError(f"Index of {a} ≡ 0 modulo {self._base} is undefined")
        if not self._is_unit(a):
            raise UndefinedDomainError(f"{a} is not invertible modulo {self._base}; index is undefined")
        self._check_limit("IntegerCongruence.index", self.config.max_discrete_log_modulus)

        m = math.isqrt(self._base - 1) + 1
        table: Dict[int, int] = {}
        value = self.mod(1)
        for j in range(m):
            table.setdefault(value, j)
            value = value * r % self._base
        logger.debug("baby-step/giant-step modulo %d: %d baby steps", self._base, m)

        giant = self.power(r, -m)
        gamma = self.mod(a)
        for i in range(m):
            j = table.get(gamma)
            if j is not None:
                return i * m + j
            gamma = gamma * giant % self._base

        raise UndefinedDomainError(f"{a} has no index to base {r} modulo {self._base}")

    # =========================================================================
    # QUADRATIC RESIDUES
    # =========================================================================

    def _require_odd_base(self, symbol: str) -> None:
        if self._base % 2 == 0:
            raise UndefinedDomainError(
                f"{symbol} symbol is undefined for even base {self._base}; "
                f"use is_quadratic_residue instead"
            )

    def legendre(self, a: int) -> int:
        """
        Символ Лежандра (a/n) для нечётного простого n.

        Для нечётного составного n возвращается символ Якоби.

        Returns:
            1, −1 или 0 (если gcd(a, n) ≠ 1)

        Raises:
            UndefinedDomainError: n чётно
        """
        self._require_odd_base("Legendre")
        a = integer(a)
        if is_prime(self._base):
            return _legendre_prime(a, self._base)
        return self.jacobi(a)

    def jacobi(self, a: int) -> int:
        """
        Символ Якоби (a/n) = Π (a/pᵢ)^eᵢ для n = Π pᵢ^eᵢ нечётного.

        (a/n) = 1 не гарантирует, что a — квадратичный вычет по составному n.

        Raises:
            UndefinedDomainError: n чётно
        """
        self._require_odd_base("Jacobi")
        a = integer(a)
        result = 1
        for factor in factorize(self._base):
            result *= _legendre_prime(a, factor.base) ** factor.index
        return result

    def is_quadratic_residue(self, a: int) -> bool:
        """
        Разрешимо ли x² ≡ a (mod n).

        gcd(a, n) = 1: a — вычет по каждому pᵏ из разложения n:
        - p нечётное: (a/p) = 1
        - 2¹: всегда; 2²: a ≡ 1 (mod 4); 2ᵏ, k ≥ 3: a ≡ 1 (mod 8)
        gcd(a, n) ≠ 1: перебор x ∈ [0, n), O(n).

        Raises:
            ComputationLimitError: перебор при n > max_brute_force_modulus
        """
        residue = self.mod(a)
        if self._base == 1:
            return True

        if not self._is_unit(residue):
            self._check_limit(
                "IntegerCongruence.is_quadratic_residue", self.config.max_brute_force_modulus
            )
            logger.debug("brute-force quadratic residue test for %d modulo %d", residue, self._base)
            return any(x * x % self._base == residue for x in range(self._base))

        for factor in factorize(self._base):
            p, k = factor.base, factor.index
            if p == 2:
                if k == 2 and residue % 4 != 1:
                    return False
                if k >= 3 and residue % 8 != 1:
                    return False
            elif _legendre_prime(residue, p) != 1:
                return False
        return True

    def quadratic_residues(self) -> Set:
        """
        Все квадратичные вычеты x² mod n (включая 0) по возрастанию.

        Raises:
            ComputationLimitError: n > max_brute_force_modulus
        """
        self._check_limit("IntegerCongruence.quadratic_residues", self.config.max_brute_force_modulus)
        return Set(*sorted({x * x % self._base for x in range(self._base)}))

    def __repr__(self) -> str:
        return f"IntegerCongruence({self._base})"
