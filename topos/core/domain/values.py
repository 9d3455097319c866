"""
Values — атомарные математические значения

Элементом множества может быть любое hashable значение с точным
(структурным) равенством. Числовой слой — встроенные типы Python:
    int, fractions.Fraction, float, complex
Они уже гарантируют a == b ⇒ hash(a) == hash(b) между типами
(hash(2) == hash(Fraction(2)) == hash(2.0)).

Дополнительно модуль определяет два неизменяемых value object:
- Indeterminate : символьный атом ("x", "y", ...)
- Exponential   : пара (base, index), вычисляется по требованию

И явные конструкторы вместо неявных конверсий:
- integer(value)            : целое значение или UnsupportedValueError
- rational(numerator, den)  : Fraction или DivisionByZeroError
"""

from fractions import Fraction
from typing import Any, Final, Hashable, Optional, Union

from pydantic import BaseModel, Field, field_validator

from topos.core.errors import DivisionByZeroError, UnsupportedValueError

# Любое значение, допустимое как элемент Set
MathObject = Hashable

Real = Union[int, Fraction, float]

_REAL_TYPES: Final[tuple] = (int, Fraction, float)
_NUMBER_TYPES: Final[tuple] = (int, Fraction, float, complex)

# Предел длины точного результата при сравнении и hash Exponential
MAX_EXACT_BITS: Final[int] = 1 << 16


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def is_number(value: Any) -> bool:
    """True для int/Fraction/float/complex и вычислимых Exponential (bool исключён)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Exponential):
        return value.is_real()
    return isinstance(value, _NUMBER_TYPES)


def is_real(value: Any) -> bool:
    """True для вещественных значений, включая Exponential с вещественными частями."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Exponential):
        return value.is_real()
    return isinstance(value, _REAL_TYPES)


# =============================================================================
# ЯВНЫЕ КОНСТРУКТОРЫ
# =============================================================================


def rational(numerator: Union[int, Fraction], denominator: Union[int, Fraction] = 1) -> Fraction:
    """
    Рациональное число numerator / denominator.

    Raises:
        DivisionByZeroError: если denominator == 0

    Examples:
        >>> rational(6, 4)
        Fraction(3, 2)
    """
    if denominator == 0:
        raise DivisionByZeroError(f"Rational {numerator}/{denominator} has zero denominator")
    return Fraction(numerator, denominator)


def integer(value: Any) -> int:
    """
    Привести числовое значение к int без потери точности.

    Принимает int, целые Fraction/float и вычислимые Exponential.

    Raises:
        UnsupportedValueError: значение не является целым числом
    """
    if isinstance(value, Exponential):
        value = value.compute()
    if isinstance(value, bool) or not isinstance(value, _REAL_TYPES):
        raise UnsupportedValueError(f"Expected an integer value, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise UnsupportedValueError(f"Value {value!r} is not integral")


def _normalize(value: Any) -> Any:
    # Fraction(8, 1) -> 8
    if isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    return value


def _power(base: Any, index: Any) -> Any:
    """Точное возведение в степень для вещественных операндов."""
    exact = isinstance(base, (int, Fraction)) and isinstance(index, (int, Fraction))
    if exact:
        index = _normalize(index)

    if exact and isinstance(index, int):
        if index < 0:
            if base == 0:
                raise DivisionByZeroError(f"{base}^{index} divides by zero")
            return _normalize(Fraction(base) ** index)
        return _normalize(base ** index)

    try:
        result = float(base) ** float(index)
    except ZeroDivisionError as e:
        raise DivisionByZeroError(f"{base}^{index} divides by zero") from e
    except OverflowError as e:
        raise UnsupportedValueError(f"{base}^{index} overflows the float range") from e

    if isinstance(result, complex):
        raise UnsupportedValueError(f"{base}^{index} has no real value")
    return result


def _exceeds_exact_bound(base: Any, index: Any) -> bool:
    """Точный результат base^index длиннее MAX_EXACT_BITS бит."""
    if not isinstance(base, (int, Fraction)) or not isinstance(index, (int, Fraction)):
        return False
    index = _normalize(index)
    if not isinstance(index, int):
        return False
    base = Fraction(base)
    size = max(abs(base.numerator), base.denominator)
    # 0, 1 и −1 в любой степени вычисляются мгновенно
    if size <= 1:
        return False
    return abs(index) * size.bit_length() > MAX_EXACT_BITS


# =============================================================================
# INDETERMINATE
# =============================================================================


class Indeterminate(BaseModel):
    """
    Символьный атом без дополнительных свойств.

    Равенство и hash определяются идентификатором.
    """

    identifier: str = Field(..., min_length=1, description="Имя символа")

    model_config = {"frozen": True}

    def __init__(self, identifier: str, /, **data: Any):
        super().__init__(identifier=identifier, **data)

    def __str__(self) -> str:
        return self.identifier


# =============================================================================
# EXPONENTIAL
# =============================================================================


class Exponential(BaseModel):
    """
    Представление base^index без немедленного вычисления.

    Используется в разложении на простые множители (2^3 · 3^2 · 5) и
    в модульном возведении в степень, где index не нужно вычислять.

    Равенство:
    - обе стороны вещественно вычислимы → сравниваются значения
      (Exponential(2, 3) == Exponential(8, 1) == 8)
    - иначе → структурное сравнение (base, index)
    Значение не вычисляется, если оно не помещается в float или точный
    результат длиннее MAX_EXACT_BITS бит: тогда сравнение структурное
    (Exponential(2, 10**12) != Exponential(4, 5 * 10**11)).
    Hash согласован с равенством.
    """

    base: Any = Field(..., description="Основание: число, Indeterminate или Exponential")
    index: Any = Field(..., description="Показатель: число, Indeterminate или Exponential")

    model_config = {"frozen": True}

    def __init__(self, base: Any, index: Any, /, **data: Any):
        super().__init__(base=base, index=index, **data)

    @field_validator("base", "index")
    @classmethod
    def validate_operand(cls, v: Any) -> Any:
        """Операнды ограничены числами, символами и вложенными Exponential."""
        if isinstance(v, bool) or not isinstance(v, (*_NUMBER_TYPES, Indeterminate, Exponential)):
            raise ValueError(f"Unsupported exponential operand: {v!r}")
        return v

    def is_real(self) -> bool:
        """Обе части вещественны (рекурсивно для вложенных Exponential)."""
        return is_real(self.base) and is_real(self.index)

    def compute(self) -> Real:
        """
        Вычислить значение base^index.

        Целые и рациональные операнды вычисляются точно
        (Exponential(2, -3).compute() == Fraction(1, 8)).

        Raises:
            UnsupportedValueError: комплексная или символьная часть,
                выход за пределы float
            DivisionByZeroError: 0 в отрицательной степени
        """
        base = self.base.compute() if isinstance(self.base, Exponential) else self.base
        index = self.index.compute() if isinstance(self.index, Exponential) else self.index

        if isinstance(base, complex) or isinstance(index, complex):
            raise UnsupportedValueError(f"Complex exponential {self} is not supported")
        if isinstance(base, Indeterminate) or isinstance(index, Indeterminate):
            raise UnsupportedValueError(f"Exponential {self} contains an indeterminate")

        return _power(base, index)

    def _value(self) -> Optional[Real]:
        """
        Значение для равенства и hash; None → структурная идентичность.

        Точный результат длиннее MAX_EXACT_BITS бит не вычисляется.
        """
        if not self.is_real():
            return None
        base = self.base._value() if isinstance(self.base, Exponential) else self.base
        index = self.index._value() if isinstance(self.index, Exponential) else self.index
        if base is None or index is None or _exceeds_exact_bound(base, index):
            return None
        try:
            return _power(base, index)
        except (UnsupportedValueError, DivisionByZeroError):
            return None

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Exponential):
            mine, theirs = self._value(), other._value()
            if mine is not None and theirs is not None:
                return mine == theirs
            return (self.base, self.index) == (other.base, other.index)
        if is_number(other):
            mine = self._value()
            return mine is not None and mine == other
        return NotImplemented

    def __hash__(self) -> int:
        value = self._value()
        if value is not None:
            return hash(value)
        return hash((self.base, self.index))

    def __str__(self) -> str:
        base_wrapped = isinstance(self.base, (complex, Exponential))
        index_wrapped = isinstance(self.index, (complex, Exponential))

        # Показатель 1 опускается
        if is_real(self.index) and not isinstance(self.index, Exponential) and self.index == 1:
            return f"({self.base})" if base_wrapped else f"{self.base}"

        base_str = f"({self.base})" if base_wrapped else f"{self.base}"
        index_str = f"({self.index})" if index_wrapped else f"{self.index}"
        return f"{base_str}^{index_str}"
