"""
Errors — таксономия исключений topos

Все ошибки поднимаются синхронно в точке нарушения и не перехватываются
внутри библиотеки. Каждый класс дополнительно наследует подходящее
встроенное исключение, чтобы вызывающий код мог ловить привычные типы.

Условия, которые математически корректны, но не имеют значения
(нет обратного элемента, порядок не определён), ошибками НЕ являются:
такие операции возвращают None или пустое множество.
"""


class ToposError(Exception):
    """Базовый класс всех ошибок topos."""
    pass


class ArityError(ToposError, TypeError):
    """
    N-арная операция получила меньше операндов, чем требуется.

    Например: Set.union(a) или gcd(12).
    """

    def __init__(self, operation: str, minimum: int = 2, received: int = 0):
        self.operation = operation
        self.minimum = minimum
        self.received = received
        super().__init__(
            f"{operation} requires at least {minimum} operands, got {received}"
        )


class UndefinedDomainError(ToposError, ValueError):
    """
    Аргумент вне математически допустимой области.

    Примеры: отрицательная граница решета, модуль ≤ 0, символ Лежандра
    по чётному модулю, дискретный логарифм по не-первообразному корню.
    """
    pass


class DivisionByZeroError(ToposError, ZeroDivisionError):
    """Нулевой знаменатель или перечисление делителей нуля."""
    pass


class UnsupportedValueError(ToposError, ValueError):
    """
    Значение поддерживается как элемент множества, но не в вычислении.

    Пример: Exponential с комплексным или символьным основанием.
    """
    pass


class ComputationLimitError(ToposError):
    """
    Переборный алгоритм превысил лимит, заданный в конфигурации.

    Лимиты отключены по умолчанию (см. CongruenceConfig).
    """

    def __init__(self, operation: str, size: int, limit: int):
        self.operation = operation
        self.size = size
        self.limit = limit
        super().__init__(f"{operation}: input size {size} exceeds configured limit {limit}")
