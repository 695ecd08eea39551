"""
Arithmetic Exceptions — нарушения контракта операций

Два класса abort-ошибок:
- DivisionByZero: деление (BigInt/BigFloat) или построение дроби с нулевым делителем
- InvalidOperand: вычитание BigInt, где уменьшаемое меньше вычитаемого

Ошибка прерывает операцию целиком, частичный результат не возвращается.

Выход за пределы u64 при narrowing-конверсии НЕ является ошибкой:
to_u64 / to_u64_trunc возвращают None.
"""


class ArithmeticContractViolation(Exception):
    """
    Базовый класс для нарушений контракта арифметических операций.

    Сигнализирует об ошибке вызывающей стороны, а не об ожидаемом
    runtime-исходе. Повторная попытка с теми же аргументами бессмысленна.
    """

    pass


class DivisionByZero(ArithmeticContractViolation, ZeroDivisionError):
    """Деление на ноль (BigInt.div_rem, BigFloat.div, from_ratio_u64)."""

    pass


class InvalidOperand(ArithmeticContractViolation, ValueError):
    """
    Недопустимый операнд беззнаковой операции.

    Возникает в BigInt.sub при minuend < subtrahend: беззнаковый тип
    не может представить отрицательную разность.
    """

    pass
