"""
Division Kernels — деление с остатком над limb-векторами

Стратегии общего случая (DivisionStrategy):
- LONG: single-limb делитель → один проход 64/32 деления по limbs;
  иначе двоичное деление сдвигом и вычитанием (бит за битом делимого)
- REPEATED_SUBTRACTION: эталонный алгоритм, O(quotient) итераций

Общие для всех стратегий правила:
1. Делитель 0 → DivisionByZero
2. a < b → (0, a)
3. a == b → (1, 0)
4. Постусловие: quotient * b + remainder == a, remainder < b

Результаты стратегий побитово идентичны.
"""

import logging
from typing import Sequence

from src.exactnum.config import DivisionStrategy
from src.exactnum.log_config import get_logger, log_operation
from src.exactnum.math.exceptions import DivisionByZero
from src.exactnum.math.limbs import (
    LIMB_BITS,
    Ordering,
    add,
    bit_length,
    compare,
    is_zero,
    normalize,
    shift_left_one,
    shift_right,
    sub,
)

logger = get_logger("exactnum.division")


def divrem(
    a: Sequence[int],
    b: Sequence[int],
    strategy: DivisionStrategy = DivisionStrategy.LONG,
) -> tuple[list[int], list[int]]:
    """
    Деление с остатком a / b.

    Args:
        a: Делимое (каноничный вектор)
        b: Делитель (каноничный вектор)
        strategy: Алгоритм общего случая

    Returns:
        (quotient, remainder) — новые каноничные векторы

    Raises:
        DivisionByZero: Если b == 0

    Examples:
        >>> divrem([456], [123])
        ([3], [87])
        >>> divrem([5], [7])
        ([0], [5])
    """
    if is_zero(b):
        log_operation(
            logger,
            logging.DEBUG,
            "Division by zero",
            operation="division.divrem",
            extra={"dividend_limbs": len(a)},
        )
        raise DivisionByZero("BigInt division by zero")

    order = compare(a, b)
    if order is Ordering.LESS:
        return [0], list(a)
    if order is Ordering.EQUAL:
        return [1], [0]

    if strategy == DivisionStrategy.REPEATED_SUBTRACTION:
        return divrem_repeated_subtraction(a, b)

    if len(b) == 1:
        quotient, remainder = divrem_limb(a, b[0])
        return quotient, [remainder]

    return divrem_long(a, b)


def divrem_limb(a: Sequence[int], divisor: int) -> tuple[list[int], int]:
    """
    Деление на один limb (0 < divisor < 2^32).

    Проход от старшего limb к младшему: (remainder << 32 | limb) делится
    на divisor, частное помещается в limb результата. Промежуточное
    значение < 2^64.

    Returns:
        (quotient, remainder) — remainder как int < divisor
    """
    if divisor == 0:
        raise DivisionByZero("BigInt division by zero")

    quotient = [0] * len(a)
    remainder = 0

    for i in range(len(a) - 1, -1, -1):
        current = (remainder << LIMB_BITS) | a[i]
        quotient[i] = current // divisor
        remainder = current - quotient[i] * divisor

    return normalize(quotient), remainder


def divrem_long(a: Sequence[int], b: Sequence[int]) -> tuple[list[int], list[int]]:
    """
    Двоичное деление сдвигом и вычитанием.

    Старшие bit_length(b) - 1 бит делимого заведомо меньше b и сразу
    образуют начальный остаток. Далее для каждого оставшегося бита
    от старшего к младшему:
        remainder = (remainder << 1) | bit
        если remainder >= b: remainder -= b, бит частного = 1

    Инвариант цикла: remainder < b. Число итераций равно числу бит
    частного (bit_length(a) - bit_length(b) + 1).
    """
    shift = bit_length(a) - bit_length(b)
    if shift < 0:
        return [0], list(a)

    quotient = [0] * (shift // LIMB_BITS + 1)
    remainder = shift_right(a, shift + 1)

    for position in range(shift, -1, -1):
        index, offset = divmod(position, LIMB_BITS)
        remainder = shift_left_one(remainder, (a[index] >> offset) & 1)
        if compare(remainder, b) is not Ordering.LESS:
            remainder = sub(remainder, b)
            quotient[index] |= 1 << offset

    return normalize(quotient), remainder


def divrem_repeated_subtraction(
    a: Sequence[int], b: Sequence[int]
) -> tuple[list[int], list[int]]:
    """
    Эталонное деление: вычитать b из остатка и увеличивать частное на 1,
    пока остаток >= b.

    Число итераций равно значению частного: пригодно только для малых
    частных и для сверки с LONG.
    """
    quotient = [0]
    remainder = list(a)
    steps = 0

    while compare(remainder, b) is not Ordering.LESS:
        remainder = sub(remainder, b)
        quotient = add(quotient, [1])
        steps += 1

    log_operation(
        logger,
        logging.DEBUG,
        "Repeated-subtraction division finished",
        operation="division.divrem_repeated_subtraction",
        extra={"iterations": steps},
    )

    return quotient, remainder
