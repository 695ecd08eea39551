"""
Limb Kernels — арифметика над векторами 32-битных limbs

Беззнаковое целое хранится как list[int] limbs, младший limb по индексу 0:

    value = Σ limb[i] * 2^(32·i)

Каноническая форма:
1. len(limbs) >= 1
2. Старший limb != 0, кроме нуля
3. Ноль — ровно [0]

Все функции модуля чистые: входные последовательности не изменяются,
результат — новый list в канонической форме. Изменяется только локальный
буфер результата до возврата.
"""

import logging
from enum import Enum
from typing import Final, Sequence

from src.exactnum.log_config import get_logger, log_operation
from src.exactnum.math.exceptions import InvalidOperand

logger = get_logger("exactnum.limbs")

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

LIMB_BITS: Final[int] = 32
LIMB_BASE: Final[int] = 1 << LIMB_BITS
LIMB_MASK: Final[int] = LIMB_BASE - 1

U64_MAX: Final[int] = (1 << 64) - 1


class Ordering(int, Enum):
    """Результат трёхзначного сравнения"""

    LESS = -1
    EQUAL = 0
    GREATER = 1


# =============================================================================
# НОРМАЛИЗАЦИЯ И ПРЕДИКАТЫ
# =============================================================================


def normalize(limbs: list[int]) -> list[int]:
    """
    Удаление старших нулевых limbs (in-place на локальном буфере).

    Останавливается на длине 1 или на ненулевом старшем limb.
    Пустой буфер превращается в каноничный ноль [0].

    Returns:
        Тот же list (для цепочек вызовов)
    """
    while len(limbs) > 1 and limbs[-1] == 0:
        limbs.pop()
    if not limbs:
        limbs.append(0)
    return limbs


def is_zero(limbs: Sequence[int]) -> bool:
    """Каноничный ноль: ровно один limb со значением 0"""
    return len(limbs) == 1 and limbs[0] == 0


def is_canonical(limbs: Sequence[int]) -> bool:
    """Проверка инвариантов каноничной формы и диапазона limbs"""
    if len(limbs) == 0:
        return False
    if any(not 0 <= limb <= LIMB_MASK for limb in limbs):
        return False
    return len(limbs) == 1 or limbs[-1] != 0


def bit_length(limbs: Sequence[int]) -> int:
    """Количество значащих бит (0 для нуля)"""
    return (len(limbs) - 1) * LIMB_BITS + limbs[-1].bit_length()


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def from_int(value: int) -> list[int]:
    """
    Разложение неотрицательного int на limbs.

    Raises:
        ValueError: Если value < 0
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")

    limbs: list[int] = []
    while value:
        limbs.append(value & LIMB_MASK)
        value >>= LIMB_BITS
    return normalize(limbs)


def to_int(limbs: Sequence[int]) -> int:
    """Сборка int из limbs (от старшего к младшему)"""
    value = 0
    for limb in reversed(limbs):
        value = (value << LIMB_BITS) | limb
    return value


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare(a: Sequence[int], b: Sequence[int]) -> Ordering:
    """
    Сравнение двух каноничных векторов.

    Сначала по длине, затем limb-wise от старшего к младшему.
    Корректно только для каноничной формы (длина однозначно задаёт порядок).
    """
    if len(a) != len(b):
        return Ordering.GREATER if len(a) > len(b) else Ordering.LESS

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return Ordering.GREATER if a[i] > b[i] else Ordering.LESS

    return Ordering.EQUAL


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Школьное сложение с переносом.

    Промежуточная сумма занимает до 33 бит; старший бит переносится в
    следующую позицию. Оставшийся перенос даёт дополнительный limb.
    """
    size_a = len(a)
    size_b = len(b)
    result: list[int] = []
    carry = 0

    for i in range(max(size_a, size_b)):
        total = carry
        if i < size_a:
            total += a[i]
        if i < size_b:
            total += b[i]
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS

    if carry:
        result.append(carry)

    return normalize(result)


def sub(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Вычитание a - b с распространением заёма по len(a) позициям.

    Raises:
        InvalidOperand: Если a < b (беззнаковая разность непредставима)
    """
    if compare(a, b) is Ordering.LESS:
        log_operation(
            logger,
            logging.DEBUG,
            "Subtraction would underflow",
            operation="limbs.sub",
            extra={"minuend_limbs": len(a), "subtrahend_limbs": len(b)},
        )
        raise InvalidOperand("cannot subtract a larger BigInt from a smaller one")

    size_b = len(b)
    result: list[int] = []
    borrow = 0

    for i in range(len(a)):
        diff = a[i] - borrow
        if i < size_b:
            diff -= b[i]
        if diff < 0:
            diff += LIMB_BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    return normalize(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Школьное умножение с накоплением в буфер длины len(a) + len(b).

    Для каждой пары limbs: 64-битное произведение + текущий перенос +
    накопленное значение позиции. Перенос после внутреннего цикла
    распространяется в старшие позиции.

    Максимум промежуточного значения:
        (2^32 - 1)^2 + 2 * (2^32 - 1) = 2^64 - 1
    """
    if is_zero(a) or is_zero(b):
        return [0]

    size_b = len(b)
    acc = [0] * (len(a) + size_b)

    for i, x in enumerate(a):
        if x == 0:
            continue
        carry = 0
        for j, y in enumerate(b):
            t = x * y + acc[i + j] + carry
            acc[i + j] = t & LIMB_MASK
            carry = t >> LIMB_BITS

        k = i + size_b
        while carry:
            t = acc[k] + carry
            acc[k] = t & LIMB_MASK
            carry = t >> LIMB_BITS
            k += 1

    return normalize(acc)


# =============================================================================
# СДВИГИ
# =============================================================================


def shift_left_one(limbs: Sequence[int], bit_in: int = 0) -> list[int]:
    """
    Сдвиг влево на 1 бит с вдвиганием bit_in в младший разряд.

    Эквивалент (value << 1) | bit_in.
    """
    result: list[int] = []
    carry = bit_in & 1

    for limb in limbs:
        result.append(((limb << 1) | carry) & LIMB_MASK)
        carry = limb >> (LIMB_BITS - 1)

    if carry:
        result.append(carry)

    return normalize(result)


def shift_right(limbs: Sequence[int], bits: int) -> list[int]:
    """
    Логический сдвиг вправо на bits бит (value >> bits).

    Сдвиг на >= bit_length даёт каноничный ноль.
    """
    limb_shift, bit_shift = divmod(bits, LIMB_BITS)
    if limb_shift >= len(limbs):
        return [0]

    source = limbs[limb_shift:]
    if bit_shift == 0:
        return normalize(list(source))

    result: list[int] = []
    size = len(source)
    for i in range(size):
        low = source[i] >> bit_shift
        high = (source[i + 1] << (LIMB_BITS - bit_shift)) & LIMB_MASK if i + 1 < size else 0
        result.append(low | high)

    return normalize(result)
