"""
BigInt — беззнаковое целое произвольной точности

Immutable Pydantic модель над кортежем 32-битных limbs (младший limb первым).
Каждая операция возвращает новый экземпляр в каноничной форме.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(limbs) >= 1, каждый limb в [0, 2^32)
2. Нет старшего нулевого limb, кроме каноничного нуля (0,)
3. Значения неотрицательны, знак не хранится
4. sub(a, b) при a < b → InvalidOperand
5. div_rem(a, 0) → DivisionByZero
6. to_u64 при выходе за 64 бита → None (не ошибка)

Операции доступны как функции модуля (контракт) и как операторы модели.
"""

from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator

from src.exactnum.config import DEFAULT_CONFIG, ArithmeticConfig
from src.exactnum.math import division, limbs as kernels
from src.exactnum.math.limbs import LIMB_BITS, LIMB_MASK, U64_MAX, Ordering

# Основание для десятичного представления: 10^9 < 2^32
_DECIMAL_CHUNK_BASE = 10**9
_DECIMAL_CHUNK_DIGITS = 9


# =============================================================================
# BIGINT MODEL
# =============================================================================


class BigInt(BaseModel):
    """
    Беззнаковое целое произвольной точности.

    Immutable модель (frozen=True). Равенство и hash полей совпадают с
    равенством значений, т.к. представление каноничное.
    """

    limbs: tuple[int, ...] = Field(
        ...,
        min_length=1,
        description="32-битные limbs, младший первым; ноль = (0,)",
    )

    model_config = {"frozen": True}

    @field_validator("limbs")
    @classmethod
    def validate_canonical(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Проверка диапазона limbs и отсутствия старшего нулевого limb"""
        for limb in v:
            if not 0 <= limb <= LIMB_MASK:
                raise ValueError(f"limb {limb} is outside the 32-bit unsigned range")
        if len(v) > 1 and v[-1] == 0:
            raise ValueError("limbs have a leading zero limb (non-canonical form)")
        return v

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "BigInt":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else add(self, rhs)

    def __radd__(self, other: Any) -> "BigInt":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else add(lhs, self)

    def __sub__(self, other: Any) -> "BigInt":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else sub(self, rhs)

    def __rsub__(self, other: Any) -> "BigInt":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else sub(lhs, self)

    def __mul__(self, other: Any) -> "BigInt":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else mul(self, rhs)

    def __rmul__(self, other: Any) -> "BigInt":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else mul(lhs, self)

    def __floordiv__(self, other: Any) -> "BigInt":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else div_rem(self, rhs).quotient

    def __mod__(self, other: Any) -> "BigInt":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else div_rem(self, rhs).remainder

    def __divmod__(self, other: Any) -> "DivRem":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else div_rem(self, rhs)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is not Ordering.GREATER

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is Ordering.GREATER

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, BigInt):
            return NotImplemented
        return compare(self, other) is not Ordering.LESS

    def __bool__(self) -> bool:
        return not is_zero(self)

    def __int__(self) -> int:
        return to_int(self)

    def __str__(self) -> str:
        return to_decimal(self)

    def __repr__(self) -> str:
        return f"BigInt({to_decimal(self)})"

    def bit_length(self) -> int:
        """Количество значащих бит (0 для нуля)"""
        return kernels.bit_length(self.limbs)


class DivRem(NamedTuple):
    """Результат деления с остатком"""

    quotient: BigInt
    remainder: BigInt


def _wrap(values: list[int]) -> BigInt:
    """Упаковка каноничного вектора из kernels в модель"""
    return BigInt(limbs=tuple(values))


def _coerce(value: Any) -> Optional[BigInt]:
    """BigInt или неотрицательный int → BigInt, иначе None"""
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return from_int(value)
    return None


_ZERO = BigInt(limbs=(0,))
_ONE = BigInt(limbs=(1,))


# =============================================================================
# КОНСТРУКТОРЫ И КОНВЕРСИЯ
# =============================================================================


def zero() -> BigInt:
    """Каноничный ноль (0,)"""
    return _ZERO


def one() -> BigInt:
    """Каноничная единица (1,)"""
    return _ONE


def from_u64(value: int) -> BigInt:
    """
    BigInt из 64-битного беззнакового значения.

    Args:
        value: Целое в [0, 2^64)

    Returns:
        1 limb если value < 2^32, иначе 2 limbs (low, high)

    Raises:
        ValueError: Если value вне диапазона u64

    Examples:
        >>> from_u64(0).limbs
        (0,)
        >>> from_u64(2**32).limbs
        (0, 1)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"u64 value must be an int, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"value {value} is outside the u64 range")

    low = value & LIMB_MASK
    high = value >> LIMB_BITS
    if high == 0:
        return BigInt(limbs=(low,))
    return BigInt(limbs=(low, high))


def from_int(value: int) -> BigInt:
    """
    BigInt из неотрицательного int любой длины.

    Raises:
        ValueError: Если value < 0
    """
    return _wrap(kernels.from_int(value))


def to_int(x: BigInt) -> int:
    """Точное значение как int"""
    return kernels.to_int(x.limbs)


def to_u64(x: BigInt) -> Optional[int]:
    """
    Narrowing-конверсия в u64.

    Returns:
        Значение, если помещается в 64 бита; None если limbs > 2
    """
    if is_zero(x):
        return 0
    if len(x.limbs) > 2:
        return None

    low = x.limbs[0]
    high = x.limbs[1] if len(x.limbs) > 1 else 0
    return (high << LIMB_BITS) | low


def to_decimal(x: BigInt) -> str:
    """
    Десятичная запись значения.

    Повторное деление на 10^9 (один limb) даёт группы по 9 цифр
    от младших к старшим.
    """
    if is_zero(x):
        return "0"

    chunks: list[int] = []
    rest = list(x.limbs)
    while not kernels.is_zero(rest):
        rest, chunk = division.divrem_limb(rest, _DECIMAL_CHUNK_BASE)
        chunks.append(chunk)

    head = str(chunks[-1])
    tail = "".join(f"{chunk:0{_DECIMAL_CHUNK_DIGITS}d}" for chunk in reversed(chunks[:-1]))
    return head + tail


# =============================================================================
# ПРЕДИКАТЫ И СРАВНЕНИЕ
# =============================================================================


def is_zero(x: BigInt) -> bool:
    """True для каноничного нуля"""
    return kernels.is_zero(x.limbs)


def compare(a: BigInt, b: BigInt) -> Ordering:
    """Трёхзначное сравнение: по длине, затем limb-wise от старшего"""
    return kernels.compare(a.limbs, b.limbs)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def add(a: BigInt, b: BigInt) -> BigInt:
    """a + b"""
    return _wrap(kernels.add(a.limbs, b.limbs))


def sub(a: BigInt, b: BigInt) -> BigInt:
    """
    a - b.

    Raises:
        InvalidOperand: Если a < b
    """
    return _wrap(kernels.sub(a.limbs, b.limbs))


def mul(a: BigInt, b: BigInt) -> BigInt:
    """a * b (ноль, если любой операнд ноль)"""
    return _wrap(kernels.mul(a.limbs, b.limbs))


def div_rem(
    a: BigInt,
    b: BigInt,
    config: ArithmeticConfig = DEFAULT_CONFIG,
) -> DivRem:
    """
    Деление с остатком.

    Args:
        a: Делимое
        b: Делитель
        config: Конфигурация (стратегия деления)

    Returns:
        DivRem(quotient, remainder): quotient * b + remainder == a,
        remainder < b

    Raises:
        DivisionByZero: Если b == 0

    Examples:
        >>> q, r = div_rem(from_u64(456), from_u64(123))
        >>> (int(q), int(r))
        (3, 87)
    """
    quotient, remainder = division.divrem(a.limbs, b.limbs, config.division_strategy)
    return DivRem(_wrap(quotient), _wrap(remainder))


def gcd(
    a: BigInt,
    b: BigInt,
    config: ArithmeticConfig = DEFAULT_CONFIG,
) -> BigInt:
    """
    Наибольший общий делитель (алгоритм Евклида).

    x, y ← y, x mod y пока y != 0. Завершается, т.к. остаток строго
    убывает. gcd(0, 0) == 0.
    """
    x: list[int] = list(a.limbs)
    y: list[int] = list(b.limbs)

    while not kernels.is_zero(y):
        _, remainder = division.divrem(x, y, config.division_strategy)
        x, y = y, remainder

    return _wrap(x)
