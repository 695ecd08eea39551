"""
BigFloat — знаковое рациональное число поверх BigInt

Значение = (+/-) numerator / denominator, где numerator и denominator —
беззнаковые BigInt, а знак хранится отдельно (sign=True → неотрицательное).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator != 0 (проверяется моделью)
2. Каждая операция модуля возвращает сокращённую форму:
   gcd(numerator, denominator) == 1, ноль = (True, 0, 1)
3. Логический ноль определяется только numerator == 0, знак игнорируется
4. div на ноль и from_ratio_u64(n, 0) → DivisionByZero
5. to_u64_trunc для отрицательного значения → None (не ошибка)

Сравнение и арифметика используют перекрёстное умножение
(a.num * b.den против b.num * a.den), поэтому корректны и для
несокращённых операндов, созданных напрямую.

Функции, которые делят (reduce и все операции поверх него, to_u64_trunc),
принимают config: ArithmeticConfig. Стратегия деления передаётся в
bigint.gcd / bigint.div_rem; операторы модели используют DEFAULT_CONFIG.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.exactnum.config import DEFAULT_CONFIG, ArithmeticConfig
from src.exactnum.domain import bigint
from src.exactnum.domain.bigint import BigInt
from src.exactnum.log_config import get_logger, log_operation
from src.exactnum.math.exceptions import DivisionByZero
from src.exactnum.math.limbs import Ordering

logger = get_logger("exactnum.bigfloat")


# =============================================================================
# BIGFLOAT MODEL
# =============================================================================


class BigFloat(BaseModel):
    """
    Знаковое рациональное число произвольной точности.

    Immutable модель (frozen=True). Прямое создание не сокращает дробь;
    функции модуля всегда возвращают сокращённую форму.
    """

    sign: bool = Field(default=True, description="True = неотрицательное, False = отрицательное")
    numerator: BigInt = Field(..., description="Модуль числителя")
    denominator: BigInt = Field(
        default_factory=bigint.one, description="Знаменатель (ненулевой)"
    )

    model_config = {"frozen": True}

    @field_validator("denominator")
    @classmethod
    def validate_denominator_nonzero(cls, v: BigInt) -> BigInt:
        """Знаменатель не может быть нулём"""
        if bigint.is_zero(v):
            raise ValueError("denominator must be nonzero")
        return v

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "BigFloat":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else add(self, rhs)

    def __radd__(self, other: Any) -> "BigFloat":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else add(lhs, self)

    def __sub__(self, other: Any) -> "BigFloat":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else sub(self, rhs)

    def __rsub__(self, other: Any) -> "BigFloat":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else sub(lhs, self)

    def __mul__(self, other: Any) -> "BigFloat":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else mul(self, rhs)

    def __rmul__(self, other: Any) -> "BigFloat":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else mul(lhs, self)

    def __truediv__(self, other: Any) -> "BigFloat":
        rhs = _coerce(other)
        return NotImplemented if rhs is None else div(self, rhs)

    def __rtruediv__(self, other: Any) -> "BigFloat":
        lhs = _coerce(other)
        return NotImplemented if lhs is None else div(lhs, self)

    def __neg__(self) -> "BigFloat":
        return negate(self)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BigFloat):
            return NotImplemented
        return eq(self, other)

    def __hash__(self) -> int:
        # hash сокращённой формы: согласован с eq для любых представлений
        reduced = reduce(self)
        return hash((reduced.sign, reduced.numerator.limbs, reduced.denominator.limbs))

    def __lt__(self, other: Any) -> bool:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else compare(self, rhs) is Ordering.LESS

    def __le__(self, other: Any) -> bool:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else compare(self, rhs) is not Ordering.GREATER

    def __gt__(self, other: Any) -> bool:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else compare(self, rhs) is Ordering.GREATER

    def __ge__(self, other: Any) -> bool:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else compare(self, rhs) is not Ordering.LESS

    def __bool__(self) -> bool:
        return not is_zero(self)

    def __str__(self) -> str:
        reduced = reduce(self)
        prefix = "" if reduced.sign else "-"
        if reduced.denominator == bigint.one():
            return f"{prefix}{reduced.numerator}"
        return f"{prefix}{reduced.numerator}/{reduced.denominator}"

    def __repr__(self) -> str:
        return f"BigFloat({self})"


def _coerce(value: Any) -> Optional[BigFloat]:
    """BigFloat, BigInt или int → BigFloat, иначе None"""
    if isinstance(value, BigFloat):
        return value
    if isinstance(value, BigInt):
        return from_bigint(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return from_int(value)
    return None


_ZERO = BigFloat(sign=True, numerator=bigint.zero(), denominator=bigint.one())
_ONE = BigFloat(sign=True, numerator=bigint.one(), denominator=bigint.one())


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


def zero() -> BigFloat:
    """Каноничный ноль (True, 0, 1)"""
    return _ZERO


def one() -> BigFloat:
    """Каноничная единица (True, 1, 1)"""
    return _ONE


def from_u64(value: int) -> BigFloat:
    """
    BigFloat из u64: (True, value, 1).

    Raises:
        ValueError: Если value вне диапазона u64
    """
    return BigFloat(sign=True, numerator=bigint.from_u64(value), denominator=bigint.one())


def from_ratio_u64(
    numerator: int,
    denominator: int,
    config: ArithmeticConfig = DEFAULT_CONFIG,
) -> BigFloat:
    """
    Дробь numerator / denominator из двух u64, сокращённая.

    Raises:
        DivisionByZero: Если denominator == 0
        ValueError: Если аргумент вне диапазона u64

    Examples:
        >>> str(from_ratio_u64(6, 9))
        '2/3'
        >>> str(from_ratio_u64(8, 4))
        '2'
    """
    if denominator == 0:
        log_operation(
            logger,
            logging.DEBUG,
            "Ratio with zero denominator",
            operation="bigfloat.from_ratio_u64",
            extra={"numerator": numerator},
        )
        raise DivisionByZero("BigFloat ratio with zero denominator")

    return reduce(
        BigFloat(
            sign=True,
            numerator=bigint.from_u64(numerator),
            denominator=bigint.from_u64(denominator),
        ),
        config,
    )


def from_bigint(
    numerator: BigInt,
    denominator: Optional[BigInt] = None,
    negative: bool = False,
    config: ArithmeticConfig = DEFAULT_CONFIG,
) -> BigFloat:
    """
    BigFloat из BigInt-компонент, сокращённый.

    Args:
        numerator: Модуль числителя
        denominator: Знаменатель (default: 1)
        negative: True для отрицательного значения

    Raises:
        DivisionByZero: Если denominator == 0
    """
    den = bigint.one() if denominator is None else denominator
    if bigint.is_zero(den):
        log_operation(
            logger,
            logging.DEBUG,
            "Ratio with zero denominator",
            operation="bigfloat.from_bigint",
        )
        raise DivisionByZero("BigFloat ratio with zero denominator")

    return reduce(BigFloat(sign=not negative, numerator=numerator, denominator=den), config)


def from_int(value: int, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """BigFloat из int любого знака и длины"""
    return reduce(
        BigFloat(sign=value >= 0, numerator=bigint.from_int(abs(value)), denominator=bigint.one()),
        config,
    )


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def is_zero(x: BigFloat) -> bool:
    """Логический ноль: numerator == 0 (знак не учитывается)"""
    return bigint.is_zero(x.numerator)


def reduce(x: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """
    Приведение к сокращённой форме.

    - numerator == 0 → (True, 0, 1)
    - иначе g = gcd(numerator, denominator); при g > 1 обе части делятся на g
      (деление точное, остаток отбрасывается)
    """
    if is_zero(x):
        return _ZERO

    g = bigint.gcd(x.numerator, x.denominator, config)
    if bigint.is_zero(g) or g == bigint.one():
        return x

    return BigFloat(
        sign=x.sign,
        numerator=bigint.div_rem(x.numerator, g, config).quotient,
        denominator=bigint.div_rem(x.denominator, g, config).quotient,
    )


def negate(x: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """Смена знака (модули не меняются); -0 приводится к каноничному нулю"""
    return reduce(_flip_sign(x), config)


def _flip_sign(x: BigFloat) -> BigFloat:
    return BigFloat(sign=not x.sign, numerator=x.numerator, denominator=x.denominator)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def eq(a: BigFloat, b: BigFloat) -> bool:
    """
    Равенство значений.

    Разные знаки → равны только если оба нуля (два представления нуля).
    Иначе a.num * b.den == b.num * a.den.
    """
    if a.sign != b.sign:
        return is_zero(a) and is_zero(b)

    left = bigint.mul(a.numerator, b.denominator)
    right = bigint.mul(b.numerator, a.denominator)
    return bigint.compare(left, right) is Ordering.EQUAL


def compare(a: BigFloat, b: BigFloat) -> Ordering:
    """
    Трёхзначное сравнение знаковых значений.

    Ноль считается неотрицательным независимо от бита знака.
    """
    a_negative = not a.sign and not is_zero(a)
    b_negative = not b.sign and not is_zero(b)

    if a_negative != b_negative:
        return Ordering.LESS if a_negative else Ordering.GREATER

    left = bigint.mul(a.numerator, b.denominator)
    right = bigint.mul(b.numerator, a.denominator)
    magnitude = bigint.compare(left, right)

    if not a_negative or magnitude is Ordering.EQUAL:
        return magnitude
    # Для отрицательных больший модуль = меньшее значение
    return Ordering.LESS if magnitude is Ordering.GREATER else Ordering.GREATER


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def add(a: BigFloat, b: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """
    a + b.

    Одинаковые знаки: (a.num*b.den + b.num*a.den) / (a.den*b.den), общий знак.
    Разные знаки: p1 = a.num*b.den, p2 = b.num*a.den;
        p1 < p2 → модуль p2 - p1, знак b
        иначе  → модуль p1 - p2, знак a (p1 == p2 даёт ноль)
    """
    p1 = bigint.mul(a.numerator, b.denominator)
    p2 = bigint.mul(b.numerator, a.denominator)
    denominator = bigint.mul(a.denominator, b.denominator)

    if a.sign == b.sign:
        return reduce(
            BigFloat(sign=a.sign, numerator=bigint.add(p1, p2), denominator=denominator),
            config,
        )

    if bigint.compare(p1, p2) is Ordering.LESS:
        return reduce(
            BigFloat(sign=b.sign, numerator=bigint.sub(p2, p1), denominator=denominator),
            config,
        )

    return reduce(
        BigFloat(sign=a.sign, numerator=bigint.sub(p1, p2), denominator=denominator), config
    )


def sub(a: BigFloat, b: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """a - b == add(a, -b)"""
    return add(a, _flip_sign(b), config)


def mul(a: BigFloat, b: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """a * b; знак положительный при совпадении знаков"""
    return reduce(
        BigFloat(
            sign=a.sign == b.sign,
            numerator=bigint.mul(a.numerator, b.numerator),
            denominator=bigint.mul(a.denominator, b.denominator),
        ),
        config,
    )


def div(a: BigFloat, b: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> BigFloat:
    """
    a / b = (a.num * b.den) / (a.den * b.num).

    Raises:
        DivisionByZero: Если b — логический ноль
    """
    if is_zero(b):
        log_operation(
            logger,
            logging.DEBUG,
            "Division by zero",
            operation="bigfloat.div",
        )
        raise DivisionByZero("BigFloat division by zero")

    return reduce(
        BigFloat(
            sign=a.sign == b.sign,
            numerator=bigint.mul(a.numerator, b.denominator),
            denominator=bigint.mul(a.denominator, b.numerator),
        ),
        config,
    )


# =============================================================================
# NARROWING-КОНВЕРСИЯ
# =============================================================================


def to_u64_trunc(x: BigFloat, config: ArithmeticConfig = DEFAULT_CONFIG) -> Optional[int]:
    """
    Усечение к нулю и конверсия в u64.

    Returns:
        - None для отрицательного ненулевого значения
        - 0 для нуля
        - целая часть numerator / denominator, если помещается в u64, иначе None

    Examples:
        >>> to_u64_trunc(from_ratio_u64(7, 2))
        3
        >>> to_u64_trunc(sub(from_u64(10), from_u64(20))) is None
        True
    """
    if is_zero(x):
        return 0
    if not x.sign:
        return None

    quotient = bigint.div_rem(x.numerator, x.denominator, config).quotient
    return bigint.to_u64(quotient)
