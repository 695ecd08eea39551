"""
Тесты для BigInt

Проверяет:
1. Конструкторы и валидацию Pydantic модели (канонические limbs, frozen)
2. Сравнение и арифметику (add/sub/mul/div_rem/gcd)
3. Narrowing-конверсию to_u64 (None вместо ошибки)
4. Операторы модели и десятичное представление
5. Эталонные сценарии (123, 456)
"""

import math

import pytest
from pydantic import ValidationError

from src.exactnum.config import ArithmeticConfig, DivisionStrategy
from src.exactnum.domain import bigint
from src.exactnum.domain.bigint import BigInt, DivRem
from src.exactnum.math.exceptions import DivisionByZero, InvalidOperand
from src.exactnum.math.limbs import LIMB_MASK, U64_MAX, Ordering

REFERENCE_CONFIG = ArithmeticConfig(division_strategy=DivisionStrategy.REPEATED_SUBTRACTION)


@pytest.fixture
def a() -> BigInt:
    """a = 123"""
    return bigint.from_u64(123)


@pytest.fixture
def b() -> BigInt:
    """b = 456"""
    return bigint.from_u64(456)


# =============================================================================
# МОДЕЛЬ
# =============================================================================


class TestBigIntModel:
    """Тесты для Pydantic модели BigInt"""

    def test_valid_limbs(self) -> None:
        x = BigInt(limbs=(1, 2))
        assert x.limbs == (1, 2)

    def test_list_coerced_to_tuple(self) -> None:
        assert BigInt(limbs=[7]).limbs == (7,)

    def test_empty_limbs_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BigInt(limbs=())

    def test_leading_zero_limb_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            BigInt(limbs=(1, 0))
        assert "non-canonical" in str(exc_info.value)

    def test_limb_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            BigInt(limbs=(LIMB_MASK + 1,))
        assert "32-bit" in str(exc_info.value)

    def test_negative_limb_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BigInt(limbs=(-1,))

    def test_immutable(self) -> None:
        """BigInt должен быть immutable (frozen=True)"""
        x = bigint.from_u64(5)
        with pytest.raises(ValidationError):
            x.limbs = (6,)

    def test_hash_and_equality_by_value(self) -> None:
        assert bigint.from_u64(5) == bigint.from_int(5)
        assert len({bigint.from_u64(5), bigint.from_int(5), bigint.from_u64(6)}) == 2


# =============================================================================
# КОНСТРУКТОРЫ И КОНВЕРСИЯ
# =============================================================================


class TestConstructors:
    """Тесты для zero/one/from_u64/from_int"""

    def test_zero_and_one(self) -> None:
        assert bigint.zero().limbs == (0,)
        assert bigint.one().limbs == (1,)
        assert bigint.is_zero(bigint.zero())
        assert not bigint.is_zero(bigint.one())

    def test_from_u64_zero_is_canonical(self) -> None:
        assert bigint.from_u64(0) == bigint.zero()

    def test_from_u64_single_limb(self) -> None:
        assert bigint.from_u64(LIMB_MASK).limbs == (LIMB_MASK,)

    def test_from_u64_two_limbs(self) -> None:
        assert bigint.from_u64(2**32).limbs == (0, 1)
        assert bigint.from_u64(U64_MAX).limbs == (LIMB_MASK, LIMB_MASK)

    @pytest.mark.parametrize("value", [-1, 2**64, 2**100])
    def test_from_u64_out_of_range(self, value: int) -> None:
        with pytest.raises(ValueError, match="u64 range"):
            bigint.from_u64(value)

    @pytest.mark.parametrize("value", [True, 1.0, "1"])
    def test_from_u64_rejects_non_int(self, value: object) -> None:
        with pytest.raises(ValueError, match="must be an int"):
            bigint.from_u64(value)  # type: ignore[arg-type]

    def test_from_int_arbitrary_size(self) -> None:
        value = 3**200
        assert bigint.to_int(bigint.from_int(value)) == value

    def test_from_int_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            bigint.from_int(-5)


class TestToU64:
    """Тесты для narrowing-конверсии to_u64"""

    def test_zero(self) -> None:
        assert bigint.to_u64(bigint.zero()) == 0

    def test_single_limb(self) -> None:
        assert bigint.to_u64(bigint.from_u64(579)) == 579

    def test_two_limbs(self) -> None:
        assert bigint.to_u64(bigint.from_u64(2**40 + 3)) == 2**40 + 3
        assert bigint.to_u64(bigint.from_u64(U64_MAX)) == U64_MAX

    def test_three_limbs_is_none(self) -> None:
        """Выход за 64 бита — None, а не ошибка"""
        assert bigint.to_u64(bigint.from_int(2**64)) is None
        assert bigint.to_u64(bigint.from_int(2**200)) is None


class TestDecimal:
    """Тесты для десятичного представления"""

    @pytest.mark.parametrize(
        "value",
        [0, 7, 10**9 - 1, 10**9, 10**9 + 1, 1234567890123456789, 10**30, 2**200 + 5],
    )
    def test_str_matches_int(self, value: int) -> None:
        assert str(bigint.from_int(value)) == str(value)

    def test_repr(self) -> None:
        assert repr(bigint.from_u64(56088)) == "BigInt(56088)"


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


class TestCompare:
    """Тесты для compare и операторов порядка"""

    def test_compare(self, a: BigInt, b: BigInt) -> None:
        assert bigint.compare(a, b) is Ordering.LESS
        assert bigint.compare(b, a) is Ordering.GREATER
        assert bigint.compare(a, bigint.from_u64(123)) is Ordering.EQUAL

    def test_length_decides(self) -> None:
        assert bigint.compare(bigint.from_u64(2**32), bigint.from_u64(LIMB_MASK)) is Ordering.GREATER

    def test_ordering_operators(self, a: BigInt, b: BigInt) -> None:
        assert a < b
        assert a <= b
        assert b > a
        assert b >= a
        assert a <= bigint.from_u64(123)
        assert a >= bigint.from_u64(123)

    def test_ordering_with_int_unsupported(self, a: BigInt) -> None:
        with pytest.raises(TypeError):
            a < 5  # noqa: B015


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestReferenceScenario:
    """Эталонные значения для a=123, b=456"""

    def test_add(self, a: BigInt, b: BigInt) -> None:
        assert bigint.to_u64(bigint.add(a, b)) == 579

    def test_sub(self, a: BigInt, b: BigInt) -> None:
        assert bigint.to_u64(bigint.sub(b, a)) == 333

    def test_mul(self, a: BigInt, b: BigInt) -> None:
        assert bigint.to_u64(bigint.mul(a, b)) == 56088

    def test_div_rem(self, a: BigInt, b: BigInt) -> None:
        result = bigint.div_rem(b, a)
        assert isinstance(result, DivRem)
        assert bigint.to_u64(result.quotient) == 3
        assert bigint.to_u64(result.remainder) == 87

    def test_div_rem_reference_strategy(self, a: BigInt, b: BigInt) -> None:
        result = bigint.div_rem(b, a, REFERENCE_CONFIG)
        assert (int(result.quotient), int(result.remainder)) == (3, 87)


class TestAdd:
    """Тесты для add"""

    def test_zero_identity(self, a: BigInt) -> None:
        assert bigint.add(a, bigint.zero()) == a

    def test_carry_into_new_limb(self) -> None:
        result = bigint.add(bigint.from_u64(U64_MAX), bigint.one())
        assert result.limbs == (0, 0, 1)

    def test_returns_new_value(self, a: BigInt, b: BigInt) -> None:
        bigint.add(a, b)
        assert a.limbs == (123,)
        assert b.limbs == (456,)


class TestSub:
    """Тесты для sub"""

    def test_equal_operands_give_zero(self, a: BigInt) -> None:
        assert bigint.sub(a, a) == bigint.zero()

    def test_result_normalized(self) -> None:
        result = bigint.sub(bigint.from_u64(2**32 + 5), bigint.from_u64(2**32))
        assert result.limbs == (5,)

    def test_underflow_raises(self, a: BigInt, b: BigInt) -> None:
        with pytest.raises(InvalidOperand):
            bigint.sub(a, b)


class TestMul:
    """Тесты для mul"""

    def test_zero(self, a: BigInt) -> None:
        assert bigint.mul(a, bigint.zero()) == bigint.zero()
        assert bigint.mul(bigint.zero(), a) == bigint.zero()

    def test_one_identity(self, b: BigInt) -> None:
        assert bigint.mul(b, bigint.one()) == b

    def test_u64_square(self) -> None:
        x = bigint.from_u64(U64_MAX)
        assert bigint.to_int(bigint.mul(x, x)) == U64_MAX**2


class TestDivRem:
    """Тесты для div_rem"""

    def test_division_by_zero(self, a: BigInt) -> None:
        with pytest.raises(DivisionByZero):
            bigint.div_rem(a, bigint.zero())

    def test_dividend_smaller(self, a: BigInt, b: BigInt) -> None:
        assert bigint.div_rem(a, b) == DivRem(bigint.zero(), a)

    def test_equal(self, a: BigInt) -> None:
        assert bigint.div_rem(a, bigint.from_u64(123)) == DivRem(bigint.one(), bigint.zero())

    def test_large(self) -> None:
        x = 2**300 + 987654321
        y = 2**100 + 3
        q, r = bigint.div_rem(bigint.from_int(x), bigint.from_int(y))
        assert (int(q), int(r)) == divmod(x, y)


class TestGcd:
    """Тесты для gcd"""

    @pytest.mark.parametrize(
        "x, y",
        [
            (12, 18),
            (18, 12),
            (17, 5),
            (2**80 * 3, 2**70 * 9),
            (10**30, 10**20 * 7),
            (1, 2**90),
        ],
    )
    def test_matches_math_gcd(self, x: int, y: int) -> None:
        result = bigint.gcd(bigint.from_int(x), bigint.from_int(y))
        assert int(result) == math.gcd(x, y)

    def test_zero_operands(self) -> None:
        five = bigint.from_u64(5)
        assert bigint.gcd(bigint.zero(), bigint.zero()) == bigint.zero()
        assert bigint.gcd(five, bigint.zero()) == five
        assert bigint.gcd(bigint.zero(), five) == five

    def test_reference_strategy(self) -> None:
        result = bigint.gcd(bigint.from_u64(1071), bigint.from_u64(462), REFERENCE_CONFIG)
        assert int(result) == 21


# =============================================================================
# ОПЕРАТОРЫ
# =============================================================================


class TestOperators:
    """Тесты для операторов модели"""

    def test_arithmetic(self, a: BigInt, b: BigInt) -> None:
        assert int(a + b) == 579
        assert int(b - a) == 333
        assert int(a * b) == 56088
        assert int(b // a) == 3
        assert int(b % a) == 87
        assert divmod(b, a) == bigint.div_rem(b, a)

    def test_mixed_with_int(self, a: BigInt) -> None:
        assert int(a + 1) == 124
        assert int(1 + a) == 124
        assert int(a - 23) == 100
        assert int(200 - a) == 77
        assert int(2 * a) == 246
        assert int(a * 2) == 246

    def test_underflow_via_operator(self, a: BigInt) -> None:
        with pytest.raises(InvalidOperand):
            a - 124

    def test_division_by_zero_via_operator(self, a: BigInt) -> None:
        with pytest.raises(DivisionByZero):
            a // 0

    def test_unsupported_operand(self, a: BigInt) -> None:
        with pytest.raises(TypeError):
            a + 1.5

    @pytest.mark.parametrize("negative", [-1, -(2**70)])
    def test_negative_int_operand_declined(self, a: BigInt, negative: int) -> None:
        """Отрицательный int не приводится к BigInt: оператор возвращает NotImplemented"""
        assert a.__sub__(negative) is NotImplemented
        assert a.__radd__(negative) is NotImplemented
        with pytest.raises(TypeError):
            a - negative
        with pytest.raises(TypeError):
            negative * a
        with pytest.raises(TypeError):
            divmod(a, negative)

    def test_bool(self) -> None:
        assert not bigint.zero()
        assert bigint.one()

    def test_bit_length(self) -> None:
        assert bigint.zero().bit_length() == 0
        assert bigint.from_int(2**100).bit_length() == 101
