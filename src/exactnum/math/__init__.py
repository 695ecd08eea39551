"""
Math kernels для exactnum

Чистые функции над limb-векторами (list[int], младший limb первым)
и иерархия abort-исключений.
"""

# Exceptions
from src.exactnum.math.exceptions import (
    ArithmeticContractViolation,
    DivisionByZero,
    InvalidOperand,
)

# Limb kernels
from src.exactnum.math.limbs import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    U64_MAX,
    Ordering,
    add,
    bit_length,
    compare,
    from_int,
    is_canonical,
    is_zero,
    mul,
    normalize,
    shift_left_one,
    shift_right,
    sub,
    to_int,
)

# Division kernels
from src.exactnum.math.division import (
    divrem,
    divrem_limb,
    divrem_long,
    divrem_repeated_subtraction,
)

__all__ = [
    # Exceptions
    "ArithmeticContractViolation",
    "DivisionByZero",
    "InvalidOperand",
    # Limb kernels: Constants
    "LIMB_BASE",
    "LIMB_BITS",
    "LIMB_MASK",
    "U64_MAX",
    # Limb kernels: Types
    "Ordering",
    # Limb kernels: Functions
    "add",
    "bit_length",
    "compare",
    "from_int",
    "is_canonical",
    "is_zero",
    "mul",
    "normalize",
    "shift_left_one",
    "shift_right",
    "sub",
    "to_int",
    # Division kernels
    "divrem",
    "divrem_limb",
    "divrem_long",
    "divrem_repeated_subtraction",
]
