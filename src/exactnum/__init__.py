"""
exactnum — точная арифметика произвольной точности.

Беззнаковые BigInt над 32-битными limbs и знаковые рациональные BigFloat
поверх них. Чистые функции над immutable значениями, без глобального
состояния.

    >>> from src.exactnum import bigfloat
    >>> half = bigfloat.from_ratio_u64(1, 2)
    >>> third = bigfloat.from_ratio_u64(1, 3)
    >>> str(bigfloat.add(half, third))
    '5/6'
"""

from src.exactnum.config import DEFAULT_CONFIG, ArithmeticConfig, DivisionStrategy
from src.exactnum.domain import BigFloat, BigInt, DivRem, bigfloat, bigint
from src.exactnum.log_config import get_logger, setup_logging, setup_logging_from_config
from src.exactnum.math import (
    ArithmeticContractViolation,
    DivisionByZero,
    InvalidOperand,
    Ordering,
)

__version__ = "0.1.0"

__all__ = [
    # Value types
    "BigInt",
    "BigFloat",
    "DivRem",
    "Ordering",
    # Operations
    "bigint",
    "bigfloat",
    # Exceptions
    "ArithmeticContractViolation",
    "DivisionByZero",
    "InvalidOperand",
    # Configuration
    "ArithmeticConfig",
    "DivisionStrategy",
    "DEFAULT_CONFIG",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
