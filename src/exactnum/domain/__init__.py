"""
Value types exactnum.

BigInt — беззнаковое целое над 32-битными limbs.
BigFloat — знаковое рациональное число (numerator/denominator BigInt).

Операции каждого типа — функции модулей bigint и bigfloat.
"""

from src.exactnum.domain import bigfloat, bigint
from src.exactnum.domain.bigfloat import BigFloat
from src.exactnum.domain.bigint import BigInt, DivRem

__all__ = [
    # Modules (операции)
    "bigint",
    "bigfloat",
    # Models
    "BigInt",
    "BigFloat",
    "DivRem",
]
