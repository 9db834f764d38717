"""
Core math modules

Точные целочисленные примитивы для бинарного NUMERIC: логарифм и разложение
на группы base-10000. Никакой арифметики с плавающей точкой.
"""

# Exact integer log10
from src.core.math.int_log import (
    U64_MAX,
    U128_MAX,
    decimal_digit_count,
    ilog10_u64,
    ilog10_u128,
)

# Digit groups
from src.core.math.digit_groups import (
    DEC_DIGITS,
    NBASE,
    decompose_digit_groups,
    first_group_weight,
)

__all__ = [
    # Int log — Constants
    "U64_MAX",
    "U128_MAX",
    # Int log — Functions
    "decimal_digit_count",
    "ilog10_u64",
    "ilog10_u128",
    # Digit groups — Constants
    "DEC_DIGITS",
    "NBASE",
    # Digit groups — Functions
    "decompose_digit_groups",
    "first_group_weight",
]
