"""
Numeric Values — Исходные числовые значения для записи в NUMERIC

Immutable Pydantic модели, представляющие уже декодированные поля аккаунтов.
Закрытое множество вариантов, различаемых по полю kind:
- FixedI80F48: знаковое fixed-point, raw i128 / 2^48
- SignedInt128: знаковое 128-битное целое
- UnsignedInt64: беззнаковое 64-битное целое

Диапазон проверяется при создании: значение, не помещающееся в свой тип,
никогда не доходит до кодировщика.
"""

from enum import Enum
from fractions import Fraction
from typing import Final, Literal, Union

from pydantic import BaseModel, Field, field_validator

from src.core.math.int_log import U64_MAX

# =============================================================================
# ГРАНИЦЫ ТИПОВ
# =============================================================================

I128_MIN: Final[int] = -(1 << 127)
I128_MAX: Final[int] = (1 << 127) - 1
U64_MIN: Final[int] = 0

# Бит дробной части Q80.48
FIXED_FRAC_BITS: Final[int] = 48
FIXED_ONE: Final[int] = 1 << FIXED_FRAC_BITS
FIXED_FRAC_MASK: Final[int] = FIXED_ONE - 1

# Размер raw-представления в аккаунте (байт)
FIXED_BYTE_SIZE: Final[int] = 16


# =============================================================================
# ENUMS
# =============================================================================


class NumericKind(str, Enum):
    """Тег варианта исходного значения"""

    FIXED_I80F48 = "fixed_i80f48"
    I128 = "i128"
    U64 = "u64"


# =============================================================================
# МОДЕЛИ
# =============================================================================


class FixedI80F48(BaseModel):
    """
    Знаковое fixed-point значение Q80.48.

    Хранится raw i128 (bits), реальное значение = bits / 2^48.
    """

    kind: Literal[NumericKind.FIXED_I80F48] = NumericKind.FIXED_I80F48
    bits: int = Field(..., description="Raw i128 (value * 2^48)")

    model_config = {"frozen": True}

    @field_validator("bits")
    @classmethod
    def validate_i128_range(cls, v: int) -> int:
        if not I128_MIN <= v <= I128_MAX:
            raise ValueError(f"bits {v} out of i128 range")
        return v

    @classmethod
    def from_bits(cls, bits: int) -> "FixedI80F48":
        return cls(bits=bits)

    @classmethod
    def from_int(cls, value: int) -> "FixedI80F48":
        """Целое значение без дробной части."""
        return cls(bits=value << FIXED_FRAC_BITS)

    @classmethod
    def from_le_bytes(cls, data: bytes) -> "FixedI80F48":
        """
        Из 16 байт little-endian two's complement (раскладка в аккаунте).

        Raises:
            ValueError: Если длина не 16 байт
        """
        if len(data) != FIXED_BYTE_SIZE:
            raise ValueError(
                f"I80F48 requires exactly {FIXED_BYTE_SIZE} bytes, got {len(data)}"
            )
        return cls(bits=int.from_bytes(data, byteorder="little", signed=True))

    def to_le_bytes(self) -> bytes:
        return self.bits.to_bytes(FIXED_BYTE_SIZE, byteorder="little", signed=True)

    def to_fraction(self) -> Fraction:
        """Точное рациональное значение bits / 2^48."""
        return Fraction(self.bits, FIXED_ONE)

    def is_zero(self) -> bool:
        return self.bits == 0

    def is_negative(self) -> bool:
        return self.bits < 0


class SignedInt128(BaseModel):
    """Знаковое 128-битное целое."""

    kind: Literal[NumericKind.I128] = NumericKind.I128
    value: int = Field(..., description="Значение i128")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_i128_range(cls, v: int) -> int:
        if not I128_MIN <= v <= I128_MAX:
            raise ValueError(f"value {v} out of i128 range")
        return v

    def is_zero(self) -> bool:
        return self.value == 0

    def is_negative(self) -> bool:
        return self.value < 0


class UnsignedInt64(BaseModel):
    """Беззнаковое 64-битное целое."""

    kind: Literal[NumericKind.U64] = NumericKind.U64
    value: int = Field(..., description="Значение u64")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_u64_range(cls, v: int) -> int:
        if not U64_MIN <= v <= U64_MAX:
            raise ValueError(f"value {v} out of u64 range")
        return v

    def is_zero(self) -> bool:
        return self.value == 0

    def is_negative(self) -> bool:
        return False


NumericValue = Union[FixedI80F48, SignedInt128, UnsignedInt64]
