"""
NumericWireRecord — Бинарное представление PostgreSQL NUMERIC

Immutable Pydantic модель одной записи NUMERIC в бинарном протоколе.
Полная совместимость с JSON Schema (src/core/contracts/schema/numeric_wire_record.json).

Раскладка на проводе (big-endian):

    num_groups  u16   количество групп
    weight      i16   weight старшей группы (степень 10000)
    sign        u16   0x0000 положительное / 0x4000 отрицательное
    dscale      u16   объявленное число дробных десятичных разрядов
    digits      i16 × num_groups, каждая в [0, 9999], старшая первой

Запись живёт одно значение: строится кодировщиком, сериализуется в буфер
вызывающего кода и выбрасывается.
"""

import struct
from decimal import Context, Decimal, localcontext
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.math.digit_groups import DEC_DIGITS, NBASE

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТА
# =============================================================================

NUMERIC_POS: Final[int] = 0x0000
NUMERIC_NEG: Final[int] = 0x4000

# num_groups, weight, sign, dscale
HEADER_FORMAT: Final[str] = "!HhHH"
HEADER_SIZE: Final[int] = struct.calcsize(HEADER_FORMAT)
DIGIT_SIZE: Final[int] = 2

U16_MAX: Final[int] = 0xFFFF
I16_MIN: Final[int] = -0x8000
I16_MAX: Final[int] = 0x7FFF


# =============================================================================
# WIRE RECORD MODEL
# =============================================================================


class NumericWireRecord(BaseModel):
    """
    Запись NUMERIC в бинарном формате PostgreSQL.

    Immutable модель (frozen=True). Инварианты проверяются при создании:
    - num_groups == len(digits)
    - каждая группа в [0, NBASE - 1]
    - sign только NUMERIC_POS / NUMERIC_NEG
    - weight в i16, num_groups и dscale в u16
    """

    num_groups: int = Field(..., ge=0, le=U16_MAX, description="Количество групп")
    weight: int = Field(..., ge=I16_MIN, le=I16_MAX, description="weight старшей группы")
    sign: int = Field(..., description="0x0000 положительное / 0x4000 отрицательное")
    dscale: int = Field(..., ge=0, le=U16_MAX, description="Дробных десятичных разрядов")
    digits: tuple[int, ...] = Field(..., description="Группы base-10000, старшая первой")

    model_config = {"frozen": True}

    @field_validator("sign")
    @classmethod
    def validate_sign(cls, v: int) -> int:
        if v not in (NUMERIC_POS, NUMERIC_NEG):
            raise ValueError(f"sign must be 0x0000 or 0x4000, got {v:#06x}")
        return v

    @field_validator("digits")
    @classmethod
    def validate_digit_range(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        for position, digit in enumerate(v):
            if not 0 <= digit < NBASE:
                raise ValueError(
                    f"digit group #{position} = {digit} outside [0, {NBASE - 1}]"
                )
        return v

    @model_validator(mode="after")
    def validate_group_count(self) -> "NumericWireRecord":
        if self.num_groups != len(self.digits):
            raise ValueError(
                f"num_groups {self.num_groups} does not match "
                f"{len(self.digits)} digit groups"
            )
        return self

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_negative(self) -> bool:
        return self.sign == NUMERIC_NEG

    @property
    def is_zero(self) -> bool:
        return all(digit == 0 for digit in self.digits)

    @property
    def byte_size(self) -> int:
        return HEADER_SIZE + DIGIT_SIZE * self.num_groups

    # -------------------------------------------------------------------------
    # Сериализация
    # -------------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Байты в точности как в бинарном протоколе."""
        return struct.pack(
            f"{HEADER_FORMAT}{self.num_groups}h",
            self.num_groups,
            self.weight,
            self.sign,
            self.dscale,
            *self.digits,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "NumericWireRecord":
        """
        Строгий разбор бинарного NUMERIC.

        Args:
            data: Байты одного значения (без длины параметра)

        Returns:
            NumericWireRecord

        Raises:
            ValueError: Если длина не соответствует заголовку или поля
                нарушают инварианты (включая pydantic ValidationError)
        """
        if len(data) < HEADER_SIZE:
            raise ValueError(
                f"NUMERIC header requires {HEADER_SIZE} bytes, got {len(data)}"
            )

        num_groups, weight, sign, dscale = struct.unpack_from(HEADER_FORMAT, data)
        expected_size = HEADER_SIZE + DIGIT_SIZE * num_groups
        if len(data) != expected_size:
            raise ValueError(
                f"NUMERIC with {num_groups} groups requires {expected_size} bytes, "
                f"got {len(data)}"
            )

        digits = struct.unpack_from(f"!{num_groups}h", data, HEADER_SIZE)
        return cls(
            num_groups=num_groups,
            weight=weight,
            sign=sign,
            dscale=dscale,
            digits=digits,
        )

    def to_decimal(self) -> Decimal:
        """
        Точная реконструкция значения как Decimal с экспонентой -dscale.

        Группа с индексом i имеет weight (self.weight - i), поэтому
        конкатенация групп по 4 цифры умножается на
        10^(4 * (weight - num_groups + 1)).
        """
        sign = 1 if self.is_negative else 0
        if not self.digits:
            return Decimal((sign, (0,), -self.dscale))

        digit_string = "".join(f"{digit:0{DEC_DIGITS}d}" for digit in self.digits)
        exponent = DEC_DIGITS * (self.weight - self.num_groups + 1)
        raw = Decimal((sign, tuple(int(c) for c in digit_string), exponent))

        with localcontext(Context(prec=len(digit_string) + abs(exponent) + self.dscale + 1)):
            return raw.quantize(Decimal((0, (1,), -self.dscale)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "num_groups": self.num_groups,
            "weight": self.weight,
            "sign": self.sign,
            "dscale": self.dscale,
            "digits": list(self.digits),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NumericWireRecord":
        """
        Создание из dict с проверкой по JSON Schema контракту.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        from src.core.contracts import validate_numeric_wire_record

        validate_numeric_wire_record(data)
        return cls(
            num_groups=data["num_groups"],
            weight=data["weight"],
            sign=data["sign"],
            dscale=data["dscale"],
            digits=tuple(data["digits"]),
        )
