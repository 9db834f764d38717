"""
NUMERIC Encoder — Кодирование числовых полей аккаунтов в бинарный NUMERIC

Модуль превращает FixedI80F48, SignedInt128 и UnsignedInt64 в байты
бинарного NUMERIC PostgreSQL, готовые стать параметром INSERT.

Алгоритм (общий для трёх вариантов):
    1. Знак и модуль исходного значения
    2. digit_count = ilog10(целая часть), для нуля = 0 без вызова ilog10
    3. first_group_weight = digit_count // 4
    4. Целая часть раскладывается по weight first..0
    5. Для FixedI80F48 дробь * 10^16 раскладывается по weight -1..-4
    6. Заголовок + группы дописываются в буфер вызывающего кода

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакого float: логарифм, weight и дробь вычисляются в целых числах
2. Ноль всегда {num_groups=1, weight=0, sign=0, dscale=тип, digits=[0]}
3. FixedI80F48 всегда объявляет dscale=16 и четыре дробные группы
4. Кодирование не падает для любого значения, прошедшего валидацию модели
5. Целевой тип, отличный от NUMERIC, отвергается UnsupportedTypeError
"""

from enum import IntEnum
from typing import Final

from loguru import logger

from src.core.domain.numeric_values import (
    FIXED_FRAC_BITS,
    FIXED_FRAC_MASK,
    FixedI80F48,
    NumericKind,
    NumericValue,
    SignedInt128,
    UnsignedInt64,
)
from src.core.domain.wire_record import NUMERIC_NEG, NUMERIC_POS, NumericWireRecord
from src.core.math.digit_groups import decompose_digit_groups, first_group_weight
from src.core.math.int_log import ilog10_u64, ilog10_u128

# =============================================================================
# ПАРАМЕТРЫ КОДИРОВАНИЯ
# =============================================================================

# Объявленные дробные разряды FixedI80F48 (4 группы по 4 цифры)
FIXED_DSCALE: Final[int] = 16
FIXED_FRAC_GROUPS: Final[int] = 4
FIXED_FRAC_SCALE: Final[int] = 10**FIXED_DSCALE

# dscale для целочисленных источников
INTEGER_DSCALE: Final[int] = 0


# =============================================================================
# ТИПЫ POSTGRESQL
# =============================================================================


class PgType(IntEnum):
    """OID типов PostgreSQL, в колонки которых пишутся значения аккаунтов"""

    INT8 = 20
    TEXT = 25
    FLOAT8 = 701
    NUMERIC = 1700


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedTypeError(Exception):
    """
    Запрошен целевой тип, в который значение не кодируется.

    Кодировщик не пытается подобрать "близкое" представление: значение
    отвергается до записи единого байта в буфер.
    """

    def __init__(self, pg_type: PgType | int, kind: NumericKind) -> None:
        self.pg_type = pg_type
        self.kind = kind
        type_name = pg_type.name if isinstance(pg_type, PgType) else f"oid={pg_type}"
        super().__init__(
            f"Cannot encode {kind.value} as {type_name}: only NUMERIC is supported"
        )


# =============================================================================
# ОБЩАЯ СБОРКА ЗАПИСИ
# =============================================================================


def _zero_record(dscale: int) -> NumericWireRecord:
    return NumericWireRecord(
        num_groups=1,
        weight=0,
        sign=NUMERIC_POS,
        dscale=dscale,
        digits=(0,),
    )


def _build_record(
    int_part: int,
    digit_count: int,
    negative: bool,
    dscale: int,
    frac_scaled: int = 0,
    frac_groups: int = 0,
) -> NumericWireRecord:
    """
    Заголовок и группы для ненулевого значения.

    Args:
        int_part: Модуль целой части
        digit_count: ilog10(int_part), либо 0 если int_part == 0
        negative: Знак исходного значения
        dscale: Объявленные дробные разряды
        frac_scaled: Дробь, умноженная на 10000 ** frac_groups
        frac_groups: Количество дробных групп (last_group_weight = -frac_groups)
    """
    first_weight = first_group_weight(digit_count)

    digits = decompose_digit_groups(int_part, first_weight, 0)
    if frac_groups:
        digits += decompose_digit_groups(frac_scaled, -1, -frac_groups)

    return NumericWireRecord(
        num_groups=len(digits),
        weight=first_weight,
        sign=NUMERIC_NEG if negative else NUMERIC_POS,
        dscale=dscale,
        digits=tuple(digits),
    )


# =============================================================================
# КОДИРОВЩИКИ
# =============================================================================


def encode_fixed_i80f48(value: FixedI80F48) -> NumericWireRecord:
    """
    FixedI80F48 → NUMERIC с dscale=16.

    Дробная часть переводится в десятичную точно: frac_bits * 10^16 >> 48
    (усечение, как при to_num::<u64> на исходной стороне). Всегда пишутся
    ровно четыре дробные группы, включая нулевые хвостовые.

    Examples:
        >>> encode_fixed_i80f48(FixedI80F48.from_int(1)).digits
        (1, 0, 0, 0, 0)
    """
    if value.bits == 0:
        return _zero_record(FIXED_DSCALE)

    magnitude = abs(value.bits)
    int_part = magnitude >> FIXED_FRAC_BITS
    frac_bits = magnitude & FIXED_FRAC_MASK
    frac_scaled = (frac_bits * FIXED_FRAC_SCALE) >> FIXED_FRAC_BITS

    digit_count = ilog10_u128(int_part) if int_part > 0 else 0

    logger.trace(
        "i80f48 bits={} int={} frac={} digit_count={}",
        value.bits,
        int_part,
        frac_scaled,
        digit_count,
    )

    return _build_record(
        int_part,
        digit_count,
        negative=value.bits < 0,
        dscale=FIXED_DSCALE,
        frac_scaled=frac_scaled,
        frac_groups=FIXED_FRAC_GROUPS,
    )


def encode_i128(value: SignedInt128) -> NumericWireRecord:
    """
    SignedInt128 → NUMERIC с dscale=0.

    Модуль до 2^127 проходит через 128-битную ветку ilog10.

    Examples:
        >>> encode_i128(SignedInt128(value=12345)).digits
        (1, 2345)
    """
    if value.value == 0:
        return _zero_record(INTEGER_DSCALE)

    magnitude = abs(value.value)
    digit_count = ilog10_u128(magnitude)

    logger.trace("i128 value={} digit_count={}", value.value, digit_count)

    return _build_record(
        magnitude,
        digit_count,
        negative=value.value < 0,
        dscale=INTEGER_DSCALE,
    )


def encode_u64(value: UnsignedInt64) -> NumericWireRecord:
    """
    UnsignedInt64 → NUMERIC с dscale=0, знак всегда положительный.
    """
    if value.value == 0:
        return _zero_record(INTEGER_DSCALE)

    digit_count = ilog10_u64(value.value)

    logger.trace("u64 value={} digit_count={}", value.value, digit_count)

    return _build_record(
        value.value,
        digit_count,
        negative=False,
        dscale=INTEGER_DSCALE,
    )


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================


def accepts(pg_type: PgType | int) -> bool:
    """Может ли значение быть закодировано в данный тип PostgreSQL."""
    return pg_type == PgType.NUMERIC


def to_wire_record(value: NumericValue) -> NumericWireRecord:
    """
    Запись NUMERIC для любого из поддерживаемых вариантов.

    Множество вариантов закрыто: каждая ветка вызывает кодировщик,
    принимающий ровно этот вариант.

    Raises:
        TypeError: Если value не FixedI80F48 / SignedInt128 / UnsignedInt64
    """
    if isinstance(value, FixedI80F48):
        return encode_fixed_i80f48(value)
    if isinstance(value, SignedInt128):
        return encode_i128(value)
    if isinstance(value, UnsignedInt64):
        return encode_u64(value)
    raise TypeError(
        f"Expected FixedI80F48, SignedInt128 or UnsignedInt64, "
        f"got {type(value).__name__}"
    )


def write_numeric(value: NumericValue, out: bytearray) -> int:
    """
    Дописать бинарный NUMERIC в буфер вызывающего кода.

    Args:
        value: Исходное значение
        out: Буфер, которым владеет вызывающий код

    Returns:
        Количество записанных байт
    """
    payload = to_wire_record(value).to_bytes()
    out += payload
    return len(payload)


def encode_numeric(value: NumericValue) -> bytes:
    """Бинарный NUMERIC как отдельный bytes."""
    return to_wire_record(value).to_bytes()


def to_sql(value: NumericValue, pg_type: PgType | int, out: bytearray) -> int:
    """
    Кодирование параметра с проверкой целевого типа.

    Args:
        value: Исходное значение
        pg_type: Тип колонки, в которую пишется параметр
        out: Буфер вызывающего кода

    Returns:
        Количество записанных байт (значение никогда не NULL)

    Raises:
        UnsupportedTypeError: Если pg_type не NUMERIC; буфер не изменяется
    """
    if not accepts(pg_type):
        kind = getattr(value, "kind", None)
        if not isinstance(kind, NumericKind):
            raise TypeError(f"Unsupported value type {type(value).__name__}")
        logger.warning("Rejected {} parameter for pg type {}", kind.value, pg_type)
        raise UnsupportedTypeError(pg_type, kind)

    return write_numeric(value, out)
