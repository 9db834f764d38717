"""
Тесты для NUMERIC Encoder

Проверяемые инварианты:
1. Ноль → {num_groups=1, weight=0, sign=0, dscale=тип, digits=[0]}
2. num_groups = first_group_weight - last_group_weight + 1
3. Каждая группа в [0, 9999] на всём диапазоне типов
4. weight совпадает с точным порядком величины
5. Round-trip: Decimal из записи == исходное значение (с точностью dscale)
6. Целевой тип, отличный от NUMERIC → UnsupportedTypeError, буфер не тронут
"""

from decimal import Decimal

import pytest

from src.core.codec import (
    FIXED_DSCALE,
    INTEGER_DSCALE,
    PgType,
    UnsupportedTypeError,
    accepts,
    encode_fixed_i80f48,
    encode_i128,
    encode_numeric,
    encode_u64,
    to_sql,
    to_wire_record,
    write_numeric,
)
from src.core.domain import (
    FIXED_FRAC_BITS,
    FIXED_ONE,
    I128_MAX,
    I128_MIN,
    NUMERIC_NEG,
    NUMERIC_POS,
    FixedI80F48,
    NumericKind,
    SignedInt128,
    UnsignedInt64,
)
from src.core.math import U64_MAX


# =============================================================================
# ЭТАЛОНЫ
# =============================================================================


def _reference_groups(magnitude: int) -> list[int]:
    """Строковый эталон целых групп (произвольная точность)."""
    text = str(magnitude)
    text = "0" * (-len(text) % 4) + text
    return [int(text[i : i + 4]) for i in range(0, len(text), 4)]


def _expected_fixed_decimal(bits: int) -> Decimal:
    """Значение bits / 2^48, усечённое до 16 дробных разрядов."""
    units = (abs(bits) * 10**16) >> FIXED_FRAC_BITS
    sign = "-" if bits < 0 else ""
    return Decimal(f"{sign}{units}E-16")


def _integer_samples(low: int, high: int) -> list[int]:
    samples = {low, high, 0, 1}
    for k in range(0, 40):
        for candidate in (10**k - 1, 10**k, 10**k + 1, 10_000**k, 10_000**k - 1):
            for signed in (candidate, -candidate):
                if low <= signed <= high:
                    samples.add(signed)
    return sorted(samples)


I128_SAMPLES = _integer_samples(I128_MIN, I128_MAX)
U64_SAMPLES = _integer_samples(0, U64_MAX)
FIXED_SAMPLES = sorted(
    {
        0,
        1,
        -1,
        FIXED_ONE,
        -FIXED_ONE,
        FIXED_ONE // 2,
        FIXED_ONE - 1,
        12345 * FIXED_ONE + FIXED_ONE // 4,
        9999 * FIXED_ONE + FIXED_ONE - 1,
        10_000 * FIXED_ONE,
        -(10**20) * FIXED_ONE - 7,
        I128_MAX,
        I128_MIN,
    }
)


# =============================================================================
# ТЕСТЫ: ZERO
# =============================================================================


class TestZeroRecord:
    """Ноль — жёсткий частный случай"""

    def test_fixed_zero(self) -> None:
        record = encode_fixed_i80f48(FixedI80F48(bits=0))
        assert record.num_groups == 1
        assert record.weight == 0
        assert record.sign == NUMERIC_POS
        assert record.dscale == FIXED_DSCALE == 16
        assert record.digits == (0,)

    def test_i128_zero(self) -> None:
        record = encode_i128(SignedInt128(value=0))
        assert record.to_dict() == {
            "num_groups": 1,
            "weight": 0,
            "sign": 0,
            "dscale": 0,
            "digits": [0],
        }

    def test_u64_zero(self) -> None:
        record = encode_u64(UnsignedInt64(value=0))
        assert (record.num_groups, record.weight, record.sign, record.dscale) == (1, 0, 0, 0)
        assert record.digits == (0,)

    def test_zero_bytes(self) -> None:
        assert encode_numeric(UnsignedInt64(value=0)) == bytes.fromhex(
            "0001 0000 0000 0000 0000"
        )
        assert encode_numeric(FixedI80F48(bits=0)) == bytes.fromhex(
            "0001 0000 0000 0010 0000"
        )


# =============================================================================
# ТЕСТЫ: FIXED I80F48
# =============================================================================


class TestEncodeFixedI80F48:
    """Кодирование Q80.48"""

    def test_plus_one(self) -> None:
        """+1 (raw = 2^48)"""
        record = encode_fixed_i80f48(FixedI80F48(bits=FIXED_ONE))
        assert record.weight == 0
        assert record.sign == NUMERIC_POS
        assert record.dscale == 16
        assert record.digits == (1, 0, 0, 0, 0)
        assert record.num_groups == 5

    def test_minus_one(self) -> None:
        """-1: те же группы, знак 0x4000"""
        record = encode_fixed_i80f48(FixedI80F48(bits=-FIXED_ONE))
        assert record.digits == (1, 0, 0, 0, 0)
        assert record.sign == NUMERIC_NEG
        assert record.weight == 0

    def test_plus_one_bytes(self) -> None:
        assert encode_numeric(FixedI80F48.from_int(1)) == bytes.fromhex(
            "0005 0000 0000 0010 0001 0000 0000 0000 0000"
        )

    def test_half(self) -> None:
        """0.5: целая часть 0 даёт группу 0 с weight 0"""
        record = encode_fixed_i80f48(FixedI80F48(bits=FIXED_ONE // 2))
        assert record.weight == 0
        assert record.digits == (0, 5000, 0, 0, 0)

    def test_smallest_positive(self) -> None:
        """raw = 1 → 2^-48 = 3.55e-15 → усекается до 35e-16"""
        record = encode_fixed_i80f48(FixedI80F48(bits=1))
        assert record.digits == (0, 0, 0, 0, 35)
        assert record.to_decimal() == Decimal("0.0000000000000035")

    def test_integer_and_fraction(self) -> None:
        """12345.25"""
        record = encode_fixed_i80f48(FixedI80F48(bits=12345 * FIXED_ONE + FIXED_ONE // 4))
        assert record.weight == 1
        assert record.digits == (1, 2345, 2500, 0, 0, 0)
        assert record.num_groups == 1 - (-4) + 1

    def test_always_four_fractional_groups(self) -> None:
        """Хвостовые нулевые группы не обрезаются"""
        for int_value in (1, 99, 10_000, 10**12):
            record = encode_fixed_i80f48(FixedI80F48.from_int(int_value))
            assert record.digits[-4:] == (0, 0, 0, 0)
            assert record.dscale == 16
            assert record.num_groups == record.weight + 5

    def test_exact_power_of_nbase(self) -> None:
        """10000 → weight 1, [1, 0] + 4 дробные группы"""
        record = encode_fixed_i80f48(FixedI80F48.from_int(10_000))
        assert record.weight == 1
        assert record.digits == (1, 0, 0, 0, 0, 0)

    def test_just_below_power_of_nbase(self) -> None:
        """9999.999... → weight 0, дробь (2^48 - 1) / 2^48 усекается"""
        record = encode_fixed_i80f48(FixedI80F48(bits=10_000 * FIXED_ONE - 1))
        assert record.weight == 0
        assert record.digits == (9999, 9999, 9999, 9999, 9964)

    def test_min_value(self) -> None:
        """-2^127 / 2^48 = -2^79: модуль помещается без переполнения"""
        record = encode_fixed_i80f48(FixedI80F48(bits=I128_MIN))
        assert record.sign == NUMERIC_NEG
        assert record.weight == 5
        assert list(record.digits[:6]) == _reference_groups(2**79)
        assert record.digits[6:] == (0, 0, 0, 0)

    @pytest.mark.parametrize("bits", FIXED_SAMPLES)
    def test_roundtrip_decimal(self, bits: int) -> None:
        """Decimal из записи == значение, усечённое до 16 разрядов"""
        record = encode_fixed_i80f48(FixedI80F48(bits=bits))
        assert record.to_decimal() == _expected_fixed_decimal(bits)

    @pytest.mark.parametrize("bits", FIXED_SAMPLES)
    def test_weight_matches_integer_magnitude(self, bits: int) -> None:
        int_part = abs(bits) >> FIXED_FRAC_BITS
        record = encode_fixed_i80f48(FixedI80F48(bits=bits))
        expected_weight = (len(str(int_part)) - 1) // 4 if int_part else 0
        assert record.weight == expected_weight


# =============================================================================
# ТЕСТЫ: I128
# =============================================================================


class TestEncodeI128:
    """Кодирование знакового 128-битного целого"""

    def test_12345(self) -> None:
        """digit_count = 4 → weight 1 → [1, 2345]"""
        record = encode_i128(SignedInt128(value=12345))
        assert record.num_groups == 2
        assert record.weight == 1
        assert record.dscale == 0
        assert record.sign == NUMERIC_POS
        assert record.digits == (1, 2345)

    def test_12345_bytes(self) -> None:
        assert encode_numeric(SignedInt128(value=12345)) == bytes.fromhex(
            "0002 0001 0000 0000 0001 0929"
        )

    def test_thirty_four_nines_negative(self) -> None:
        """-(10^34 - 1): 128-битная ветка, сверка со строковым эталоном"""
        value = -(10**34 - 1)
        record = encode_i128(SignedInt128(value=value))
        expected = _reference_groups(10**34 - 1)
        assert list(record.digits) == expected
        assert expected == [99] + [9999] * 8
        assert record.weight == 8
        assert record.num_groups == 9
        assert record.sign == NUMERIC_NEG
        assert record.dscale == 0

    def test_extremes(self) -> None:
        """I128_MAX и I128_MIN (модуль 2^127)"""
        top = encode_i128(SignedInt128(value=I128_MAX))
        assert list(top.digits) == _reference_groups(I128_MAX)
        assert top.weight == 9

        bottom = encode_i128(SignedInt128(value=I128_MIN))
        assert list(bottom.digits) == _reference_groups(2**127)
        assert bottom.sign == NUMERIC_NEG

    @pytest.mark.parametrize("value", I128_SAMPLES)
    def test_matches_reference_and_roundtrips(self, value: int) -> None:
        record = encode_i128(SignedInt128(value=value))
        assert list(record.digits) == _reference_groups(abs(value))
        assert record.weight == record.num_groups - 1
        assert all(0 <= digit < 10_000 for digit in record.digits)
        assert record.to_decimal() == Decimal(value)
        assert record.dscale == INTEGER_DSCALE


# =============================================================================
# ТЕСТЫ: U64
# =============================================================================


class TestEncodeU64:
    """Кодирование беззнакового 64-битного целого"""

    def test_max(self) -> None:
        record = encode_u64(UnsignedInt64(value=U64_MAX))
        assert record.digits == (1844, 6744, 737, 955, 1615)
        assert record.weight == 4
        assert record.sign == NUMERIC_POS

    def test_single_group(self) -> None:
        record = encode_u64(UnsignedInt64(value=9999))
        assert record.weight == 0
        assert record.digits == (9999,)

    @pytest.mark.parametrize("value", U64_SAMPLES)
    def test_matches_reference_and_roundtrips(self, value: int) -> None:
        record = encode_u64(UnsignedInt64(value=value))
        assert list(record.digits) == _reference_groups(value)
        assert record.sign == NUMERIC_POS
        assert record.to_decimal() == Decimal(value)

    def test_agrees_with_i128_encoder(self) -> None:
        """Для неотрицательных значений u64 и i128 дают одинаковые байты"""
        for value in U64_SAMPLES:
            assert encode_numeric(UnsignedInt64(value=value)) == encode_numeric(
                SignedInt128(value=value)
            )


# =============================================================================
# ТЕСТЫ: DISPATCH И ЦЕЛЕВОЙ ТИП
# =============================================================================


class TestDispatch:
    """Диспетчеризация по тегу варианта"""

    @pytest.mark.parametrize(
        "value,encoder",
        [
            (FixedI80F48(bits=FIXED_ONE), encode_fixed_i80f48),
            (SignedInt128(value=-7), encode_i128),
            (UnsignedInt64(value=7), encode_u64),
        ],
    )
    def test_to_wire_record_routes_by_kind(self, value, encoder) -> None:
        assert to_wire_record(value) == encoder(value)

    def test_every_kind_has_typed_encoder(self) -> None:
        """Каждый тег варианта кодируется своим кодировщиком с его dscale"""
        samples = {
            NumericKind.FIXED_I80F48: (FixedI80F48(bits=-FIXED_ONE), 16),
            NumericKind.I128: (SignedInt128(value=-1), 0),
            NumericKind.U64: (UnsignedInt64(value=1), 0),
        }
        assert set(samples) == set(NumericKind)
        for kind, (value, dscale) in samples.items():
            assert value.kind == kind
            assert to_wire_record(value).dscale == dscale

    def test_unknown_value_rejected(self) -> None:
        with pytest.raises(TypeError, match="Expected"):
            to_wire_record(12345)

    def test_write_numeric_appends(self) -> None:
        """Байты дописываются в конец буфера вызывающего кода"""
        out = bytearray(b"\xaa\xbb")
        written = write_numeric(SignedInt128(value=12345), out)
        assert written == 12
        assert out[:2] == b"\xaa\xbb"
        assert bytes(out[2:]) == bytes.fromhex("0002 0001 0000 0000 0001 0929")

    def test_write_numeric_multiple_values(self) -> None:
        out = bytearray()
        total = 0
        for value in (UnsignedInt64(value=0), FixedI80F48(bits=-FIXED_ONE)):
            total += write_numeric(value, out)
        assert total == len(out) == 10 + 18


class TestTargetType:
    """Проверка целевого типа"""

    def test_accepts_only_numeric(self) -> None:
        assert accepts(PgType.NUMERIC)
        assert accepts(1700)
        assert not accepts(PgType.INT8)
        assert not accepts(PgType.FLOAT8)
        assert not accepts(PgType.TEXT)

    def test_pg_type_oids(self) -> None:
        assert {t.name: t.value for t in PgType} == {
            "INT8": 20,
            "TEXT": 25,
            "FLOAT8": 701,
            "NUMERIC": 1700,
        }

    def test_to_sql_numeric(self) -> None:
        out = bytearray()
        written = to_sql(UnsignedInt64(value=1), PgType.NUMERIC, out)
        assert written == 10
        assert bytes(out) == bytes.fromhex("0001 0000 0000 0000 0001")

    @pytest.mark.parametrize("pg_type", [PgType.INT8, PgType.FLOAT8, PgType.TEXT, 9999])
    def test_to_sql_unsupported_type(self, pg_type) -> None:
        """Неподдерживаемый тип — отдельная ошибка, буфер не изменяется"""
        out = bytearray(b"\x01")
        with pytest.raises(UnsupportedTypeError, match="only NUMERIC") as exc_info:
            to_sql(FixedI80F48(bits=FIXED_ONE), pg_type, out)
        assert exc_info.value.pg_type == pg_type
        assert exc_info.value.kind == NumericKind.FIXED_I80F48
        assert out == bytearray(b"\x01")

    def test_to_sql_unsupported_value(self) -> None:
        with pytest.raises(TypeError):
            to_sql(1.5, PgType.INT8, bytearray())
