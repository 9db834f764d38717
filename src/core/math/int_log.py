"""
Exact Integer Log10 — Целочисленный десятичный логарифм без float

Модуль вычисляет floor(log10(n)) для беззнаковых целых шириной 64 и 128 бит
только сравнениями с заранее вычисленными степенями десяти.

Результат определяет weight старшей группы NUMERIC, поэтому он обязан быть
точным и около степеней десяти (10^k - 1, 10^k, 10^k + 1).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ilog10_u64(n) == len(str(n)) - 1 для всех 1 <= n <= U64_MAX
2. ilog10_u128(n) == len(str(n)) - 1 для всех 1 <= n <= U128_MAX
3. n == 0 — нарушение предусловия (ValueError), вызывающий код обрабатывает ноль сам
4. Никакой арифметики с плавающей точкой
"""

from typing import Final

# =============================================================================
# ГРАНИЦЫ ШИРИНЫ
# =============================================================================

U64_MAX: Final[int] = (1 << 64) - 1
U128_MAX: Final[int] = (1 << 128) - 1

# =============================================================================
# ПОРОГИ (степени десяти)
# =============================================================================

_POW10_4: Final[int] = 10_000
_POW10_8: Final[int] = 100_000_000
_POW10_16: Final[int] = 10_000_000_000_000_000
_POW10_32: Final[int] = 100_000_000_000_000_000_000_000_000_000_000


# =============================================================================
# ВНУТРЕННИЕ СТУПЕНИ
# =============================================================================


def _less_than_8(value: int) -> int:
    # 0 < value < 10^8
    log = 0
    if value >= _POW10_4:
        value //= _POW10_4
        log += 4

    if value >= 1000:
        return log + 3
    elif value >= 100:
        return log + 2
    elif value >= 10:
        return log + 1
    return log


def _less_than_16(value: int) -> int:
    # 0 < value < 10^16
    log = 0
    if value >= _POW10_8:
        value //= _POW10_8
        log += 8
    return log + _less_than_8(value)


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================


def ilog10_u64(value: int) -> int:
    """
    floor(log10(value)) для беззнакового 64-битного целого.

    Args:
        value: Целое в диапазоне [1, U64_MAX]

    Returns:
        Индекс старшего десятичного разряда (число цифр минус один)

    Raises:
        ValueError: Если value вне [1, U64_MAX]

    Examples:
        >>> ilog10_u64(1)
        0
        >>> ilog10_u64(99)
        1
        >>> ilog10_u64(100)
        2
        >>> ilog10_u64(18446744073709551615)
        19
    """
    if value <= 0:
        raise ValueError(f"ilog10 is undefined for non-positive value, got {value}")
    if value > U64_MAX:
        raise ValueError(f"value does not fit in 64 bits, got {value}")

    log = 0
    if value >= _POW10_16:
        value //= _POW10_16
        log += 16
    return log + _less_than_16(value)


def ilog10_u128(value: int) -> int:
    """
    floor(log10(value)) для беззнакового 128-битного целого.

    Сначала отсекается множитель 10^32: U128_MAX < 10^39, поэтому остаток
    после деления на 10^32 меньше 10^8 и уходит в младшую ступень. Иначе
    значение укладывается в 64-битную ветку после деления на 10^16.

    Args:
        value: Целое в диапазоне [1, U128_MAX]

    Returns:
        Индекс старшего десятичного разряда

    Raises:
        ValueError: Если value вне [1, U128_MAX]

    Examples:
        >>> ilog10_u128(10**32)
        32
        >>> ilog10_u128(10**32 - 1)
        31
        >>> ilog10_u128(2**128 - 1)
        38
    """
    if value <= 0:
        raise ValueError(f"ilog10 is undefined for non-positive value, got {value}")
    if value > U128_MAX:
        raise ValueError(f"value does not fit in 128 bits, got {value}")

    if value >= _POW10_32:
        return 32 + _less_than_8(value // _POW10_32)

    log = 0
    if value >= _POW10_16:
        value //= _POW10_16
        log += 16
    return log + _less_than_16(value)


def decimal_digit_count(value: int) -> int:
    """
    Количество десятичных цифр в беззнаковом целом до 128 бит.

    Ноль считается одной цифрой.
    """
    if value == 0:
        return 1
    return ilog10_u128(value) + 1
