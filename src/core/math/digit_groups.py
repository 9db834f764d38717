"""
Digit Groups — Разложение на base-10000 группы NUMERIC

Бинарный NUMERIC хранит число как последовательность "цифр" по основанию
10000 (каждая группа = 4 десятичных разряда). weight — показатель степени
10000 старшей группы относительно десятичной точки; дробные группы имеют
отрицательный weight.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая группа в [0, NBASE - 1]
2. Число групп = first_weight - last_weight + 1
3. weight старшей группы = digit_count // DEC_DIGITS (целочисленное деление)
"""

from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТА
# =============================================================================

# Основание "цифры" NUMERIC
NBASE: Final[int] = 10_000

# Десятичных разрядов в одной группе
DEC_DIGITS: Final[int] = 4


# =============================================================================
# WEIGHT
# =============================================================================


def first_group_weight(digit_count: int) -> int:
    """
    weight старшей группы по индексу старшего десятичного разряда.

    digit_count здесь — результат ilog10 (число цифр минус один), а не длина
    строки. Деление только целочисленное.

    Args:
        digit_count: floor(log10(magnitude)), >= 0

    Returns:
        floor(digit_count / 4)

    Raises:
        ValueError: Если digit_count < 0

    Examples:
        >>> first_group_weight(0)
        0
        >>> first_group_weight(3)
        0
        >>> first_group_weight(4)
        1
        >>> first_group_weight(38)
        9
    """
    if digit_count < 0:
        raise ValueError(f"digit_count must be non-negative, got {digit_count}")
    return digit_count // DEC_DIGITS


# =============================================================================
# РАЗЛОЖЕНИЕ
# =============================================================================


def decompose_digit_groups(
    magnitude: int,
    first_weight: int,
    last_weight: int,
) -> list[int]:
    """
    Разложение беззнаковой величины на группы от first_weight до last_weight.

    magnitude выражена в единицах NBASE ** last_weight. Для целой части
    last_weight = 0 и magnitude — само целое. Для дробной части
    (last_weight = -4) вызывающий код передаёт дробь, уже умноженную на 10^16.

    Для каждого weight (от старшего к младшему):
        group = remainder // NBASE ** (weight - last_weight)
        remainder -= group * NBASE ** (weight - last_weight)

    Args:
        magnitude: Неотрицательное целое
        first_weight: weight старшей группы (включительно)
        last_weight: weight младшей группы (включительно, может быть < 0)

    Returns:
        Список групп, старшая первой

    Raises:
        ValueError: Если magnitude < 0, first_weight < last_weight или
            magnitude не помещается в заданный диапазон групп

    Examples:
        >>> decompose_digit_groups(12345, 1, 0)
        [1, 2345]
        >>> decompose_digit_groups(5000_0000_0000_0000, -1, -4)
        [5000, 0, 0, 0]
    """
    if magnitude < 0:
        raise ValueError(f"magnitude must be non-negative, got {magnitude}")
    if first_weight < last_weight:
        raise ValueError(
            f"first_weight {first_weight} must be >= last_weight {last_weight}"
        )

    num_groups = first_weight - last_weight + 1
    if magnitude >= NBASE**num_groups:
        raise ValueError(
            f"magnitude {magnitude} does not fit in {num_groups} digit groups "
            f"(weights {first_weight}..{last_weight})"
        )

    groups: list[int] = []
    remainder = magnitude
    for weight in range(first_weight, last_weight - 1, -1):
        decimal_shift = NBASE ** (weight - last_weight)
        group = remainder // decimal_shift
        groups.append(group)
        remainder -= group * decimal_shift

    return groups
