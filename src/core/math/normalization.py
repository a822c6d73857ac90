"""
Decimal Normalizer — рендеринг чисел без научной нотации

Float вида 1e-8 или 1.5e-7 по умолчанию печатается в научной нотации,
из-за чего нельзя посчитать количество знаков после запятой по строке.
Модуль переводит такое значение в обычную fixed-point строку:

    1e-8    → "0.00000001"
    1.5e-7  → "0.00000015"
    1e21    → "1000000000000000000000"

Количество дробных цифр = max(0, len(дробная часть мантиссы) - exponent),
где мантисса и exponent берутся из кратчайшей научной записи значения.
"""

import math
from decimal import Decimal
from typing import Union

Number = Union[int, float]


def fraction_digits(value: Number) -> int:
    """
    Количество дробных цифр в кратчайшей десятичной записи значения.

    Args:
        value: Конечное число (int или float)

    Returns:
        Количество цифр после десятичной точки (0 для целых)

    Raises:
        ValueError: Если value NaN/Inf

    Examples:
        >>> fraction_digits(0.125)
        3
        >>> fraction_digits(1.5e-7)
        8
        >>> fraction_digits(1e21)
        0
    """
    if isinstance(value, int):
        return 0

    if not math.isfinite(value):
        raise ValueError(f"value must be finite, got {value}")

    # repr(float) — кратчайшая строка, однозначно восстанавливающая float
    exponent = Decimal(repr(value)).normalize().as_tuple().exponent
    return max(0, -exponent)


def to_non_exponential(value: Number) -> str:
    """
    Рендеринг числа в fixed-point строку (без научной нотации).

    Args:
        value: Конечное число (int или float)

    Returns:
        Строка вида "-0.00000025" с минимально необходимым числом
        дробных цифр

    Raises:
        ValueError: Если value NaN/Inf

    Examples:
        >>> to_non_exponential(1e-8)
        '0.00000001'
        >>> to_non_exponential(-2.5e-10)
        '-0.00000000025'
        >>> to_non_exponential(123.0)
        '123'
    """
    if isinstance(value, int):
        return str(value)

    digits = fraction_digits(value)
    rendered = f"{value:.{digits}f}"

    # -0.0 → "-0"
    if rendered.startswith("-") and value == 0:
        return rendered[1:]
    return rendered
