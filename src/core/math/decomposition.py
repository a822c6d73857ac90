"""
Mantissa/Scale Decomposition — точное целочисленное представление десятичных чисел

Любое десятичное значение с ограниченным числом значащих цифр
представляется парой (mantissa, scale):

    value = mantissa / scale,  scale ∈ {1, 10, 100, ...}

    0.11   → DecimalValue(mantissa=11, scale=100)
    -0.5   → DecimalValue(mantissa=-5, scale=10)
    42     → DecimalValue(mantissa=42, scale=1)

ИНВАРИАНТЫ:
1. scale >= 1 и scale — степень десяти
2. Из двух scale больший всегда кратен меньшему (выравнивание в add/subtract)
3. mantissa / scale восстанавливает исходный float точно
   (для литералов с <= 15 значащими цифрами)

Percent-операнды сюда не попадают: их разрешает operators.resolve_percent.
"""

import math
from typing import NamedTuple

from src.core.math.normalization import to_non_exponential
from src.core.math.operands import InvalidOperand, Number


class DecimalValue(NamedTuple):
    """Точное значение mantissa ÷ scale."""

    mantissa: int  # Целый числитель (со знаком)
    scale: int  # Знаменатель, степень десяти

    @property
    def value(self) -> Number:
        """Значение пары: int если делится нацело, иначе ближайший float."""
        if self.mantissa % self.scale == 0:
            return self.mantissa // self.scale
        return self.mantissa / self.scale


def decompose_number(value: Number) -> DecimalValue:
    """
    Разложение числа в пару (mantissa, scale).

    Алгоритм:
    1. Целое (включая integral float) → (value, 1)
    2. Иначе: fixed-point рендеринг через Normalizer, d = число цифр
       после точки, scale = 10^d
    3. mantissa = цифры нормализованной строки без точки
       (то же, что round(value × scale), но без float умножения)

    Args:
        value: Конечное число

    Returns:
        DecimalValue

    Raises:
        InvalidOperand: Если value NaN/Inf или не число

    Examples:
        >>> decompose_number(0.11)
        DecimalValue(mantissa=11, scale=100)
        >>> decompose_number(1e-8)
        DecimalValue(mantissa=1, scale=100000000)
        >>> decompose_number(7.0)
        DecimalValue(mantissa=7, scale=1)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidOperand(f"Cannot decompose non-numeric value: {value!r}")

    if isinstance(value, int):
        return DecimalValue(mantissa=value, scale=1)

    if not math.isfinite(value):
        raise InvalidOperand(f"Cannot decompose non-finite value: {value}")

    if value.is_integer():
        return DecimalValue(mantissa=int(value), scale=1)

    fixed = to_non_exponential(value)
    _, _, fraction = fixed.partition(".")

    return DecimalValue(
        mantissa=int(fixed.replace(".", "")),
        scale=10 ** len(fraction),
    )
