"""
Operator Engine — точные арифметические операции над десятичными операндами

Оба операнда раскладываются в (M1, S1), (M2, S2), операция выполняется
над целыми числами, результат масштабируется обратно:

    add       (M1 + M2 × S1/S2) / S1           (выравнивание по max scale)
    subtract  M1 - M2 при равных scale, иначе как add (см. ниже)
    multiply  (M1 × M2) / (S1 × S2)
    divide    (M1 / M2) × (S2 / S1), при нецелых отношениях — через multiply
    mod       (M1 rem (raw_second × max_scale)) / max_scale

Так 0.1 + 0.2 = 0.3, а не 0.30000000000000004.

ОСОБЕННОСТИ ПОВЕДЕНИЯ (сохранены намеренно, на них могут опираться вызовы):
1. subtract при разных scale СКЛАДЫВАЕТ выровненные мантиссы, как add.
   Корректное вычитание включается через EngineConfig(strict_subtract=True).
2. mod использует raw второй операнд (разрешённое число), а не его мантиссу.
3. Деление на нулевую мантиссу даёт IEEE семантику (±inf / nan), без исключений.

Результат: int, если точное частное целое, иначе ближайший float.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional, Union

from src.core.math.decomposition import DecimalValue, decompose_number
from src.core.math.operands import (
    ExactArithmeticError,
    Number,
    Operand,
    OperandKind,
    RawOperand,
)

logger = logging.getLogger(__name__)


# Делитель percent-литерала: "50%" = 50 / 100
PERCENT_DIVISOR: Final[int] = 100


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedOperation(ExactArithmeticError, ValueError):
    """Тег операции не входит в {add, subtract, multiply, divide, mod}."""

    pass


# =============================================================================
# OPERATION & CONFIG
# =============================================================================


class Operation(str, Enum):
    """Тег арифметической операции"""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MOD = "mod"

    @classmethod
    def parse(cls, tag: Union["Operation", str]) -> "Operation":
        """
        Разбор тега операции.

        Raises:
            UnsupportedOperation: Если тег неизвестен
        """
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedOperation(
                f"Unsupported operation {tag!r}, expected one of "
                f"{[op.value for op in cls]}"
            ) from None


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация Operator Engine."""

    # True: при разных scale subtract действительно вычитает выровненные мантиссы.
    # False (default): воспроизводится исторический результат (сложение).
    strict_subtract: bool = False


_DEFAULT_CONFIG: Final[EngineConfig] = EngineConfig()


# =============================================================================
# INTEGER HELPERS
# =============================================================================


def _is_integral(value: Number) -> bool:
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def _quotient(numerator: Number, denominator: Number) -> Number:
    """Точное частное: int при делении нацело, IEEE семантика при нулевом делителе."""
    if denominator == 0:
        if numerator == 0 or (isinstance(numerator, float) and math.isnan(numerator)):
            return math.nan
        return math.inf if numerator > 0 else -math.inf

    if (
        isinstance(numerator, int)
        and isinstance(denominator, int)
        and numerator % denominator == 0
    ):
        return numerator // denominator

    return numerator / denominator


def _remainder(dividend: int, divisor: Number) -> Number:
    """Остаток со знаком делимого (truncated), nan при нулевом делителе."""
    if divisor == 0:
        return math.nan

    if isinstance(divisor, int):
        remainder = abs(dividend) % abs(divisor)
        return -remainder if dividend < 0 else remainder

    return math.fmod(dividend, divisor)


# =============================================================================
# PERCENT RESOLVER & DECOMPOSER
# =============================================================================


def resolve_percent(operand: Operand) -> Number:
    """
    Percent-литерал → число, через алгоритм divide.

    Examples:
        >>> resolve_percent(Operand.percent(50))
        0.5
        >>> resolve_percent(Operand.percent(12.5))
        0.125
    """
    return _divide(decompose_number(operand.value), DecimalValue(PERCENT_DIVISOR, 1))


def resolve_operand(raw: RawOperand) -> Number:
    """
    Raw операнд → число (percent разрешается, число возвращается как есть).

    Raises:
        InvalidOperand: Если raw не является допустимым операндом
    """
    operand = Operand.parse(raw)
    if operand.kind is OperandKind.PERCENT:
        return resolve_percent(operand)
    return operand.value


def decompose(raw: RawOperand) -> DecimalValue:
    """
    Единая точка получения точного (mantissa, scale) для любого операнда.

    Examples:
        >>> decompose("25%")
        DecimalValue(mantissa=25, scale=100)
        >>> decompose(3)
        DecimalValue(mantissa=3, scale=1)
    """
    return decompose_number(resolve_operand(raw))


# =============================================================================
# OPERATION ALGORITHMS
# =============================================================================


def _add(first: DecimalValue, second: DecimalValue) -> Number:
    max_scale = max(first.scale, second.scale)

    if first.scale == second.scale:
        combined = first.mantissa + second.mantissa
    elif first.scale > second.scale:
        combined = first.mantissa + second.mantissa * (first.scale // second.scale)
    else:
        combined = second.mantissa + first.mantissa * (second.scale // first.scale)

    return _quotient(combined, max_scale)


def _subtract(first: DecimalValue, second: DecimalValue, strict: bool) -> Number:
    if first.scale == second.scale:
        return _quotient(first.mantissa - second.mantissa, first.scale)

    if strict:
        max_scale = max(first.scale, second.scale)
        combined = (
            first.mantissa * (max_scale // first.scale)
            - second.mantissa * (max_scale // second.scale)
        )
        return _quotient(combined, max_scale)

    logger.debug(
        "subtract with misaligned scales %d/%d combines mantissas additively",
        first.scale,
        second.scale,
    )
    return _add(first, second)


def _multiply(first: DecimalValue, second: DecimalValue) -> Number:
    return _quotient(first.mantissa * second.mantissa, first.scale * second.scale)


def _divide(first: DecimalValue, second: DecimalValue) -> Number:
    """
    Деление через отношения мантисс и scale.

    Если оба отношения целые — результат их произведение. Иначе
    отношения раскладываются заново и перемножаются (0.7 / 10 → 0.7 × 0.1).
    Повтор ровно один: multiply сам не делит, поэтому рекурсии нет.
    """
    if second.mantissa == 0:
        return _quotient(first.mantissa, 0)

    mantissa_ratio = _quotient(first.mantissa, second.mantissa)
    scale_ratio = _quotient(second.scale, first.scale)

    if _is_integral(mantissa_ratio) and _is_integral(scale_ratio):
        return int(mantissa_ratio) * int(scale_ratio)

    return _multiply(decompose_number(mantissa_ratio), decompose_number(scale_ratio))


def _mod(first: DecimalValue, second: DecimalValue, raw_second: Number) -> Number:
    max_scale = max(first.scale, second.scale)
    remainder = _remainder(first.mantissa, raw_second * max_scale)
    return _quotient(remainder, max_scale)


# =============================================================================
# ENGINE
# =============================================================================


def compute(
    first: RawOperand,
    second: RawOperand,
    operation: Union[Operation, str],
    config: Optional[EngineConfig] = None,
) -> Number:
    """
    Точная операция над двумя операндами.

    Args:
        first: Левый операнд (число или percent-строка)
        second: Правый операнд (число или percent-строка)
        operation: Тег операции (Operation или строка "add", ...)
        config: Конфигурация движка (default: EngineConfig())

    Returns:
        Точный результат: int или ближайший float

    Raises:
        UnsupportedOperation: Если тег операции неизвестен
        InvalidOperand: Если операнд не может быть разобран

    Examples:
        >>> compute(0.1, 0.2, "add")
        0.3
        >>> compute(1.1, 2, "multiply")
        2.2
        >>> compute("50%", 200, Operation.MULTIPLY)
        100
        >>> compute(10, 3, "mod")
        1
    """
    op = Operation.parse(operation)
    config = config or _DEFAULT_CONFIG

    left = decompose(first)
    second_number = resolve_operand(second)
    right = decompose_number(second_number)

    if op is Operation.ADD:
        return _add(left, right)
    if op is Operation.SUBTRACT:
        return _subtract(left, right, strict=config.strict_subtract)
    if op is Operation.MULTIPLY:
        return _multiply(left, right)
    if op is Operation.DIVIDE:
        return _divide(left, right)
    return _mod(left, right, raw_second=second_number)
