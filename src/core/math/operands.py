"""
Operand — входной операнд арифметического движка

Операнд приходит снаружи в одном из двух видов:
- обычное число (int / float / числовая строка)
- percent-литерал "<decimal>%" (например, "50%" = 0.5)

Raw значение разбирается РОВНО ОДИН РАЗ в tagged variant `Operand`
на границе декомпозиции. Дальше код ветвится по `Operand.kind`
и никогда не ищет "%" в строках повторно.
"""

import math
import re
from enum import Enum
from typing import Final, Union

from pydantic import BaseModel

Number = Union[int, float]
RawOperand = Union[int, float, str, "Operand"]

# Маркер процента в литерале
PERCENT_MARKER: Final[str] = "%"

# Десятичный литерал: 12, -0.5, .5, 1e-8, +3.
_DECIMAL_LITERAL: Final = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_LITERAL: Final = re.compile(r"^[+-]?\d+$")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ExactArithmeticError(Exception):
    """Базовая ошибка точной десятичной арифметики."""

    pass


class InvalidOperand(ExactArithmeticError, ValueError):
    """
    Операнд не может быть разобран.

    Примеры: "abc%", "%", NaN/Inf, bool, None, пустая последовательность
    операндов для неинициализированной цепочки.
    """

    pass


# =============================================================================
# OPERAND
# =============================================================================


class OperandKind(str, Enum):
    """Вид операнда"""

    NUMBER = "NUMBER"
    PERCENT = "PERCENT"


def parse_decimal_literal(text: str) -> Number:
    """
    Разбор десятичного литерала в число.

    Целые литералы дают int (без потери точности), остальные — float.

    Args:
        text: Литерал без маркера процента

    Returns:
        int или float

    Raises:
        InvalidOperand: Если строка не является конечным десятичным литералом
    """
    literal = text.strip()

    if _INTEGER_LITERAL.match(literal):
        return int(literal)

    if not _DECIMAL_LITERAL.match(literal):
        raise InvalidOperand(f"Not a decimal literal: {text!r}")

    value = float(literal)
    if not math.isfinite(value):
        raise InvalidOperand(f"Decimal literal overflows float range: {text!r}")
    return value


class Operand(BaseModel):
    """
    Tagged variant операнда.

    Для PERCENT `value` хранит литерал ДО деления на 100
    ("50%" → kind=PERCENT, value=50). Деление выполняет Percent Resolver
    через алгоритм divide, а не через float деление.
    """

    kind: OperandKind
    value: Union[int, float]

    model_config = {"frozen": True}

    @classmethod
    def number(cls, value: Number) -> "Operand":
        return cls(kind=OperandKind.NUMBER, value=value)

    @classmethod
    def percent(cls, value: Number) -> "Operand":
        return cls(kind=OperandKind.PERCENT, value=value)

    @classmethod
    def parse(cls, raw: RawOperand) -> "Operand":
        """
        Разбор raw значения в Operand.

        Args:
            raw: int, конечный float, числовая строка, percent-строка
                 "<decimal>%" или уже готовый Operand

        Returns:
            Operand

        Raises:
            InvalidOperand: Если raw не является допустимым операндом

        Examples:
            >>> Operand.parse("50%")
            Operand(kind=<OperandKind.PERCENT: 'PERCENT'>, value=50)
            >>> Operand.parse(0.1).kind
            <OperandKind.NUMBER: 'NUMBER'>
        """
        if isinstance(raw, Operand):
            return raw

        # bool — подкласс int, но как операнд не имеет смысла
        if isinstance(raw, bool):
            raise InvalidOperand(f"Boolean is not a numeric operand: {raw!r}")

        if isinstance(raw, int):
            return cls.number(raw)

        if isinstance(raw, float):
            if not math.isfinite(raw):
                raise InvalidOperand(f"Operand must be finite, got {raw}")
            return cls.number(raw)

        if isinstance(raw, str):
            text = raw.strip()
            if PERCENT_MARKER not in text:
                return cls.number(parse_decimal_literal(text))

            literal, marker, tail = text.partition(PERCENT_MARKER)
            if tail or not literal:
                raise InvalidOperand(f"Malformed percent literal: {raw!r}")
            return cls.percent(parse_decimal_literal(literal))

        raise InvalidOperand(f"Unsupported operand type {type(raw).__name__}: {raw!r}")
