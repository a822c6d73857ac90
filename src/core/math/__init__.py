"""
Core math modules для exactcalc

Точная десятичная арифметика через целочисленные (mantissa, scale) пары.
"""

# Decimal Normalizer
from src.core.math.normalization import (
    fraction_digits,
    to_non_exponential,
)

# Operands
from src.core.math.operands import (
    PERCENT_MARKER,
    ExactArithmeticError,
    InvalidOperand,
    Operand,
    OperandKind,
    parse_decimal_literal,
)

# Decomposition
from src.core.math.decomposition import (
    DecimalValue,
    decompose_number,
)

# Operator Engine
from src.core.math.operators import (
    PERCENT_DIVISOR,
    EngineConfig,
    Operation,
    UnsupportedOperation,
    compute,
    decompose,
    resolve_operand,
    resolve_percent,
)

__all__ = [
    # Normalizer
    "fraction_digits",
    "to_non_exponential",
    # Operands — Constants
    "PERCENT_MARKER",
    # Operands — Exceptions
    "ExactArithmeticError",
    "InvalidOperand",
    # Operands — Types
    "Operand",
    "OperandKind",
    # Operands — Functions
    "parse_decimal_literal",
    # Decomposition
    "DecimalValue",
    "decompose_number",
    # Operator Engine — Constants
    "PERCENT_DIVISOR",
    # Operator Engine — Exceptions
    "UnsupportedOperation",
    # Operator Engine — Types
    "EngineConfig",
    "Operation",
    # Operator Engine — Functions
    "compute",
    "decompose",
    "resolve_operand",
    "resolve_percent",
]
