"""Chain Reducer — left-fold последовательности операндов через Operator Engine.

Цепочка хранит аккумулятор в явном ChainContext. Контекст неизменяем:
каждый вызов возвращает новый контекст, и вызывающий код сам передаёт его
в следующий вызов. Глобального или скрытого состояния нет.

Правила одного вызова reduce_chain(operands, operation, context):
1. Контекст не инициализирован → первый операнд становится seed
2. Контекст инициализирован и операндов > 1 → первый операнд заново
   задаёт базу (рестарт цепочки)
3. Остальные операнды сворачиваются слева направо:
   acc ← compute(acc, next, operation)
4. Результат и новый контекст возвращаются в ChainResult
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import BaseModel, model_validator

from src.core.contracts import validate_chain_request
from src.core.math.normalization import to_non_exponential
from src.core.math.operands import InvalidOperand, Number, RawOperand
from src.core.math.operators import (
    EngineConfig,
    Operation,
    compute,
    resolve_operand,
)

logger = logging.getLogger(__name__)


class ChainContext(BaseModel):
    """Аккумулятор одной цепочки вычислений."""

    value: Optional[Union[int, float]] = None
    initialized: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_seeded(self) -> "ChainContext":
        """Инициализированный контекст всегда содержит значение, и наоборот"""
        if self.initialized != (self.value is not None):
            raise ValueError(
                f"initialized={self.initialized} inconsistent with value={self.value!r}"
            )
        return self


@dataclass(frozen=True)
class ChainResult:
    """Результат reduce_chain."""

    value: Number
    context: ChainContext

    @property
    def text(self) -> str:
        """Значение в fixed-point нотации (без 1e-08)."""
        return to_non_exponential(self.value)


def reduce_chain(
    operands: Sequence[RawOperand],
    operation: Union[Operation, str],
    context: Optional[ChainContext] = None,
    config: Optional[EngineConfig] = None,
) -> ChainResult:
    """Свёртка операндов через одну операцию с учётом аккумулятора.

    Args:
        operands: Упорядоченные операнды (числа или percent-строки)
        operation: Тег операции
        context: Аккумулятор цепочки (None → новая цепочка)
        config: Конфигурация Operator Engine

    Returns:
        ChainResult(value, context) — context передаётся в следующий вызов

    Raises:
        UnsupportedOperation: Если тег операции неизвестен
        InvalidOperand: Если операнд не разбирается или новая цепочка
            вызвана без операндов
    """
    op = Operation.parse(operation)
    context = context or ChainContext()
    pending = list(operands)

    if not context.initialized:
        if not pending:
            raise InvalidOperand("Cannot seed a chain from an empty operand sequence")
        accumulator = resolve_operand(pending.pop(0))
    elif len(pending) > 1:
        accumulator = resolve_operand(pending.pop(0))
        logger.debug("chain restarted from %r", accumulator)
    else:
        accumulator = context.value

    for operand in pending:
        result = compute(accumulator, operand, op, config)
        logger.debug("%s(%r, %r) = %r", op.value, accumulator, operand, result)
        accumulator = result

    return ChainResult(
        value=accumulator,
        context=ChainContext(value=accumulator, initialized=True),
    )


def compute_chain(
    operands: Sequence[RawOperand],
    operation: Union[Operation, str],
    config: Optional[EngineConfig] = None,
) -> Number:
    """Свёртка операндов в новой цепочке.

    Examples:
        >>> compute_chain([0.1, 0.2], "add")
        0.3
        >>> compute_chain([0.1, 0.2, 0.3], "add")
        0.6
        >>> compute_chain(["50%", 200], "multiply")
        100
    """
    return reduce_chain(operands, operation, config=config).value


def compute_chain_request(payload: Dict[str, Any]) -> Number:
    """Вычисление chain_request контракта.

    Args:
        payload: {"operation": ..., "operands": [...], "strict_subtract": bool}

    Raises:
        jsonschema.ValidationError: Если payload не соответствует схеме
    """
    validate_chain_request(payload)
    config = EngineConfig(strict_subtract=payload.get("strict_subtract", False))
    return compute_chain(payload["operands"], payload["operation"], config=config)


class Calculator:
    """Fluent обёртка над одной цепочкой.

    Example:
        >>> Calculator().add(0.1, 0.2).multiply(3).value
        0.9

    Экземпляр — одна логическая цепочка; не разделяйте его между потоками.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._context = ChainContext()

    @property
    def context(self) -> ChainContext:
        return self._context

    @property
    def value(self) -> Optional[Number]:
        return self._context.value

    @property
    def text(self) -> Optional[str]:
        if self._context.value is None:
            return None
        return to_non_exponential(self._context.value)

    def reset(self) -> "Calculator":
        self._context = ChainContext()
        return self

    def apply(self, operation: Union[Operation, str], *operands: RawOperand) -> "Calculator":
        result = reduce_chain(operands, operation, self._context, self.config)
        self._context = result.context
        return self

    def add(self, *operands: RawOperand) -> "Calculator":
        return self.apply(Operation.ADD, *operands)

    def subtract(self, *operands: RawOperand) -> "Calculator":
        return self.apply(Operation.SUBTRACT, *operands)

    def multiply(self, *operands: RawOperand) -> "Calculator":
        return self.apply(Operation.MULTIPLY, *operands)

    def divide(self, *operands: RawOperand) -> "Calculator":
        return self.apply(Operation.DIVIDE, *operands)

    def mod(self, *operands: RawOperand) -> "Calculator":
        return self.apply(Operation.MOD, *operands)
