"""Chain — свёртка последовательностей операндов через точную арифметику.

- ChainContext: явный неизменяемый аккумулятор цепочки
- reduce_chain / compute_chain: left-fold через Operator Engine
- Calculator: fluent обёртка над одной цепочкой
"""

from .reducer import (
    Calculator,
    ChainContext,
    ChainResult,
    compute_chain,
    compute_chain_request,
    reduce_chain,
)

__all__ = [
    "Calculator",
    "ChainContext",
    "ChainResult",
    "compute_chain",
    "compute_chain_request",
    "reduce_chain",
]
