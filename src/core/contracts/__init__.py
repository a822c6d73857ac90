"""
Contract Validation Module

Модуль для валидации JSON контрактов запросов к движку точной арифметики.
"""

from .validators import (
    ChainRequestValidator,
    ContractValidator,
    SchemaLoader,
    validate_chain_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ChainRequestValidator",
    # Functions
    "validate_chain_request",
]
