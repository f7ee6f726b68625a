"""
Contract Validation Module

Валидация JSON контрактов между formula-engine и host form layer.
"""

from .validators import (
    ContractValidator,
    EvaluationRequestValidator,
    EvaluationResultValidator,
    SchemaLoader,
    get_schema_loader,
    validate_evaluation_request,
    validate_evaluation_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EvaluationRequestValidator",
    "EvaluationResultValidator",
    # Functions
    "get_schema_loader",
    "validate_evaluation_request",
    "validate_evaluation_result",
]
