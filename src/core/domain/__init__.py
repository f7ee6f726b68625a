"""
Domain models.

Модели обмена с host form layer: запрос на вычисление формулы и ответ.
"""

from src.core.domain.evaluation import (
    MAX_DIVISION_SCALE,
    MAX_EXPRESSION_LENGTH,
    EvaluationFailure,
    EvaluationOptions,
    EvaluationRequest,
    EvaluationResponse,
    EvaluationStatus,
)

__all__ = [
    # Evaluation
    "EvaluationStatus",
    "EvaluationOptions",
    "EvaluationRequest",
    "EvaluationFailure",
    "EvaluationResponse",
    # Constants
    "MAX_EXPRESSION_LENGTH",
    "MAX_DIVISION_SCALE",
]
