"""
Evaluation — модели обмена с host form layer

Схемы: contracts/schema/evaluation_request.json, evaluation_result.json

Immutable Pydantic модели запроса на вычисление формулы и ответа.
Формула приходит с уже подставленными значениями полей ({field} → число).
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# CONSTANTS
# =============================================================================

# Максимальная длина формулы в запросе
MAX_EXPRESSION_LENGTH: Final[int] = 10_000

# Максимальный division_scale, принимаемый от host layer
MAX_DIVISION_SCALE: Final[int] = 1_000


# =============================================================================
# ENUMS
# =============================================================================


class EvaluationStatus(str, Enum):
    """Итог вычисления"""

    OK = "ok"
    ERROR = "error"


# =============================================================================
# REQUEST
# =============================================================================


class EvaluationOptions(BaseModel):
    """
    Переопределения EvaluatorConfig для одного запроса.

    None — использовать значение конфигурации калькулятора.
    """

    division_scale: int | None = Field(
        None, ge=0, le=MAX_DIVISION_SCALE, description="Знаков после точки при делении"
    )
    exact_modulo: bool | None = Field(None, description="Точный остаток BigDecimal")

    model_config = {"frozen": True}


class EvaluationRequest(BaseModel):
    """Запрос на вычисление формулы."""

    expression: str = Field(
        ..., min_length=1, max_length=MAX_EXPRESSION_LENGTH, description="Формула"
    )
    options: EvaluationOptions = Field(
        default_factory=EvaluationOptions, description="Параметры вычисления"
    )

    model_config = {"frozen": True}


# =============================================================================
# RESPONSE
# =============================================================================


class EvaluationFailure(BaseModel):
    """Описание ошибки вычисления."""

    kind: str = Field(..., min_length=1, description="Имя класса ошибки")
    message: str = Field(..., description="Текст ошибки")
    position: int | None = Field(None, ge=0, description="Позиция в формуле")

    model_config = {"frozen": True}


class EvaluationResponse(BaseModel):
    """
    Ответ на запрос вычисления.

    status="ok" → заполнен result; status="error" → заполнен error.
    """

    status: EvaluationStatus = Field(..., description="Итог вычисления")
    expression: str = Field(..., description="Исходная формула")
    result: int | float | None = Field(None, description="Значение формулы")
    error: EvaluationFailure | None = Field(None, description="Ошибка")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_status_payload(self) -> "EvaluationResponse":
        """Проверка согласованности status с result/error"""
        if self.status == EvaluationStatus.OK:
            if self.result is None or self.error is not None:
                raise ValueError("status 'ok' requires result and no error")
        else:
            if self.error is None or self.result is not None:
                raise ValueError("status 'error' requires error and no result")
        return self
