"""
Tokens — лексические атомы выражения

Immutable Pydantic модель Token и таблицы операторов (приоритет,
ассоциативность), общие для Tokenizer, ShuntingYard и RpnEvaluator.
"""

from enum import Enum
from typing import Final, Union

from pydantic import BaseModel, Field


# =============================================================================
# CHARACTERS
# =============================================================================

PLUS: Final[str] = "+"
MINUS: Final[str] = "-"
MULT: Final[str] = "*"
DIV: Final[str] = "/"
POW: Final[str] = "^"
MOD: Final[str] = "%"

ARG_SEPARATOR: Final[str] = ","
FLOAT_POINT: Final[str] = "."

PAREN_LEFT: Final[str] = "("
PAREN_RIGHT: Final[str] = ")"

DIGITS: Final[str] = "0123456789"

OPERATORS: Final[frozenset[str]] = frozenset({PLUS, MINUS, MULT, DIV, POW, MOD})


# =============================================================================
# PRECEDENCE & ASSOCIATIVITY
# =============================================================================

# Больший приоритет связывает сильнее
OPERATOR_PRECEDENCE: Final[dict[str, int]] = {
    POW: 6,
    MULT: 4,
    DIV: 4,
    MOD: 2,
    PLUS: 1,
    MINUS: 1,
}

RIGHT_ASSOCIATIVE_OPERATORS: Final[frozenset[str]] = frozenset({POW})

# Унарное отрицание "-(...)" и "-func(...)": сильнее * / %, слабее ^
# (-(2)^2 → -4, 2/-(4) → -0.5)
NEGATION_PRECEDENCE: Final[int] = 5


def operator_precedence(operator: str) -> int:
    """
    Приоритет оператора.

    Raises:
        ValueError: неизвестный оператор
    """
    try:
        return OPERATOR_PRECEDENCE[operator]
    except KeyError:
        raise ValueError(f"Cannot check precedence of {operator!r} operator") from None


def is_left_associative(operator: str) -> bool:
    """
    Левая ассоциативность оператора (все, кроме ^).

    Raises:
        ValueError: неизвестный оператор
    """
    if operator not in OPERATORS:
        raise ValueError(f"Cannot check association of {operator!r} operator")
    return operator not in RIGHT_ASSOCIATIVE_OPERATORS


# =============================================================================
# TOKEN
# =============================================================================


class TokenKind(str, Enum):
    """Вид токена"""

    NUMBER = "number"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    ARG_SEPARATOR = "arg_separator"
    FUNCTION = "function"
    NEGATION = "negation"


class Token(BaseModel):
    """
    Лексический токен.

    synthetic=True для "*", вставленного токенизатором (неявное умножение).
    NEGATION — унарный минус перед "(" или именем функции.
    """

    kind: TokenKind = Field(..., description="Вид токена")
    text: str = Field(..., min_length=1, description="Текст токена")
    position: int = Field(..., ge=0, description="Смещение в исходном выражении")
    synthetic: bool = Field(False, description="Вставлен токенизатором")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.text


# Элемент RPN очереди: числовой литерал уже разобран в native число
RpnItem = Union[int, float, Token]
