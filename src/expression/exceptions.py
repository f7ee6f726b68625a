"""
Expression Exceptions — ошибки разбора и вычисления формул

Иерархия:
- ExpressionError: базовый класс (message, position, expression)
- LexicalError: недопустимый символ, литерал или последовательность операторов
- ExpressionSyntaxError: несбалансированные скобки, лишний разделитель аргументов
- EvaluationError: нехватка операндов, остаток на стеке, деление на ноль,
  ошибка пользовательской функции
- FunctionRegistrationError: дубликат или недопустимое имя функции
"""

from typing import Optional


class ExpressionError(Exception):
    """
    Базовая ошибка выражения.

    Attributes:
        message: Текст ошибки без позиции
        position: Смещение символа в выражении (если известно)
        expression: Исходная формула (заполняется FormulaCalculator)
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class LexicalError(ExpressionError):
    """Ошибка токенизации: символ, числовой литерал или пара операторов."""
    pass


class ExpressionSyntaxError(ExpressionError):
    """Ошибка структуры: скобки или разделитель аргументов вне вызова."""
    pass


class EvaluationError(ExpressionError):
    """
    Ошибка стековой машины.

    Поднимается при нехватке операндов оператора/функции, при остатке
    больше или меньше одного значения на стеке, при делении на ноль и при
    сбое пользовательской функции (исходная ошибка — в __cause__).
    """
    pass


class FunctionRegistrationError(ExpressionError):
    """Имя функции занято, недопустимо, или арность не определяется."""
    pass
