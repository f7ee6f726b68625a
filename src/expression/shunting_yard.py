"""
ShuntingYard — перевод инфиксной последовательности токенов в RPN

Алгоритм Дейкстры с явным стеком операторов и выходной очередью:
- NUMBER → в очередь (разобранным в int / float)
- FUNCTION → в стек
- "," → из стека в очередь до "("; нет "(" — ExpressionSyntaxError
- оператор → выталкиваются операторы стека с большим приоритетом
  (или равным, если текущий левоассоциативен), затем текущий в стек
- NEGATION → в стек без выталкивания (префиксный, левого операнда нет)
- "(" → в стек
- ")" → из стека в очередь до "(", "(" отбрасывается; функция на вершине
  стека уходит в очередь
- конец → остаток стека в очередь; оставшаяся "(" — ExpressionSyntaxError

Приоритеты: ^ = 6, унарный минус = 5, * / = 4, % = 2, + - = 1. ^ правоассоциативен.
"""

from typing import Iterable, Optional, Sequence

from src.core.math.backend import digits_to_int
from src.expression.exceptions import ExpressionSyntaxError
from src.expression.tokens import (
    FLOAT_POINT,
    NEGATION_PRECEDENCE,
    RpnItem,
    Token,
    TokenKind,
    is_left_associative,
    operator_precedence,
)


def parse_number_literal(token: Token) -> int | float:
    """Числовой литерал → int (без точки, любой длины) или float (с точкой)."""
    if FLOAT_POINT in token.text:
        return float(token.text)

    return digits_to_int(token.text)


class ShuntingYard:
    """Конвертер infix → postfix."""

    def to_postfix(
        self,
        tokens: Sequence[Token],
        function_names: Optional[Iterable[str]] = None,
    ) -> list[RpnItem]:
        """
        Перестановка токенов в обратную польскую запись.

        Args:
            tokens: Токены в инфиксном порядке (результат Tokenizer)
            function_names: Допустимые имена функций (None — без проверки)

        Returns:
            RPN очередь: числа и токены операторов/функций

        Raises:
            ExpressionSyntaxError: несбалансированные скобки, разделитель
                аргументов вне скобок, неизвестная функция
        """
        known_functions = set(function_names) if function_names is not None else None

        output: list[RpnItem] = []
        stack: list[Token] = []

        for token in tokens:
            kind = token.kind

            if kind == TokenKind.NUMBER:
                output.append(parse_number_literal(token))

            elif kind == TokenKind.FUNCTION:
                if known_functions is not None and token.text not in known_functions:
                    raise ExpressionSyntaxError(
                        f"unknown function '{token.text}'", token.position
                    )
                stack.append(token)

            elif kind == TokenKind.ARG_SEPARATOR:
                if not self._has_left_paren(stack):
                    raise ExpressionSyntaxError(
                        "misplaced argument separator", token.position
                    )
                while stack[-1].kind != TokenKind.LEFT_PAREN:
                    output.append(stack.pop())

            elif kind == TokenKind.OPERATOR:
                while stack and self._pops(token.text, stack[-1]):
                    output.append(stack.pop())
                stack.append(token)

            elif kind == TokenKind.NEGATION:
                stack.append(token)

            elif kind == TokenKind.LEFT_PAREN:
                stack.append(token)

            elif kind == TokenKind.RIGHT_PAREN:
                if not self._has_left_paren(stack):
                    raise ExpressionSyntaxError("unbalanced parentheses", token.position)
                while stack[-1].kind != TokenKind.LEFT_PAREN:
                    output.append(stack.pop())
                stack.pop()

                if stack and stack[-1].kind == TokenKind.FUNCTION:
                    output.append(stack.pop())

        while stack:
            token = stack.pop()
            if token.kind == TokenKind.LEFT_PAREN:
                raise ExpressionSyntaxError("unbalanced parentheses", token.position)
            output.append(token)

        return output

    @staticmethod
    def _pops(current: str, top: Token) -> bool:
        """Выталкивается ли вершина стека top перед помещением оператора current."""
        if top.kind == TokenKind.NEGATION:
            top_precedence = NEGATION_PRECEDENCE
        elif top.kind == TokenKind.OPERATOR:
            top_precedence = operator_precedence(top.text)
        else:
            return False

        current_precedence = operator_precedence(current)

        if is_left_associative(current) and current_precedence == top_precedence:
            return True
        return current_precedence < top_precedence

    @staticmethod
    def _has_left_paren(stack: list[Token]) -> bool:
        return any(token.kind == TokenKind.LEFT_PAREN for token in stack)


def to_postfix(
    tokens: Sequence[Token], function_names: Optional[Iterable[str]] = None
) -> list[RpnItem]:
    """Перевод в RPN (см. ShuntingYard.to_postfix)."""
    return ShuntingYard().to_postfix(tokens, function_names)
