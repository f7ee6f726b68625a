"""
Тесты для ShuntingYard

Проверяет:
1. Приоритеты ^ > * / > % > + -
2. Правую ассоциативность ^ и левую у остальных
3. Скобки и вызовы функций с несколькими аргументами
4. Унарное отрицание между * / % и ^
5. Разбор числовых литералов в int / float
6. Синтаксические ошибки
"""

import pytest

from src.expression.exceptions import ExpressionSyntaxError
from src.expression.shunting_yard import ShuntingYard, parse_number_literal, to_postfix
from src.expression.tokenizer import tokenize
from src.expression.tokens import (
    Token,
    TokenKind,
    is_left_associative,
    operator_precedence,
)

FUNCTIONS = ["sqrt", "log", "max_of"]


def rpn(expression: str) -> str:
    tokens = tokenize(expression, FUNCTIONS)
    return " ".join(str(item) for item in to_postfix(tokens, FUNCTIONS))


class TestOperatorTable:
    """Приоритеты и ассоциативность"""

    def test_precedence_order(self) -> None:
        """^ > * = / > % > + = -"""
        assert operator_precedence("^") > operator_precedence("*")
        assert operator_precedence("*") == operator_precedence("/")
        assert operator_precedence("/") > operator_precedence("%")
        assert operator_precedence("%") > operator_precedence("+")
        assert operator_precedence("+") == operator_precedence("-")

    def test_associativity(self) -> None:
        """Только ^ правоассоциативен"""
        assert not is_left_associative("^")
        for operator in "+-*/%":
            assert is_left_associative(operator)

    @pytest.mark.parametrize("check", [operator_precedence, is_left_associative])
    def test_unknown_operator(self, check) -> None:
        """Неизвестный оператор"""
        with pytest.raises(ValueError, match="Cannot check"):
            check("&")


class TestConversion:
    """Перевод в RPN"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("3+4*2", "3 4 2 * +"),
            ("3*4+2", "3 4 * 2 +"),
            ("(3+4)*2", "3 4 + 2 *"),
            ("10-4-3", "10 4 - 3 -"),
            ("16/4/2", "16 4 / 2 /"),
            ("2^3^2", "2 3 2 ^ ^"),
            ("2*3^2", "2 3 2 ^ *"),
            ("7+8%3", "7 8 3 % +"),
            ("8*3%5", "8 3 * 5 %"),
            ("8%3*5", "8 3 5 * %"),
        ],
    )
    def test_operators(self, expression, expected) -> None:
        """Приоритеты и ассоциативность в выходной очереди"""
        assert rpn(expression) == expected

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("sqrt(16)", "16 sqrt"),
            ("log(2,8)", "2 8 log"),
            ("log(2,4*2)+1", "2 4 2 * log 1 +"),
            ("sqrt(sqrt(16))", "16 sqrt sqrt"),
            ("3sqrt(16)", "3 16 sqrt *"),
            ("max_of(1+2,log(2,8))", "1 2 + 2 8 log max_of"),
        ],
    )
    def test_functions(self, expression, expected) -> None:
        """Функции уходят в очередь после своих аргументов"""
        assert rpn(expression) == expected

    def test_numbers_are_parsed(self) -> None:
        """Литералы в очереди — int и float"""
        queue = to_postfix(tokenize("12+0.5"))
        assert queue[0] == 12 and isinstance(queue[0], int)
        assert queue[1] == 0.5 and isinstance(queue[1], float)
        assert isinstance(queue[2], Token)
        assert queue[2].kind == TokenKind.OPERATOR

    def test_without_function_check(self) -> None:
        """function_names=None — имена функций не проверяются"""
        tokens = tokenize("sqrt(4)", ["sqrt"])
        assert [str(item) for item in ShuntingYard().to_postfix(tokens)] == ["4", "sqrt"]


class TestNegation:
    """Унарный минус перед "(" и функцией"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("-(2+3)", "2 3 + -"),
            ("2/-(4)", "2 4 - /"),
            ("8/-(2+2)", "8 2 2 + - /"),
            ("2^-(2)", "2 2 - ^"),
            ("2^-sqrt(4)", "2 4 sqrt - ^"),
            ("-(2)^2", "2 2 ^ -"),
            ("-(2)*3", "2 - 3 *"),
            ("-sqrt(16)+1", "16 sqrt - 1 +"),
            ("10%-(3)", "10 3 - %"),
        ],
    )
    def test_negation_binding(self, expression, expected) -> None:
        """Сильнее * / %, слабее ^"""
        assert rpn(expression) == expected

    def test_negation_token_in_queue(self) -> None:
        """Отрицание остаётся NEGATION токеном"""
        queue = to_postfix(tokenize("2/-(4)"))
        assert [item.kind for item in queue[2:]] == [TokenKind.NEGATION, TokenKind.OPERATOR]


class TestNumberLiterals:
    """parse_number_literal"""

    @pytest.mark.parametrize(
        "text, expected",
        [("42", 42), ("-7", -7), ("2.", 2.0), (".5", 0.5), ("-1.25", -1.25)],
    )
    def test_parse(self, text, expected) -> None:
        """Целое без точки, float с точкой"""
        value = parse_number_literal(Token(kind=TokenKind.NUMBER, text=text, position=0))
        assert value == expected
        assert isinstance(value, float) == ("." in text)

    def test_long_integer_literal(self) -> None:
        """Целый литерал длиннее лимита int(str) разбирается точно"""
        token = Token(kind=TokenKind.NUMBER, text="9" * 5000, position=3)
        assert parse_number_literal(token) == 10**5000 - 1


class TestSyntaxErrors:
    """Синтаксические ошибки"""

    @pytest.mark.parametrize("expression, position", [("(1+2", 0), ("1+2)", 3), ("((1)", 0)])
    def test_unbalanced_parentheses(self, expression, position) -> None:
        """Несбалансированные скобки"""
        with pytest.raises(ExpressionSyntaxError, match="unbalanced parentheses") as exc_info:
            rpn(expression)
        assert exc_info.value.position == position

    def test_misplaced_separator(self) -> None:
        """Запятая вне скобок"""
        with pytest.raises(ExpressionSyntaxError, match="misplaced argument separator") as exc_info:
            rpn("1,2")
        assert exc_info.value.position == 1

    def test_unknown_function(self) -> None:
        """Функция, которой нет в списке допустимых"""
        tokens = tokenize("ln(2)", ["ln"])
        with pytest.raises(ExpressionSyntaxError, match="unknown function 'ln'"):
            to_postfix(tokens, FUNCTIONS)
