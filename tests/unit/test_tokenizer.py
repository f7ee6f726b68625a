"""
Тесты для Tokenizer

Проверяет:
1. Числовые литералы и буфер
2. Унарный минус в допустимых позициях
3. Неявное умножение перед "(" и функцией
4. Функции (сопоставление от длинного имени)
5. Лексические ошибки с позицией
"""

import pytest
from pydantic import ValidationError

from src.expression.exceptions import LexicalError
from src.expression.tokenizer import Tokenizer, tokenize
from src.expression.tokens import Token, TokenKind

FUNCTIONS = ["sqrt", "log", "fn_day", "fn_day_of_year"]


def texts(expression: str, function_names=FUNCTIONS) -> list[str]:
    return [token.text for token in tokenize(expression, function_names)]


class TestNumbers:
    """Числовые литералы"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("42", ["42"]),
            ("3.14", ["3.14"]),
            (".5", [".5"]),
            ("2.", ["2."]),
            ("-7", ["-7"]),
            ("1+2", ["1", "+", "2"]),
            ("  12  *  3 ", ["12", "*", "3"]),
        ],
    )
    def test_literals(self, expression, expected) -> None:
        """Литералы и пробелы"""
        assert texts(expression) == expected

    def test_token_kinds_and_positions(self) -> None:
        """Вид и позиция каждого токена"""
        tokens = Tokenizer().tokenize("12+(3)")
        assert [(t.kind, t.text, t.position) for t in tokens] == [
            (TokenKind.NUMBER, "12", 0),
            (TokenKind.OPERATOR, "+", 2),
            (TokenKind.LEFT_PAREN, "(", 3),
            (TokenKind.NUMBER, "3", 4),
            (TokenKind.RIGHT_PAREN, ")", 5),
        ]

    def test_tokens_are_immutable(self) -> None:
        """Token — frozen модель"""
        token = tokenize("1")[0]
        assert isinstance(token, Token)
        with pytest.raises(ValidationError):
            token.text = "2"

    @pytest.mark.parametrize("expression", ["1.2.3", "1..2", "."])
    def test_invalid_literal(self, expression) -> None:
        """Более одной точки или пустой литерал"""
        with pytest.raises(LexicalError, match="invalid numeric literal"):
            tokenize(expression)

    def test_adjacent_literals(self) -> None:
        """Два числа подряд"""
        with pytest.raises(LexicalError, match="adjacent numeric literals") as exc_info:
            tokenize("3 4")
        assert exc_info.value.position == 2


class TestUnaryMinus:
    """Унарный минус"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("-3+2", ["-3", "+", "2"]),
            ("3*-2", ["3", "*", "-2"]),
            ("3--2", ["3", "-", "-2"]),
            ("2^-1", ["2", "^", "-1"]),
            ("(-4)", ["(", "-4", ")"]),
            ("log(2,-8)", ["log", "(", "2", ",", "-8", ")"]),
            ("3 * - 2", ["3", "*", "-2"]),
            ("3-2", ["3", "-", "2"]),
            ("(1)-2", ["(", "1", ")", "-", "2"]),
        ],
    )
    def test_unary_positions(self, expression, expected) -> None:
        """Минус сливается с литералом только в унарной позиции"""
        assert texts(expression) == expected

    def test_negated_group(self) -> None:
        """-(...) → NEGATION токен перед скобкой"""
        tokens = tokenize("-(2+3)")
        assert [t.text for t in tokens] == ["-", "(", "2", "+", "3", ")"]
        assert tokens[0].kind == TokenKind.NEGATION
        assert tokens[0].position == 0
        assert not tokens[0].synthetic

    def test_negated_function(self) -> None:
        """-sqrt(4) → NEGATION, без вставленного умножения"""
        assert texts("-sqrt(4)") == ["-", "sqrt", "(", "4", ")"]
        tokens = tokenize("2*-sqrt(4)", FUNCTIONS)
        assert [t.kind for t in tokens[:4]] == [
            TokenKind.NUMBER,
            TokenKind.OPERATOR,
            TokenKind.NEGATION,
            TokenKind.FUNCTION,
        ]

    @pytest.mark.parametrize("expression", ["2/-(4)", "2^-(2)", "10%-(3)", "log(2,-(8))"])
    def test_negation_after_operator_or_separator(self, expression) -> None:
        """NEGATION после оператора и разделителя, без литерала -1"""
        tokens = tokenize(expression, FUNCTIONS)
        assert [t.kind for t in tokens].count(TokenKind.NEGATION) == 1
        assert "-1" not in [t.text for t in tokens]
        assert not any(t.synthetic for t in tokens)

    def test_dangling_minus(self) -> None:
        """Одиночный минус в конце"""
        with pytest.raises(LexicalError, match="invalid numeric literal"):
            tokenize("3*-")


class TestImplicitMultiplication:
    """Неявное умножение"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2(3+4)", ["2", "*", "(", "3", "+", "4", ")"]),
            ("(1)(2)", ["(", "1", ")", "*", "(", "2", ")"]),
            ("((1+2))", ["(", "(", "1", "+", "2", ")", ")"]),
            ("3sqrt(16)", ["3", "*", "sqrt", "(", "16", ")"]),
            ("(2)sqrt(4)", ["(", "2", ")", "*", "sqrt", "(", "4", ")"]),
            ("2 (3)", ["2", "*", "(", "3", ")"]),
        ],
    )
    def test_inserted_multiplication(self, expression, expected) -> None:
        """* перед ( и функцией после числа или )"""
        assert texts(expression) == expected

    def test_synthetic_flag(self) -> None:
        """Вставленный * помечен synthetic"""
        tokens = tokenize("2(3)")
        assert tokens[1].text == "*"
        assert tokens[1].synthetic
        assert not tokens[0].synthetic


class TestFunctions:
    """Имена функций"""

    def test_longest_name_wins(self) -> None:
        """fn_day_of_year не читается как fn_day"""
        assert texts("fn_day_of_year(10)") == ["fn_day_of_year", "(", "10", ")"]
        assert texts("fn_day(10)") == ["fn_day", "(", "10", ")"]

    def test_function_kind(self) -> None:
        """FUNCTION токен"""
        token = tokenize("sqrt(4)", FUNCTIONS)[0]
        assert token.kind == TokenKind.FUNCTION

    def test_unknown_name(self) -> None:
        """Незарегистрированное имя — недопустимый символ"""
        with pytest.raises(LexicalError, match="invalid token") as exc_info:
            tokenize("foo(1)", FUNCTIONS)
        assert exc_info.value.position == 0

    def test_without_functions(self) -> None:
        """Без имён функций буквы недопустимы"""
        with pytest.raises(LexicalError, match="invalid token"):
            tokenize("sqrt(4)")


class TestLexicalErrors:
    """Ошибки токенизации"""

    @pytest.mark.parametrize("expression, position", [("3*/2", 2), ("1++2", 2), ("2^*3", 2)])
    def test_operator_sequence(self, expression, position) -> None:
        """Два бинарных оператора подряд"""
        with pytest.raises(LexicalError, match="invalid operator sequence") as exc_info:
            tokenize(expression)
        assert exc_info.value.position == position

    def test_minus_then_operator(self) -> None:
        """Унарный минус перед оператором"""
        with pytest.raises(LexicalError, match="invalid operator sequence"):
            tokenize("3*-*2")

    @pytest.mark.parametrize("expression, position", [("2#3", 1), ("1+{a}", 2), ("1=1", 1)])
    def test_invalid_character(self, expression, position) -> None:
        """Недопустимый символ"""
        with pytest.raises(LexicalError, match="invalid token") as exc_info:
            tokenize(expression)
        assert exc_info.value.position == position
        assert exc_info.value.expression == expression
