"""
Tokenizer — разбиение формулы на токены

Сканирование слева направо с буфером числового литерала.

Правила:
1. Цифры и "." накапливаются в буфер; любой другой символ сбрасывает буфер
   в NUMBER токен (литерал: -?(digits[.digits?] | .digits))
2. Унарный минус попадает в буфер в начале выражения и после "(", ","
   или оператора: "3*-2", "3--2", "2^-1"
3. Одиночный "-" перед "(" или именем функции становится NEGATION токеном:
   "-(2+3)", "2/-(4)", "2^-sqrt(4)"
4. Неявное умножение: "*" вставляется перед "(" и перед именем функции,
   если предыдущий токен — число или ")": "2(3+4)", "3sqrt(16)", "(1)(2)"
5. Два оператора подряд (кроме случая правила 2) — LexicalError
6. Два числовых литерала подряд ("3 4") — LexicalError
7. Имена функций сопоставляются от длинного к короткому
8. Пробельные символы пропускаются
"""

import re
from typing import Final, Iterable, Optional

from src.expression.exceptions import LexicalError
from src.expression.tokens import (
    ARG_SEPARATOR,
    DIGITS,
    FLOAT_POINT,
    MINUS,
    MULT,
    OPERATORS,
    PAREN_LEFT,
    PAREN_RIGHT,
    Token,
    TokenKind,
)


NUMBER_LITERAL_REGEXP: Final[re.Pattern] = re.compile(
    r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
)

# Токены, после которых минус унарный
_UNARY_MINUS_PRECEDERS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.LEFT_PAREN, TokenKind.ARG_SEPARATOR, TokenKind.OPERATOR}
)

# Токены, после которых "(" или функция означают умножение
_IMPLICIT_MULT_PRECEDERS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.NUMBER, TokenKind.RIGHT_PAREN}
)


class Tokenizer:
    """Токенизатор формул."""

    def tokenize(
        self, expression: str, function_names: Iterable[str] = ()
    ) -> list[Token]:
        """
        Разбиение выражения на токены.

        Args:
            expression: Формула
            function_names: Имена зарегистрированных функций

        Returns:
            Токены в порядке следования

        Raises:
            LexicalError: недопустимый символ, литерал или пара операторов
        """
        names = sorted(set(function_names), key=len, reverse=True)

        tokens: list[Token] = []
        buffer = ""
        buffer_start = 0

        i = 0
        length = len(expression)

        while i < length:
            char = expression[i]

            if char in DIGITS or char == FLOAT_POINT:
                if not buffer:
                    buffer_start = i
                buffer += char
                i += 1
                continue

            if char.isspace():
                # Одиночный "-" ждёт следующего значимого символа
                if buffer and buffer != MINUS:
                    self._flush_number(tokens, buffer, buffer_start, expression)
                    buffer = ""
                i += 1
                continue

            if char == MINUS and not buffer and self._is_unary_position(tokens):
                buffer = MINUS
                buffer_start = i
                i += 1
                continue

            function_name = None
            if char.isalpha() or char == "_":
                function_name = self._match_function(expression, i, names)

            if buffer == MINUS:
                if char == PAREN_LEFT or function_name is not None:
                    tokens.append(
                        Token(kind=TokenKind.NEGATION, text=MINUS, position=buffer_start)
                    )
                elif char in OPERATORS:
                    raise LexicalError("invalid operator sequence", i, expression)
                else:
                    raise LexicalError("invalid numeric literal", buffer_start, expression)
                buffer = ""
            elif buffer:
                self._flush_number(tokens, buffer, buffer_start, expression)
                buffer = ""

            if char == PAREN_LEFT:
                self._insert_implicit_multiplication(tokens, i)
                tokens.append(Token(kind=TokenKind.LEFT_PAREN, text=char, position=i))
            elif char == PAREN_RIGHT:
                tokens.append(Token(kind=TokenKind.RIGHT_PAREN, text=char, position=i))
            elif char == ARG_SEPARATOR:
                tokens.append(Token(kind=TokenKind.ARG_SEPARATOR, text=char, position=i))
            elif char in OPERATORS:
                if tokens and tokens[-1].kind == TokenKind.OPERATOR:
                    raise LexicalError("invalid operator sequence", i, expression)
                tokens.append(Token(kind=TokenKind.OPERATOR, text=char, position=i))
            elif function_name is not None:
                self._insert_implicit_multiplication(tokens, i)
                tokens.append(Token(kind=TokenKind.FUNCTION, text=function_name, position=i))
                i += len(function_name)
                continue
            else:
                raise LexicalError(f"invalid token '{char}'", i, expression)

            i += 1

        if buffer == MINUS:
            raise LexicalError("invalid numeric literal", buffer_start, expression)
        if buffer:
            self._flush_number(tokens, buffer, buffer_start, expression)

        return tokens

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_unary_position(tokens: list[Token]) -> bool:
        return not tokens or tokens[-1].kind in _UNARY_MINUS_PRECEDERS

    @staticmethod
    def _match_function(expression: str, start: int, names: list[str]) -> Optional[str]:
        for name in names:
            if expression.startswith(name, start):
                return name
        return None

    @staticmethod
    def _insert_implicit_multiplication(tokens: list[Token], position: int) -> None:
        if tokens and tokens[-1].kind in _IMPLICIT_MULT_PRECEDERS:
            tokens.append(
                Token(kind=TokenKind.OPERATOR, text=MULT, position=position, synthetic=True)
            )

    @staticmethod
    def _flush_number(
        tokens: list[Token], buffer: str, start: int, expression: str
    ) -> None:
        if NUMBER_LITERAL_REGEXP.fullmatch(buffer) is None:
            raise LexicalError("invalid numeric literal", start, expression)

        if tokens and tokens[-1].kind == TokenKind.NUMBER:
            raise LexicalError("adjacent numeric literals", start, expression)

        tokens.append(Token(kind=TokenKind.NUMBER, text=buffer, position=start))


def tokenize(expression: str, function_names: Iterable[str] = ()) -> list[Token]:
    """Разбиение выражения на токены (см. Tokenizer.tokenize)."""
    return Tokenizer().tokenize(expression, function_names)
