"""
Тесты для RpnEvaluator

Проверяет:
1. Точную арифметику + - * / через BigDecimal и сужение результата
2. Конфигурацию деления (scale, rounding mode)
3. Точный и legacy остаток
4. Возведение в степень и его границы, унарное отрицание
5. Стековые ошибки (операнды, арность, остаток на стеке)
6. Вызов функций: порядок аргументов, оборачивание исключений, типы результата
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.big_numbers import BigDecimal, BigInteger, BigRational
from src.core.math.rounding import RoundingMode
from src.expression.exceptions import EvaluationError, LexicalError
from src.expression.function_registry import FunctionRegistry
from src.expression.rpn_evaluator import (
    DEFAULT_DIVISION_SCALE,
    EvaluatorConfig,
    RpnEvaluator,
)
from src.expression.shunting_yard import to_postfix
from src.expression.tokenizer import tokenize
from src.expression.tokens import Token, TokenKind


def run(expression: str, config: EvaluatorConfig | None = None, registry=None):
    registry = registry if registry is not None else FunctionRegistry.with_builtins()
    names = registry.names()
    queue = to_postfix(tokenize(expression, names), names)
    return RpnEvaluator(registry, config).evaluate(queue)


def operator(text: str) -> Token:
    return Token(kind=TokenKind.OPERATOR, text=text, position=0)


def function(name: str) -> Token:
    return Token(kind=TokenKind.FUNCTION, text=name, position=0)


# =============================================================================
# CONFIG
# =============================================================================


class TestEvaluatorConfig:
    """EvaluatorConfig"""

    def test_defaults(self) -> None:
        """Значения по умолчанию"""
        config = EvaluatorConfig()
        assert config.division_scale == DEFAULT_DIVISION_SCALE == 16
        assert config.division_rounding_mode == RoundingMode.HALF_UP
        assert config.exact_modulo is True

    @pytest.mark.parametrize("field", ["division_scale", "max_power"])
    def test_negative_values_rejected(self, field) -> None:
        """Отрицательные границы"""
        with pytest.raises(ValueError, match="must be non-negative"):
            EvaluatorConfig(**{field: -1})


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestArithmetic:
    """Операторы + - * /"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("3+4*2", 11),
            ("10-4-3", 3),
            ("2*-3", -6),
            ("6/3", 2),
            ("7/2", 3.5),
            ("1/4", 0.25),
            ("0.1+0.2", 0.3),
            ("0.3-0.1", 0.2),
            ("1.5*2", 3.0),
        ],
    )
    def test_results(self, expression, expected) -> None:
        """Результаты точной арифметики"""
        assert run(expression) == expected

    def test_integer_results_stay_int(self) -> None:
        """Целые операнды дают int, деление без остатка тоже"""
        assert isinstance(run("2+3"), int)
        assert isinstance(run("6/3"), int)
        assert isinstance(run("1.5*2"), float)

    def test_large_integers_are_exact(self) -> None:
        """Целые больше 2^63 без потери точности"""
        assert run("99999999999999999999+1") == 10**20
        assert run("123456789012*987654321098") == 123456789012 * 987654321098

    def test_division_scale(self) -> None:
        """Количество знаков при делении"""
        assert run("1/3") == 0.3333333333333333
        assert run("2/3", EvaluatorConfig(division_scale=2)) == 0.67
        assert run("1/3", EvaluatorConfig(division_scale=0)) == 0

    def test_division_rounding_mode(self) -> None:
        """Режим округления при делении"""
        config = EvaluatorConfig(division_scale=2, division_rounding_mode=RoundingMode.DOWN)
        assert run("2/3", config) == 0.66

    def test_division_by_zero(self) -> None:
        """Деление на ноль"""
        with pytest.raises(EvaluationError, match="division by zero") as exc_info:
            run("5/0")
        assert exc_info.value.position == 1

    def test_division_by_zero_float(self) -> None:
        """Деление на 0.0"""
        with pytest.raises(EvaluationError, match="division by zero"):
            run("5/0.0")


class TestModulo:
    """Оператор %"""

    @pytest.mark.parametrize(
        "expression, expected",
        [("7%3", 1), ("-7%3", -1), ("7%-3", 1), ("7.5%2", 1.5), ("5.5%0.5", 0.0)],
    )
    def test_exact_remainder(self, expression, expected) -> None:
        """Точный остаток со знаком делимого"""
        assert run(expression) == expected

    @pytest.mark.parametrize(
        "expression, expected",
        [("7%3", 1), ("-7%3", -1), ("7.5%2", 1), ("7.9%2.9", 1), ("-7.5%2", -1)],
    )
    def test_legacy_remainder(self, expression, expected) -> None:
        """exact_modulo=False: остаток целых частей"""
        result = run(expression, EvaluatorConfig(exact_modulo=False))
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize("exact", [True, False])
    def test_modulo_by_zero(self, exact) -> None:
        """Остаток от деления на ноль"""
        with pytest.raises(EvaluationError, match="division by zero"):
            run("7%0", EvaluatorConfig(exact_modulo=exact))

    def test_legacy_zero_integer_part(self) -> None:
        """Делитель с нулевой целой частью в legacy режиме"""
        with pytest.raises(EvaluationError, match="division by zero"):
            run("7%0.5", EvaluatorConfig(exact_modulo=False))


class TestPower:
    """Оператор ^"""

    @pytest.mark.parametrize(
        "expression, expected",
        [("2^10", 1024), ("2^3^2", 512), ("2^-1", 0.5), ("4^0.5", 2.0), ("(-2)^3", -8)],
    )
    def test_power(self, expression, expected) -> None:
        """Native возведение в степень"""
        assert run(expression) == expected

    def test_exponent_too_large(self) -> None:
        """Целый показатель больше max_power"""
        with pytest.raises(EvaluationError, match="exponent too large"):
            run("2^101", EvaluatorConfig(max_power=100))

    def test_trivial_base_ignores_limit(self) -> None:
        """Основание 0, 1, -1 не ограничено"""
        config = EvaluatorConfig(max_power=10)
        assert run("1^1000", config) == 1
        assert run("(-1)^1001", config) == -1
        assert run("0^1000", config) == 0

    def test_zero_to_negative_power(self) -> None:
        """0 в отрицательной степени"""
        with pytest.raises(EvaluationError, match="division by zero"):
            run("0^-1")

    def test_overflow(self) -> None:
        """Переполнение float"""
        with pytest.raises(EvaluationError, match="numeric overflow"):
            run("10.0^400")

    def test_complex_result(self) -> None:
        """Дробная степень отрицательного числа"""
        with pytest.raises(EvaluationError, match="complex result"):
            run("(-8)^0.5")


class TestNegation:
    """Унарный минус перед "(" и функцией"""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("-(2+3)", -5),
            ("2/-(4)", -0.5),
            ("8/-(2+2)", -2),
            ("2^-(2)", 0.25),
            ("-(2)^2", -4),
            ("10%-(3)", 1),
            ("-(-(3))", 3),
        ],
    )
    def test_negation(self, expression, expected) -> None:
        """Отрицание связывает свой операнд, а не результат оператора слева"""
        assert run(expression) == expected

    def test_negation_keeps_type(self) -> None:
        """int остаётся int, float — float"""
        assert isinstance(run("-(6/3)"), int)
        assert run("-(0.5)") == -0.5


# =============================================================================
# STACK
# =============================================================================


class TestStackErrors:
    """Ошибки стековой машины"""

    def test_not_enough_operands(self) -> None:
        """Оператору не хватает операндов"""
        evaluator = RpnEvaluator(FunctionRegistry())
        with pytest.raises(EvaluationError, match="not enough operands for operator '\\+'"):
            evaluator.evaluate([1, operator("+")])

    def test_negation_without_operand(self) -> None:
        """Отрицанию не хватает операнда"""
        negation = Token(kind=TokenKind.NEGATION, text="-", position=2)
        with pytest.raises(EvaluationError, match="not enough operands for negation") as exc_info:
            RpnEvaluator(FunctionRegistry()).evaluate([negation])
        assert exc_info.value.position == 2

    def test_leftover_values(self) -> None:
        """На стеке больше одного значения"""
        evaluator = RpnEvaluator(FunctionRegistry())
        with pytest.raises(EvaluationError, match="exactly one value, got 2"):
            evaluator.evaluate([1, 2])

    def test_empty_queue(self) -> None:
        """Пустая очередь"""
        with pytest.raises(EvaluationError, match="exactly one value, got 0"):
            RpnEvaluator(FunctionRegistry()).evaluate([])

    def test_unexpected_token(self) -> None:
        """Скобка в RPN очереди"""
        paren = Token(kind=TokenKind.LEFT_PAREN, text="(", position=4)
        with pytest.raises(EvaluationError, match="unexpected token"):
            RpnEvaluator(FunctionRegistry()).evaluate([1, paren])

    def test_unknown_function(self) -> None:
        """Функции нет в реестре"""
        with pytest.raises(EvaluationError, match="unknown function 'nope'"):
            RpnEvaluator(FunctionRegistry()).evaluate([1, function("nope")])

    def test_arity_error(self) -> None:
        """Функции не хватает аргументов"""
        with pytest.raises(EvaluationError, match="function 'log' expects 2 argument\\(s\\), got 1"):
            run("log(8)")

    def test_non_finite_literal(self) -> None:
        """inf в очереди"""
        with pytest.raises(EvaluationError, match="non-finite value"):
            RpnEvaluator(FunctionRegistry()).evaluate([float("inf")])


# =============================================================================
# FUNCTIONS
# =============================================================================


class TestFunctionCalls:
    """Вызов зарегистрированных функций"""

    def test_argument_order(self) -> None:
        """Аргументы передаются в порядке записи"""
        registry = FunctionRegistry()
        registry.add_function("sub", lambda a, b: a - b)
        assert run("sub(10,3)", registry=registry) == 7

    def test_builtin_log_base_first(self) -> None:
        """log(base, x)"""
        assert run("log(2,8)") == pytest.approx(3.0)

    def test_zero_arity_function(self) -> None:
        """Функция без аргументов"""
        registry = FunctionRegistry()
        registry.add_function("answer", lambda: 42)
        assert run("answer()+1", registry=registry) == 43

    def test_function_failure_wrapped(self) -> None:
        """ValueError функции → EvaluationError с __cause__"""
        with pytest.raises(EvaluationError, match="function 'sqrt' failed") as exc_info:
            run("sqrt(-1)")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_zero_division_in_function(self) -> None:
        """ZeroDivisionError функции"""
        registry = FunctionRegistry()
        registry.add_function("inv", lambda x: 1 / x)
        with pytest.raises(EvaluationError, match="function 'inv' failed"):
            run("inv(0)", registry=registry)

    def test_expression_error_propagates(self) -> None:
        """ExpressionError функции не оборачивается"""
        def nested(x):
            raise LexicalError("inner", 0)

        registry = FunctionRegistry()
        registry.add_function("nested", nested)
        with pytest.raises(LexicalError, match="inner"):
            run("nested(1)", registry=registry)

    def test_unexpected_exception_propagates(self) -> None:
        """Прочие исключения не перехватываются"""
        def broken(x):
            raise KeyError("boom")

        registry = FunctionRegistry()
        registry.add_function("broken", broken)
        with pytest.raises(KeyError):
            run("broken(1)", registry=registry)

    @pytest.mark.parametrize(
        "value, expected, expected_type",
        [
            (True, 1, int),
            (7, 7, int),
            (2.5, 2.5, float),
            (Decimal("1.25"), 1.25, float),
            (Decimal("3"), 3, int),
            (Fraction(6, 3), 2, int),
            (Fraction(1, 4), 0.25, float),
            (BigInteger.of(12), 12, int),
            (BigDecimal.of("0.5"), 0.5, float),
            (BigRational.nd(3, 4), 0.75, float),
        ],
    )
    def test_result_narrowing(self, value, expected, expected_type) -> None:
        """Результат функции сужается до int / float"""
        registry = FunctionRegistry()
        registry.add_function("const", lambda: value)
        result = run("const()", registry=registry)
        assert result == expected
        assert type(result) is expected_type

    def test_unsupported_result(self) -> None:
        """Нечисловой результат"""
        registry = FunctionRegistry()
        registry.add_function("text", lambda: "12")
        with pytest.raises(EvaluationError, match="returned unsupported type str"):
            run("text()", registry=registry)

    def test_non_finite_result(self) -> None:
        """NaN из функции"""
        registry = FunctionRegistry()
        registry.add_function("nan", lambda: float("nan"))
        with pytest.raises(EvaluationError, match="non-finite value"):
            run("nan()", registry=registry)
