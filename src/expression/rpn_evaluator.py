"""
RpnEvaluator — стековая машина над RPN очередью

Правила:
1. Число → в стек
2. Оператор → снимает два операнда (правый снимается первым), результат в стек;
   NEGATION снимает один операнд и меняет знак
3. Функция → снимает arity операндов; аргументы передаются в исходном
   порядке записи (первый снятый — последний параметр)
4. После очереди на стеке должно остаться ровно одно значение

Семантика операторов:
- + - * : точная арифметика BigDecimal
- /     : BigDecimal с division_scale знаками и division_rounding_mode,
          лишние нули отбрасываются (6/3 → 2)
- %     : точный остаток BigDecimal (знак делимого); при exact_modulo=False —
          остаток от целых частей операндов
- ^     : native возведение в степень

Результат BigDecimal сужается до native: scale 0 → int, иначе float.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Final, Sequence

from src.core.math.backend import MAX_POWER
from src.core.math.big_numbers import BigDecimal, BigInteger, BigNumber, BigRational
from src.core.math.exceptions import MathError
from src.core.math.rounding import RoundingMode
from src.expression.exceptions import EvaluationError, ExpressionError
from src.expression.function_registry import FunctionDefinition, FunctionRegistry
from src.expression.tokens import (
    DIV,
    MINUS,
    MOD,
    MULT,
    PLUS,
    POW,
    RpnItem,
    Token,
    TokenKind,
)


# =============================================================================
# CONSTANTS
# =============================================================================

# Знаков после точки при делении
DEFAULT_DIVISION_SCALE: Final[int] = 16

# Исключения пользовательских функций, превращаемые в EvaluationError
_FUNCTION_FAILURES: Final[tuple[type[BaseException], ...]] = (
    ValueError,
    ArithmeticError,
    TypeError,
    MathError,
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EvaluatorConfig:
    """Конфигурация RPN evaluator."""

    # Деление
    division_scale: int = DEFAULT_DIVISION_SCALE
    division_rounding_mode: RoundingMode = RoundingMode.HALF_UP

    # Остаток: True: точный BigDecimal, False: от целых частей
    exact_modulo: bool = True

    # Максимальный целый показатель для целого основания с |base| > 1
    max_power: int = MAX_POWER

    def __post_init__(self):
        if self.division_scale < 0:
            raise ValueError(f"division_scale must be non-negative, got {self.division_scale}")
        if self.max_power < 0:
            raise ValueError(f"max_power must be non-negative, got {self.max_power}")


# =============================================================================
# EVALUATOR
# =============================================================================


class RpnEvaluator:
    """Вычислитель RPN очереди."""

    def __init__(self, registry: FunctionRegistry, config: EvaluatorConfig | None = None):
        self.registry = registry
        self.config = config or EvaluatorConfig()

    def evaluate(self, queue: Sequence[RpnItem]) -> int | float:
        """
        Вычисление RPN очереди.

        Args:
            queue: Результат ShuntingYard.to_postfix

        Returns:
            Единственное значение, оставшееся на стеке

        Raises:
            EvaluationError: нехватка операндов, на стеке не одно значение,
                деление на ноль, ошибка функции, нечисловой результат
        """
        stack: list[int | float] = []

        for item in queue:
            if not isinstance(item, Token):
                stack.append(self._check_finite(item))
                continue

            if item.kind == TokenKind.OPERATOR:
                if len(stack) < 2:
                    raise EvaluationError(
                        f"not enough operands for operator '{item.text}'", item.position
                    )
                right = stack.pop()
                left = stack.pop()
                stack.append(self.apply_operator(item.text, left, right, item.position))

            elif item.kind == TokenKind.NEGATION:
                if not stack:
                    raise EvaluationError("not enough operands for negation", item.position)
                stack.append(self._check_finite(-stack.pop(), item.position))

            elif item.kind == TokenKind.FUNCTION:
                definition = self.registry.get(item.text)
                if definition is None:
                    raise EvaluationError(f"unknown function '{item.text}'", item.position)
                if len(stack) < definition.arity:
                    raise EvaluationError(
                        f"function '{definition.name}' expects {definition.arity} "
                        f"argument(s), got {len(stack)}",
                        item.position,
                    )
                split = len(stack) - definition.arity
                arguments = stack[split:]
                del stack[split:]
                stack.append(self.call_function(definition, arguments, item.position))

            else:
                raise EvaluationError(f"unexpected token '{item.text}'", item.position)

        if len(stack) != 1:
            raise EvaluationError(
                f"expression must reduce to exactly one value, got {len(stack)}"
            )

        return stack[0]

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def apply_operator(
        self,
        operator: str,
        left: int | float,
        right: int | float,
        position: int | None = None,
    ) -> int | float:
        """
        Применение бинарного оператора.

        Raises:
            EvaluationError: деление на ноль, переполнение, неизвестный оператор
        """
        if operator == POW:
            return self._power(left, right, position)

        a = self._to_decimal(left, position)
        b = self._to_decimal(right, position)

        try:
            if operator == PLUS:
                return self._narrow(a.plus(b), position)
            if operator == MINUS:
                return self._narrow(a.minus(b), position)
            if operator == MULT:
                return self._narrow(a.multiplied_by(b), position)
            if operator == DIV:
                if b.is_zero():
                    raise EvaluationError("division by zero", position)
                result = a.divided_by(
                    b, self.config.division_scale, self.config.division_rounding_mode
                )
                return self._narrow(result.strip_trailing_zeros(), position)
            if operator == MOD:
                return self._modulo(left, right, a, b, position)
        except MathError as e:
            raise EvaluationError(str(e), position) from e

        raise EvaluationError(f"unknown operator '{operator}'", position)

    def _modulo(
        self,
        left: int | float,
        right: int | float,
        a: BigDecimal,
        b: BigDecimal,
        position: int | None,
    ) -> int | float:
        if self.config.exact_modulo:
            if b.is_zero():
                raise EvaluationError("division by zero", position)
            return self._narrow(a.remainder(b), position)

        # Целые части с усечением к нулю; остаток со знаком делимого
        dividend = int(left)
        divisor = int(right)
        if divisor == 0:
            raise EvaluationError("division by zero", position)
        remainder = abs(dividend) % abs(divisor)
        return -remainder if dividend < 0 else remainder

    def _power(
        self, base: int | float, exponent: int | float, position: int | None
    ) -> int | float:
        if (
            isinstance(base, int)
            and isinstance(exponent, int)
            and abs(base) > 1
            and exponent > self.config.max_power
        ):
            raise EvaluationError("exponent too large", position)

        if base == 0 and exponent < 0:
            raise EvaluationError("division by zero", position)

        try:
            result = base ** exponent
        except OverflowError as e:
            raise EvaluationError("numeric overflow", position) from e

        if isinstance(result, complex):
            raise EvaluationError("complex result", position)

        return self._check_finite(result, position)

    # -------------------------------------------------------------------------
    # Functions
    # -------------------------------------------------------------------------

    def call_function(
        self,
        definition: FunctionDefinition,
        arguments: list[int | float],
        position: int | None = None,
    ) -> int | float:
        """
        Вызов зарегистрированной функции.

        Raises:
            EvaluationError: функция упала (ValueError, ArithmeticError,
                TypeError, MathError) или вернула нечисловое значение
        """
        try:
            result = definition.func(*arguments)
        except ExpressionError:
            raise
        except _FUNCTION_FAILURES as e:
            raise EvaluationError(
                f"function '{definition.name}' failed: {e}", position
            ) from e

        return self._narrow_function_result(definition.name, result, position)

    def _narrow_function_result(
        self, name: str, result: Any, position: int | None
    ) -> int | float:
        if isinstance(result, bool):
            return int(result)

        if isinstance(result, (int, float)):
            return self._check_finite(result, position)

        if isinstance(result, (BigNumber, Decimal, Fraction)):
            try:
                number = BigNumber.of(result)
            except MathError as e:
                raise EvaluationError(
                    f"function '{name}' returned an invalid number: {e}", position
                ) from e
            return self._narrow_number(number, position)

        raise EvaluationError(
            f"function '{name}' returned unsupported type {type(result).__name__}",
            position,
        )

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    @staticmethod
    def _to_decimal(value: int | float, position: int | None) -> BigDecimal:
        try:
            return BigDecimal.of(value)
        except MathError as e:
            raise EvaluationError(str(e), position) from e

    def _narrow_number(self, number: BigNumber, position: int | None) -> int | float:
        if isinstance(number, BigRational):
            number = number.simplified()
            if number.denominator.is_equal_to(1):
                number = number.numerator
            else:
                return self._check_finite(number.to_float(), position)

        if isinstance(number, BigInteger):
            return number.to_int()

        return self._narrow(number, position)

    def _narrow(self, result: BigDecimal, position: int | None) -> int | float:
        if result.scale == 0:
            return result.to_int()
        return self._check_finite(result.to_float(), position)

    @staticmethod
    def _check_finite(value: int | float, position: int | None = None) -> int | float:
        if isinstance(value, float) and not math.isfinite(value):
            raise EvaluationError("non-finite value", position)
        return value
