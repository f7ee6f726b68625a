"""
FormulaCalculator — вычисление формул host form layer

Pipeline:
    expression → Tokenizer → ShuntingYard → RpnEvaluator → int | float

Калькулятор владеет своим FunctionRegistry (built-ins + пользовательские
функции) и явно заданным NumberBackend: вся BigDecimal арифметика одного
вычисления выполняется внутри using_backend(self.backend).

Вычисление не имеет состояния между вызовами: токены, стеки и числа
создаются заново для каждой формулы.
"""

import dataclasses
from typing import Any, Callable, Dict, Mapping, Optional

from src.core.contracts.validators import (
    validate_evaluation_request,
    validate_evaluation_result,
)
from src.core.domain.evaluation import (
    EvaluationFailure,
    EvaluationOptions,
    EvaluationRequest,
    EvaluationResponse,
    EvaluationStatus,
)
from src.core.math.backend import NumberBackend
from src.core.math.backend_selection import get_default_backend, using_backend
from src.core.math.exceptions import MathError
from src.expression.exceptions import ExpressionError
from src.expression.function_registry import FunctionRegistry
from src.expression.rpn_evaluator import EvaluatorConfig, RpnEvaluator
from src.expression.shunting_yard import ShuntingYard
from src.expression.tokenizer import Tokenizer
from src.expression.tokens import RpnItem


class FormulaCalculator:
    """
    Калькулятор формул.

    Examples:
        >>> calculator = FormulaCalculator()
        >>> calculator.calculate("3+4*2")
        11
        >>> calculator.calculate("2(3+4)")
        14
        >>> calculator.calculate("3sqrt(16)")
        12.0
    """

    def __init__(
        self,
        config: Optional[EvaluatorConfig] = None,
        backend: Optional[NumberBackend] = None,
        functions: Optional[Mapping[str, Callable[..., Any]]] = None,
    ):
        """
        Args:
            config: Конфигурация evaluator (default: EvaluatorConfig())
            backend: Backend арифметики (default: backend процесса)
            functions: Пользовательские функции поверх built-ins

        Raises:
            FunctionRegistrationError: конфликт или недопустимое имя функции
        """
        self.config = config or EvaluatorConfig()
        self.backend = backend if backend is not None else get_default_backend()
        self.functions = FunctionRegistry.with_builtins()

        for name, func in (functions or {}).items():
            self.functions.add_function(name, func)

        self._tokenizer = Tokenizer()
        self._shunting_yard = ShuntingYard()

    # -------------------------------------------------------------------------
    # Function registry
    # -------------------------------------------------------------------------

    def add_function(
        self, name: str, func: Callable[..., Any], arity: Optional[int] = None
    ) -> None:
        self.functions.add_function(name, func, arity)

    def replace_function(
        self, name: str, func: Callable[..., Any], arity: Optional[int] = None
    ) -> None:
        self.functions.replace_function(name, func, arity)

    def remove_function(self, name: str) -> None:
        self.functions.remove_function(name)

    def get_functions(self) -> list[str]:
        return self.functions.names()

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def to_rpn(self, expression: str) -> list[RpnItem]:
        """
        Разбор формулы в RPN очередь без вычисления.

        Raises:
            LexicalError, ExpressionSyntaxError
        """
        names = self.functions.names()
        try:
            tokens = self._tokenizer.tokenize(expression, names)
            return self._shunting_yard.to_postfix(tokens, names)
        except ExpressionError as error:
            if error.expression is None:
                error.expression = expression
            raise

    def calculate(self, expression: str) -> int | float:
        """
        Вычисление формулы.

        Args:
            expression: Формула с уже подставленными значениями полей

        Returns:
            int или float

        Raises:
            LexicalError: недопустимый символ, литерал, пара операторов
            ExpressionSyntaxError: скобки, разделитель аргументов
            EvaluationError: стек, деление на ноль, ошибка функции
        """
        return self._calculate(expression, self.config)

    def _calculate(self, expression: str, config: EvaluatorConfig) -> int | float:
        if not isinstance(expression, str):
            raise TypeError(f"expression must be a string, got {type(expression).__name__}")

        with using_backend(self.backend):
            queue = self.to_rpn(expression)
            try:
                return RpnEvaluator(self.functions, config).evaluate(queue)
            except ExpressionError as error:
                if error.expression is None:
                    error.expression = expression
                raise

    # -------------------------------------------------------------------------
    # Host boundary
    # -------------------------------------------------------------------------

    def evaluate_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Вычисление по payload host form layer.

        Args:
            payload: dict по схеме evaluation_request.json

        Returns:
            dict по схеме evaluation_result.json: status "ok" с result или
            status "error" с error.kind / error.message

        Raises:
            jsonschema.ValidationError: payload не соответствует схеме
        """
        validate_evaluation_request(payload)
        request = EvaluationRequest.model_validate(payload)

        config = self._config_for(request.options)

        try:
            result = self._calculate(request.expression, config)
            response = EvaluationResponse(
                status=EvaluationStatus.OK,
                expression=request.expression,
                result=result,
            )
        except (ExpressionError, MathError) as error:
            response = EvaluationResponse(
                status=EvaluationStatus.ERROR,
                expression=request.expression,
                error=EvaluationFailure(
                    kind=type(error).__name__,
                    message=getattr(error, "message", str(error)),
                    position=getattr(error, "position", None),
                ),
            )

        data = response.model_dump(mode="json", exclude_none=True)
        validate_evaluation_result(data)
        return data

    def _config_for(self, options: EvaluationOptions) -> EvaluatorConfig:
        overrides = options.model_dump(exclude_none=True)
        if not overrides:
            return self.config
        return dataclasses.replace(self.config, **overrides)


def evaluate(
    expression: str,
    functions: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> int | float:
    """
    Вычисление формулы калькулятором по умолчанию.

    Examples:
        >>> evaluate("2^3^2")
        512
    """
    return FormulaCalculator(functions=functions).calculate(expression)
