"""
Expression engine для formula-engine

Tokenizer → ShuntingYard → RpnEvaluator с реестром функций и фасадом
FormulaCalculator.
"""

# Exceptions
from src.expression.exceptions import (
    EvaluationError,
    ExpressionError,
    ExpressionSyntaxError,
    FunctionRegistrationError,
    LexicalError,
)

# Tokens
from src.expression.tokens import (
    OPERATOR_PRECEDENCE,
    OPERATORS,
    RpnItem,
    Token,
    TokenKind,
    is_left_associative,
    operator_precedence,
)

# Pipeline
from src.expression.tokenizer import Tokenizer, tokenize
from src.expression.shunting_yard import ShuntingYard, parse_number_literal, to_postfix
from src.expression.rpn_evaluator import (
    DEFAULT_DIVISION_SCALE,
    EvaluatorConfig,
    RpnEvaluator,
)

# Functions
from src.expression.builtin_functions import BUILTIN_FUNCTIONS
from src.expression.function_registry import (
    FunctionDefinition,
    FunctionRegistry,
    normalize_function_name,
    required_arity,
)

# Facade
from src.expression.calculator import FormulaCalculator, evaluate

__all__ = [
    # Exceptions
    "EvaluationError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "FunctionRegistrationError",
    "LexicalError",
    # Tokens
    "OPERATOR_PRECEDENCE",
    "OPERATORS",
    "RpnItem",
    "Token",
    "TokenKind",
    "is_left_associative",
    "operator_precedence",
    # Pipeline
    "Tokenizer",
    "tokenize",
    "ShuntingYard",
    "parse_number_literal",
    "to_postfix",
    "DEFAULT_DIVISION_SCALE",
    "EvaluatorConfig",
    "RpnEvaluator",
    # Functions
    "BUILTIN_FUNCTIONS",
    "FunctionDefinition",
    "FunctionRegistry",
    "normalize_function_name",
    "required_arity",
    # Facade
    "FormulaCalculator",
    "evaluate",
]
