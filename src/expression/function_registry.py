"""
Function Registry — именованные функции формул

Каждая запись — immutable FunctionDefinition(name, func, arity):
- name: строчные латинские буквы и "_", минимум одна буква
- func: любой callable
- arity: число обязательных позиционных параметров (по inspect.signature),
  либо явное значение для callable без доступной сигнатуры

Registry изменяем (add/replace/remove) и не синхронизирован: при
использовании из нескольких потоков каждый поток работает со своей копией
(copy()) или синхронизирует доступ снаружи.
"""

import inspect
import logging
import re
from typing import Any, Callable, Final, Iterator, Mapping, Optional

from pydantic import BaseModel, Field

from src.expression.builtin_functions import BUILTIN_FUNCTIONS
from src.expression.exceptions import FunctionRegistrationError

logger = logging.getLogger(__name__)


FUNCTION_NAME_REGEXP: Final[re.Pattern] = re.compile(r"[a-z_]+")

_POSITIONAL_KINDS: Final[frozenset] = frozenset(
    {inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD}
)


# =============================================================================
# DEFINITION
# =============================================================================


class FunctionDefinition(BaseModel):
    """Зарегистрированная функция."""

    name: str = Field(..., min_length=1, description="Имя в формулах")
    func: Callable[..., Any] = Field(..., description="Реализация")
    arity: int = Field(..., ge=0, description="Число аргументов")

    model_config = {"frozen": True}


def normalize_function_name(name: str) -> str:
    """
    Нормализация имени: strip + lower, проверка допустимых символов.

    Raises:
        FunctionRegistrationError: имя содержит что-то кроме a-z и "_",
            или состоит только из "_"
    """
    if not isinstance(name, str):
        raise FunctionRegistrationError(f"Function name must be a string, got {name!r}")

    normalized = name.strip().lower()

    if FUNCTION_NAME_REGEXP.fullmatch(normalized) is None or normalized.strip("_") == "":
        raise FunctionRegistrationError(
            f"Invalid function name {name!r}: only letters and underscores are allowed"
        )

    return normalized


def required_arity(func: Callable[..., Any]) -> int:
    """
    Число обязательных позиционных параметров callable.

    Raises:
        FunctionRegistrationError: сигнатура недоступна или есть обязательный
            keyword-only параметр
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise FunctionRegistrationError(
            f"Cannot inspect signature of {func!r}, pass arity explicitly"
        ) from e

    arity = 0
    for parameter in signature.parameters.values():
        if parameter.default is not inspect.Parameter.empty:
            continue
        if parameter.kind in _POSITIONAL_KINDS:
            arity += 1
        elif parameter.kind == inspect.Parameter.KEYWORD_ONLY:
            raise FunctionRegistrationError(
                f"Required keyword-only parameter {parameter.name!r} cannot be "
                f"passed from a formula"
            )

    return arity


# =============================================================================
# REGISTRY
# =============================================================================


class FunctionRegistry:
    """
    Реестр функций, доступных токенизатору и RPN evaluator.

    Examples:
        >>> registry = FunctionRegistry.with_builtins()
        >>> registry.add_function("double", lambda x: x * 2)
        >>> registry.get("double").arity
        1
    """

    def __init__(self, functions: Optional[Mapping[str, Callable[..., Any]]] = None):
        self._functions: dict[str, FunctionDefinition] = {}

        for name, func in (functions or {}).items():
            self.add_function(name, func)

    @classmethod
    def with_builtins(cls) -> "FunctionRegistry":
        """Новый реестр с sqrt, ln, log и календарными fn_* функциями."""
        return cls(BUILTIN_FUNCTIONS)

    def add_function(
        self,
        name: str,
        func: Callable[..., Any],
        arity: Optional[int] = None,
    ) -> None:
        """
        Регистрация функции.

        Args:
            name: Имя (приводится к нижнему регистру)
            func: Реализация
            arity: Число аргументов (default: из сигнатуры func)

        Raises:
            FunctionRegistrationError: имя занято или недопустимо, func не
                callable, арность не определяется или отрицательна
        """
        normalized = normalize_function_name(name)

        if normalized in self._functions:
            raise FunctionRegistrationError(f"Function {normalized!r} already exists")

        if not callable(func):
            raise FunctionRegistrationError(f"Function {normalized!r} is not callable")

        if arity is None:
            arity = required_arity(func)
        elif arity < 0:
            raise FunctionRegistrationError(
                f"Arity of {normalized!r} must be non-negative, got {arity}"
            )

        self._functions[normalized] = FunctionDefinition(
            name=normalized, func=func, arity=arity
        )
        logger.debug("Registered function %s/%d", normalized, arity)

    def replace_function(
        self,
        name: str,
        func: Callable[..., Any],
        arity: Optional[int] = None,
    ) -> None:
        """Регистрация с заменой существующей функции того же имени."""
        self.remove_function(name)
        self.add_function(name, func, arity)

    def remove_function(self, name: str) -> None:
        """Удаление функции (отсутствующее имя игнорируется)."""
        normalized = normalize_function_name(name)
        if self._functions.pop(normalized, None) is not None:
            logger.debug("Removed function %s", normalized)

    def get(self, name: str) -> Optional[FunctionDefinition]:
        return self._functions.get(name.strip().lower())

    def names(self) -> list[str]:
        return list(self._functions)

    def copy(self) -> "FunctionRegistry":
        registry = FunctionRegistry()
        registry._functions = dict(self._functions)
        return registry

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[FunctionDefinition]:
        return iter(self._functions.values())
