"""
JSON Schema Contract Validators

Валидация payload, которыми formula-engine обменивается с host form layer,
против формальных JSON Schema контрактов (draft 2020-12, библиотека jsonschema).

Схемы (contracts/schema/):
- evaluation_request.json — формула и параметры вычисления
- evaluation_result.json — результат или типизированная ошибка
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем.

    По умолчанию ищет схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        """
        Args:
            schema_dir: Каталог схем (default: <project root>/contracts/schema)

        Raises:
            RuntimeError: каталог не существует
        """
        if schema_dir is None:
            # Корень проекта: 4 уровня вверх от этого файла
            schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"

        self._schema_dir = Path(schema_dir)
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы.

        Args:
            schema_name: Имя схемы без расширения (например, 'evaluation_request')

        Returns:
            Схема как dict

        Raises:
            FileNotFoundError: файл схемы не найден
            json.JSONDecodeError: файл не является валидным JSON
            ValueError: файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=1)
def get_schema_loader() -> SchemaLoader:
    """Общий загрузчик схем проекта (создаётся при первом обращении)."""
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый валидатор контракта.

    Инкапсулирует Draft202012Validator для одной схемы.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Args:
            schema_name: Имя схемы
            loader: Загрузчик схем (default: get_schema_loader())
        """
        loader = loader or get_schema_loader()

        self.schema_name = schema_name
        self.schema = loader.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все ошибки валидации (пустой итератор для валидных данных)."""
        return self.validator.iter_errors(data)


class EvaluationRequestValidator(ContractValidator):
    """Валидатор evaluation_request контракта."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("evaluation_request", loader)


class EvaluationResultValidator(ContractValidator):
    """Валидатор evaluation_result контракта."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("evaluation_result", loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_evaluation_request(data: Dict[str, Any]) -> None:
    """
    Валидация запроса на вычисление.

    Raises:
        ValidationError: данные не соответствуют evaluation_request.json
    """
    EvaluationRequestValidator().validate(data)


def validate_evaluation_result(data: Dict[str, Any]) -> None:
    """
    Валидация результата вычисления.

    Raises:
        ValidationError: данные не соответствуют evaluation_result.json
    """
    EvaluationResultValidator().validate(data)
