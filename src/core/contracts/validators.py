"""
JSON Schema контракт записи NUMERIC

Схема numeric_wire_record.json поставляется внутри пакета (schema/) и
читается через importlib.resources при первом обращении, поэтому импорт
кодировщика не зависит от расположения исходного дерева.
"""

import json
from functools import lru_cache
from importlib.resources import files
from typing import Any, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

NUMERIC_WIRE_RECORD_SCHEMA = "numeric_wire_record"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    """
    Загрузка и meta-валидация схемы из пакетного каталога schema/.

    Args:
        schema_name: Имя схемы без расширения

    Returns:
        Схема как dict (один объект на имя за процесс)

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema
    """
    resource = files(__package__) / "schema" / f"{schema_name}.json"
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not found: {schema_name}.json")

    schema = json.loads(resource.read_text(encoding="utf-8"))

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

    return schema


class NumericWireRecordValidator:
    """Проверка dict-формы NumericWireRecord по контракту."""

    def __init__(self) -> None:
        self._validator = Draft202012Validator(load_schema(NUMERIC_WIRE_RECORD_SCHEMA))

    def validate(self, data: dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self._validator.validate(data)

    def is_valid(self, data: dict[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: dict[str, Any]) -> Iterator[ValidationError]:
        return self._validator.iter_errors(data)


def validate_numeric_wire_record(data: dict[str, Any]) -> None:
    """
    Валидация dict-формы NumericWireRecord.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NumericWireRecordValidator().validate(data)
