"""
Contract Validation Module

Модуль для валидации JSON контрактов записей NUMERIC.
"""

from .validators import (
    NUMERIC_WIRE_RECORD_SCHEMA,
    NumericWireRecordValidator,
    load_schema,
    validate_numeric_wire_record,
)

__all__ = [
    "NUMERIC_WIRE_RECORD_SCHEMA",
    "NumericWireRecordValidator",
    "load_schema",
    "validate_numeric_wire_record",
]
