"""
Codec modules

Кодирование декодированных числовых полей в бинарный NUMERIC PostgreSQL.
"""

from src.core.codec.numeric import (
    FIXED_DSCALE,
    FIXED_FRAC_GROUPS,
    INTEGER_DSCALE,
    PgType,
    UnsupportedTypeError,
    accepts,
    encode_fixed_i80f48,
    encode_i128,
    encode_numeric,
    encode_u64,
    to_sql,
    to_wire_record,
    write_numeric,
)

__all__ = [
    # Constants
    "FIXED_DSCALE",
    "FIXED_FRAC_GROUPS",
    "INTEGER_DSCALE",
    # Types
    "PgType",
    # Exceptions
    "UnsupportedTypeError",
    # Encoders
    "encode_fixed_i80f48",
    "encode_i128",
    "encode_u64",
    # Dispatch
    "accepts",
    "encode_numeric",
    "to_sql",
    "to_wire_record",
    "write_numeric",
]
