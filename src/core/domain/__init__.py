"""
Domain models and value objects.

Contains source numeric values (FixedI80F48, SignedInt128, UnsignedInt64) and
the NumericWireRecord they are encoded into.
"""

from src.core.domain.numeric_values import (
    FIXED_FRAC_BITS,
    FIXED_ONE,
    I128_MAX,
    I128_MIN,
    FixedI80F48,
    NumericKind,
    NumericValue,
    SignedInt128,
    UnsignedInt64,
)
from src.core.domain.wire_record import (
    NUMERIC_NEG,
    NUMERIC_POS,
    NumericWireRecord,
)

__all__ = [
    # Numeric values
    "FIXED_FRAC_BITS",
    "FIXED_ONE",
    "I128_MAX",
    "I128_MIN",
    "FixedI80F48",
    "NumericKind",
    "NumericValue",
    "SignedInt128",
    "UnsignedInt64",
    # Wire record
    "NUMERIC_NEG",
    "NUMERIC_POS",
    "NumericWireRecord",
]
