"""
Core math modules для limitseries

Знак и сравнение скаляров: epsilon-защиты для числовых значений и
SignOracle для символьных.
"""

# Numerical Safeguards
from limitseries.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SIGN,
    # Scalar validity
    is_exact_scalar,
    is_numeric_scalar,
    is_valid_scalar,
    # Sign with tolerance
    is_negative,
    is_positive,
    is_zero,
    sign_with_tolerance,
    # Comparisons
    is_close,
    # Validation
    validate_non_negative_int,
)

# Sign Oracle
from limitseries.core.math.sign_oracle import (
    SYMPY_EVALF_PRECISION,
    CallableSignOracle,
    ConsistentSignOracle,
    NumericSignOracle,
    Sign,
    SignOracle,
    SympySignOracle,
    default_sign_oracle,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_SIGN",
    # Numerical Safeguards — Scalar validity
    "is_exact_scalar",
    "is_numeric_scalar",
    "is_valid_scalar",
    # Numerical Safeguards — Sign with tolerance
    "is_negative",
    "is_positive",
    "is_zero",
    "sign_with_tolerance",
    # Numerical Safeguards — Comparisons
    "is_close",
    # Numerical Safeguards — Validation
    "validate_non_negative_int",
    # Sign Oracle — Constants
    "SYMPY_EVALF_PRECISION",
    # Sign Oracle — Types
    "Sign",
    "SignOracle",
    # Sign Oracle — Implementations
    "CallableSignOracle",
    "ConsistentSignOracle",
    "NumericSignOracle",
    "SympySignOracle",
    "default_sign_oracle",
]
