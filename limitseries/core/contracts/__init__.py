"""
Contract Validation Module

Валидация JSON-представлений Monomial, snapshot multiseries и LimitResult.
"""

from .validators import (
    CONTRACT_SCHEMAS,
    ContractValidator,
    LimitResultValidator,
    MonomialValidator,
    SchemaLoader,
    SeriesSnapshotValidator,
    get_validator,
    schema_uri,
    validate_limit_result,
    validate_monomial,
    validate_series_snapshot,
)

__all__ = [
    "CONTRACT_SCHEMAS",
    "schema_uri",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MonomialValidator",
    "SeriesSnapshotValidator",
    "LimitResultValidator",
    # Functions
    "get_validator",
    "validate_monomial",
    "validate_series_snapshot",
    "validate_limit_result",
]
