"""
Domain models and value objects.

Contains Basis, Multiseries (with constructors, predicates and arithmetic),
Monomial and the limit verdict.
"""

from limitseries.core.domain.arithmetic import add, mul_monomial, sub
from limitseries.core.domain.basis import Basis, BasisFunction
from limitseries.core.domain.monomial import Monomial
from limitseries.core.domain.multiseries import (
    DEFAULT_ORDER_CHECK_PREFIX,
    DEFAULT_SNAPSHOT_TERMS,
    Multiseries,
    Term,
    constant,
    from_generator,
    from_terms,
    is_flat_zero,
    is_trimmed,
    is_well_ordered,
    monomial_series,
    negate,
    of_monomial,
    scale,
    snapshot,
    well_ordered_view,
    zero,
)
from limitseries.core.domain.scalars import (
    Scalar,
    exponent_gt,
    is_exact_zero,
    scalar_to_contract,
)
from limitseries.core.domain.verdict import FailureKind, LimitKind, LimitVerdict

__all__ = [
    # Scalars
    "Scalar",
    "exponent_gt",
    "is_exact_zero",
    "scalar_to_contract",
    # Basis
    "Basis",
    "BasisFunction",
    # Multiseries model
    "DEFAULT_ORDER_CHECK_PREFIX",
    "DEFAULT_SNAPSHOT_TERMS",
    "Multiseries",
    "Term",
    # Multiseries constructors
    "constant",
    "from_generator",
    "from_terms",
    "monomial_series",
    "negate",
    "of_monomial",
    "scale",
    "zero",
    # Multiseries predicates
    "is_flat_zero",
    "is_trimmed",
    "is_well_ordered",
    "well_ordered_view",
    "snapshot",
    # Arithmetic
    "add",
    "mul_monomial",
    "sub",
    # Monomial
    "Monomial",
    # Verdict
    "FailureKind",
    "LimitKind",
    "LimitVerdict",
]
