"""
limitseries — пределы на +∞ через multiseries

Функция представлена вложенным ленивым рядом над упорядоченным basis;
предел определяется по ведущему члену после trimming.
"""

from limitseries.core.domain import Basis, Multiseries
from limitseries.core.domain.verdict import LimitKind, LimitVerdict
from limitseries.core.errors import FailureKind
from limitseries.core.math.sign_oracle import Sign, SignOracle
from limitseries.engine import LimitEngine, LimitEngineConfig, LimitResult, find_limit

__all__ = [
    "Basis",
    "Multiseries",
    "LimitKind",
    "LimitVerdict",
    "FailureKind",
    "Sign",
    "SignOracle",
    "LimitEngine",
    "LimitEngineConfig",
    "LimitResult",
    "find_limit",
]
