"""
LimitVerdict — результат вычисления предела на +∞

Три исхода: расходимость к +∞, к −∞, сходимость к конечному значению.
FailureKind (таксономия отказов) определён в core.errors и реэкспортируется здесь.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from limitseries.core.domain.scalars import scalar_to_contract
from limitseries.core.errors import FailureKind


# =============================================================================
# ENUMS
# =============================================================================


class LimitKind(str, Enum):
    """Вид предела."""

    POS_INF = "POS_INF"
    NEG_INF = "NEG_INF"
    FINITE = "FINITE"


# =============================================================================
# VERDICT
# =============================================================================


@dataclass(frozen=True)
class LimitVerdict:
    """Вердикт о пределе; value задан только для FINITE."""

    kind: LimitKind
    value: Optional[Any] = None

    @classmethod
    def pos_inf(cls) -> "LimitVerdict":
        return cls(kind=LimitKind.POS_INF)

    @classmethod
    def neg_inf(cls) -> "LimitVerdict":
        return cls(kind=LimitKind.NEG_INF)

    @classmethod
    def finite(cls, value: Any) -> "LimitVerdict":
        return cls(kind=LimitKind.FINITE, value=value)

    @property
    def is_finite(self) -> bool:
        return self.kind == LimitKind.FINITE

    def to_contract_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "value": scalar_to_contract(self.value) if self.is_finite else None,
        }

    def __str__(self) -> str:
        if self.kind == LimitKind.POS_INF:
            return "+oo"
        if self.kind == LimitKind.NEG_INF:
            return "-oo"
        return f"finite({self.value})"
