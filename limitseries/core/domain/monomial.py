"""
Monomial — ведущий член multiseries

Immutable Pydantic модель: скалярный коэффициент и по одному показателю
на каждую функцию basis. Представляет coefficient · Π basis[i]^exponents[i].
Производится LeadingTermExtractor, потребляется LimitResolver.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from limitseries.core.contracts import validate_monomial
from limitseries.core.domain.scalars import scalar_to_contract


class Monomial(BaseModel):
    """Одночлен coefficient · Π basis[i]^exponents[i]."""

    coefficient: Any = Field(..., description="Скалярный коэффициент")
    exponents: tuple[Any, ...] = Field(
        default=(), description="Показатели по функциям basis (в порядке basis)"
    )

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("coefficient")
    @classmethod
    def validate_coefficient(cls, v: Any) -> Any:
        """Коэффициент не может быть bool или None"""
        if v is None or isinstance(v, bool):
            raise ValueError(f"coefficient must be a scalar, got {v!r}")
        return v

    @property
    def depth(self) -> int:
        return len(self.exponents)

    def to_contract_dict(self) -> dict:
        """
        JSON-представление (контракт monomial.json).

        Raises:
            jsonschema.ValidationError: Если представление нарушает контракт
        """
        data = {
            "coefficient": scalar_to_contract(self.coefficient),
            "exponents": [scalar_to_contract(e) for e in self.exponents],
        }
        validate_monomial(data)
        return data

    def __str__(self) -> str:
        if not self.exponents:
            return str(self.coefficient)
        powers = " * ".join(f"b{i}^{e}" for i, e in enumerate(self.exponents))
        return f"{self.coefficient} * {powers}"
