"""
Basis — упорядоченный список функций сравнения

Immutable Pydantic модель. Basis фиксирован на время одного вычисления
предела; глубина multiseries равна длине basis.

ПРЕДУСЛОВИЕ (не проверяется движком):
- каждая функция стремится к +∞
- каждая функция растёт строго быстрее (в log-шкале) всех последующих
"""

from typing import Any, Iterator

from pydantic import BaseModel, Field, field_validator


class BasisFunction(BaseModel):
    """
    Функция basis: имя + непрозрачный handle.

    Движок не вычисляет handle; он может быть sympy выражением, callable
    или любым объектом внешнего коллаборатора.
    """

    name: str = Field(..., min_length=1, description="Имя функции (например, 'exp(x)')")
    handle: Any = Field(None, description="Непрозрачный handle функции")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class Basis(BaseModel):
    """Упорядоченный basis: functions[0] растёт быстрее всех."""

    functions: tuple[BasisFunction, ...] = Field(
        default=(), description="Функции basis от самой быстрой к самой медленной"
    )

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("functions")
    @classmethod
    def validate_unique_names(cls, v: tuple) -> tuple:
        """Имена функций basis уникальны"""
        names = [f.name for f in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"basis function names must be unique, duplicates: {duplicates}")
        return v

    @classmethod
    def of(cls, *functions: Any) -> "Basis":
        """
        Basis из имён или BasisFunction.

        Examples:
            >>> Basis.of("exp(x)", "x", "log(x)").names
            ('exp(x)', 'x', 'log(x)')
        """
        items = tuple(
            f if isinstance(f, BasisFunction) else BasisFunction(name=str(f), handle=f)
            for f in functions
        )
        return cls(functions=items)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.functions)

    @property
    def depth(self) -> int:
        return len(self.functions)

    def tail(self) -> "Basis":
        """Basis без доминирующей функции (basis коэффициентов)."""
        return Basis(functions=self.functions[1:])

    def __len__(self) -> int:
        return len(self.functions)

    def __getitem__(self, index: int) -> BasisFunction:
        return self.functions[index]

    def iter_functions(self) -> Iterator[BasisFunction]:
        return iter(self.functions)
