"""
Scalars — коэффициенты и показатели multiseries

Скаляр — int, Fraction, float или вещественное sympy выражение. Модуль
содержит общие для доменных моделей операции, не зависящие от SignOracle:
точный ноль, строгое сравнение показателей и JSON-представление.
"""

from fractions import Fraction
from typing import Any, Union

import sympy

from limitseries.core.math.numerical_safeguards import is_numeric_scalar

Scalar = Union[int, float, Fraction, sympy.Expr]


def is_exact_zero(value: Any) -> bool:
    """
    Скаляр является нулём синтаксически.

    Для sympy используется структурное равенство (S.Zero, Float(0)), без
    упрощения: выражение, равное нулю только после simplify, не считается
    точным нулём. Такие случаи решает SignOracle.
    """
    return value == 0


def exponent_gt(a: Any, b: Any) -> bool:
    """
    Строгое a > b для показателей.

    Raises:
        TypeError: если сравнение sympy выражений не определено
            (например, свободные символы)
    """
    return bool(a > b)


def scalar_to_contract(value: Any) -> Union[int, float, str]:
    """
    JSON-представление скаляра.

    int/float остаются числами, Fraction и sympy выражения — строкой.
    """
    if isinstance(value, bool) or not (is_numeric_scalar(value) or isinstance(value, sympy.Basic)):
        raise TypeError(f"not a scalar: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, sympy.Integer):
        return int(value)
    return str(value)
