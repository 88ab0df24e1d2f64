"""
Numerical Safeguards — знак и сравнение числовых скаляров

Модуль даёт примитивы для численных (не символьных) коэффициентов
и показателей multiseries:
- Проверка валидности скаляра (int, Fraction, конечный float)
- Epsilon-защиты при определении знака float
- Epsilon-сравнение float
- Валидация неотрицательных целочисленных параметров (fuel, границы развёртки)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Точные скаляры (int, Fraction) сравниваются точно, без epsilon
2. NaN/Inf никогда не получают знак (ValueError)
3. bool не считается скаляром
4. Все операции детерминированы и воспроизводимы
"""

import math
from fractions import Fraction
from numbers import Rational, Real
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность при определении знака float-коэффициента
# |x| <= EPS_SIGN → ZERO
EPS_SIGN: Final[float] = 1e-12

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ВАЛИДНОСТЬ СКАЛЯРОВ
# =============================================================================


def is_numeric_scalar(value: object) -> bool:
    """
    Проверка, является ли значение числовым вещественным скаляром.

    bool исключён явно: True/False не являются коэффициентами.
    """
    return isinstance(value, Real) and not isinstance(value, bool)


def is_exact_scalar(value: object) -> bool:
    """int и Fraction (любые numbers.Rational) — точные скаляры."""
    return isinstance(value, Rational) and not isinstance(value, bool)


def is_valid_scalar(value: object) -> bool:
    """
    Числовой скаляр без NaN/Inf.

    Examples:
        >>> is_valid_scalar(Fraction(1, 3))
        True
        >>> is_valid_scalar(float("nan"))
        False
        >>> is_valid_scalar(True)
        False
    """
    if not is_numeric_scalar(value):
        return False
    if is_exact_scalar(value):
        return True
    return math.isfinite(float(value))


# =============================================================================
# ЗНАК С EPSILON-ЗАЩИТОЙ
# =============================================================================


def sign_with_tolerance(value: Real, tol: float = EPS_SIGN) -> int:
    """
    Знак числового скаляра.

    Для int/Fraction знак точный; для float значения с |x| <= tol
    считаются нулём.

    Args:
        value: Числовой скаляр
        tol: Абсолютная толерантность для float (default: EPS_SIGN)

    Returns:
        -1, 0 или +1

    Raises:
        ValueError: если value NaN/Inf или tol отрицательный
        TypeError: если value не числовой скаляр

    Examples:
        >>> sign_with_tolerance(Fraction(-1, 10**20))
        -1
        >>> sign_with_tolerance(1e-15)
        0
        >>> sign_with_tolerance(2.5)
        1
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    if not is_numeric_scalar(value):
        raise TypeError(f"expected a real numeric scalar, got {type(value).__name__}")
    if not is_valid_scalar(value):
        raise ValueError(f"scalar must be finite (not NaN/Inf), got {value}")

    if is_exact_scalar(value):
        if value == 0:
            return 0
        return 1 if value > 0 else -1

    x = float(value)
    if abs(x) <= tol:
        return 0
    return 1 if x > 0 else -1


def is_zero(value: Real, tol: float = EPS_SIGN) -> bool:
    return sign_with_tolerance(value, tol) == 0


def is_positive(value: Real, tol: float = EPS_SIGN) -> bool:
    return sign_with_tolerance(value, tol) > 0


def is_negative(value: Real, tol: float = EPS_SIGN) -> bool:
    return sign_with_tolerance(value, tol) < 0


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: Real,
    b: Real,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение скаляров с учётом машинной точности.

    Точные скаляры сравниваются через ==, иначе math.isclose:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
    """
    if is_exact_scalar(a) and is_exact_scalar(b):
        return Fraction(a) == Fraction(b)
    return math.isclose(float(a), float(b), rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация неотрицательного целого параметра.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
