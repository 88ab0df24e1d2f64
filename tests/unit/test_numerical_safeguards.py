"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Валидность скаляров (bool, NaN/Inf, Fraction)
2. Знак с epsilon-защитой (точный для int/Fraction)
3. Epsilon-сравнения
4. Валидацию неотрицательных целых параметров
"""

import math
from fractions import Fraction

import pytest

from limitseries.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SIGN,
    is_close,
    is_exact_scalar,
    is_negative,
    is_numeric_scalar,
    is_positive,
    is_valid_scalar,
    is_zero,
    sign_with_tolerance,
    validate_non_negative_int,
)

# =============================================================================
# ТЕСТЫ ВАЛИДНОСТИ СКАЛЯРОВ
# =============================================================================


class TestScalarValidity:
    """Тесты для is_numeric_scalar / is_exact_scalar / is_valid_scalar"""

    @pytest.mark.parametrize("value", [0, -3, 2.5, Fraction(1, 3)])
    def test_numeric_scalars(self, value) -> None:
        assert is_numeric_scalar(value)

    @pytest.mark.parametrize("value", [True, False, "1", None, 1j])
    def test_non_scalars(self, value) -> None:
        """bool, строки, None и complex не являются скалярами"""
        assert not is_numeric_scalar(value)

    def test_exact_scalars(self) -> None:
        assert is_exact_scalar(7)
        assert is_exact_scalar(Fraction(-2, 5))
        assert not is_exact_scalar(0.5)
        assert not is_exact_scalar(True)

    def test_nan_and_inf_invalid(self) -> None:
        assert not is_valid_scalar(math.nan)
        assert not is_valid_scalar(math.inf)
        assert not is_valid_scalar(-math.inf)
        assert is_valid_scalar(1e308)


# =============================================================================
# ТЕСТЫ ЗНАКА
# =============================================================================


class TestSignWithTolerance:
    """Тесты для sign_with_tolerance"""

    def test_exact_scalars_have_exact_sign(self) -> None:
        """Сколь угодно малая Fraction не считается нулём"""
        assert sign_with_tolerance(Fraction(1, 10**30)) == 1
        assert sign_with_tolerance(Fraction(-1, 10**30)) == -1
        assert sign_with_tolerance(0) == 0

    def test_float_within_eps_is_zero(self) -> None:
        assert sign_with_tolerance(EPS_SIGN / 2) == 0
        assert sign_with_tolerance(-EPS_SIGN / 2) == 0
        assert sign_with_tolerance(0.0) == 0

    def test_float_boundary_is_zero(self) -> None:
        """|x| == tol считается нулём"""
        assert sign_with_tolerance(1e-6, tol=1e-6) == 0

    def test_float_outside_eps(self) -> None:
        assert sign_with_tolerance(1e-6) == 1
        assert sign_with_tolerance(-2.5) == -1

    def test_zero_tolerance(self) -> None:
        assert sign_with_tolerance(1e-300, tol=0.0) == 1

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            sign_with_tolerance(math.nan)

    def test_inf_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            sign_with_tolerance(math.inf)

    def test_negative_tol_rejected(self) -> None:
        with pytest.raises(ValueError, match="tol must be non-negative"):
            sign_with_tolerance(1.0, tol=-1e-9)

    def test_non_scalar_rejected(self) -> None:
        with pytest.raises(TypeError, match="expected a real numeric scalar"):
            sign_with_tolerance("1.0")
        with pytest.raises(TypeError):
            sign_with_tolerance(True)

    def test_predicates(self) -> None:
        assert is_zero(1e-13)
        assert is_positive(1e-3)
        assert is_negative(Fraction(-1, 7))
        assert not is_positive(0)


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты для is_close"""

    def test_exact_equal(self) -> None:
        assert is_close(Fraction(1, 2), Fraction(2, 4))
        assert is_close(3, 3)

    def test_exact_unequal_no_tolerance(self) -> None:
        """Точные скаляры не сравниваются с epsilon"""
        assert not is_close(Fraction(1, 10**20), 0)

    def test_float_relative(self) -> None:
        assert is_close(1e6, 1e6 * (1 + EPS_FLOAT_COMPARE_REL / 2))
        assert not is_close(1e6, 1e6 * (1 + 10 * EPS_FLOAT_COMPARE_REL))

    def test_float_absolute_near_zero(self) -> None:
        assert is_close(0.0, EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_close(0.0, 1e-6)

    def test_mixed_exact_and_float(self) -> None:
        assert is_close(Fraction(1, 4), 0.25)


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidateNonNegativeInt:
    """Тесты для validate_non_negative_int"""

    @pytest.mark.parametrize("value", [0, 1, 10**6])
    def test_valid(self, value) -> None:
        validate_non_negative_int(value, "fuel")

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="fuel must be non-negative"):
            validate_non_negative_int(-1, "fuel")

    @pytest.mark.parametrize("value", [1.0, "3", None, True])
    def test_non_int_rejected(self, value) -> None:
        with pytest.raises(ValueError, match="fuel must be an integer"):
            validate_non_negative_int(value, "fuel")
