"""
SignOracle — внешняя процедура определения знака скаляра

Контракт: query(scalar) → ZERO | POSITIVE | NEGATIVE; тотальная,
детерминированная, без побочных эффектов с точки зрения движка.
Движок ничего не предполагает о реализации oracle сверх этого контракта
и получает его через dependency injection (никакого глобального состояния).

Реализации:
- NumericSignOracle: int/Fraction точно, float с epsilon-защитой
- SympySignOracle: sympy assumptions, затем численная оценка evalf
- CallableSignOracle: адаптер произвольной функции
- ConsistentSignOracle: обёртка, детектирующая противоречивые ответы
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Final, Hashable, Union

import sympy

from limitseries.core.errors import OracleInconsistencyError
from limitseries.core.math.numerical_safeguards import (
    EPS_SIGN,
    is_numeric_scalar,
    sign_with_tolerance,
)

# Точность численной оценки (значащие цифры) для sympy выражений,
# знак которых не выводится из assumptions
SYMPY_EVALF_PRECISION: Final[int] = 30


# =============================================================================
# ENUMS
# =============================================================================


class Sign(str, Enum):
    """Знак скаляра."""

    ZERO = "ZERO"
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"

    @classmethod
    def from_int(cls, value: int) -> "Sign":
        if value == 0:
            return cls.ZERO
        return cls.POSITIVE if value > 0 else cls.NEGATIVE


# =============================================================================
# CONTRACT
# =============================================================================


class SignOracle(ABC):
    """Стратегия определения знака скаляра."""

    @abstractmethod
    def query(self, value: Any) -> Sign:
        """
        Знак скаляра.

        Args:
            value: Скаляр (символьное или числовое представление)

        Returns:
            Sign.ZERO, Sign.POSITIVE или Sign.NEGATIVE
        """


# =============================================================================
# IMPLEMENTATIONS
# =============================================================================


class NumericSignOracle(SignOracle):
    """
    Oracle для числовых скаляров.

    int и Fraction — точный знак; float с |x| <= eps считается нулём.
    """

    def __init__(self, eps: float = EPS_SIGN):
        if eps < 0:
            raise ValueError(f"eps must be non-negative, got {eps}")
        self.eps = eps

    def query(self, value: Any) -> Sign:
        return Sign.from_int(sign_with_tolerance(value, self.eps))


class SympySignOracle(SignOracle):
    """
    Oracle для символьных скаляров (sympy).

    Порядок:
    1. Числовые скаляры Python → NumericSignOracle (eps)
    2. sympy assumptions: is_zero / is_positive / is_negative
    3. То же после simplify
    4. Численная оценка evalf(precision) для выражений без свободных символов

    Oracle частичный: знак выражения со свободными символами, комплексного
    значения или NaN не определяется, query выбрасывает ValueError, и
    find_limit пропускает его наружу (это не FailureKind).

    Raises (из query):
        ValueError: знак не определяется (свободные символы, комплексное
            значение или NaN)
    """

    def __init__(self, eps: float = EPS_SIGN, precision: int = SYMPY_EVALF_PRECISION):
        self._numeric = NumericSignOracle(eps)
        self.precision = precision

    def query(self, value: Any) -> Sign:
        if is_numeric_scalar(value) and not isinstance(value, sympy.Basic):
            return self._numeric.query(value)

        expr = sympy.sympify(value)

        decided = self._from_assumptions(expr)
        if decided is not None:
            return decided

        simplified = sympy.simplify(expr)
        decided = self._from_assumptions(simplified)
        if decided is not None:
            return decided

        if simplified.free_symbols:
            raise ValueError(
                f"cannot decide sign of {expr}: free symbols {sorted(map(str, simplified.free_symbols))}"
            )

        numeric = simplified.evalf(self.precision)
        if not numeric.is_real or numeric.is_finite is False:
            raise ValueError(f"cannot decide sign of {expr}: evaluates to {numeric}")

        return self._numeric.query(float(numeric))

    @staticmethod
    def _from_assumptions(expr: sympy.Basic) -> Union[Sign, None]:
        if expr.is_zero:
            return Sign.ZERO
        if expr.is_positive:
            return Sign.POSITIVE
        if expr.is_negative:
            return Sign.NEGATIVE
        return None


class CallableSignOracle(SignOracle):
    """
    Адаптер функции value → Sign | int.

    int интерпретируется как знак (-1/0/+1 или любое число того же знака).
    """

    def __init__(self, fn: Callable[[Any], Union[Sign, int]]):
        self.fn = fn

    def query(self, value: Any) -> Sign:
        verdict = self.fn(value)
        if isinstance(verdict, Sign):
            return verdict
        return Sign.from_int(verdict)


def _oracle_key(value: Any) -> Hashable:
    """Ключ "наблюдаемо равных" входов: сам скаляр, если хешируем, иначе repr."""
    try:
        hash(value)
    except TypeError:
        return (type(value).__name__, repr(value))
    return value


class ConsistentSignOracle(SignOracle):
    """
    Обёртка с проверкой согласованности ответов в пределах одного прохода.

    Запоминает ответ для каждого входа; если на равный вход inner oracle
    отвечает иначе — OracleInconsistencyError. Повторные запросы всё равно
    уходят во inner oracle, иначе противоречие нельзя обнаружить.
    """

    def __init__(self, inner: SignOracle):
        self.inner = inner
        self._verdicts: dict = {}

    def query(self, value: Any) -> Sign:
        verdict = self.inner.query(value)
        key = _oracle_key(value)
        previous = self._verdicts.get(key)

        if previous is not None and previous != verdict:
            raise OracleInconsistencyError(
                f"SignOracle returned {verdict.value} for {value!r}, "
                f"previously {previous.value} for an equal input"
            )

        self._verdicts[key] = verdict
        return verdict

    @property
    def query_count(self) -> int:
        """Количество различных входов, на которые получен ответ."""
        return len(self._verdicts)

    def reset(self) -> None:
        """Начало нового прохода."""
        self._verdicts.clear()


def default_sign_oracle() -> SignOracle:
    """Oracle по умолчанию: sympy (покрывает и числовые скаляры)."""
    return SympySignOracle()
