"""Trimmer — нормализация multiseries (удаление нулевых ведущих коэффициентов).

Trimmed multiseries: на каждой глубине ведущий коэффициент не flat zero.
Нормализуется только цепочка ведущих термов; хвосты остаются ленивыми и
нетронутыми.

Шаг на глубине d > 0 (глубина 0 уже trimmed и fuel не тратит):
1. Пустая последовательность → пустой результат
2. Trim коэффициента ведущего терма (глубина d-1), 1 единица fuel
3. d-1 == 0: SignOracle на скаляре
   - ZERO → терм поглощается, trim хвоста на его месте (1 единица fuel)
   - POSITIVE/NEGATIVE → терм остаётся с trimmed коэффициентом
4. d-1 > 0: trimmed коэффициент пуст → поглощение, иначе терм остаётся

Fuel — один общий бюджет на вызов trim: каждый рекурсивный вызов
(коэффициент или хвост) стоит ровно одну единицу. Завершимость
поглощения нулей не разрешима в общем случае, поэтому при нулевом бюджете
и оставшейся работе результат — OUT_OF_FUEL, а не зацикливание.
Поглощение хвостов выполняется циклом, спуск в коэффициенты ограничен
глубиной basis.
"""

import logging
from dataclasses import dataclass
from typing import Final, Optional

from limitseries.core.domain.multiseries import Multiseries, Term
from limitseries.core.errors import FailureKind, LimitEngineError, OutOfFuelError
from limitseries.core.lazy.sequence import LazySequence
from limitseries.core.math.numerical_safeguards import validate_non_negative_int
from limitseries.core.math.sign_oracle import (
    ConsistentSignOracle,
    Sign,
    SignOracle,
    default_sign_oracle,
)

logger = logging.getLogger(__name__)

# Бюджет fuel по умолчанию на один вызов trim
DEFAULT_FUEL: Final[int] = 64


@dataclass(frozen=True)
class TrimConfig:
    """Конфигурация Trimmer.

    - default_fuel: бюджет, если trim вызван без fuel
    - check_oracle_consistency: оборачивать oracle в ConsistentSignOracle на проход
    """
    default_fuel: int = DEFAULT_FUEL
    check_oracle_consistency: bool = True


@dataclass(frozen=True)
class TrimResult:
    """Результат trim: нормализованный multiseries или причина отказа."""

    ok: bool
    series: Optional[Multiseries]
    failure: Optional[FailureKind]

    # Учёт работы
    fuel_supplied: int
    fuel_used: int
    absorbed_terms: int

    # Детали
    details: str


class _FuelTank:
    """Общий бюджет одного прохода."""

    __slots__ = ("supplied", "remaining", "absorbed")

    def __init__(self, supplied: int):
        self.supplied = supplied
        self.remaining = supplied
        self.absorbed = 0

    @property
    def used(self) -> int:
        return self.supplied - self.remaining

    def consume(self, what: str, depth: int) -> None:
        if self.remaining <= 0:
            raise OutOfFuelError(
                f"fuel exhausted before trimming {what} at depth {depth} "
                f"(supplied {self.supplied}, absorbed {self.absorbed} terms)"
            )
        self.remaining -= 1


class Trimmer:
    """Trimmer с внедрённым SignOracle.

    Stateless между вызовами: состояние прохода (fuel, ответы oracle)
    создаётся заново в каждом trim.
    """

    def __init__(self, oracle: SignOracle, config: Optional[TrimConfig] = None):
        """
        Args:
            oracle: процедура определения знака скалярных коэффициентов
            config: конфигурация (default TrimConfig())
        """
        self.oracle = oracle
        self.config = config or TrimConfig()

    def trim(self, ms: Multiseries, fuel: Optional[int] = None) -> TrimResult:
        """Нормализация ведущей цепочки multiseries.

        Args:
            ms: multiseries любой глубины
            fuel: бюджет рекурсивных вызовов (default config.default_fuel)

        Returns:
            TrimResult: ok=True с trimmed multiseries, либо ok=False с
            FailureKind (OUT_OF_FUEL, ORACLE_INCONSISTENCY, NOT_WELL_ORDERED)

        Raises:
            ValueError: если fuel отрицательный или не int
        """
        if fuel is None:
            fuel = self.config.default_fuel
        validate_non_negative_int(fuel, "fuel")

        oracle = self.oracle
        if self.config.check_oracle_consistency:
            oracle = ConsistentSignOracle(self.oracle)

        tank = _FuelTank(fuel)

        try:
            trimmed = self._trim(ms, tank, oracle)
        except LimitEngineError as e:
            logger.debug("trim failed: %s (%s)", e.failure_kind.value, e)
            return TrimResult(
                ok=False,
                series=None,
                failure=e.failure_kind,
                fuel_supplied=fuel,
                fuel_used=tank.used,
                absorbed_terms=tank.absorbed,
                details=str(e),
            )

        return TrimResult(
            ok=True,
            series=trimmed,
            failure=None,
            fuel_supplied=fuel,
            fuel_used=tank.used,
            absorbed_terms=tank.absorbed,
            details=f"trimmed depth-{ms.depth} multiseries: "
                    f"absorbed {tank.absorbed} terms, fuel {tank.used}/{fuel}",
        )

    def _trim(self, ms: Multiseries, tank: _FuelTank, oracle: SignOracle) -> Multiseries:
        if ms.is_scalar:
            return ms

        depth = ms.depth
        seq = ms.terms

        while True:
            # 1. Пустая последовательность: trimmed вакуумно
            split = seq.destruct()
            if split is None:
                return Multiseries.of_terms(depth, seq)

            term, rest = split

            # 2. Trim коэффициента ведущего терма
            tank.consume("coefficient", depth)
            coefficient = self._trim(term.coefficient, tank, oracle)

            # 3-4. Решение о поглощении
            if coefficient.is_scalar:
                absorbed = oracle.query(coefficient.value) == Sign.ZERO
            else:
                absorbed = coefficient.terms.is_empty()

            if not absorbed:
                return Multiseries.of_terms(
                    depth, LazySequence.prepend(Term(term.exponent, coefficient), rest)
                )

            tank.absorbed += 1
            logger.debug(
                "absorbed zero term with exponent %r at depth %d", term.exponent, depth
            )

            # Trim хвоста на месте поглощённого терма
            tank.consume("tail", depth)
            seq = rest


def trim(
    ms: Multiseries,
    fuel: Optional[int] = None,
    oracle: Optional[SignOracle] = None,
) -> TrimResult:
    """Shortcut: Trimmer(oracle).trim(ms, fuel); oracle по умолчанию — sympy."""
    return Trimmer(oracle or default_sign_oracle()).trim(ms, fuel)
