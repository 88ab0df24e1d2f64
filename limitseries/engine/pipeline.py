"""LimitEngine — публичная точка входа find_limit.

Порядок стадий:
1. Проверка контракта вызова (глубина multiseries == длина basis)
2. Well-ordering: eager проверка prefix + ленивая проверка при форсировании
3. Trimmer (fuel-bounded)
4. LeadingTermExtractor
5. LimitResolver

Каждый вызов самодостаточен: между вызовами ничего не сохраняется.
Отказы OUT_OF_FUEL / NOT_WELL_ORDERED / ORACLE_INCONSISTENCY возвращаются
как LimitResult с ok=False; нарушения контракта вызова — ValueError.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from limitseries.core.contracts import validate_limit_result
from limitseries.core.domain.basis import Basis
from limitseries.core.domain.monomial import Monomial
from limitseries.core.domain.multiseries import (
    DEFAULT_ORDER_CHECK_PREFIX,
    Multiseries,
    is_well_ordered,
    well_ordered_view,
)
from limitseries.core.domain.verdict import LimitVerdict
from limitseries.core.errors import FailureKind, LimitEngineError
from limitseries.core.math.sign_oracle import SignOracle, default_sign_oracle
from limitseries.engine.leading_term import LeadingTermExtractor
from limitseries.engine.limit_resolver import LimitResolver
from limitseries.engine.trimmer import DEFAULT_FUEL, TrimConfig, Trimmer, TrimResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimitEngineConfig:
    """Конфигурация LimitEngine.

    - default_fuel: бюджет trim, если find_limit вызван без fuel
    - order_check_prefix: сколько термов на каждой глубине проверяется
      eager до trim (0 — только ленивая проверка)
    - lazy_order_check: проверять well-ordering термов, форсируемых при trim
    - check_oracle_consistency: детектировать противоречивые ответы oracle
    """
    default_fuel: int = DEFAULT_FUEL
    order_check_prefix: int = DEFAULT_ORDER_CHECK_PREFIX
    lazy_order_check: bool = True
    check_oracle_consistency: bool = True


@dataclass(frozen=True)
class LimitResult:
    """Результат find_limit."""

    ok: bool
    verdict: Optional[LimitVerdict]
    failure: Optional[FailureKind]

    # Промежуточные результаты
    monomial: Optional[Monomial]
    trim_result: Optional[TrimResult]

    # Детали
    details: str

    @property
    def fuel_used(self) -> int:
        return self.trim_result.fuel_used if self.trim_result is not None else 0

    def to_contract_dict(self) -> dict:
        """
        JSON-представление (контракт limit_result.json).

        Raises:
            jsonschema.ValidationError: Если результат несогласован, например
                ok=True без verdict
        """
        data = {
            "ok": self.ok,
            "verdict": self.verdict.to_contract_dict() if self.verdict is not None else None,
            "failure": self.failure.value if self.failure is not None else None,
            "monomial": self.monomial.to_contract_dict() if self.monomial is not None else None,
            "fuel_used": self.fuel_used,
            "details": self.details,
        }
        validate_limit_result(data)
        return data


class LimitEngine:
    """Вычисление предела multiseries на +∞ над заданным basis."""

    def __init__(
        self,
        oracle: Optional[SignOracle] = None,
        config: Optional[LimitEngineConfig] = None,
    ):
        """
        Args:
            oracle: SignOracle (default SympySignOracle)
            config: конфигурация (default LimitEngineConfig())
        """
        self.oracle = oracle or default_sign_oracle()
        self.config = config or LimitEngineConfig()
        self.trimmer = Trimmer(
            self.oracle,
            TrimConfig(
                default_fuel=self.config.default_fuel,
                check_oracle_consistency=self.config.check_oracle_consistency,
            ),
        )
        self.extractor = LeadingTermExtractor()
        self.resolver = LimitResolver(self.oracle)

    def find_limit(
        self,
        ms: Multiseries,
        basis: Basis,
        fuel: Optional[int] = None,
    ) -> LimitResult:
        """Предел функции, представленной ms, при x → +∞.

        Args:
            ms: multiseries глубины len(basis)
            basis: упорядоченный basis
            fuel: бюджет trim (default config.default_fuel)

        Returns:
            LimitResult: ok=True с LimitVerdict, либо ok=False с FailureKind

        Raises:
            ValueError: если глубина ms не равна длине basis, fuel невалиден
                или oracle не может определить знак коэффициента
                (SympySignOracle на свободных символах)
        """
        if ms.depth != len(basis):
            raise ValueError(
                f"multiseries depth {ms.depth} does not match basis length {len(basis)}"
            )

        # 1. Eager проверка well-ordering на prefix
        if self.config.order_check_prefix > 0 and not is_well_ordered(
            ms, self.config.order_check_prefix
        ):
            return self._failure(
                FailureKind.NOT_WELL_ORDERED,
                trim_result=None,
                details=f"exponents do not strictly decrease within the first "
                        f"{self.config.order_check_prefix} terms",
            )

        series = well_ordered_view(ms) if self.config.lazy_order_check else ms

        # 2. Trim
        trim_result = self.trimmer.trim(series, fuel)
        if not trim_result.ok:
            return self._failure(trim_result.failure, trim_result, trim_result.details)

        # 3-4. Leading term + verdict
        try:
            monomial = self.extractor.extract(trim_result)
            verdict = self.resolver.resolve(monomial, basis)
        except LimitEngineError as e:
            return self._failure(e.failure_kind, trim_result, str(e))

        logger.info(
            "limit over basis %s: %s (leading term %s, fuel %d/%d)",
            list(basis.names),
            verdict,
            monomial,
            trim_result.fuel_used,
            trim_result.fuel_supplied,
        )

        return LimitResult(
            ok=True,
            verdict=verdict,
            failure=None,
            monomial=monomial,
            trim_result=trim_result,
            details=f"leading term {monomial} → {verdict}",
        )

    @staticmethod
    def _failure(
        failure: FailureKind,
        trim_result: Optional[TrimResult],
        details: str,
    ) -> LimitResult:
        logger.warning("find_limit failed: %s (%s)", failure.value, details)
        return LimitResult(
            ok=False,
            verdict=None,
            failure=failure,
            monomial=None,
            trim_result=trim_result,
            details=details,
        )


def find_limit(
    ms: Multiseries,
    basis: Basis,
    oracle: Optional[SignOracle] = None,
    fuel: Optional[int] = None,
    config: Optional[LimitEngineConfig] = None,
) -> LimitResult:
    """
    Shortcut: LimitEngine(oracle, config).find_limit(ms, basis, fuel).

    Raises:
        ValueError: как LimitEngine.find_limit; default oracle (SympySignOracle)
            не определяет знак выражений со свободными символами
    """
    return LimitEngine(oracle, config).find_limit(ms, basis, fuel)
