"""
Тесты для LeadingTermExtractor и LimitResolver
"""

import pytest
import sympy

from limitseries.core.domain import (
    Basis,
    LimitKind,
    LimitVerdict,
    Monomial,
    Multiseries,
    constant,
    from_generator,
    from_terms,
    monomial_series,
    of_monomial,
    zero,
)
from limitseries.core.lazy import Next
from limitseries.core.math import NumericSignOracle
from limitseries.engine import (
    LeadingTermExtractor,
    LimitResolver,
    Trimmer,
    leading_term,
    resolve_limit,
)


@pytest.fixture
def resolver() -> LimitResolver:
    return LimitResolver(NumericSignOracle())


@pytest.fixture
def basis2() -> Basis:
    return Basis.of("exp(x)", "x")


# =============================================================================
# LEADING TERM
# =============================================================================


class TestLeadingTerm:
    def test_scalar(self) -> None:
        assert leading_term(Multiseries.of_scalar(5)) == Monomial(coefficient=5, exponents=())

    def test_constant(self) -> None:
        assert leading_term(constant(7.0, 2)) == Monomial(coefficient=7.0, exponents=(0, 0))

    def test_depth_one(self) -> None:
        ms = from_terms(1, [(3, 2), (1, 5)])
        assert leading_term(ms) == Monomial(coefficient=2, exponents=(3,))

    def test_empty_series_is_zero_monomial(self) -> None:
        assert leading_term(zero(3)) == Monomial(coefficient=0, exponents=(0, 0, 0))

    def test_empty_inner_coefficient(self) -> None:
        ms = from_terms(2, [(4, zero(1))])
        assert leading_term(ms) == Monomial(coefficient=0, exponents=(4, 0))

    def test_round_trip_with_of_monomial(self) -> None:
        m = Monomial(coefficient=-3, exponents=(1, 2, -1))
        assert leading_term(of_monomial(m)) == m

    def test_forces_only_leading_chain(self) -> None:
        ms = from_generator(1, 0, lambda k: Next((-k, k + 1), k + 1))
        leading_term(ms)
        assert ms.terms.forced_count == 1


class TestLeadingTermExtractor:
    def test_extract_after_trim(self) -> None:
        ms = from_terms(1, [(2, 0), (1, 3)])
        trim_result = Trimmer(NumericSignOracle()).trim(ms, fuel=10)
        assert LeadingTermExtractor().extract(trim_result) == Monomial(
            coefficient=3, exponents=(1,)
        )

    def test_extract_from_failed_trim(self) -> None:
        trim_result = Trimmer(NumericSignOracle()).trim(from_terms(1, [(0, 1)]), fuel=0)
        with pytest.raises(ValueError, match="failed trim"):
            LeadingTermExtractor().extract(trim_result)


# =============================================================================
# LIMIT RESOLVER
# =============================================================================


class TestLimitResolver:
    def test_constant_is_finite(self, resolver, basis2) -> None:
        verdict = resolver.resolve(leading_term(constant(7.0, 2)), basis2)
        assert verdict == LimitVerdict.finite(7.0)

    @pytest.mark.parametrize(
        "coefficient, exponents, kind",
        [
            (2, (1, 0), LimitKind.POS_INF),
            (-2, (1, 0), LimitKind.NEG_INF),
            (3, (0, 2), LimitKind.POS_INF),
            (-3, (0, 2), LimitKind.NEG_INF),
            # доминирует первый ненулевой показатель
            (1, (1, -5), LimitKind.POS_INF),
            (1, (-1, 5), LimitKind.FINITE),
        ],
    )
    def test_first_nonzero_exponent_decides(
        self, resolver, basis2, coefficient, exponents, kind
    ) -> None:
        verdict = resolver.resolve(Monomial(coefficient=coefficient, exponents=exponents), basis2)
        assert verdict.kind == kind

    def test_negative_exponent_limit_is_zero(self, resolver, basis2) -> None:
        verdict = resolver.resolve(Monomial(coefficient=-9, exponents=(0, -1)), basis2)
        assert verdict == LimitVerdict.finite(0)

    def test_zero_coefficient_with_growth_is_zero(self, resolver, basis2) -> None:
        verdict = resolver.resolve(Monomial(coefficient=0, exponents=(2, 0)), basis2)
        assert verdict == LimitVerdict.finite(0)

    def test_empty_basis(self, resolver) -> None:
        assert resolver.resolve(Monomial(coefficient=4), Basis()) == LimitVerdict.finite(4)

    def test_exponent_count_mismatch(self, resolver, basis2) -> None:
        with pytest.raises(ValueError, match="basis has 2 functions"):
            resolver.resolve(Monomial(coefficient=1, exponents=(1,)), basis2)

    def test_symbolic_exponents_default_oracle(self, basis2) -> None:
        m = Monomial(coefficient=sympy.Integer(1), exponents=(sympy.S.Zero, sympy.sqrt(2) - 1))
        assert resolve_limit(m, basis2) == LimitVerdict.pos_inf()

    def test_symbolic_coefficient_sign(self, basis2) -> None:
        m = Monomial(coefficient=sympy.E - 3, exponents=(1, 0))
        assert resolve_limit(m, basis2).kind == LimitKind.NEG_INF

    def test_monomial_series_verdict(self, resolver) -> None:
        basis = Basis.of("x", "log(x)")
        ms = monomial_series(-1, (0, 1))
        assert resolver.resolve(leading_term(ms), basis) == LimitVerdict.neg_inf()
