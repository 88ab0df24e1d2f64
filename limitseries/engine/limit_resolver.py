"""LimitResolver — вердикт о пределе ведущего одночлена.

Одночлен c · Π basis[i]^e[i] при x → +∞. Все функции basis стремятся к +∞,
и basis[i] растёт в log-шкале строго быстрее всех basis[j], j > i. Поэтому
поведение произведения определяется первым ненулевым показателем:

- первый ненулевой e[k] > 0: c > 0 → +∞, c < 0 → −∞, c == 0 → 0
- первый ненулевой e[k] < 0: → 0 (конечный предел)
- все показатели нулевые: → c (конечный предел)

Знаки коэффициента и показателей определяются через SignOracle.
"""

from typing import Optional

from limitseries.core.domain.basis import Basis
from limitseries.core.domain.monomial import Monomial
from limitseries.core.domain.verdict import LimitVerdict
from limitseries.core.math.sign_oracle import Sign, SignOracle, default_sign_oracle


class LimitResolver:
    """Трёхзначный вердикт (+∞ / −∞ / конечный) для одночлена."""

    def __init__(self, oracle: Optional[SignOracle] = None):
        self.oracle = oracle or default_sign_oracle()

    def resolve(self, monomial: Monomial, basis: Basis) -> LimitVerdict:
        """
        Args:
            monomial: ведущий одночлен
            basis: basis, над которым построен одночлен

        Returns:
            LimitVerdict

        Raises:
            ValueError: если число показателей не равно длине basis
        """
        if monomial.depth != len(basis):
            raise ValueError(
                f"monomial has {monomial.depth} exponents, basis has {len(basis)} functions"
            )

        coefficient_sign = self.oracle.query(monomial.coefficient)

        for exponent in monomial.exponents:
            exponent_sign = self.oracle.query(exponent)
            if exponent_sign == Sign.ZERO:
                continue

            if exponent_sign == Sign.NEGATIVE or coefficient_sign == Sign.ZERO:
                return LimitVerdict.finite(0)
            if coefficient_sign == Sign.POSITIVE:
                return LimitVerdict.pos_inf()
            return LimitVerdict.neg_inf()

        return LimitVerdict.finite(monomial.coefficient)


def resolve_limit(
    monomial: Monomial,
    basis: Basis,
    oracle: Optional[SignOracle] = None,
) -> LimitVerdict:
    return LimitResolver(oracle).resolve(monomial, basis)
