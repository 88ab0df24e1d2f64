"""LeadingTermExtractor — ведущий одночлен trimmed multiseries.

- Глубина 0: одночлен — сам скаляр с пустым вектором показателей
- Глубина d > 0, пустая последовательность: нулевой скаляр и d нулевых
  показателей (вырожденный случай)
- Иначе: (coefficient_monomial.coefficient, exponent :: coefficient_monomial.exponents),
  где coefficient_monomial — ведущий одночлен коэффициента ведущего терма

Корректный результат гарантирован только для trimmed multiseries: у
ряда без trim ведущий терм может быть алгебраически нулевым.
"""

from limitseries.core.domain.monomial import Monomial
from limitseries.core.domain.multiseries import Multiseries
from limitseries.engine.trimmer import TrimResult


def leading_term(ms: Multiseries) -> Monomial:
    """Ведущий одночлен; форсирует только цепочку ведущих термов."""
    exponents = []
    current = ms

    while not current.is_scalar:
        split = current.destruct()
        if split is None:
            exponents.extend([0] * current.depth)
            return Monomial(coefficient=0, exponents=tuple(exponents))
        term, _ = split
        exponents.append(term.exponent)
        current = term.coefficient

    return Monomial(coefficient=current.value, exponents=tuple(exponents))


class LeadingTermExtractor:
    """Извлечение ведущего одночлена из успешного TrimResult."""

    def extract(self, trim_result: TrimResult) -> Monomial:
        """
        Args:
            trim_result: результат Trimmer.trim

        Returns:
            Monomial ведущего члена

        Raises:
            ValueError: если trim завершился отказом
        """
        if not trim_result.ok:
            raise ValueError(
                f"cannot extract leading term from a failed trim "
                f"({trim_result.failure.value}: {trim_result.details})"
            )
        return leading_term(trim_result.series)
