"""
Multiseries — вложенный ленивый ряд над basis

Глубина 0: скаляр. Глубина d > 0: LazySequence термов (exponent, coefficient),
где coefficient — Multiseries глубины d-1. Multiseries глубины d над
basis [b0, ..., b(d-1)] представляет
    Σ_k coefficient_k · b0^exponent_k
с коэффициентами — функциями над [b1, ..., b(d-1)].

Smart constructors определены рекурсией по глубине и опускаются до скаляров.
Ни один конструктор не форсирует больше термов, чем запрошено потребителем.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Well-ordering: показатели вдоль последовательности строго убывают
2. Глубина коэффициента терма на глубине d равна d-1
3. Значения immutable: любая трансформация создаёт новый Multiseries
4. Trimmed: на каждой глубине ведущий коэффициент не flat zero

Approximation (связь с представляемой функцией) — семантический инвариант,
движком не проверяется, а сохраняется по построению.
"""

from dataclasses import dataclass
from typing import Any, Callable, Final, Iterable, Optional, Union

from limitseries.core.contracts import validate_series_snapshot
from limitseries.core.domain.basis import Basis
from limitseries.core.domain.scalars import exponent_gt, is_exact_zero, scalar_to_contract
from limitseries.core.errors import NotWellOrderedError
from limitseries.core.lazy.sequence import DONE, Emission, LazySequence, Next
from limitseries.core.math.numerical_safeguards import validate_non_negative_int

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Сколько термов на каждой глубине проверяет is_well_ordered по умолчанию
DEFAULT_ORDER_CHECK_PREFIX: Final[int] = 8

# Сколько термов на каждой глубине попадает в snapshot по умолчанию
DEFAULT_SNAPSHOT_TERMS: Final[int] = 4


# =============================================================================
# MODEL
# =============================================================================


@dataclass(frozen=True)
class Term:
    """Терм multiseries: coefficient · b^exponent."""

    exponent: Any
    coefficient: "Multiseries"

    def __post_init__(self):
        if not isinstance(self.coefficient, Multiseries):
            raise TypeError(
                f"term coefficient must be a Multiseries, got {type(self.coefficient).__name__}"
            )


class Multiseries:
    """
    Значение multiseries фиксированной глубины.

    Создаётся через of_scalar / of_terms или smart constructors модуля.
    """

    __slots__ = ("_depth", "_scalar", "_terms")

    def __init__(self, depth: int, scalar: Any = None, terms: Optional[LazySequence] = None):
        validate_non_negative_int(depth, "depth")
        if depth == 0 and terms is not None:
            raise ValueError("depth-0 multiseries is a scalar, terms are not allowed")
        if depth > 0 and terms is None:
            raise ValueError(f"depth-{depth} multiseries requires a term sequence")
        self._depth = depth
        self._scalar = scalar
        self._terms = terms

    @classmethod
    def of_scalar(cls, value: Any) -> "Multiseries":
        if isinstance(value, Multiseries):
            raise TypeError("value is already a Multiseries")
        if value is None or isinstance(value, bool):
            raise TypeError(f"scalar expected, got {value!r}")
        return cls(0, scalar=value)

    @classmethod
    def of_terms(cls, depth: int, terms: LazySequence) -> "Multiseries":
        if depth < 1:
            raise ValueError(f"term sequence requires depth >= 1, got {depth}")
        return cls(depth, terms=terms)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def is_scalar(self) -> bool:
        return self._depth == 0

    @property
    def value(self) -> Any:
        """Скаляр (только для глубины 0)."""
        if not self.is_scalar:
            raise AttributeError(f"depth-{self._depth} multiseries has no scalar value")
        return self._scalar

    @property
    def terms(self) -> LazySequence:
        """Последовательность термов (только для глубины > 0)."""
        if self.is_scalar:
            raise AttributeError("depth-0 multiseries has no terms")
        return self._terms

    def destruct(self) -> Optional[tuple[Term, "Multiseries"]]:
        """
        Разбор на ведущий терм и остаток той же глубины.

        Returns:
            None для пустой последовательности, иначе (head_term, tail)
        """
        split = self.terms.destruct()
        if split is None:
            return None
        head, rest = split
        return head, Multiseries(self._depth, terms=rest)

    def __repr__(self) -> str:
        if self.is_scalar:
            return f"Multiseries(depth=0, scalar={self._scalar!r})"
        return f"Multiseries(depth={self._depth}, terms={self._terms!r})"


# =============================================================================
# SMART CONSTRUCTORS
# =============================================================================


def _depth_of(basis: Union[Basis, int]) -> int:
    if isinstance(basis, Basis):
        return basis.depth
    validate_non_negative_int(basis, "depth")
    return basis


def _coerce_coefficient(coefficient: Any, depth: int) -> Multiseries:
    """Коэффициент глубины depth: Multiseries как есть, скаляр — только для depth 0."""
    if isinstance(coefficient, Multiseries):
        if coefficient.depth != depth:
            raise ValueError(
                f"coefficient depth {coefficient.depth} does not match expected depth {depth}"
            )
        return coefficient
    if depth != 0:
        raise ValueError(f"scalar coefficient given where depth-{depth} multiseries is expected")
    return Multiseries.of_scalar(coefficient)


def _single(depth: int, exponent: Any, coefficient: Multiseries) -> Multiseries:
    return Multiseries.of_terms(
        depth, LazySequence.prepend(Term(exponent, coefficient), LazySequence.empty())
    )


def zero(basis: Union[Basis, int]) -> Multiseries:
    """
    Нулевой multiseries.

    Глубина 0 — скаляр 0, иначе пустая последовательность термов.
    """
    depth = _depth_of(basis)
    if depth == 0:
        return Multiseries.of_scalar(0)
    return Multiseries.of_terms(depth, LazySequence.empty())


def constant(c: Any, basis: Union[Basis, int]) -> Multiseries:
    """
    Константа c: один терм с показателем 0 на каждой глубине.

    Examples:
        >>> ms = constant(7.0, 2)
        >>> snapshot(ms)["terms"][0]["exponent"]
        0
    """
    return monomial_series(c, (0,) * _depth_of(basis))


def monomial_series(c: Any, exponents: Iterable[Any]) -> Multiseries:
    """Одночлен c · Π b_i^exponents[i] как цепочка одиночных термов."""
    ms = Multiseries.of_scalar(c)
    for exponent in reversed(tuple(exponents)):
        ms = _single(ms.depth + 1, exponent, ms)
    return ms


def of_monomial(monomial) -> Multiseries:
    """Multiseries из Monomial (обратно к leading_term для одночленов)."""
    return monomial_series(monomial.coefficient, monomial.exponents)


def from_terms(depth: int, terms: Iterable[tuple[Any, Any]]) -> Multiseries:
    """
    Конечный multiseries из пар (exponent, coefficient).

    Коэффициенты на глубине 1 можно передавать скалярами; глубже —
    только Multiseries глубины depth-1. Пары проверяются сразу, порядок
    показателей — нет (см. is_well_ordered).
    """
    if depth < 1:
        raise ValueError(f"from_terms requires depth >= 1, got {depth}")
    items = [Term(exponent, _coerce_coefficient(coef, depth - 1)) for exponent, coef in terms]
    return Multiseries.of_terms(depth, LazySequence.from_iterable(items))


def from_generator(depth: int, seed: Any, step: Callable[[Any], Emission]) -> Multiseries:
    """
    Корекурсивный (возможно бесконечный) multiseries.

    step: seed → DONE | Next((exponent, coefficient), next_seed); коэффициенты
    приводятся к Multiseries лениво, при форсировании терма.
    """
    if depth < 1:
        raise ValueError(f"from_generator requires depth >= 1, got {depth}")

    def to_term(item: Any) -> Term:
        if isinstance(item, Term):
            _coerce_coefficient(item.coefficient, depth - 1)
            return item
        exponent, coef = item
        return Term(exponent, _coerce_coefficient(coef, depth - 1))

    return Multiseries.of_terms(depth, LazySequence.corecurse(seed, step).map(to_term))


def _map_scalars(ms: Multiseries, f: Callable[[Any], Any]) -> Multiseries:
    if ms.is_scalar:
        return Multiseries.of_scalar(f(ms.value))
    return Multiseries.of_terms(
        ms.depth,
        ms.terms.map(lambda t: Term(t.exponent, _map_scalars(t.coefficient, f))),
    )


def negate(ms: Multiseries) -> Multiseries:
    return _map_scalars(ms, lambda v: -v)


def scale(ms: Multiseries, c: Any) -> Multiseries:
    """Умножение всех скалярных коэффициентов на c (лениво)."""
    return _map_scalars(ms, lambda v: v * c)


# =============================================================================
# PREDICATES
# =============================================================================


def is_flat_zero(ms: Multiseries) -> bool:
    """Точный скаляр 0 или пустая последовательность термов."""
    if ms.is_scalar:
        return is_exact_zero(ms.value)
    return ms.terms.is_empty()


def is_trimmed(ms: Multiseries) -> bool:
    """
    Ведущий коэффициент на каждой глубине не flat zero.

    Форсирует только цепочку ведущих термов.
    """
    current = ms
    while not current.is_scalar:
        split = current.destruct()
        if split is None:
            return True
        term, _ = split
        if is_flat_zero(term.coefficient):
            return False
        current = term.coefficient
    return True


def is_well_ordered(ms: Multiseries, prefix: int = DEFAULT_ORDER_CHECK_PREFIX) -> bool:
    """
    Строгое убывание показателей на первых prefix термах каждой глубины.

    Проверяются и коэффициенты каждого из просмотренных термов, так что
    форсируется не более prefix^depth термов.
    """
    validate_non_negative_int(prefix, "prefix")

    pending = [ms]
    while pending:
        current = pending.pop()
        if current.is_scalar:
            continue

        previous = None
        for index, term in enumerate(current.terms.take(prefix)):
            if term.coefficient.depth != current.depth - 1:
                return False
            if index > 0 and not exponent_gt(previous, term.exponent):
                return False
            previous = term.exponent
            pending.append(term.coefficient)

    return True


_NO_EXPONENT = object()


def well_ordered_view(ms: Multiseries) -> Multiseries:
    """
    Ленивая проверка well-ordering.

    Возвращает тот же multiseries, у которого форсирование терма,
    нарушающего строгое убывание показателей (на любой глубине),
    выбрасывает NotWellOrderedError. Непросмотренные термы не проверяются.
    """
    if ms.is_scalar:
        return ms

    depth = ms.depth

    def step(seed: tuple) -> Emission:
        previous, seq = seed
        split = seq.destruct()
        if split is None:
            return DONE
        term, rest = split
        if term.coefficient.depth != depth - 1:
            raise ValueError(
                f"coefficient of depth {term.coefficient.depth} inside depth-{depth} multiseries"
            )
        if previous is not _NO_EXPONENT and not exponent_gt(previous, term.exponent):
            raise NotWellOrderedError(
                f"exponent {term.exponent!r} does not strictly decrease after "
                f"{previous!r} at depth {depth}"
            )
        return Next(
            Term(term.exponent, well_ordered_view(term.coefficient)),
            (term.exponent, rest),
        )

    return Multiseries.of_terms(depth, LazySequence.corecurse((_NO_EXPONENT, ms.terms), step))


# =============================================================================
# SNAPSHOT
# =============================================================================


def snapshot(ms: Multiseries, terms: int = DEFAULT_SNAPSHOT_TERMS) -> dict:
    """
    Конечное вложенное представление (контракт series_snapshot.json).

    На каждой глубине берутся первые terms термов; truncated=True, если
    за ними есть ещё термы.

    Raises:
        jsonschema.ValidationError: Если представление нарушает контракт
    """
    validate_non_negative_int(terms, "terms")
    data = _snapshot(ms, terms)
    validate_series_snapshot(data)
    return data


def _snapshot(ms: Multiseries, terms: int) -> dict:
    if ms.is_scalar:
        return {"depth": 0, "scalar": scalar_to_contract(ms.value)}

    return {
        "depth": ms.depth,
        "terms": [
            {"exponent": scalar_to_contract(t.exponent), "coefficient": _snapshot(t.coefficient, terms)}
            for t in ms.terms.take(terms)
        ],
        "truncated": ms.terms.force(terms),
    }
