"""
Multiseries arithmetic — ленивые операции, сохраняющие well-ordering

- add: слияние двух рядов по убыванию показателей; при равных показателях
  коэффициенты складываются рекурсивно
- sub: add(a, negate(b))
- mul_monomial: умножение на c · Π b_i^e_i (сдвиг показателей)

Нулевые суммы коэффициентов НЕ удаляются: это задача Trimmer, которому
для этого нужен SignOracle.
"""

from typing import Any, Sequence

from limitseries.core.domain.multiseries import Multiseries, Term, negate
from limitseries.core.domain.scalars import exponent_gt
from limitseries.core.lazy.sequence import DONE, Emission, LazySequence, Next


def _require_same_depth(a: Multiseries, b: Multiseries) -> None:
    if a.depth != b.depth:
        raise ValueError(f"depth mismatch: {a.depth} != {b.depth}")


def _merge_step(seed: tuple) -> Emission:
    left, right = seed
    split_left = left.destruct()
    split_right = right.destruct()

    if split_left is None and split_right is None:
        return DONE
    if split_left is None:
        head, rest = split_right
        return Next(head, (left, rest))
    if split_right is None:
        head, rest = split_left
        return Next(head, (rest, right))

    head_left, rest_left = split_left
    head_right, rest_right = split_right

    if exponent_gt(head_left.exponent, head_right.exponent):
        return Next(head_left, (rest_left, right))
    if exponent_gt(head_right.exponent, head_left.exponent):
        return Next(head_right, (left, rest_right))

    # Равные показатели: один терм с суммой коэффициентов
    merged = Term(head_left.exponent, add(head_left.coefficient, head_right.coefficient))
    return Next(merged, (rest_left, rest_right))


def add(a: Multiseries, b: Multiseries) -> Multiseries:
    """
    Сумма двух multiseries одной глубины.

    Позиция n результата форсирует не более n+1 термов каждого слагаемого.
    """
    _require_same_depth(a, b)
    if a.is_scalar:
        return Multiseries.of_scalar(a.value + b.value)
    return Multiseries.of_terms(a.depth, LazySequence.corecurse((a.terms, b.terms), _merge_step))


def sub(a: Multiseries, b: Multiseries) -> Multiseries:
    return add(a, negate(b))


def mul_monomial(ms: Multiseries, c: Any, exponents: Sequence[Any]) -> Multiseries:
    """
    Умножение на одночлен c · Π b_i^exponents[i].

    Args:
        ms: Multiseries глубины d
        c: Скалярный множитель
        exponents: d показателей (по одному на функцию basis)

    Raises:
        ValueError: если len(exponents) != ms.depth
    """
    exponents = tuple(exponents)
    if len(exponents) != ms.depth:
        raise ValueError(
            f"expected {ms.depth} exponents for a depth-{ms.depth} multiseries, got {len(exponents)}"
        )
    if ms.is_scalar:
        return Multiseries.of_scalar(ms.value * c)

    shift, rest = exponents[0], exponents[1:]
    return Multiseries.of_terms(
        ms.depth,
        ms.terms.map(lambda t: Term(t.exponent + shift, mul_monomial(t.coefficient, c, rest))),
    )
