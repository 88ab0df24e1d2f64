"""
Bisimulation — проверка равенства ленивых последовательностей

Две последовательности равны, если существует отношение R на парах
последовательностей, такое что из R(a, b) следует: либо обе исчерпаны,
либо у них равные head и R(tail(a), tail(b)).

Bisimulation проходит по развёртке пары (a, b), на каждом шаге проверяя
отношение, синхронность исчерпания и равенство голов. Детекция циклов
сравнивает state_key обеих последовательностей: если пара ключей
повторилась, остатки на этом шаге совпадают с уже пройденными, и равенство
доказано без форсирования остатка. Пара, у которой хотя бы один ключ None
(например, from_iterable), цикл не замыкает.

Verdicts:
- PROVEN: обе исчерпаны одновременно или повторилась пара state_key
- REFUTED: различие голов, рассинхрон исчерпания или R не выполнено
- BOUNDED: max_steps шагов совпали, доказательства нет
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final, Optional

from limitseries.core.lazy.sequence import LazySequence

# Граница развёртки по умолчанию
DEFAULT_BISIMULATION_STEPS: Final[int] = 256

Relation = Callable[[LazySequence, LazySequence], bool]


class BisimulationVerdict(str, Enum):
    """Результат проверки bisimulation."""

    PROVEN = "PROVEN"
    REFUTED = "REFUTED"
    BOUNDED = "BOUNDED"


@dataclass(frozen=True)
class BisimulationResult:
    """Результат проверки пары последовательностей."""

    verdict: BisimulationVerdict
    steps: int
    reason: str

    # Для отладки
    details: str

    @property
    def holds(self) -> bool:
        """True если равенство не опровергнуто (PROVEN или BOUNDED)."""
        return self.verdict != BisimulationVerdict.REFUTED


def _always(a: LazySequence, b: LazySequence) -> bool:
    return True


class Bisimulation:
    """
    Combinator проверки bisimulation для кандидата-отношения.

    Args:
        relation: Кандидат R(a, b); по умолчанию тождественно True
        detect_cycles: Замыкать цикл по повтору пары state_key
        eq: Равенство элементов (default: operator.eq)
    """

    def __init__(
        self,
        relation: Optional[Relation] = None,
        detect_cycles: bool = True,
        eq: Callable[[Any, Any], bool] = operator.eq,
    ):
        self.relation = relation or _always
        self.detect_cycles = detect_cycles
        self.eq = eq

    def check(
        self,
        a: LazySequence,
        b: LazySequence,
        max_steps: int = DEFAULT_BISIMULATION_STEPS,
    ) -> BisimulationResult:
        """
        Развёртка пары (a, b) не более max_steps шагов.

        Returns:
            BisimulationResult с verdict и числом выполненных шагов
        """
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")

        visited: set = set()

        for steps in range(max_steps):
            if not self.relation(a, b):
                return BisimulationResult(
                    verdict=BisimulationVerdict.REFUTED,
                    steps=steps,
                    reason="relation_not_closed",
                    details=f"Candidate relation does not hold at step {steps}",
                )

            if self.detect_cycles:
                key_a = a.state_key()
                key_b = b.state_key()
                if key_a is not None and key_b is not None:
                    pair_state = (key_a, key_b)
                    if pair_state in visited:
                        return BisimulationResult(
                            verdict=BisimulationVerdict.PROVEN,
                            steps=steps,
                            reason="cycle_closed",
                            details=f"Generator states of both sequences repeat at step {steps}",
                        )
                    visited.add(pair_state)

            split_a = a.destruct()
            split_b = b.destruct()

            if split_a is None and split_b is None:
                return BisimulationResult(
                    verdict=BisimulationVerdict.PROVEN,
                    steps=steps,
                    reason="both_exhausted",
                    details=f"Both sequences exhausted after {steps} elements",
                )

            if split_a is None or split_b is None:
                shorter = "left" if split_a is None else "right"
                return BisimulationResult(
                    verdict=BisimulationVerdict.REFUTED,
                    steps=steps,
                    reason="exhaustion_mismatch",
                    details=f"{shorter} sequence exhausted at position {steps}",
                )

            head_a, tail_a = split_a
            head_b, tail_b = split_b

            if not self.eq(head_a, head_b):
                return BisimulationResult(
                    verdict=BisimulationVerdict.REFUTED,
                    steps=steps,
                    reason="head_mismatch",
                    details=f"Heads differ at position {steps}: {head_a!r} != {head_b!r}",
                )

            a, b = tail_a, tail_b

        return BisimulationResult(
            verdict=BisimulationVerdict.BOUNDED,
            steps=max_steps,
            reason="step_bound_reached",
            details=f"{max_steps} unfoldings agree, no closing cycle found",
        )


def bisimilar(
    a: LazySequence,
    b: LazySequence,
    relation: Optional[Relation] = None,
    detect_cycles: bool = True,
    max_steps: int = DEFAULT_BISIMULATION_STEPS,
) -> BisimulationResult:
    """Shortcut: Bisimulation(relation, detect_cycles).check(a, b, max_steps)."""
    return Bisimulation(relation=relation, detect_cycles=detect_cycles).check(a, b, max_steps)
