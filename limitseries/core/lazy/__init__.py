"""
Lazy sequences для limitseries

Корекурсивные (возможно бесконечные) последовательности и проверка
их равенства через bisimulation.
"""

from limitseries.core.lazy.sequence import (
    DONE,
    Emission,
    LazySequence,
    Next,
    prefix_equal,
)
from limitseries.core.lazy.bisimulation import (
    DEFAULT_BISIMULATION_STEPS,
    Bisimulation,
    BisimulationResult,
    BisimulationVerdict,
    bisimilar,
)

__all__ = [
    # Sequence
    "DONE",
    "Emission",
    "LazySequence",
    "Next",
    "prefix_equal",
    # Bisimulation
    "DEFAULT_BISIMULATION_STEPS",
    "Bisimulation",
    "BisimulationResult",
    "BisimulationVerdict",
    "bisimilar",
]
