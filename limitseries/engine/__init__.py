"""Engine — trimming, leading term и вердикт о пределе.

Стадии в фиксированном порядке:
- Trimmer: удаление нулевых ведущих коэффициентов (fuel-bounded)
- LeadingTermExtractor: ведущий одночлен trimmed multiseries
- LimitResolver: +∞ / −∞ / конечный предел
- LimitEngine: find_limit поверх всех стадий
"""

from .trimmer import DEFAULT_FUEL, TrimConfig, Trimmer, TrimResult, trim
from .leading_term import LeadingTermExtractor, leading_term
from .limit_resolver import LimitResolver, resolve_limit
from .pipeline import LimitEngine, LimitEngineConfig, LimitResult, find_limit

__all__ = [
    "DEFAULT_FUEL",
    "TrimConfig",
    "Trimmer",
    "TrimResult",
    "trim",
    "LeadingTermExtractor",
    "leading_term",
    "LimitResolver",
    "resolve_limit",
    "LimitEngine",
    "LimitEngineConfig",
    "LimitResult",
    "find_limit",
]
