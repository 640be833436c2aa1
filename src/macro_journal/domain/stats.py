"""Domain models for statistics."""

from dataclasses import dataclass, field
from datetime import date

from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.nutrients import NutrientVector
from macro_journal.domain.targets import TargetEvaluation


@dataclass(frozen=True)
class Totals:
    """Unrounded sum of entry contributions and how many entries were included."""

    nutrients: NutrientVector
    count: int

    def display(self, decimals: int = 1) -> NutrientVector:
        """Return a rounded copy for rendering only."""
        return self.nutrients.rounded(decimals)


@dataclass(frozen=True)
class DailyTotals:
    """Totals for one local calendar day."""

    day: date
    totals: Totals
    kcal: int


@dataclass(frozen=True)
class DaySummary:
    """Totals for a day or selection, with derived energy and targets."""

    day: date | None
    totals: Totals
    kcal: int
    display_totals: NutrientVector
    targets: list[TargetEvaluation]
    entries: list[LogEntry] = field(default_factory=list)
