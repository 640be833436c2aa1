"""Summing of entry contributions into totals."""

import logging
from collections.abc import Callable, Hashable, Iterable
from datetime import date
from typing import Protocol, TypeVar
from zoneinfo import ZoneInfo

from macro_journal.domain.catalog import CatalogItem
from macro_journal.domain.errors import ValidationError
from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.nutrients import NutrientVector
from macro_journal.domain.stats import Totals
from macro_journal.services.servings import portion_nutrients

_logger = logging.getLogger(__name__)


class Portion(Protocol):
    """Anything that scales a resolved catalog item by a multiplier."""

    multiplier: float
    food_item: CatalogItem | None


P = TypeVar("P", bound=Portion)
K = TypeVar("K", bound=Hashable)


def contribution(portion: Portion) -> NutrientVector | None:
    """Return the portion's nutrients, or None when it cannot be resolved."""
    if portion.food_item is None:
        return None
    try:
        return portion_nutrients(portion.food_item.nutrients, portion.multiplier)
    except ValidationError:
        _logger.warning(
            "Skipping portion of %s with invalid multiplier %r",
            portion.food_item.name,
            portion.multiplier,
        )
        return None


def aggregate(portions: Iterable[Portion]) -> Totals:
    """Sum contributions field by field, skipping unresolvable portions."""
    total = NutrientVector.zero()
    count = 0
    skipped = 0
    for portion in portions:
        nutrients = contribution(portion)
        if nutrients is None:
            skipped += 1
            continue
        total = total + nutrients
        count += 1
    if skipped:
        _logger.info("Aggregation excluded %s unresolvable entries", skipped)
    return Totals(nutrients=total, count=count)


def aggregate_by(portions: Iterable[P], key: Callable[[P], K]) -> dict[K, Totals]:
    """Aggregate portions per group key."""
    groups: dict[K, list[P]] = {}
    for portion in portions:
        groups.setdefault(key(portion), []).append(portion)
    return {group: aggregate(members) for group, members in groups.items()}


def aggregate_by_day(entries: Iterable[LogEntry], tz: ZoneInfo) -> dict[date, Totals]:
    """Aggregate log entries per local calendar day in tz."""
    return aggregate_by(entries, lambda entry: entry.logged_at.astimezone(tz).date())
