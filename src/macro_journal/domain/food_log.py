"""Domain models for food logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from macro_journal.domain.catalog import CatalogItem


@dataclass(frozen=True)
class LogEntry:
    """A consumption event referencing a catalog item.

    The nutrient contribution is always derived from the current catalog
    item, so edits to the item change historical totals.
    """

    id: UUID
    user_id: UUID
    food_item_id: UUID
    multiplier: float
    logged_at: datetime
    food_item: CatalogItem | None = None
