"""Row conversion helpers shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.nutrients import NUTRIENT_FIELDS, Nutrient, NutrientVector

# The storage schema predates the long name for glycemic load.
_COLUMN_NAMES = {Nutrient.GLYCEMIC_LOAD.value: "gl"}


def to_columns(payload: dict[str, object]) -> dict[str, object]:
    """Rename nutrient keys to their storage column names."""
    return {_COLUMN_NAMES.get(key, key): value for key, value in payload.items()}


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating the trailing Z."""
    if not isinstance(raw, str) or not raw:
        return None
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def parse_catalog_item(row: dict[str, object]) -> CatalogItem:
    """Parse a food_items row into a domain model."""
    nutrients: dict[str, object] = {}
    for nutrient in NUTRIENT_FIELDS:
        column = _COLUMN_NAMES.get(nutrient.value, nutrient.value)
        nutrients[nutrient.value] = row.get(column)
    return CatalogItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        serving_qty=float(row.get("serving_qty") or 1.0),
        serving_unit=ServingUnit(str(row.get("serving_unit") or ServingUnit.GRAMS)),
        nutrients=NutrientVector.from_mapping(nutrients),
        comment=row.get("comment") or None,
        created_at=parse_timestamp(row.get("created_at")),
    )


def parse_log_entry(row: dict[str, object]) -> LogEntry:
    """Parse a food_logs row, with its joined food_items row when present."""
    joined = row.get("food_items")
    logged_at = parse_timestamp(row.get("logged_at"))
    if logged_at is None:
        raise ValueError(f"Log entry {row.get('id')} has no timestamp")
    return LogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_item_id=UUID(str(row["food_item_id"])),
        multiplier=row.get("multiplier"),  # type: ignore[arg-type]
        logged_at=logged_at,
        food_item=parse_catalog_item(joined) if isinstance(joined, dict) else None,
    )

