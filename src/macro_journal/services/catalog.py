"""Services for managing the food catalog."""

import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.errors import NotFoundError, ValidationError
from macro_journal.domain.nutrients import NUTRIENT_FIELDS, Nutrient, parse_amount

_TEXT_FIELDS = {"name", "comment"}
_SERVING_FIELDS = {"serving_qty", "serving_unit"}
_NUTRIENT_KEYS = {nutrient.value for nutrient in NUTRIENT_FIELDS}


class CatalogRepository(Protocol):
    """Persistence interface for catalog items."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> CatalogItem:
        """Create a catalog item and return it."""

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> CatalogItem:
        """Update a catalog item and return it."""

    def get_item(self, item_id: UUID) -> CatalogItem | None:
        """Return a catalog item by id, if present."""

    def search_items(self, user_id: UUID, query: str, limit: int) -> list[CatalogItem]:
        """Search catalog items by name."""

    def list_recent_items(self, user_id: UUID, limit: int) -> list[CatalogItem]:
        """Return the most recently created items."""

    def delete_item(self, item_id: UUID) -> None:
        """Delete a catalog item."""


@dataclass
class CatalogService:
    """Application service for catalog operations."""

    repository: CatalogRepository

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> CatalogItem:
        """Validate and create a catalog item."""
        return self.repository.create_item(user_id, validate_item_payload(payload))

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> CatalogItem:
        """Apply an inline edit; only the supplied fields are validated."""
        self.get_item(user_id, item_id)
        cleaned = validate_item_payload(payload, partial=True)
        if not cleaned:
            raise ValidationError("Nothing to update")
        return self.repository.update_item(item_id, cleaned)

    def get_item(self, user_id: UUID, item_id: UUID) -> CatalogItem:
        """Return one of the user's catalog items."""
        item = self.repository.get_item(item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError(f"Catalog item {item_id} not found")
        return item

    def search(
        self, user_id: UUID, query: str | None, limit: int = 20
    ) -> list[CatalogItem]:
        """Search by name, falling back to recent items when query is empty."""
        cleaned = (query or "").strip()
        if not cleaned:
            return self.repository.list_recent_items(user_id, limit)
        items = self.repository.search_items(user_id, cleaned, limit)
        return sorted(items, key=lambda item: _match_rank(item.name, cleaned))

    def list_for_context(self, user_id: UUID, limit: int = 200) -> list[CatalogItem]:
        """Return recent items used as context for AI decomposition."""
        return self.repository.list_recent_items(user_id, limit)

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete a catalog item; log entries pointing at it become unresolvable."""
        self.get_item(user_id, item_id)
        self.repository.delete_item(item_id)


def validate_item_payload(
    payload: dict[str, object], *, partial: bool = False
) -> dict[str, object]:
    """Normalize a catalog payload, raising ValidationError when invalid."""
    unknown = set(payload) - _TEXT_FIELDS - _SERVING_FIELDS - _NUTRIENT_KEYS
    if Nutrient.CALORIES.value in unknown:
        raise ValidationError("calories are derived and cannot be stored")
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    if not partial:
        missing = {"name", "serving_qty", "serving_unit"} - set(payload)
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(sorted(missing))}")

    cleaned: dict[str, object] = {}
    if "name" in payload:
        name = str(payload["name"] or "").strip()
        if not name:
            raise ValidationError("name must not be empty")
        cleaned["name"] = name
    if "comment" in payload:
        comment = str(payload["comment"] or "").strip()
        cleaned["comment"] = comment or None
    if "serving_qty" in payload:
        cleaned["serving_qty"] = _serving_qty(payload["serving_qty"])
    if "serving_unit" in payload:
        cleaned["serving_unit"] = _serving_unit(payload["serving_unit"]).value
    for nutrient in NUTRIENT_FIELDS:
        if nutrient.value in payload:
            cleaned[nutrient.value] = parse_amount(nutrient, payload[nutrient.value])
    return cleaned


def _serving_qty(value: object) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid serving_qty: {value!r}")
    try:
        qty = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid serving_qty: {value!r}") from exc
    if not math.isfinite(qty) or qty <= 0:
        raise ValidationError("serving_qty must be a positive number")
    return qty


def _serving_unit(value: object) -> ServingUnit:
    if isinstance(value, ServingUnit):
        return value
    try:
        return ServingUnit(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Unknown serving unit: {value!r}") from exc


def _match_rank(name: str, query: str) -> tuple[int, str]:
    """Rank exact matches first, then prefix matches, then the rest."""
    lowered = name.lower()
    needle = query.lower()
    if lowered == needle:
        return 0, lowered
    if lowered.startswith(needle):
        return 1, lowered
    return 2, lowered
