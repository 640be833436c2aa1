"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_journal.adapters.supabase_rows import parse_catalog_item, to_columns
from macro_journal.domain.catalog import CatalogItem
from macro_journal.domain.errors import StorageError
from macro_journal.services.catalog import CatalogRepository


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for catalog items."""

    client: Client

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> CatalogItem:
        """Create a catalog item and return it."""
        response = (
            self.client.table("food_items")
            .insert({"user_id": str(user_id), **to_columns(payload)})
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create food item")
        return parse_catalog_item(response.data[0])

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> CatalogItem:
        """Update a catalog item and return it."""
        response = (
            self.client.table("food_items")
            .update(to_columns(payload))
            .eq("id", str(item_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update food item")
        return parse_catalog_item(response.data[0])

    def get_item(self, item_id: UUID) -> CatalogItem | None:
        """Return a catalog item by id, if present."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_catalog_item(response.data[0])

    def search_items(self, user_id: UUID, query: str, limit: int) -> list[CatalogItem]:
        """Search catalog items by case-insensitive name match."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("user_id", str(user_id))
            .ilike("name", f"%{query}%")
            .limit(limit)
            .execute()
        )
        return [parse_catalog_item(row) for row in response.data or []]

    def list_recent_items(self, user_id: UUID, limit: int) -> list[CatalogItem]:
        """Return the user's newest catalog items."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_catalog_item(row) for row in response.data or []]

    def delete_item(self, item_id: UUID) -> None:
        """Delete a catalog item."""
        self.client.table("food_items").delete().eq("id", str(item_id)).execute()
