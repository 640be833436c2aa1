"""Supabase repository for nutrition targets."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_journal.domain.errors import StorageError
from macro_journal.domain.targets import NutritionTarget
from macro_journal.services.targets import TargetRepository


@dataclass
class SupabaseTargetRepository(TargetRepository):
    """Supabase implementation for nutrition targets."""

    client: Client

    def list_targets(self, user_id: UUID) -> list[NutritionTarget]:
        """Return all targets for a user."""
        response = (
            self.client.table("nutrition_targets")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_target(row) for row in response.data or []]

    def get_target(self, target_id: UUID) -> NutritionTarget | None:
        """Return a target by id."""
        response = (
            self.client.table("nutrition_targets")
            .select("*")
            .eq("id", str(target_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_target(response.data[0])

    def find_target(
        self, user_id: UUID, nutrient_1: str, nutrient_2: str | None
    ) -> NutritionTarget | None:
        """Return the user's target for a nutrient pair."""
        query = (
            self.client.table("nutrition_targets")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("nutrient_1", nutrient_1)
        )
        if nutrient_2 is None:
            query = query.is_("nutrient_2", "null")
        else:
            query = query.eq("nutrient_2", nutrient_2)
        response = query.limit(1).execute()
        if not response.data:
            return None
        return _parse_target(response.data[0])

    def create_target(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutritionTarget:
        """Create a target and return it."""
        response = (
            self.client.table("nutrition_targets")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create nutrition target")
        return _parse_target(response.data[0])

    def update_target(
        self, target_id: UUID, payload: dict[str, object]
    ) -> NutritionTarget:
        """Update a target and return it."""
        response = (
            self.client.table("nutrition_targets")
            .update(payload)
            .eq("id", str(target_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update nutrition target")
        return _parse_target(response.data[0])

    def delete_target(self, target_id: UUID) -> None:
        """Delete a target."""
        self.client.table("nutrition_targets").delete().eq(
            "id", str(target_id)
        ).execute()


def _parse_target(row: dict[str, object]) -> NutritionTarget:
    min_value = row.get("min_value")
    max_value = row.get("max_value")
    return NutritionTarget(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        nutrient_1=str(row["nutrient_1"]),
        nutrient_2=str(row["nutrient_2"]) if row.get("nutrient_2") else None,
        min_value=float(min_value) if min_value is not None else None,
        max_value=float(max_value) if max_value is not None else None,
    )
