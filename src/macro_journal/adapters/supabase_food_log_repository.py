"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from macro_journal.adapters.supabase_rows import parse_log_entry
from macro_journal.domain.errors import StorageError
from macro_journal.domain.food_log import LogEntry
from macro_journal.services.food_log import FoodLogRepository

_ENTRY_COLUMNS = "*, food_items(*)"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food logs joined with their catalog item."""

    client: Client

    def create_entry(
        self,
        user_id: UUID,
        food_item_id: UUID,
        multiplier: float,
        logged_at: datetime,
    ) -> LogEntry:
        """Create a log entry and return it with its catalog item."""
        response = (
            self.client.table("food_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "food_item_id": str(food_item_id),
                    "multiplier": multiplier,
                    "logged_at": logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create food log")
        return self._reload(UUID(str(response.data[0]["id"])))

    def get_entry(self, entry_id: UUID) -> LogEntry | None:
        """Return a log entry by id."""
        response = (
            self.client.table("food_logs")
            .select(_ENTRY_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_log_entry(response.data[0])

    def get_entries(self, entry_ids: list[UUID]) -> list[LogEntry]:
        """Return the log entries with the given ids."""
        if not entry_ids:
            return []
        response = (
            self.client.table("food_logs")
            .select(_ENTRY_COLUMNS)
            .in_("id", [str(entry_id) for entry_id in entry_ids])
            .execute()
        )
        return [parse_log_entry(row) for row in response.data or []]

    def update_entry(self, entry_id: UUID, payload: dict[str, object]) -> LogEntry:
        """Update multiplier or timestamp and return the entry."""
        columns = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in payload.items()
        }
        response = (
            self.client.table("food_logs")
            .update(columns)
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to update food log")
        return self._reload(entry_id)

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a log entry."""
        self.client.table("food_logs").delete().eq("id", str(entry_id)).execute()

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[LogEntry]:
        """Return entries with start <= logged_at < end, oldest first."""
        response = (
            self.client.table("food_logs")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [parse_log_entry(row) for row in response.data or []]

    def _reload(self, entry_id: UUID) -> LogEntry:
        entry = self.get_entry(entry_id)
        if entry is None:
            raise StorageError(f"Food log {entry_id} vanished after write")
        return entry
