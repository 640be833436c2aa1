"""Food logging service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from macro_journal.domain.errors import NotFoundError, ValidationError
from macro_journal.domain.food_log import LogEntry
from macro_journal.services.catalog import CatalogService
from macro_journal.services.servings import parse_multiplier


class FoodLogRepository(Protocol):
    """Persistence interface for log entries."""

    def create_entry(
        self,
        user_id: UUID,
        food_item_id: UUID,
        multiplier: float,
        logged_at: datetime,
    ) -> LogEntry:
        """Create a log entry and return it with its catalog item."""

    def get_entry(self, entry_id: UUID) -> LogEntry | None:
        """Return a log entry by id, if present."""

    def get_entries(self, entry_ids: list[UUID]) -> list[LogEntry]:
        """Return the log entries with the given ids."""

    def update_entry(self, entry_id: UUID, payload: dict[str, object]) -> LogEntry:
        """Update multiplier or timestamp and return the entry."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a log entry."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[LogEntry]:
        """Return log entries with start <= logged_at < end."""


@dataclass
class FoodLogService:
    """Service for logging, copying, editing and deleting consumption events."""

    repository: FoodLogRepository
    catalog_service: CatalogService

    def log_food(
        self,
        user_id: UUID,
        food_item_id: UUID,
        multiplier: object,
        logged_at: datetime | None = None,
    ) -> LogEntry:
        """Record a consumption event for a catalog item."""
        value = parse_multiplier(multiplier)
        self.catalog_service.get_item(user_id, food_item_id)
        return self.repository.create_entry(
            user_id=user_id,
            food_item_id=food_item_id,
            multiplier=value,
            logged_at=_aware(logged_at) if logged_at else datetime.now(tz=UTC),
        )

    def copy_entry(self, user_id: UUID, entry_id: UUID) -> LogEntry:
        """Duplicate an entry with the current time as its timestamp."""
        entry = self.get_entry(user_id, entry_id)
        return self.repository.create_entry(
            user_id=user_id,
            food_item_id=entry.food_item_id,
            multiplier=entry.multiplier,
            logged_at=datetime.now(tz=UTC),
        )

    def update_entry(
        self,
        user_id: UUID,
        entry_id: UUID,
        *,
        multiplier: object = None,
        logged_at: datetime | None = None,
    ) -> LogEntry:
        """Edit an entry's multiplier and/or timestamp."""
        self.get_entry(user_id, entry_id)
        payload: dict[str, object] = {}
        if multiplier is not None:
            payload["multiplier"] = parse_multiplier(multiplier)
        if logged_at is not None:
            payload["logged_at"] = _aware(logged_at)
        if not payload:
            raise ValidationError("Nothing to update")
        return self.repository.update_entry(entry_id, payload)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry."""
        self.get_entry(user_id, entry_id)
        self.repository.delete_entry(entry_id)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> LogEntry:
        """Return one of the user's entries."""
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Log entry {entry_id} not found")
        return entry

    def get_entries(self, user_id: UUID, entry_ids: list[UUID]) -> list[LogEntry]:
        """Return the selected entries, all of which must belong to the user."""
        wanted = list(dict.fromkeys(entry_ids))
        found = {
            entry.id: entry
            for entry in self.repository.get_entries(wanted)
            if entry.user_id == user_id
        }
        missing = [entry_id for entry_id in wanted if entry_id not in found]
        if missing:
            raise NotFoundError(f"Log entries not found: {missing}")
        return [found[entry_id] for entry_id in wanted]

    def list_day(self, user_id: UUID, day: date, tz: ZoneInfo) -> list[LogEntry]:
        """Return entries logged on a local calendar day."""
        return self.list_range(user_id, day, day, tz)

    def list_range(
        self, user_id: UUID, first_day: date, last_day: date, tz: ZoneInfo
    ) -> list[LogEntry]:
        """Return entries between two local days, both inclusive."""
        if last_day < first_day:
            raise ValidationError("last day must not be before first day")
        start, _ = day_bounds(first_day, tz)
        _, end = day_bounds(last_day, tz)
        return self.repository.list_entries(user_id, start, end)


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC instants where a local day starts and ends."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
