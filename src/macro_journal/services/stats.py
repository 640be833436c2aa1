"""Statistics service for daily and selection totals."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID

from macro_journal.domain.errors import ValidationError
from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.stats import DailyTotals, DaySummary
from macro_journal.services.aggregation import aggregate, aggregate_by_day
from macro_journal.services.energy import calculate_kcal
from macro_journal.services.food_log import FoodLogService
from macro_journal.services.targets import TargetService, evaluate_targets
from macro_journal.services.user_settings import UserSettingsService

MAX_RANGE_DAYS = 366


@dataclass
class StatsService:
    """Service computing totals and target progress from fresh log reads."""

    food_log_service: FoodLogService
    target_service: TargetService
    user_settings_service: UserSettingsService

    def get_day(self, user_id: UUID, day: date) -> DaySummary:
        """Return totals and target evaluations for a local day."""
        tz = self.user_settings_service.get_zone(user_id)
        entries = self.food_log_service.list_day(user_id, day, tz)
        return self._summarize(user_id, day, entries)

    def get_today(self, user_id: UUID) -> DaySummary:
        """Return the summary for today in the user's timezone."""
        tz = self.user_settings_service.get_zone(user_id)
        return self.get_day(user_id, datetime.now(tz=tz).date())

    def get_daily_totals(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> list[DailyTotals]:
        """Return per-day totals between two local days, including empty days."""
        span = (last_day - first_day).days + 1
        if span > MAX_RANGE_DAYS:
            raise ValidationError(f"Ranges are limited to {MAX_RANGE_DAYS} days")
        tz = self.user_settings_service.get_zone(user_id)
        entries = self.food_log_service.list_range(user_id, first_day, last_day, tz)
        by_day = aggregate_by_day(entries, tz)
        daily = []
        for offset in range(span):
            day = first_day + timedelta(days=offset)
            totals = by_day.get(day) or aggregate([])
            daily.append(
                DailyTotals(day=day, totals=totals, kcal=calculate_kcal(totals.nutrients))
            )
        return daily

    def get_selection(self, user_id: UUID, entry_ids: list[UUID]) -> DaySummary:
        """Return totals and target evaluations for chosen entries."""
        entries = self.food_log_service.get_entries(user_id, entry_ids)
        return self.summarize_entries(user_id, entries)

    def summarize_entries(self, user_id: UUID, entries: list[LogEntry]) -> DaySummary:
        """Summarize an arbitrary set of entries."""
        return self._summarize(user_id, None, entries)

    def _summarize(
        self, user_id: UUID, day: date | None, entries: list[LogEntry]
    ) -> DaySummary:
        totals = aggregate(entries)
        targets = self.target_service.list_targets(user_id)
        return DaySummary(
            day=day,
            totals=totals,
            kcal=calculate_kcal(totals.nutrients),
            display_totals=totals.display(),
            targets=evaluate_targets(targets, totals.nutrients),
            entries=entries,
        )
