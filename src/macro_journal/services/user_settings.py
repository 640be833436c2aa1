"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from macro_journal.domain.errors import ValidationError


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Store the user's timezone."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the default if unset."""
        return self.repository.get_timezone(user_id) or self.default_timezone

    def get_zone(self, user_id: UUID) -> ZoneInfo:
        """Return the zone whose midnight bounds the user's days."""
        return ZoneInfo(self.get_timezone(user_id))

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Validate and persist a user's timezone."""
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(f"Unknown timezone: {timezone!r}") from exc
        self.repository.set_timezone(user_id, timezone)
