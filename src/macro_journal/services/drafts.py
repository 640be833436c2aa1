"""In-memory storage for recipe drafts being edited."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from macro_journal.domain.errors import NotFoundError
from macro_journal.domain.recipes import RecipeDraft


class DraftStore(Protocol):
    """Storage interface for recipe working sets."""

    def get(self, user_id: UUID, draft_id: UUID) -> RecipeDraft:
        """Return a draft owned by the user, refreshing its expiry."""

    def save(self, draft: RecipeDraft) -> None:
        """Store a draft."""

    def discard(self, user_id: UUID, draft_id: UUID) -> None:
        """Forget a draft."""


@dataclass
class _DraftEntry:
    draft: RecipeDraft
    expires_at: datetime


@dataclass
class InMemoryDraftStore(DraftStore):
    """Process-local draft store; abandoned drafts expire after the TTL."""

    ttl_seconds: int
    _entries: dict[UUID, _DraftEntry]

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries = {}

    def get(self, user_id: UUID, draft_id: UUID) -> RecipeDraft:
        """Return a live draft or raise NotFoundError."""
        self._evict_expired()
        entry = self._entries.get(draft_id)
        if entry is None or entry.draft.user_id != user_id:
            raise NotFoundError(f"Recipe draft {draft_id} not found")
        entry.expires_at = self._expiry()
        return entry.draft

    def save(self, draft: RecipeDraft) -> None:
        """Store a draft with a fresh TTL."""
        self._evict_expired()
        self._entries[draft.id] = _DraftEntry(draft=draft, expires_at=self._expiry())

    def discard(self, user_id: UUID, draft_id: UUID) -> None:
        """Remove a draft if the user owns it."""
        entry = self._entries.get(draft_id)
        if entry is not None and entry.draft.user_id == user_id:
            self._entries.pop(draft_id, None)

    def _expiry(self) -> datetime:
        return datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)

    def _evict_expired(self) -> None:
        now = datetime.now(tz=UTC)
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            self._entries.pop(key, None)
