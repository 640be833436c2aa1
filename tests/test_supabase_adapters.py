"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from macro_journal.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from macro_journal.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from macro_journal.adapters.supabase_target_repository import (
    SupabaseTargetRepository,
)
from macro_journal.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from macro_journal.domain.catalog import ServingUnit
from macro_journal.domain.errors import StorageError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload, **_kwargs) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def is_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "name": "Lentils",
        "serving_qty": 100,
        "serving_unit": "g",
        "protein": 9.0,
        "carbs": 20.0,
        "gl": 5.0,
        "comment": None,
        "created_at": "2024-01-01T10:00:00Z",
    }
    row.update(overrides)
    return row


def test_catalog_repository_maps_glycemic_load_column() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    row = _food_row()
    table.queue("insert", [row])

    repository = SupabaseCatalogRepository(client)
    item = repository.create_item(
        uuid4(),
        {
            "name": "Lentils",
            "serving_qty": 100.0,
            "serving_unit": "g",
            "glycemic_load": 5.0,
        },
    )

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["gl"] == 5.0
    assert "glycemic_load" not in table.last_payload
    assert item.nutrients.glycemic_load == 5.0
    assert item.serving_unit is ServingUnit.GRAMS
    assert item.created_at == datetime(2024, 1, 1, 10, tzinfo=UTC)


def test_catalog_repository_empty_write_raises() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseCatalogRepository(client)

    with pytest.raises(StorageError):
        repository.update_item(uuid4(), {"name": "Lentils"})


def test_catalog_repository_search_and_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    row = _food_row()
    table.queue("select", [row])
    table.queue("select", [])

    repository = SupabaseCatalogRepository(client)
    found = repository.search_items(uuid4(), "lent", 10)
    missing = repository.get_item(uuid4())

    assert [item.name for item in found] == ["Lentils"]
    assert ("name", "%lent%") in table.last_filters
    assert missing is None


def test_food_log_repository_joins_catalog_item() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    entry_id = str(uuid4())
    food = _food_row()
    log_row = {
        "id": entry_id,
        "user_id": food["user_id"],
        "food_item_id": food["id"],
        "multiplier": 1.5,
        "logged_at": "2024-01-01T08:00:00+00:00",
        "food_items": food,
    }
    table.queue("insert", [{"id": entry_id}])
    table.queue("select", [log_row])

    repository = SupabaseFoodLogRepository(client)
    entry = repository.create_entry(
        user_id=uuid4(),
        food_item_id=uuid4(),
        multiplier=1.5,
        logged_at=datetime(2024, 1, 1, 8, tzinfo=UTC),
    )

    assert str(entry.id) == entry_id
    assert entry.multiplier == 1.5
    assert entry.food_item is not None
    assert entry.food_item.name == "Lentils"


def test_food_log_repository_lists_half_open_range() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    food = _food_row()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": food["user_id"],
                "food_item_id": food["id"],
                "multiplier": 1,
                "logged_at": "2024-01-01T08:00:00+00:00",
                "food_items": None,
            }
        ],
    )
    start = datetime(2024, 1, 1, tzinfo=UTC)
    end = datetime(2024, 1, 2, tzinfo=UTC)

    repository = SupabaseFoodLogRepository(client)
    entries = repository.list_entries(uuid4(), start, end)

    assert entries[0].food_item is None
    assert ("logged_at", start.isoformat()) in table.last_filters
    assert ("logged_at", end.isoformat()) in table.last_filters


def test_target_repository_find_absolute_target() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutrition_targets")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "nutrient_1": "protein",
                "nutrient_2": None,
                "min_value": 50,
                "max_value": None,
            }
        ],
    )

    repository = SupabaseTargetRepository(client)
    target = repository.find_target(user_id, "protein", None)

    assert target is not None
    assert target.min_value == 50.0
    assert target.max_value is None
    assert not target.is_relative
    assert ("nutrient_2", "null") in table.last_filters


def test_target_repository_empty_insert_raises() -> None:
    repository = SupabaseTargetRepository(FakeSupabaseClient())

    with pytest.raises(StorageError):
        repository.create_target(uuid4(), {"nutrient_1": "protein"})


def test_user_settings_repository_upserts_timezone() -> None:
    client = FakeSupabaseClient()
    settings_table = client.table("user_settings")
    settings_table.queue("select", [{"timezone": "Europe/Helsinki"}])

    repository = SupabaseUserSettingsRepository(client)
    assert repository.get_timezone(uuid4()) == "Europe/Helsinki"

    user_id = uuid4()
    repository.set_timezone(user_id, "America/Los_Angeles")
    assert isinstance(settings_table.last_payload, dict)
    assert settings_table.last_payload["user_id"] == str(user_id)
    assert settings_table.last_payload["timezone"] == "America/Los_Angeles"
