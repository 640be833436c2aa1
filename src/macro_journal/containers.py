"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_journal.adapters.openai_nutrient_client import OpenAINutrientClient
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
from macro_journal.config import Settings
from macro_journal.services.catalog import CatalogService
from macro_journal.services.drafts import DraftStore, InMemoryDraftStore
from macro_journal.services.estimation import NutrientEstimationService
from macro_journal.services.food_log import FoodLogService
from macro_journal.services.recipes import RecipeService
from macro_journal.services.stats import StatsService
from macro_journal.services.targets import TargetService
from macro_journal.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    food_log_service: FoodLogService
    target_service: TargetService
    user_settings_service: UserSettingsService
    stats_service: StatsService
    estimation_service: NutrientEstimationService
    recipe_service: RecipeService
    draft_store: DraftStore
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = CatalogService(SupabaseCatalogRepository(supabase_client))
    food_log_service = FoodLogService(
        repository=SupabaseFoodLogRepository(supabase_client),
        catalog_service=catalog_service,
    )
    target_service = TargetService(SupabaseTargetRepository(supabase_client))
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    stats_service = StatsService(
        food_log_service=food_log_service,
        target_service=target_service,
        user_settings_service=user_settings_service,
    )
    openai_client = OpenAINutrientClient.create(resolved_settings.openai_api_key)
    estimation_service = NutrientEstimationService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    recipe_service = RecipeService(
        catalog_service=catalog_service,
        estimation_service=estimation_service,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        food_log_service=food_log_service,
        target_service=target_service,
        user_settings_service=user_settings_service,
        stats_service=stats_service,
        estimation_service=estimation_service,
        recipe_service=recipe_service,
        draft_store=InMemoryDraftStore(resolved_settings.recipe_draft_ttl_seconds),
        close_resources=close_resources,
    )
