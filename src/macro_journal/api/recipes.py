"""Recipe synthesis endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from macro_journal.api.deps import current_user, get_container
from macro_journal.api.schemas import (
    RecipeFinalizeRequest,
    RecipeFromLogsRequest,
    RecipePlanRequest,
    draft_payload,
    item_payload,
)
from macro_journal.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/from-logs", status_code=status.HTTP_201_CREATED)
async def recipe_from_logs(
    request: RecipeFromLogsRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Sum selected log entries into a new catalog item."""
    entries = container.food_log_service.get_entries(user_id, request.entry_ids)
    item = container.recipe_service.create_from_log_entries(
        user_id, request.name, entries, request.serving_unit
    )
    return item_payload(item)


@router.post("/drafts", status_code=status.HTTP_201_CREATED)
async def plan_recipe(
    request: RecipePlanRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Decompose a recipe name into a draft of ingredients."""
    draft = await container.recipe_service.plan_recipe(
        user_id, request.name, request.context
    )
    container.draft_store.save(draft)
    return draft_payload(draft)


@router.get("/drafts/{draft_id}")
async def get_draft(
    draft_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a draft and the state of each ingredient."""
    return draft_payload(container.draft_store.get(user_id, draft_id))


@router.post("/drafts/{draft_id}/resolve")
async def resolve_draft(
    draft_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Resolve every idle or failed ingredient concurrently."""
    draft = container.draft_store.get(user_id, draft_id)
    await container.recipe_service.resolve_ingredients(user_id, draft)
    container.draft_store.save(draft)
    return draft_payload(draft)


@router.post("/drafts/{draft_id}/ingredients/{ingredient_id}/retry")
async def retry_ingredient(
    draft_id: UUID,
    ingredient_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Resolve a single ingredient again."""
    draft = container.draft_store.get(user_id, draft_id)
    await container.recipe_service.retry_ingredient(user_id, draft, ingredient_id)
    container.draft_store.save(draft)
    return draft_payload(draft)


@router.delete("/drafts/{draft_id}/ingredients/{ingredient_id}")
async def remove_ingredient(
    draft_id: UUID,
    ingredient_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Drop an ingredient from a draft."""
    draft = container.draft_store.get(user_id, draft_id)
    container.recipe_service.remove_ingredient(draft, ingredient_id)
    container.draft_store.save(draft)
    return draft_payload(draft)


@router.post("/drafts/{draft_id}/finalize", status_code=status.HTTP_201_CREATED)
async def finalize_draft(
    draft_id: UUID,
    request: RecipeFinalizeRequest | None = None,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Persist a fully resolved draft as a catalog item."""
    options = request or RecipeFinalizeRequest()
    draft = container.draft_store.get(user_id, draft_id)
    item = container.recipe_service.finalize(user_id, draft, options.serving_unit)
    container.draft_store.discard(user_id, draft_id)
    return item_payload(item)
