"""Catalog endpoints."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status

from macro_journal.api.deps import current_user, get_container
from macro_journal.api.schemas import FoodEstimateRequest, item_payload
from macro_journal.containers import AppContainer
from macro_journal.services.energy import calculate_kcal

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def search_foods(
    q: str | None = None,
    limit: int = 20,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search the catalog; an empty query lists recent items."""
    items = container.catalog_service.search(user_id, q, limit)
    return {"items": [item_payload(item) for item in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: dict[str, Any] = Body(...),
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a catalog item."""
    return item_payload(container.catalog_service.create_item(user_id, payload))


@router.post("/estimate")
async def estimate_food(
    request: FoodEstimateRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Estimate nutrients for a food without storing it."""
    nutrients = await container.estimation_service.resolve(
        request.name, request.serving_qty, request.serving_unit, request.context
    )
    return {
        "name": request.name,
        "serving_qty": request.serving_qty,
        "serving_unit": request.serving_unit.value,
        "nutrients": nutrients.as_dict(),
        "kcal": calculate_kcal(nutrients),
    }


@router.patch("/{item_id}")
async def update_food(
    item_id: UUID,
    payload: dict[str, Any] = Body(...),
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Apply an inline edit to a catalog item."""
    return item_payload(
        container.catalog_service.update_item(user_id, item_id, payload)
    )


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    item_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete a catalog item."""
    container.catalog_service.delete_item(user_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
