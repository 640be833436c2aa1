"""Food log endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from macro_journal.api.deps import current_user, get_container
from macro_journal.api.schemas import LogCreateRequest, LogUpdateRequest, entry_payload
from macro_journal.containers import AppContainer

router = APIRouter(prefix="/logs", tags=["logs"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_log(
    request: LogCreateRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a serving multiple of a catalog item."""
    entry = container.food_log_service.log_food(
        user_id, request.food_item_id, request.multiplier, request.logged_at
    )
    return entry_payload(entry)


@router.post("/{entry_id}/copy", status_code=status.HTTP_201_CREATED)
async def copy_log(
    entry_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log the same food and multiplier again, now."""
    return entry_payload(container.food_log_service.copy_entry(user_id, entry_id))


@router.patch("/{entry_id}")
async def update_log(
    entry_id: UUID,
    request: LogUpdateRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit multiplier and/or timestamp of an entry."""
    entry = container.food_log_service.update_entry(
        user_id,
        entry_id,
        multiplier=request.multiplier,
        logged_at=request.logged_at,
    )
    return entry_payload(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_log(
    entry_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete an entry."""
    container.food_log_service.delete_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
