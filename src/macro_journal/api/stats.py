"""Day totals, selection summaries, targets and settings endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from macro_journal.api.deps import current_user, get_container
from macro_journal.api.schemas import (
    SelectionRequest,
    TargetRequest,
    TimezoneRequest,
    daily_payload,
    summary_payload,
    target_payload,
)
from macro_journal.containers import AppContainer

router = APIRouter(tags=["stats"])


@router.get("/days/today")
async def today(
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return today's entries, totals and target progress."""
    return summary_payload(container.stats_service.get_today(user_id))


@router.get("/days/{day}")
async def day_summary(
    day: date,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a day's entries, totals and target progress."""
    return summary_payload(container.stats_service.get_day(user_id, day))


@router.get("/days")
async def daily_totals(
    start: date,
    end: date,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return per-day totals between two days, both inclusive."""
    daily = container.stats_service.get_daily_totals(user_id, start, end)
    return {"days": [daily_payload(item) for item in daily]}


@router.post("/selection/summary")
async def selection_summary(
    request: SelectionRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return totals and target progress for selected entries."""
    summary = container.stats_service.get_selection(user_id, request.entry_ids)
    return summary_payload(summary)


@router.get("/targets")
async def list_targets(
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the user's targets."""
    targets = container.target_service.list_targets(user_id)
    return {"targets": [target_payload(target) for target in targets]}


@router.put("/targets")
async def save_target(
    request: TargetRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create or replace the target for a nutrient pair."""
    target = container.target_service.save_target(user_id, request.model_dump())
    return target_payload(target)


@router.delete("/targets/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_target(
    target_id: UUID,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete a target."""
    container.target_service.delete_target(user_id, target_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/settings/timezone")
async def get_timezone(
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Return the timezone that bounds the user's days."""
    return {"timezone": container.user_settings_service.get_timezone(user_id)}


@router.put("/settings/timezone")
async def set_timezone(
    request: TimezoneRequest,
    user_id: UUID = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Change the user's timezone."""
    container.user_settings_service.set_timezone(user_id, request.timezone)
    return {"timezone": request.timezone}
