"""
Focus suggestion API endpoints.

Ranks a posted work item snapshot with the Prioritizer and returns the
suggestions with their breakdowns and justifications.
"""

import logging
from datetime import datetime

from dateutil import parser as date_parser
from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_prioritizer
from backend.schemas import EnergyResponse, FocusRequest, FocusResponse, RankedEntrySchema
from focus_planner.core.models import work_items_from_records
from focus_planner.scheduler.energy import current_energy_level
from focus_planner.scheduler.prioritizer import Prioritizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/focus", tags=["focus"])


@router.post("/top", response_model=FocusResponse)
async def get_top_focus(
    request: FocusRequest,
    prioritizer: Prioritizer = Depends(get_prioritizer),
):
    """
    Rank a work item snapshot.

    Returns the top suggestions (configured focus count unless `count` is
    given). Items without collaborators are only suggested when no shared
    item is open.
    """
    try:
        now = date_parser.isoparse(request.now) if request.now else datetime.now().astimezone()
        now = prioritizer.local_time(now)
        items = work_items_from_records([item.to_record() for item in request.items])
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    if request.fallback is not None and request.fallback != prioritizer.fallback_mode:
        prioritizer = Prioritizer(prioritizer.config, fallback_mode=request.fallback)

    entries = prioritizer.get_top_priorities(items, now, request.count)
    logger.debug("Ranked %d items, returning %d", len(items), len(entries))

    return FocusResponse(
        generated_at=now.isoformat(),
        energy_level=current_energy_level(now.hour),
        entries=[RankedEntrySchema(**entry.as_dict()) for entry in entries],
    )


@router.get("/energy", response_model=EnergyResponse)
async def get_energy(hour: int = Query(..., ge=0, le=23)):
    """Energy level for an hour of the day."""
    return EnergyResponse(hour=hour, energy_level=current_energy_level(hour))
