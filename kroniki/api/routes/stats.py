"""
Stat derivation API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from kroniki.core.exceptions import UnknownEntityError
from ..schemas.stats import (
    StatsRequest,
    StatsResponse,
    EquipPreviewRequest,
    EquipPreviewResponse,
)
from ..services.encounter_service import EncounterService
from ..dependencies import get_encounter_service

router = APIRouter()


@router.post("/derive", response_model=StatsResponse)
async def derive_stats(
    request: StatsRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Derive combat stats from attributes, equipment, race and guild."""
    stats = service.calculate_stats(request.character, request.guild, request.now_ms)
    return StatsResponse(character_id=request.character.id, stats=stats.to_dict())


@router.post("/preview-equip", response_model=EquipPreviewResponse)
async def preview_equip(
    request: EquipPreviewRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """
    Preview equipping an item.

    Returns the stats after the swap and only the stats that change.
    """
    try:
        stats, changes = service.preview_equip(
            request.character,
            request.slot,
            request.item,
            request.guild,
            request.now_ms,
        )
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return EquipPreviewResponse(stats=stats.to_dict(), changes=changes)
