"""
Expedition API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from kroniki.core.exceptions import UnknownEntityError
from kroniki.encounters import ExpeditionResult
from ..schemas.encounters import ExpeditionRequest
from ..services.encounter_service import EncounterService
from ..dependencies import get_encounter_service

router = APIRouter()


@router.post("/run", response_model=ExpeditionResult)
async def run_expedition(
    request: ExpeditionRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Run an expedition and return the updated character."""
    try:
        return service.run_expedition(
            character=request.character,
            expedition_id=request.expedition_id,
            guild=request.guild,
            now_ms=request.now_ms,
            seed=request.seed,
        )
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=str(e))
