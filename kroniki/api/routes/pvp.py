"""
PvP API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from kroniki.core.exceptions import InvalidRunStateError
from kroniki.encounters import PvpResult
from ..schemas.encounters import PvpRequest
from ..services.encounter_service import EncounterService
from ..dependencies import get_encounter_service

router = APIRouter()


@router.post("/duel", response_model=PvpResult)
async def duel(
    request: PvpRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Attack another character."""
    try:
        return service.duel(
            attacker=request.attacker,
            defender=request.defender,
            attacker_guild=request.attacker_guild,
            defender_guild=request.defender_guild,
            now_ms=request.now_ms,
            seed=request.seed,
        )
    except InvalidRunStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
