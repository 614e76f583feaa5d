"""
Tower API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from kroniki.core.exceptions import InvalidRunStateError, UnknownEntityError
from kroniki.encounters import FloorResult, RetreatResult, TowerRun
from ..schemas.encounters import (
    TowerStartRequest,
    TowerFightRequest,
    TowerRetreatRequest,
)
from ..services.encounter_service import EncounterService
from ..dependencies import get_encounter_service

router = APIRouter()


@router.post("/start", response_model=TowerRun)
async def start_tower(
    request: TowerStartRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Enter a tower at floor 1."""
    try:
        return service.start_tower(request.character, request.tower_id, request.guild, request.now_ms)
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRunStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/fight", response_model=FloorResult)
async def fight_floor(
    request: TowerFightRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Fight the run's current floor (continue)."""
    try:
        return service.fight_tower_floor(
            run=request.run,
            character=request.character,
            guild=request.guild,
            now_ms=request.now_ms,
            seed=request.seed,
        )
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRunStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/retreat", response_model=RetreatResult)
async def retreat(
    request: TowerRetreatRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """Leave the tower and bank the accumulated rewards; the returned run is closed."""
    try:
        return service.retreat_tower(request.run, request.character)
    except InvalidRunStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
