"""
Combat API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from kroniki.core.exceptions import UnknownEntityError
from ..schemas.combat import FightEnemyRequest, FightResultSchema
from ..services.encounter_service import EncounterService
from ..dependencies import get_encounter_service

router = APIRouter()


@router.post("/fight", response_model=FightResultSchema)
async def fight_enemy(
    request: FightEnemyRequest,
    service: EncounterService = Depends(get_encounter_service),
):
    """
    Fight one catalog enemy.

    The character document is not changed; use the final pools from
    the response to persist the outcome.
    """
    try:
        result = service.fight_enemy(
            character=request.character,
            enemy_id=request.enemy_id,
            guild=request.guild,
            now_ms=request.now_ms,
            seed=request.seed,
        )
    except UnknownEntityError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return FightResultSchema(
        is_victory=result.is_victory,
        timed_out=result.timed_out,
        turns=result.turns,
        final_player_health=result.final_attacker_health,
        final_player_mana=result.final_attacker_mana,
        final_enemy_health=result.final_defender_health,
        final_enemy_mana=result.final_defender_mana,
        log=result.log_dicts(),
    )
