"""
Static data API routes.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import Optional, List, Dict, Any

from kroniki.core.exceptions import UnknownEntityError
from ..services.game_data_service import GameDataService
from ..dependencies import get_game_data_service

router = APIRouter()


# === Items ===


@router.get("/items")
async def get_all_items(
    slot: Optional[str] = None,
    service: GameDataService = Depends(get_game_data_service),
) -> List[Dict[str, Any]]:
    """Get all item templates, optionally filtered by slot."""
    return [i.model_dump() for i in service.list_items(slot)]


@router.get("/items/{item_id}")
async def get_item(
    item_id: str,
    service: GameDataService = Depends(get_game_data_service),
) -> Dict[str, Any]:
    """Get specific item template by ID."""
    try:
        return service.get_item(item_id).model_dump()
    except UnknownEntityError:
        raise HTTPException(status_code=404, detail="Item not found")


# === Enemies ===


@router.get("/enemies")
async def get_all_enemies(
    max_level: Optional[int] = None,
    service: GameDataService = Depends(get_game_data_service),
) -> List[Dict[str, Any]]:
    """Get all enemies, optionally up to a level."""
    return [e.model_dump() for e in service.list_enemies(max_level)]


@router.get("/enemies/{enemy_id}")
async def get_enemy(
    enemy_id: str,
    service: GameDataService = Depends(get_game_data_service),
) -> Dict[str, Any]:
    """Get specific enemy by ID."""
    try:
        return service.get_enemy(enemy_id).model_dump()
    except UnknownEntityError:
        raise HTTPException(status_code=404, detail="Enemy not found")


# === Expeditions ===


@router.get("/expeditions")
async def get_all_expeditions(
    service: GameDataService = Depends(get_game_data_service),
) -> List[Dict[str, Any]]:
    """Get all expeditions."""
    return [e.model_dump() for e in service.list_expeditions()]


@router.get("/expeditions/{expedition_id}")
async def get_expedition(
    expedition_id: str,
    service: GameDataService = Depends(get_game_data_service),
) -> Dict[str, Any]:
    """Get specific expedition by ID."""
    try:
        return service.get_expedition(expedition_id).model_dump()
    except UnknownEntityError:
        raise HTTPException(status_code=404, detail="Expedition not found")


# === Towers ===


@router.get("/towers")
async def get_all_towers(
    service: GameDataService = Depends(get_game_data_service),
) -> List[Dict[str, Any]]:
    """Get active towers."""
    return [t.model_dump() for t in service.list_towers()]


@router.get("/towers/{tower_id}")
async def get_tower(
    tower_id: str,
    service: GameDataService = Depends(get_game_data_service),
) -> Dict[str, Any]:
    """Get specific tower by ID."""
    try:
        return service.get_tower(tower_id).model_dump()
    except UnknownEntityError:
        raise HTTPException(status_code=404, detail="Tower not found")
