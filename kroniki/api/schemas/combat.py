"""
Combat API schemas.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from kroniki.data.models import Character, GuildContext


class FightEnemyRequest(BaseModel):
    """Single fight against a catalog enemy."""

    character: Character
    enemy_id: str
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None
    seed: Optional[int] = Field(default=None, description="RNG seed for a reproducible fight")


class FightResultSchema(BaseModel):
    """Fight outcome with the client-facing log."""

    is_victory: bool
    timed_out: bool
    turns: int
    final_player_health: int
    final_player_mana: int
    final_enemy_health: int
    final_enemy_mana: int
    log: List[Dict[str, Any]]
