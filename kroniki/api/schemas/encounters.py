"""
Expedition, tower and PvP API schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional

from kroniki.data.models import Character, GuildContext
from kroniki.encounters import TowerRun


class ExpeditionRequest(BaseModel):
    """Run an expedition."""

    character: Character
    expedition_id: str
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None
    seed: Optional[int] = None


class TowerStartRequest(BaseModel):
    """Enter a tower."""

    character: Character
    tower_id: str
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None


class TowerFightRequest(BaseModel):
    """Fight the current floor of a run."""

    run: TowerRun
    character: Character
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None
    seed: Optional[int] = None


class TowerRetreatRequest(BaseModel):
    """Leave a tower and bank the run."""

    run: TowerRun
    character: Character


class PvpRequest(BaseModel):
    """Attack another character."""

    attacker: Character
    defender: Character
    attacker_guild: Optional[GuildContext] = None
    defender_guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None
    seed: Optional[int] = Field(default=None, description="RNG seed for a reproducible duel")
