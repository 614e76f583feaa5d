"""
Stat derivation API schemas.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional

from kroniki.data.models import Character, EquipmentSlot, GuildContext, ItemInstance


class StatsRequest(BaseModel):
    """Derive stats for a character."""

    character: Character
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = Field(default=None, description="Epoch ms for guild buff expiry")


class StatsResponse(BaseModel):
    """Derived stats."""

    character_id: str
    stats: Dict[str, float]


class EquipPreviewRequest(BaseModel):
    """Preview the stat change of equipping an item."""

    character: Character
    slot: EquipmentSlot
    item: ItemInstance
    guild: Optional[GuildContext] = None
    now_ms: Optional[int] = None


class EquipPreviewResponse(BaseModel):
    """Stats after the swap and the per-stat difference."""

    stats: Dict[str, float]
    changes: Dict[str, float]
