"""Guild and skill models consumed by stat derivation."""

from typing import Optional

from pydantic import BaseModel, Field

from .item import Attribute


class GuildBuff(BaseModel):
    """Timed guild buff."""
    id: str
    name: str
    stats: dict[Attribute, int] = Field(default_factory=dict, description="Primary attribute bonuses")
    attacks_per_round_bonus: float = 0
    exp_bonus: float = Field(default=0, description="Experience bonus in percent")
    expires_at: int = Field(..., description="Expiry as epoch milliseconds")

    model_config = {"use_enum_values": True}

    def is_active(self, now_ms: Optional[int]) -> bool:
        return now_ms is None or self.expires_at > now_ms


class GuildContext(BaseModel):
    """Guild-derived inputs for a character."""
    barracks_level: int = Field(default=0, ge=0)
    shrine_level: int = Field(default=0, ge=0)
    active_buffs: list[GuildBuff] = Field(default_factory=list)


class Skill(BaseModel):
    """Learnable skill; active skills reserve mana."""
    id: str
    name: str
    description: str = ""
    mana_maintenance_cost: int = Field(default=0, ge=0)
