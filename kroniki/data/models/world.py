"""Expedition and tower definitions."""

from typing import Optional

from pydantic import BaseModel, Field

from .item import EssenceType, LootDrop, ResourceDrop


class EnemySpawn(BaseModel):
    """Enemy candidate in an expedition or tower floor."""
    enemy_id: str
    spawn_chance: float = Field(default=100, ge=0, le=100)


class Expedition(BaseModel):
    """Expedition: a chain of fights with a shared reward roll."""
    id: str
    name: str
    description: str = ""
    gold_cost: int = 0
    energy_cost: int = 0
    duration: int = Field(default=0, ge=0, description="Travel time in seconds")
    min_base_gold_reward: int = 0
    max_base_gold_reward: int = 0
    min_base_experience_reward: int = 0
    max_base_experience_reward: int = 0
    enemies: list[EnemySpawn] = Field(default_factory=list)
    max_enemies: int = Field(default=0, ge=0, description="Spawn cap; 0 means every candidate")
    max_items: int = Field(default=0, ge=0, description="Loot cap; 0 means uncapped")
    loot_table: list[LootDrop] = Field(default_factory=list)
    resource_loot_table: list[ResourceDrop] = Field(default_factory=list)


class FloorReward(BaseModel):
    """Guaranteed reward for clearing a floor."""
    gold: int = 0
    experience: int = 0


class TowerFloor(BaseModel):
    """Single tower floor."""
    floor_number: int = Field(..., ge=1)
    enemies: list[EnemySpawn] = Field(default_factory=list)
    guaranteed_reward: Optional[FloorReward] = None
    loot_table: list[LootDrop] = Field(default_factory=list)
    resource_loot_table: list[ResourceDrop] = Field(default_factory=list)


class GrandPrize(BaseModel):
    """Reward for clearing the top floor."""
    gold: int = 0
    experience: int = 0
    essences: dict[EssenceType, int] = Field(default_factory=dict)
    items: list[str] = Field(default_factory=list, description="Item template IDs")

    model_config = {"use_enum_values": True}


class Tower(BaseModel):
    """Tower: floors fought one per activation."""
    id: str
    name: str
    description: str = ""
    location_id: Optional[str] = None
    total_floors: int = Field(..., ge=1)
    floors: list[TowerFloor] = Field(default_factory=list)
    grand_prize: Optional[GrandPrize] = None
    is_active: bool = True

    def get_floor(self, floor_number: int) -> Optional[TowerFloor]:
        for floor in self.floors:
            if floor.floor_number == floor_number:
                return floor
        return None
