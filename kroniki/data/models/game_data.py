"""Static game catalog bundle."""

from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr

from .enemy import Enemy
from .guild import Skill
from .item import Affix, ItemTemplate
from .world import Expedition, Tower


class GameData(BaseModel):
    """Read-only catalogs shared by every engine call."""
    item_templates: list[ItemTemplate] = Field(default_factory=list)
    affixes: list[Affix] = Field(default_factory=list)
    enemies: list[Enemy] = Field(default_factory=list)
    expeditions: list[Expedition] = Field(default_factory=list)
    towers: list[Tower] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)

    _items_by_id: dict[str, ItemTemplate] = PrivateAttr(default_factory=dict)
    _affixes_by_id: dict[str, Affix] = PrivateAttr(default_factory=dict)
    _enemies_by_id: dict[str, Enemy] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._items_by_id = {t.id: t for t in self.item_templates}
        self._affixes_by_id = {a.id: a for a in self.affixes}
        self._enemies_by_id = {e.id: e for e in self.enemies}

    @property
    def item_index(self) -> dict[str, ItemTemplate]:
        return self._items_by_id

    @property
    def affix_index(self) -> dict[str, Affix]:
        return self._affixes_by_id

    def get_item_template(self, template_id: str) -> Optional[ItemTemplate]:
        return self._items_by_id.get(template_id)

    def get_affix(self, affix_id: str) -> Optional[Affix]:
        return self._affixes_by_id.get(affix_id)

    def get_enemy(self, enemy_id: str) -> Optional[Enemy]:
        return self._enemies_by_id.get(enemy_id)

    def get_expedition(self, expedition_id: str) -> Optional[Expedition]:
        for expedition in self.expeditions:
            if expedition.id == expedition_id:
                return expedition
        return None

    def get_tower(self, tower_id: str) -> Optional[Tower]:
        for tower in self.towers:
            if tower.id == tower_id:
                return tower
        return None

    def get_skills(self, skill_ids: list[str]) -> list[Skill]:
        wanted = set(skill_ids)
        return [s for s in self.skills if s.id in wanted]
