"""
Game catalog service.
"""

from typing import List, Optional

from kroniki.core.exceptions import UnknownEntityError
from kroniki.data.loaders import load_game_data
from kroniki.data.models import Enemy, Expedition, GameData, ItemTemplate, Tower


class GameDataService:
    """Read access to the loaded game catalogs."""

    def __init__(self, path: Optional[str] = None):
        self.game_data: GameData = load_game_data(path)

    def list_items(self, slot: Optional[str] = None) -> List[ItemTemplate]:
        """All item templates, optionally filtered by slot."""
        items = self.game_data.item_templates
        if slot is not None:
            items = [i for i in items if i.slot == slot]
        return items

    def get_item(self, template_id: str) -> ItemTemplate:
        template = self.game_data.get_item_template(template_id)
        if template is None:
            raise UnknownEntityError("item template", template_id)
        return template

    def list_enemies(self, max_level: Optional[int] = None) -> List[Enemy]:
        """All enemies, optionally up to a level."""
        enemies = self.game_data.enemies
        if max_level is not None:
            enemies = [e for e in enemies if e.level <= max_level]
        return enemies

    def get_enemy(self, enemy_id: str) -> Enemy:
        enemy = self.game_data.get_enemy(enemy_id)
        if enemy is None:
            raise UnknownEntityError("enemy", enemy_id)
        return enemy

    def list_expeditions(self) -> List[Expedition]:
        return self.game_data.expeditions

    def get_expedition(self, expedition_id: str) -> Expedition:
        expedition = self.game_data.get_expedition(expedition_id)
        if expedition is None:
            raise UnknownEntityError("expedition", expedition_id)
        return expedition

    def list_towers(self, active_only: bool = True) -> List[Tower]:
        towers = self.game_data.towers
        if active_only:
            towers = [t for t in towers if t.is_active]
        return towers

    def get_tower(self, tower_id: str) -> Tower:
        tower = self.game_data.get_tower(tower_id)
        if tower is None:
            raise UnknownEntityError("tower", tower_id)
        return tower
