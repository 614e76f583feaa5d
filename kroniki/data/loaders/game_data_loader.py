"""Game-data catalog loader for Kroniki Mroku."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from kroniki.core.exceptions import GameDataError
from ..models.enemy import Enemy
from ..models.game_data import GameData
from ..models.item import ItemTemplate
from ..models.world import Expedition, Tower

logger = logging.getLogger(__name__)

# Get the data directory path
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
GAME_DATA_FILE = DATA_DIR / "game_data.json"


@lru_cache(maxsize=4)
def load_game_data(path: Optional[str] = None) -> GameData:
    """Load and validate the game catalogs from JSON.

    Args:
        path: JSON file to read. Defaults to the bundled catalog.

    Returns:
        Validated GameData bundle (cached per path).

    Raises:
        GameDataError: If the file is missing, not JSON, or fails validation.
    """
    file_path = Path(path) if path else GAME_DATA_FILE

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise GameDataError(f"Game data file not found: {file_path}") from e
    except json.JSONDecodeError as e:
        raise GameDataError(f"Game data file is not valid JSON: {file_path}: {e}") from e

    try:
        data = GameData.model_validate(raw)
    except ValidationError as e:
        raise GameDataError(f"Game data failed validation: {file_path}: {e}") from e

    logger.info(
        "Loaded game data from %s: %d items, %d affixes, %d enemies, %d expeditions, %d towers",
        file_path,
        len(data.item_templates),
        len(data.affixes),
        len(data.enemies),
        len(data.expeditions),
        len(data.towers),
    )
    return data


def get_item_template_by_id(template_id: str) -> Optional[ItemTemplate]:
    """Get an item template from the bundled catalog by its ID."""
    return load_game_data().get_item_template(template_id)


def get_enemy_by_id(enemy_id: str) -> Optional[Enemy]:
    """Get an enemy template from the bundled catalog by its ID."""
    return load_game_data().get_enemy(enemy_id)


def get_expedition_by_id(expedition_id: str) -> Optional[Expedition]:
    """Get an expedition from the bundled catalog by its ID."""
    return load_game_data().get_expedition(expedition_id)


def get_tower_by_id(tower_id: str) -> Optional[Tower]:
    """Get a tower from the bundled catalog by its ID."""
    return load_game_data().get_tower(tower_id)


def clear_cache() -> None:
    """Clear the loader cache (useful for testing or reloading data)."""
    load_game_data.cache_clear()
