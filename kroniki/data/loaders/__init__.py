# Data Loaders
from .game_data_loader import (
    GAME_DATA_FILE,
    load_game_data,
    get_item_template_by_id,
    get_enemy_by_id,
    get_expedition_by_id,
    get_tower_by_id,
    clear_cache,
)

__all__ = [
    "GAME_DATA_FILE",
    "load_game_data",
    "get_item_template_by_id",
    "get_enemy_by_id",
    "get_expedition_by_id",
    "get_tower_by_id",
    "clear_cache",
]
