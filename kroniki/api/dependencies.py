"""
Dependency injection for API services.
"""

from functools import lru_cache

from .config import settings
from .services.game_data_service import GameDataService
from .services.encounter_service import EncounterService


@lru_cache()
def get_game_data_service() -> GameDataService:
    """Get GameDataService singleton."""
    return GameDataService(settings.GAME_DATA_PATH)


@lru_cache()
def get_encounter_service() -> EncounterService:
    """Get EncounterService singleton."""
    return EncounterService(get_game_data_service())
