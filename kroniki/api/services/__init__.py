"""API services."""

from .game_data_service import GameDataService
from .encounter_service import EncounterService

__all__ = [
    "GameDataService",
    "EncounterService",
]
