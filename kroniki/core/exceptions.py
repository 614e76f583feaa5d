"""Exceptions raised by encounter orchestration and data loading.

The stat calculator and combat engine never raise for game conditions;
these cover caller mistakes and unreadable catalogs.
"""


class KronikiError(Exception):
    """Base class for engine errors."""


class UnknownEntityError(KronikiError, ValueError):
    """A referenced catalog entry (expedition, tower, enemy...) does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"Unknown {kind}: {entity_id}")


class InvalidRunStateError(KronikiError, ValueError):
    """An encounter cannot start or continue from the current state."""


class GameDataError(KronikiError):
    """Game-data catalog is missing or malformed."""
