"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository
from .locations_repo import LocationsRepository
from .quests_repo import QuestsRepository

__all__ = [
    "EnemiesRepository",
    "ItemsRepository",
    "LocationsRepository",
    "QuestsRepository",
]
