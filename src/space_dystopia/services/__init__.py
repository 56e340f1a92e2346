"""Service layer exports."""

from .errors import FactoryError, GameInitError, ItemUnavailableError
from .battle_service import BattleService
from .quest_service import QuestService
from .area_service import AreaService, BattleRequestedEvent
from .inventory_service import InventoryService

__all__ = [
    "FactoryError",
    "GameInitError",
    "ItemUnavailableError",
    "BattleService",
    "QuestService",
    "AreaService",
    "BattleRequestedEvent",
    "InventoryService",
]
