"""Domain definition exports."""

from .effect_def import EffectDef
from .enemy_def import EnemyDef
from .item_def import ItemDef
from .location_def import InteractionDef, LocationDef
from .quest_def import QuestDef, QuestObjectiveDef

__all__ = [
    "EffectDef",
    "EnemyDef",
    "InteractionDef",
    "ItemDef",
    "LocationDef",
    "QuestDef",
    "QuestObjectiveDef",
]
