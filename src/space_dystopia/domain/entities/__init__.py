"""Runtime entity exports."""

from .combatant import (
    DEFAULT_PLAYER_ABILITIES,
    Combatant,
    LevelUpResult,
)
from .player import Player
from .traits import Damageable, DamageRoller, Describable

__all__ = [
    "DEFAULT_PLAYER_ABILITIES",
    "Combatant",
    "Damageable",
    "DamageRoller",
    "Describable",
    "LevelUpResult",
    "Player",
]
