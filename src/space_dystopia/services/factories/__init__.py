"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy_combatant
from .id_factory import make_instance_id
from .player_factory import create_combat_proxy, create_player

__all__ = [
    "create_combat_proxy",
    "create_enemy_combatant",
    "create_player",
    "make_instance_id",
]
