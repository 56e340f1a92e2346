"""Factories for the overworld player and its combat proxy."""
from __future__ import annotations

from space_dystopia.domain.entities import DEFAULT_PLAYER_ABILITIES, Combatant, Player
from space_dystopia.services.errors import GameInitError

PROXY_HEALTH = 100
PROXY_ATTACK = 15
PROXY_DEFENSE = 5


def create_player(name: str) -> Player:
    """Create the overworld player, rejecting blank names."""
    cleaned = name.strip()
    if not cleaned:
        raise GameInitError("Name cannot be empty!")
    return Player(name=cleaned)


def create_combat_proxy(player: Player) -> Combatant:
    """Build a fresh combat stand-in; stats never carry over between encounters."""
    return Combatant(
        kind="player",
        name=player.name,
        health=PROXY_HEALTH,
        attack=PROXY_ATTACK,
        defense=PROXY_DEFENSE,
        abilities=DEFAULT_PLAYER_ABILITIES,
    )
