"""Overworld player model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from space_dystopia.domain.stat import Stat

DEFAULT_PLAYER_DESCRIPTION = "A maintenance worker on Europa"
DEFAULT_PLAYER_HEALTH = 100
DEFAULT_PLAYER_ENERGY = 100


def _default_health() -> Stat:
    return Stat.full("Health", DEFAULT_PLAYER_HEALTH)


def _default_energy() -> Stat:
    return Stat.full("Energy", DEFAULT_PLAYER_ENERGY)


@dataclass(slots=True)
class Player:
    """The persistent explorer, distinct from the per-encounter combat proxy."""

    name: str
    description: str = DEFAULT_PLAYER_DESCRIPTION
    health: Stat = field(default_factory=_default_health)
    energy: Stat = field(default_factory=_default_energy)
    inventory: List[str] = field(default_factory=list)
    experience: int = 0
    quest_flags: Set[str] = field(default_factory=set)
    total_steps: int = 0
    items_collected: int = 0
    discovered_interactions: Set[str] = field(default_factory=set)

    @property
    def is_alive(self) -> bool:
        return not self.health.is_empty

    def take_damage(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("Damage cannot be negative!")
        return -self.health.modify(-amount)

    def gain_experience(self, amount: int) -> bool:
        if amount <= 0:
            return False
        self.experience += amount
        return True

    def set_quest_flag(self, flag: str) -> bool:
        """Mark ``flag`` as achieved. Returns True the first time it is set."""
        if flag in self.quest_flags:
            return False
        self.quest_flags.add(flag)
        return True

    def has_quest_flag(self, flag: str) -> bool:
        return flag in self.quest_flags

    def has_item(self, item_id: str) -> bool:
        return item_id in self.inventory
