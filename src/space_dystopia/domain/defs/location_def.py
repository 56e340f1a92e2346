"""Location and interaction definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class InteractionDef:
    """A named action the player can take at a location."""

    key: str
    response: str
    set_flags: Tuple[str, ...] = ()
    experience: int = 0
    once_flag: str | None = None
    battle_enemy_id: str | None = None
    battle_skip_flag: str | None = None
    required_flags: Tuple[str, ...] = ()
    blocked_response: str | None = None
    escape: bool = False


@dataclass(slots=True)
class LocationDef:
    """Describes a station location and its starting contents."""

    id: str
    name: str
    description: str
    interactions: Tuple[InteractionDef, ...]
    item_ids: Tuple[str, ...] = ()
    art: str | None = None

    @property
    def interaction_keys(self) -> Tuple[str, ...]:
        return tuple(interaction.key for interaction in self.interactions)

    def get_interaction(self, key: str) -> InteractionDef | None:
        for interaction in self.interactions:
            if interaction.key == key:
                return interaction
        return None
