"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from space_dystopia.core.rng import RNG
from space_dystopia.domain.entities import Player
from space_dystopia.domain.quest_state import Quest


@dataclass
class GameState:
    """Everything a running session owns."""

    seed: int
    rng: RNG
    player: Player
    location_ids: List[str] = field(default_factory=list)
    current_location_index: int = 0
    location_items: Dict[str, List[str]] = field(default_factory=dict)
    quests: List[Quest] = field(default_factory=list)
    visited_location_ids: List[str] = field(default_factory=list)
    game_over: bool = False
    has_escaped: bool = False

    @property
    def current_location_id(self) -> str:
        return self.location_ids[self.current_location_index]
