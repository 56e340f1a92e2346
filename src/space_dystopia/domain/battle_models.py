"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass

from space_dystopia.core.types import CombatOutcome
from space_dystopia.domain.entities import Combatant


@dataclass(slots=True)
class EncounterState:
    """Tracks a single player-versus-enemy encounter."""

    encounter_id: str
    player: Combatant
    enemy: Combatant
    round: int = 0
    outcome: CombatOutcome = "ongoing"

    @property
    def is_over(self) -> bool:
        return self.outcome != "ongoing"


@dataclass(slots=True)
class CombatantView:
    """Display-ready snapshot of one combatant."""

    name: str
    health: int
    attack: int
    defense: int
    is_alive: bool
