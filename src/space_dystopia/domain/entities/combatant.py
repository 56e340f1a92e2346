"""Combat-only entity model shared by the player proxy and enemies."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from space_dystopia.core.rng import RNG
from space_dystopia.core.types import CombatantKind

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_ABILITIES: Tuple[str, ...] = ("Quick Attack", "Defensive Stance")

# Inclusive +/- spread applied to the attack value on every roll.
_ROLL_SPREAD: Dict[str, int] = {"player": 2, "enemy": 1}

LEVEL_UP_HEALTH = 10
LEVEL_UP_ATTACK = 5
LEVEL_UP_DEFENSE = 3
EXPERIENCE_PER_LEVEL = 100


@dataclass(slots=True)
class LevelUpResult:
    """Gains reported after a combatant levels up."""

    new_level: int
    health_gain: int = LEVEL_UP_HEALTH
    attack_gain: int = LEVEL_UP_ATTACK
    defense_gain: int = LEVEL_UP_DEFENSE


@dataclass(slots=True)
class Combatant:
    """A participant in a one-on-one encounter.

    ``kind`` selects the variant: ``"player"`` combatants carry level,
    experience and abilities; ``"enemy"`` combatants carry a type, tags and
    the ids of items they could drop.
    """

    kind: CombatantKind
    name: str
    health: int
    attack: int
    defense: int
    level: int = 1
    experience: int = 0
    abilities: Tuple[str, ...] = ()
    enemy_id: str | None = None
    enemy_type: str | None = None
    tags: Tuple[str, ...] = ()
    drop_item_ids: List[str] = field(default_factory=list)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def roll_damage(self, rng: RNG) -> int:
        spread = _ROLL_SPREAD[self.kind]
        return self.attack + rng.randint(-spread, spread)

    def receive_damage(self, amount: int) -> int:
        """Apply ``amount`` minus defense and return the health removed."""
        if amount < 0:
            logger.warning("Ignoring negative damage %s against %s.", amount, self.name)
            amount = 0
        before = self.health
        self.health = max(0, self.health - max(0, amount - self.defense))
        return before - self.health

    def gain_experience(self, amount: int) -> LevelUpResult | None:
        """Accrue experience, levelling up once when the threshold is met."""
        if self.kind != "player":
            raise ValueError(f"{self.name} cannot gain experience.")
        if amount <= 0:
            return None
        self.experience += amount
        if self.experience < self.level * EXPERIENCE_PER_LEVEL:
            return None
        self.level += 1
        self.health += LEVEL_UP_HEALTH
        self.attack += LEVEL_UP_ATTACK
        self.defense += LEVEL_UP_DEFENSE
        self.experience = 0
        return LevelUpResult(new_level=self.level)

    def add_drop_item(self, item_id: str) -> None:
        self.drop_item_ids.append(item_id)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
