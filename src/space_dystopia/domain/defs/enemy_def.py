"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EnemyDef:
    """Minimal enemy definition."""

    id: str
    name: str
    enemy_type: str
    hp: int
    attack: int
    defense: int
    xp_reward: int
    defeat_flags: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    drop_item_ids: tuple[str, ...] = ()

    @property
    def default_defeat_flag(self) -> str:
        return f"{self.id}_defeated"
