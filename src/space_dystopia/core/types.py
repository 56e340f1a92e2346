"""Shared type aliases for the core and domain layers."""
from typing import Literal

CombatantKind = Literal["player", "enemy"]
CombatOutcome = Literal["ongoing", "player_won", "player_lost"]
CombatActionType = Literal["attack", "emp"]
EffectKind = Literal["message", "set_flag", "gain_experience"]
TextDisplayMode = Literal["typewriter", "instant"]

__all__ = [
    "CombatActionType",
    "CombatOutcome",
    "CombatantKind",
    "EffectKind",
    "TextDisplayMode",
]
