"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .battle_controller import ActionChooser, BattleController, EventSink

__all__ = [
    "ActionChooser",
    "BattleController",
    "EventSink",
]
