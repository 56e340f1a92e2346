"""Events shared by several services."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class GameEvent:
    """Base class for non-battle events."""


@dataclass(slots=True)
class ExpGainedEvent(GameEvent):
    amount: int
    total_exp: int


@dataclass(slots=True)
class FlagSetEvent(GameEvent):
    flag: str


@dataclass(slots=True)
class QuestCompletedEvent(GameEvent):
    quest_id: str | None
    quest_name: str
