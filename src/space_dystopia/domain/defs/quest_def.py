"""Quest definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class QuestObjectiveDef:
    label: str
    target: int = 1
    flag: str | None = None


@dataclass(slots=True)
class QuestDef:
    quest_id: str
    name: str
    description: str
    objectives: Tuple[QuestObjectiveDef, ...]
