"""Quest progress state data structures."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QuestObjective:
    """Tracks progress for a single integer-threshold objective."""

    description: str
    target: int
    current: int = 0
    completed: bool = False

    def update_progress(self, value: int, *, monotone: bool = False) -> bool:
        """Set the current value and recompute completion.

        With ``monotone`` enabled, values below the current progress are
        ignored. Returns True when the stored value changed.
        """
        if monotone and value < self.current:
            return False
        changed = value != self.current
        self.current = value
        self.completed = self.current >= self.target
        return changed


@dataclass(slots=True)
class Quest:
    """A named goal that completes once every objective is met."""

    name: str
    description: str
    objectives: List[QuestObjective] = field(default_factory=list)
    completed: bool = False
    quest_id: str | None = None
    monotone: bool = False

    def add_objective(self, description: str, target: int) -> QuestObjective:
        objective = QuestObjective(description=description, target=target)
        self.objectives.append(objective)
        return objective

    def update_objective(self, index: int, value: int) -> bool:
        if not 0 <= index < len(self.objectives):
            logger.warning("Quest '%s' has no objective at index %s.", self.name, index)
            return False
        changed = self.objectives[index].update_progress(value, monotone=self.monotone)
        self._check_completion()
        return changed

    def is_completed(self) -> bool:
        return self.completed

    def _check_completion(self) -> None:
        self.completed = all(objective.completed for objective in self.objectives)
