"""Quest construction and flag-driven progress tracking."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from space_dystopia.data.repositories import QuestsRepository
from space_dystopia.domain.quest_state import Quest
from space_dystopia.domain.state import GameState
from space_dystopia.services.events import QuestCompletedEvent

FLAG_OBJECTIVE_PROGRESS = 1


@dataclass(slots=True)
class QuestObjectiveView:
    label: str
    current: int
    target: int
    completed: bool


@dataclass(slots=True)
class QuestStatusView:
    quest_id: str | None
    name: str
    description: str
    objectives: List[QuestObjectiveView]
    is_completed: bool


class QuestService:
    """Builds runtime quests and advances objectives bound to quest flags."""

    def __init__(self, quests_repo: QuestsRepository, *, monotone_objectives: bool = False) -> None:
        self._quests_repo = quests_repo
        self._monotone = monotone_objectives

    def build_quests(self) -> List[Quest]:
        quests: List[Quest] = []
        for quest_def in self._quests_repo.all():
            quest = Quest(
                name=quest_def.name,
                description=quest_def.description,
                quest_id=quest_def.quest_id,
                monotone=self._monotone,
            )
            for objective_def in quest_def.objectives:
                quest.add_objective(objective_def.label, objective_def.target)
            quests.append(quest)
        return quests

    def refresh_from_flags(self, state: GameState) -> List[QuestCompletedEvent]:
        """Sync flag-bound objectives with the player's flags.

        Returns an event for every quest that became complete during this call.
        """
        events: List[QuestCompletedEvent] = []
        for quest in state.quests:
            if quest.quest_id is None:
                continue
            was_completed = quest.is_completed()
            quest_def = self._quests_repo.get(quest.quest_id)
            for index, objective_def in enumerate(quest_def.objectives):
                if objective_def.flag is None:
                    continue
                if not state.player.has_quest_flag(objective_def.flag):
                    continue
                objective = quest.objectives[index]
                if objective.current < FLAG_OBJECTIVE_PROGRESS:
                    quest.update_objective(index, FLAG_OBJECTIVE_PROGRESS)
            if quest.is_completed() and not was_completed:
                events.append(QuestCompletedEvent(quest_id=quest.quest_id, quest_name=quest.name))
        return events

    def build_journal_view(self, state: GameState) -> List[QuestStatusView]:
        views: List[QuestStatusView] = []
        for quest in state.quests:
            objectives = [
                QuestObjectiveView(
                    label=objective.description,
                    current=objective.current,
                    target=objective.target,
                    completed=objective.completed,
                )
                for objective in quest.objectives
            ]
            views.append(
                QuestStatusView(
                    quest_id=quest.quest_id,
                    name=quest.name,
                    description=quest.description,
                    objectives=objectives,
                    is_completed=quest.is_completed(),
                )
            )
        return views
