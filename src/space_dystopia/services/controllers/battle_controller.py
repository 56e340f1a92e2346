"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

from typing import Callable, List

from space_dystopia.core.types import CombatActionType
from space_dystopia.domain.battle_models import EncounterState
from space_dystopia.domain.state import GameState
from space_dystopia.services.battle_service import BattleEvent, BattleService, EncounterView

ActionChooser = Callable[[EncounterView], CombatActionType]
EventSink = Callable[[List[BattleEvent]], None]


class BattleController:
    """
    Runs an encounter to completion without knowing how it is displayed.

    The caller supplies ``choose_action`` (asked once per round) and an
    optional ``on_events`` sink. The loop blocks until the encounter reaches
    a terminal outcome; there is no way to abort it part-way.
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service
        self._active = False

    @property
    def in_encounter(self) -> bool:
        return self._active

    def run_encounter(
        self,
        state: GameState,
        enemy_id: str,
        choose_action: ActionChooser,
        on_events: EventSink | None = None,
    ) -> EncounterState:
        if self._active:
            raise RuntimeError("An encounter is already in progress.")
        self._active = True
        try:
            encounter, events = self._service.start_encounter(enemy_id, state)
            self._emit(on_events, events)
            while not encounter.is_over:
                view = self._service.get_encounter_view(encounter, state)
                action = choose_action(view)
                events = self._service.resolve_round(encounter, state, action)
                self._emit(on_events, events)
            return encounter
        finally:
            self._active = False

    @staticmethod
    def _emit(on_events: EventSink | None, events: List[BattleEvent]) -> None:
        if on_events is not None and events:
            on_events(events)
