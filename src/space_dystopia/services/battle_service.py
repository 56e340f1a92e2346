"""Battle service handling deterministic one-on-one combat."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from space_dystopia.core.types import CombatActionType
from space_dystopia.data.repositories import EnemiesRepository, ItemsRepository
from space_dystopia.domain.battle_models import CombatantView, EncounterState
from space_dystopia.domain.entities import Combatant
from space_dystopia.domain.state import GameState
from space_dystopia.services.factories import (
    create_combat_proxy,
    create_enemy_combatant,
    make_instance_id,
)

logger = logging.getLogger(__name__)

EMP_DAMAGE_MULTIPLIER = 2
EMP_TARGET_TAG = "robot"
DEFEAT_HEALTH_PENALTY = 50


@dataclass(slots=True)
class EncounterView:
    """Presentation view for the current encounter."""

    encounter_id: str
    round: int
    player: CombatantView
    enemy: CombatantView
    emp_available: bool


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class EncounterStartedEvent(BattleEvent):
    encounter_id: str
    enemy_name: str
    player_health: int
    enemy_health: int


@dataclass(slots=True)
class EmpUnavailableEvent(BattleEvent):
    reason: str


@dataclass(slots=True)
class PlayerAttackEvent(BattleEvent):
    attacker_name: str
    target_name: str
    roll: int
    damage: int
    target_health: int
    used_emp: bool = False


@dataclass(slots=True)
class EnemyAttackEvent(BattleEvent):
    attacker_name: str
    target_name: str
    roll: int
    damage: int
    target_health: int


@dataclass(slots=True)
class EnemyDefeatedEvent(BattleEvent):
    enemy_id: str | None
    enemy_name: str
    flags_set: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ExperienceGainedEvent(BattleEvent):
    amount: int
    total_exp: int


@dataclass(slots=True)
class PlayerDefeatedEvent(BattleEvent):
    player_name: str
    penalty: int
    overworld_health: int


@dataclass(slots=True)
class RoundSummaryEvent(BattleEvent):
    round: int
    player_health: int
    enemy_name: str
    enemy_health: int


@dataclass(slots=True)
class EncounterResolvedEvent(BattleEvent):
    outcome: str


class BattleService:
    """Deterministic orchestrator for a player proxy fighting a single enemy."""

    def __init__(
        self,
        enemies_repo: EnemiesRepository,
        items_repo: ItemsRepository,
        *,
        defeat_ends_encounter: bool = True,
    ) -> None:
        self._enemies_repo = enemies_repo
        self._items_repo = items_repo
        self._defeat_ends_encounter = defeat_ends_encounter

    # -----------------------
    # Encounter Lifecycle
    # -----------------------
    def start_encounter(self, enemy_id: str, state: GameState) -> tuple[EncounterState, List[BattleEvent]]:
        """Pit a fresh combat proxy of the player against a fresh enemy."""
        enemy = create_enemy_combatant(enemy_id, enemies_repo=self._enemies_repo)
        proxy = create_combat_proxy(state.player)
        encounter_id = make_instance_id("encounter", state.rng)
        encounter = EncounterState(encounter_id=encounter_id, player=proxy, enemy=enemy)
        logger.info("Encounter %s started: %s vs %s", encounter_id, proxy.name, enemy.name)
        events: List[BattleEvent] = [
            EncounterStartedEvent(
                encounter_id=encounter_id,
                enemy_name=enemy.name,
                player_health=proxy.health,
                enemy_health=enemy.health,
            )
        ]
        return encounter, events

    def get_encounter_view(self, encounter: EncounterState, state: GameState) -> EncounterView:
        return EncounterView(
            encounter_id=encounter.encounter_id,
            round=encounter.round,
            player=self._to_view(encounter.player),
            enemy=self._to_view(encounter.enemy),
            emp_available=self.emp_available(encounter, state),
        )

    def emp_available(self, encounter: EncounterState, state: GameState) -> bool:
        """EMP needs an EMP item in the inventory and a robotic target."""
        return self._player_has_emp(state) and encounter.enemy.has_tag(EMP_TARGET_TAG)

    def resolve_round(
        self, encounter: EncounterState, state: GameState, action: CombatActionType
    ) -> List[BattleEvent]:
        """Run one full round: player strike, then enemy retaliation."""
        if encounter.is_over:
            raise ValueError(f"Encounter '{encounter.encounter_id}' is already resolved.")
        encounter.round += 1
        events = self.player_attack(encounter, state, action)
        if encounter.is_over:
            return events
        events.extend(self.run_enemy_turn(encounter, state))
        if not encounter.is_over:
            events.append(
                RoundSummaryEvent(
                    round=encounter.round,
                    player_health=encounter.player.health,
                    enemy_name=encounter.enemy.name,
                    enemy_health=encounter.enemy.health,
                )
            )
        return events

    # -----------------------
    # Turns
    # -----------------------
    def player_attack(
        self, encounter: EncounterState, state: GameState, action: CombatActionType
    ) -> List[BattleEvent]:
        events: List[BattleEvent] = []
        use_emp = False
        if action == "emp":
            if self.emp_available(encounter, state):
                use_emp = True
            else:
                events.append(EmpUnavailableEvent(reason=self._emp_unavailable_reason(encounter, state)))
        elif action != "attack":
            raise ValueError(f"Unknown combat action: {action}")

        player = encounter.player
        enemy = encounter.enemy
        roll = player.roll_damage(state.rng)
        if use_emp:
            roll *= EMP_DAMAGE_MULTIPLIER
        damage = enemy.receive_damage(roll)
        events.append(
            PlayerAttackEvent(
                attacker_name=player.name,
                target_name=enemy.name,
                roll=roll,
                damage=damage,
                target_health=enemy.health,
                used_emp=use_emp,
            )
        )
        if not enemy.is_alive:
            events.extend(self._finalize_victory(encounter, state))
        return events

    def run_enemy_turn(self, encounter: EncounterState, state: GameState) -> List[BattleEvent]:
        player = encounter.player
        enemy = encounter.enemy
        roll = enemy.roll_damage(state.rng)
        damage = player.receive_damage(roll)
        events: List[BattleEvent] = [
            EnemyAttackEvent(
                attacker_name=enemy.name,
                target_name=player.name,
                roll=roll,
                damage=damage,
                target_health=player.health,
            )
        ]
        if not player.is_alive and self._defeat_ends_encounter:
            events.extend(self._finalize_defeat(encounter, state))
        return events

    # -----------------------
    # Helpers
    # -----------------------
    def _finalize_victory(self, encounter: EncounterState, state: GameState) -> List[BattleEvent]:
        encounter.outcome = "player_won"
        enemy = encounter.enemy
        flags: List[str] = []
        if enemy.enemy_id is not None:
            enemy_def = self._enemies_repo.get(enemy.enemy_id)
            for flag in (enemy_def.default_defeat_flag, *enemy_def.defeat_flags):
                if state.player.set_quest_flag(flag):
                    flags.append(flag)
            reward = enemy_def.xp_reward
        else:
            reward = 0
        events: List[BattleEvent] = [
            EnemyDefeatedEvent(enemy_id=enemy.enemy_id, enemy_name=enemy.name, flags_set=flags)
        ]
        if state.player.gain_experience(reward):
            events.append(ExperienceGainedEvent(amount=reward, total_exp=state.player.experience))
        events.append(EncounterResolvedEvent(outcome=encounter.outcome))
        logger.info("Encounter %s won against %s", encounter.encounter_id, enemy.name)
        return events

    def _finalize_defeat(self, encounter: EncounterState, state: GameState) -> List[BattleEvent]:
        encounter.outcome = "player_lost"
        state.player.take_damage(DEFEAT_HEALTH_PENALTY)
        logger.info("Encounter %s lost to %s", encounter.encounter_id, encounter.enemy.name)
        return [
            PlayerDefeatedEvent(
                player_name=state.player.name,
                penalty=DEFEAT_HEALTH_PENALTY,
                overworld_health=state.player.health.current,
            ),
            EncounterResolvedEvent(outcome=encounter.outcome),
        ]

    def _player_has_emp(self, state: GameState) -> bool:
        for item_id in state.player.inventory:
            if self._items_repo.get(item_id).combat_effect == "emp":
                return True
        return False

    def _emp_unavailable_reason(self, encounter: EncounterState, state: GameState) -> str:
        if not self._player_has_emp(state):
            return "no_emp_device"
        return "target_not_robotic"

    @staticmethod
    def _to_view(combatant: Combatant) -> CombatantView:
        return CombatantView(
            name=combatant.name,
            health=combatant.health,
            attack=combatant.attack,
            defense=combatant.defense,
            is_alive=combatant.is_alive,
        )
