"""Application service for station exploration, interactions and escape."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from space_dystopia.core.rng import RNG
from space_dystopia.data.repositories import ItemsRepository, LocationsRepository
from space_dystopia.domain.defs import InteractionDef, LocationDef
from space_dystopia.domain.state import GameState
from space_dystopia.services.events import ExpGainedEvent, FlagSetEvent, GameEvent
from space_dystopia.services.factories import create_player
from space_dystopia.services.quest_service import QuestService

TRAVEL_EXPERIENCE = 5
UNKNOWN_INTERACTION_RESPONSE = "Nothing interesting happens."
DEFAULT_BLOCKED_RESPONSE = "You can't do that yet."
PLAYER_NAME_PLACEHOLDER = "{player_name}"

ALERT_LOCATION_ID = "terminal_room"
ALERT_TRIGGER_FLAG = "terminal_access_granted"
ALERT_CLEAR_FLAG = "security_defeated"
ALERT_ENEMY_ID = "security_bot"

ESCAPE_LOCATION_ID = "airlock"
ESCAPE_REQUIRED_FLAGS = ("security_defeated", "spacesuit_equipped")
ESCAPED_FLAG = "airlock_escaped"


@dataclass(slots=True)
class LocationItemView:
    item_id: str
    name: str


@dataclass(slots=True)
class LocationView:
    """Presentation data for the player's current location."""

    id: str
    name: str
    description: str
    art: str | None
    items: Tuple[LocationItemView, ...]
    interaction_keys: Tuple[str, ...]


@dataclass(slots=True)
class DestinationView:
    index: int
    location_id: str
    name: str
    is_current: bool


@dataclass(slots=True)
class StatusView:
    name: str
    description: str
    health: str
    energy: str
    experience: int
    location_name: str
    inventory: Tuple[str, ...]


@dataclass(slots=True)
class EndGameStats:
    """Summary shown when a session ends."""

    player_name: str
    health: str
    energy: str
    experience: int
    total_steps: int
    items_collected: int
    locations_explored: int
    locations_total: int
    interactions_discovered: int
    quest_flags: Tuple[str, ...]
    escaped: bool


@dataclass(slots=True)
class TravelPerformedEvent(GameEvent):
    from_location_id: str
    from_location_name: str
    to_location_id: str
    to_location_name: str


@dataclass(slots=True)
class InteractionResolvedEvent(GameEvent):
    key: str
    response: str
    first_time: bool


@dataclass(slots=True)
class InteractionBlockedEvent(GameEvent):
    key: str
    response: str
    missing_flags: Tuple[str, ...]


@dataclass(slots=True)
class BattleRequestedEvent(GameEvent):
    enemy_id: str
    reason: str


@dataclass(slots=True)
class EscapeEvent(GameEvent):
    location_name: str


class AreaService:
    """Coordinates movement, location views and scripted interactions."""

    def __init__(
        self,
        locations_repo: LocationsRepository,
        items_repo: ItemsRepository,
        *,
        quest_service: QuestService | None = None,
    ) -> None:
        self._locations_repo = locations_repo
        self._items_repo = items_repo
        self._quest_service = quest_service

    # ------------------------------------------------------------------ Setup
    def start_new_game(self, seed: int, player_name: str) -> GameState:
        """Create a fresh session with every item at its starting location."""
        player = create_player(player_name)
        locations = self._locations_repo.ordered()
        state = GameState(
            seed=seed,
            rng=RNG(seed),
            player=player,
            location_ids=[location.id for location in locations],
            location_items={location.id: list(location.item_ids) for location in locations},
        )
        if self._quest_service is not None:
            state.quests = self._quest_service.build_quests()
        state.visited_location_ids.append(state.current_location_id)
        return state

    # ------------------------------------------------------------------ Views
    def get_current_location_view(self, state: GameState) -> LocationView:
        location = self._current_location(state)
        items = tuple(
            LocationItemView(item_id=item_id, name=self._items_repo.get(item_id).name)
            for item_id in state.location_items.get(location.id, [])
        )
        return LocationView(
            id=location.id,
            name=location.name,
            description=location.description,
            art=location.art,
            items=items,
            interaction_keys=location.interaction_keys,
        )

    def list_destinations(self, state: GameState) -> List[DestinationView]:
        return [
            DestinationView(
                index=index,
                location_id=location_id,
                name=self._locations_repo.get(location_id).name,
                is_current=index == state.current_location_index,
            )
            for index, location_id in enumerate(state.location_ids)
        ]

    def build_status_view(self, state: GameState) -> StatusView:
        player = state.player
        return StatusView(
            name=player.name,
            description=player.description,
            health=str(player.health),
            energy=str(player.energy),
            experience=player.experience,
            location_name=self._current_location(state).name,
            inventory=tuple(self._items_repo.get(item_id).name for item_id in player.inventory),
        )

    def build_end_game_stats(self, state: GameState) -> EndGameStats:
        player = state.player
        return EndGameStats(
            player_name=player.name,
            health=str(player.health),
            energy=str(player.energy),
            experience=player.experience,
            total_steps=player.total_steps,
            items_collected=player.items_collected,
            locations_explored=len(state.visited_location_ids),
            locations_total=len(state.location_ids),
            interactions_discovered=len(player.discovered_interactions),
            quest_flags=tuple(sorted(player.quest_flags)),
            escaped=state.has_escaped,
        )

    # ------------------------------------------------------------------ Actions
    def travel_to(self, state: GameState, index: int) -> List[GameEvent]:
        """Move to the location at ``index`` in the travel menu."""
        if not 0 <= index < len(state.location_ids):
            raise ValueError(f"Location index {index} is out of range.")
        if index == state.current_location_index:
            raise ValueError("You are already here.")
        origin = self._current_location(state)
        state.current_location_index = index
        destination = self._current_location(state)
        if destination.id not in state.visited_location_ids:
            state.visited_location_ids.append(destination.id)
        state.player.total_steps += 1
        events: List[GameEvent] = [
            TravelPerformedEvent(
                from_location_id=origin.id,
                from_location_name=origin.name,
                to_location_id=destination.id,
                to_location_name=destination.name,
            )
        ]
        if state.player.gain_experience(TRAVEL_EXPERIENCE):
            events.append(ExpGainedEvent(amount=TRAVEL_EXPERIENCE, total_exp=state.player.experience))
        return events

    def interact(self, state: GameState, key: str) -> List[GameEvent]:
        """Resolve a named interaction at the current location."""
        location = self._current_location(state)
        interaction = location.get_interaction(key)
        if interaction is None:
            return [InteractionResolvedEvent(key=key, response=UNKNOWN_INTERACTION_RESPONSE, first_time=False)]

        player = state.player
        missing = tuple(flag for flag in interaction.required_flags if not player.has_quest_flag(flag))
        if missing:
            return [
                InteractionBlockedEvent(
                    key=key,
                    response=interaction.blocked_response or DEFAULT_BLOCKED_RESPONSE,
                    missing_flags=missing,
                )
            ]

        discovery_key = f"{location.id}:{interaction.key}"
        first_time = discovery_key not in player.discovered_interactions
        player.discovered_interactions.add(discovery_key)

        rewarded = interaction.once_flag is None or not player.has_quest_flag(interaction.once_flag)
        events: List[GameEvent] = [
            InteractionResolvedEvent(
                key=interaction.key,
                response=interaction.response.replace(PLAYER_NAME_PLACEHOLDER, player.name),
                first_time=first_time,
            )
        ]
        for flag in interaction.set_flags:
            if player.set_quest_flag(flag):
                events.append(FlagSetEvent(flag=flag))
        if rewarded:
            if interaction.once_flag is not None:
                player.set_quest_flag(interaction.once_flag)
            if player.gain_experience(interaction.experience):
                events.append(ExpGainedEvent(amount=interaction.experience, total_exp=player.experience))

        battle = self._battle_request(interaction, state)
        if battle is not None:
            events.append(battle)
        if interaction.escape:
            events.extend(self._escape(state, location))
        return events

    def pending_encounter(self, state: GameState) -> str | None:
        """Return the enemy that ambushes the player here, if any."""
        if state.current_location_id != ALERT_LOCATION_ID:
            return None
        player = state.player
        if player.has_quest_flag(ALERT_TRIGGER_FLAG) and not player.has_quest_flag(ALERT_CLEAR_FLAG):
            return ALERT_ENEMY_ID
        return None

    def check_escape(self, state: GameState) -> List[GameEvent]:
        """Escape automatically once the airlock conditions hold."""
        if state.has_escaped or state.current_location_id != ESCAPE_LOCATION_ID:
            return []
        if not all(state.player.has_quest_flag(flag) for flag in ESCAPE_REQUIRED_FLAGS):
            return []
        return self._escape(state, self._current_location(state))

    # ------------------------------------------------------------------ Helpers
    def _current_location(self, state: GameState) -> LocationDef:
        return self._locations_repo.get(state.current_location_id)

    @staticmethod
    def _battle_request(interaction: InteractionDef, state: GameState) -> BattleRequestedEvent | None:
        if interaction.battle_enemy_id is None:
            return None
        skip_flag = interaction.battle_skip_flag
        if skip_flag is not None and state.player.has_quest_flag(skip_flag):
            return None
        return BattleRequestedEvent(enemy_id=interaction.battle_enemy_id, reason=interaction.key)

    @staticmethod
    def _escape(state: GameState, location: LocationDef) -> List[GameEvent]:
        state.has_escaped = True
        state.game_over = True
        events: List[GameEvent] = []
        if state.player.set_quest_flag(ESCAPED_FLAG):
            events.append(FlagSetEvent(flag=ESCAPED_FLAG))
        events.append(EscapeEvent(location_name=location.name))
        return events
