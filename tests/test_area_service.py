import pytest

from space_dystopia.data.repositories import (
    EnemiesRepository,
    ItemsRepository,
    LocationsRepository,
    QuestsRepository,
)
from space_dystopia.domain.state import GameState
from space_dystopia.services.area_service import (
    AreaService,
    BattleRequestedEvent,
    EscapeEvent,
    InteractionBlockedEvent,
    InteractionResolvedEvent,
    TravelPerformedEvent,
)
from space_dystopia.services.errors import GameInitError
from space_dystopia.services.events import ExpGainedEvent, FlagSetEvent
from space_dystopia.services.quest_service import QuestService


def _make_service() -> AreaService:
    items_repo = ItemsRepository()
    locations_repo = LocationsRepository(items_repo=items_repo, enemies_repo=EnemiesRepository())
    return AreaService(locations_repo, items_repo, quest_service=QuestService(QuestsRepository()))


def _start(service: AreaService) -> GameState:
    return service.start_new_game(seed=11, player_name="Ava")


def _go(service: AreaService, state: GameState, location_id: str) -> None:
    state.current_location_index = state.location_ids.index(location_id)


def test_start_new_game_places_items_and_quests() -> None:
    service = _make_service()
    state = service.start_new_game(seed=11, player_name="  Ava ")

    assert state.player.name == "Ava"
    assert state.current_location_id == "maintenance_bay"
    assert state.location_items["maintenance_bay"] == ["datapad", "keycard"]
    assert state.location_items["airlock"] == ["spacesuit"]
    assert state.visited_location_ids == ["maintenance_bay"]
    assert [quest.name for quest in state.quests] == ["Escape Europa"]
    assert state.rng.seed == 11


def test_start_new_game_rejects_empty_name() -> None:
    with pytest.raises(GameInitError):
        _make_service().start_new_game(seed=1, player_name="")


def test_current_location_view() -> None:
    service = _make_service()
    state = _start(service)

    view = service.get_current_location_view(state)

    assert view.name == "Maintenance Bay"
    assert [item.name for item in view.items] == ["Datapad", "Keycard"]
    assert view.interaction_keys == ("examine tools", "check workbench", "look under desk")


def test_travel_counts_steps_and_experience() -> None:
    service = _make_service()
    state = _start(service)

    events = service.travel_to(state, 2)

    assert state.current_location_id == "monolith_chamber"
    assert state.player.total_steps == 1
    assert state.player.experience == 5
    assert isinstance(events[0], TravelPerformedEvent)
    assert events[0].to_location_name == "Monolith Chamber"
    assert state.visited_location_ids == ["maintenance_bay", "monolith_chamber"]
    assert service.get_current_location_view(state).art == "monolith"


def test_travel_rejects_bad_index_and_current_location() -> None:
    service = _make_service()
    state = _start(service)
    with pytest.raises(ValueError):
        service.travel_to(state, 9)
    with pytest.raises(ValueError):
        service.travel_to(state, 0)
    assert state.player.total_steps == 0


def test_list_destinations_marks_current() -> None:
    service = _make_service()
    state = _start(service)
    destinations = service.list_destinations(state)
    assert [dest.name for dest in destinations][:2] == ["Maintenance Bay", "HAL Terminal Room"]
    assert [dest.is_current for dest in destinations] == [True, False, False, False, False]


def test_once_only_interaction_rewards_first_time() -> None:
    service = _make_service()
    state = _start(service)

    first = service.interact(state, "examine tools")
    second = service.interact(state, "examine tools")

    assert any(isinstance(event, ExpGainedEvent) and event.amount == 10 for event in first)
    assert not any(isinstance(event, ExpGainedEvent) for event in second)
    assert state.player.experience == 10
    assert isinstance(second[0], InteractionResolvedEvent)
    assert second[0].first_time is False
    assert "maintenance_bay:examine tools" in state.player.discovered_interactions


def test_interaction_response_uses_player_name() -> None:
    service = _make_service()
    state = _start(service)
    _go(service, state, "terminal_room")

    events = service.interact(state, "talk to computer")

    assert "I can't let you share that information, Ava." in events[0].response


def test_unknown_interaction_is_harmless() -> None:
    service = _make_service()
    state = _start(service)
    events = service.interact(state, "dance")
    assert events[0].response == "Nothing interesting happens."
    assert state.player.discovered_interactions == set()


def test_hack_terminal_requests_battle_until_security_defeated() -> None:
    service = _make_service()
    state = _start(service)
    _go(service, state, "terminal_room")

    events = service.interact(state, "hack terminal")
    requests = [event for event in events if isinstance(event, BattleRequestedEvent)]
    assert requests[0].enemy_id == "security_bot"
    assert state.player.has_quest_flag("terminal_hacked")

    state.player.set_quest_flag("security_defeated")
    events = service.interact(state, "hack terminal")
    assert not any(isinstance(event, BattleRequestedEvent) for event in events)


def test_activate_airlock_requires_flags() -> None:
    service = _make_service()
    state = _start(service)
    _go(service, state, "airlock")

    blocked = service.interact(state, "activate airlock")
    assert isinstance(blocked[0], InteractionBlockedEvent)
    assert blocked[0].missing_flags == ("security_defeated", "spacesuit_equipped")
    assert not state.has_escaped

    state.player.set_quest_flag("security_defeated")
    state.player.set_quest_flag("spacesuit_equipped")
    events = service.interact(state, "activate airlock")

    assert any(isinstance(event, EscapeEvent) for event in events)
    assert any(isinstance(event, FlagSetEvent) and event.flag == "airlock_escaped" for event in events)
    assert state.has_escaped
    assert state.game_over


def test_pending_encounter_only_in_terminal_room() -> None:
    service = _make_service()
    state = _start(service)
    state.player.set_quest_flag("terminal_access_granted")

    assert service.pending_encounter(state) is None
    _go(service, state, "terminal_room")
    assert service.pending_encounter(state) == "security_bot"
    state.player.set_quest_flag("security_defeated")
    assert service.pending_encounter(state) is None


def test_check_escape_at_airlock() -> None:
    service = _make_service()
    state = _start(service)
    state.player.set_quest_flag("security_defeated")
    state.player.set_quest_flag("spacesuit_equipped")

    assert service.check_escape(state) == []
    _go(service, state, "airlock")
    events = service.check_escape(state)

    assert isinstance(events[-1], EscapeEvent)
    assert state.has_escaped
    assert service.check_escape(state) == []


def test_status_and_end_game_stats() -> None:
    service = _make_service()
    state = _start(service)
    state.player.inventory.append("datapad")
    service.travel_to(state, 1)
    service.interact(state, "examine terminal")

    status = service.build_status_view(state)
    stats = service.build_end_game_stats(state)

    assert status.health == "Health: 100/100"
    assert status.location_name == "HAL Terminal Room"
    assert status.inventory == ("Datapad",)
    assert stats.total_steps == 1
    assert stats.locations_explored == 2
    assert stats.locations_total == 5
    assert stats.interactions_discovered == 1
    assert stats.escaped is False
