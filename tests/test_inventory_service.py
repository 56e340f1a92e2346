import json
from pathlib import Path

import pytest

from space_dystopia.core.rng import RNG
from space_dystopia.data.repositories import EnemiesRepository, ItemsRepository, LocationsRepository
from space_dystopia.domain.entities import Player
from space_dystopia.domain.state import GameState
from space_dystopia.services.area_service import AreaService
from space_dystopia.services.errors import ItemUnavailableError
from space_dystopia.services.events import ExpGainedEvent, FlagSetEvent
from space_dystopia.services.inventory_service import (
    InventoryService,
    ItemPickedUpEvent,
    ItemUsedEvent,
    PickupFailedEvent,
)


def _make_state_and_service() -> tuple[GameState, InventoryService, AreaService]:
    items_repo = ItemsRepository()
    locations_repo = LocationsRepository(items_repo=items_repo, enemies_repo=EnemiesRepository())
    area_service = AreaService(locations_repo, items_repo)
    state = area_service.start_new_game(seed=5, player_name="Ava")
    return state, InventoryService(items_repo), area_service


def test_datapad_pickup_and_use() -> None:
    state, inventory_service, _ = _make_state_and_service()

    pickup_events = inventory_service.pick_up(state, "datapad")

    assert "datapad" not in state.location_items["maintenance_bay"]
    assert state.player.inventory == ["datapad"]
    assert state.player.items_collected == 1
    assert state.player.experience == 5
    assert isinstance(pickup_events[0], ItemPickedUpEvent)

    use_events = inventory_service.use_item(state, "datapad")

    assert state.player.has_quest_flag("read_classified_info")
    assert state.player.experience == 5 + 20 + 10
    used = use_events[0]
    assert isinstance(used, ItemUsedEvent)
    assert used.applied
    assert used.messages[0] == "You carefully read through the classified information..."
    assert any(isinstance(event, FlagSetEvent) for event in use_events)
    assert state.player.inventory == ["datapad"]


def test_flag_persists_after_leaving_location() -> None:
    state, inventory_service, area_service = _make_state_and_service()
    inventory_service.pick_up(state, "datapad")
    inventory_service.use_item(state, "datapad")

    area_service.travel_to(state, 3)
    events = inventory_service.use_item(state, "datapad")

    assert state.player.has_quest_flag("read_classified_info")
    assert not any(isinstance(event, FlagSetEvent) for event in events)


def test_keycard_outside_terminal_room_has_no_effect() -> None:
    state, inventory_service, _ = _make_state_and_service()
    inventory_service.pick_up(state, "keycard")
    experience_before = state.player.experience

    events = inventory_service.use_item(state, "keycard")

    assert len(events) == 1
    assert events[0].applied is False
    assert events[0].messages == ["There's nowhere to use the keycard here."]
    assert state.player.experience == experience_before
    assert not state.player.has_quest_flag("terminal_access_granted")


def test_keycard_in_terminal_room_grants_access() -> None:
    state, inventory_service, area_service = _make_state_and_service()
    inventory_service.pick_up(state, "keycard")
    area_service.travel_to(state, 1)

    events = inventory_service.use_item(state, "keycard")

    assert state.player.has_quest_flag("terminal_access_granted")
    gained = [event for event in events if isinstance(event, ExpGainedEvent)]
    assert gained[0].amount == 25


def test_pick_up_missing_item_raises() -> None:
    state, inventory_service, _ = _make_state_and_service()
    with pytest.raises(ItemUnavailableError):
        inventory_service.pick_up(state, "spacesuit")


def test_use_item_not_in_inventory_raises() -> None:
    state, inventory_service, _ = _make_state_and_service()
    with pytest.raises(ItemUnavailableError):
        inventory_service.use_item(state, "datapad")


def test_non_pickable_item_stays_put(tmp_path: Path) -> None:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    (definitions_dir / "items.json").write_text(
        json.dumps({"console": {"name": "Console", "description": "Bolted down", "pickable": False}}),
        encoding="utf-8",
    )
    inventory_service = InventoryService(ItemsRepository(base_path=definitions_dir))
    state = GameState(
        seed=1,
        rng=RNG(1),
        player=Player(name="Ava"),
        location_ids=["lab"],
        location_items={"lab": ["console"]},
    )

    events = inventory_service.pick_up(state, "console")

    assert isinstance(events[0], PickupFailedEvent)
    assert state.location_items["lab"] == ["console"]
    assert state.player.inventory == []
    assert state.player.items_collected == 0


def test_list_views() -> None:
    state, inventory_service, _ = _make_state_and_service()
    inventory_service.pick_up(state, "keycard")

    assert [item.name for item in inventory_service.list_location_items(state)] == ["Datapad"]
    inventory = inventory_service.list_inventory(state)
    assert inventory[0].use_description == "Use at terminals to access restricted areas"
