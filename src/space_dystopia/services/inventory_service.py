"""Item pickup and usage orchestration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from space_dystopia.data.repositories import ItemsRepository
from space_dystopia.domain.defs import ItemDef
from space_dystopia.domain.item_effects import apply_item_effects
from space_dystopia.domain.state import GameState
from space_dystopia.services.errors import ItemUnavailableError
from space_dystopia.services.events import ExpGainedEvent, FlagSetEvent, GameEvent

PICKUP_EXPERIENCE = 5
USE_EXPERIENCE = 10
NOT_PICKABLE_MESSAGE = "You can't pick that up."


@dataclass(slots=True)
class ItemView:
    item_id: str
    name: str
    description: str
    use_description: str
    usable: bool
    pickable: bool


@dataclass(slots=True)
class ItemPickedUpEvent(GameEvent):
    item_id: str
    item_name: str


@dataclass(slots=True)
class PickupFailedEvent(GameEvent):
    item_id: str
    item_name: str
    message: str


@dataclass(slots=True)
class ItemUsedEvent(GameEvent):
    item_id: str
    item_name: str
    applied: bool
    messages: List[str]


class InventoryService:
    """Moves items between locations and the inventory, and applies their effects."""

    def __init__(self, items_repo: ItemsRepository) -> None:
        self._items_repo = items_repo

    # ------------------------------------------------------------------ Views
    def list_location_items(self, state: GameState) -> List[ItemView]:
        return [self._to_view(self._items_repo.get(item_id)) for item_id in self._location_items(state)]

    def list_inventory(self, state: GameState) -> List[ItemView]:
        return [self._to_view(self._items_repo.get(item_id)) for item_id in state.player.inventory]

    # ------------------------------------------------------------------ Actions
    def pick_up(self, state: GameState, item_id: str) -> List[GameEvent]:
        location_items = self._location_items(state)
        if item_id not in location_items:
            raise ItemUnavailableError(f"Item '{item_id}' is not at this location.")
        item = self._items_repo.get(item_id)
        if not item.pickable:
            return [PickupFailedEvent(item_id=item.id, item_name=item.name, message=NOT_PICKABLE_MESSAGE)]

        location_items.remove(item_id)
        player = state.player
        player.inventory.append(item_id)
        player.items_collected += 1
        events: List[GameEvent] = [ItemPickedUpEvent(item_id=item.id, item_name=item.name)]
        if player.gain_experience(PICKUP_EXPERIENCE):
            events.append(ExpGainedEvent(amount=PICKUP_EXPERIENCE, total_exp=player.experience))
        return events

    def use_item(self, state: GameState, item_id: str) -> List[GameEvent]:
        """Apply an inventory item's effects at the current location.

        Items stay in the inventory after use. A successful use grants a flat
        experience bonus on top of whatever the item's own effects award.
        """
        player = state.player
        if not player.has_item(item_id):
            raise ItemUnavailableError(f"Item '{item_id}' is not in the inventory.")
        item = self._items_repo.get(item_id)
        result = apply_item_effects(player, item, location_id=state.current_location_id)
        events: List[GameEvent] = [
            ItemUsedEvent(
                item_id=item.id,
                item_name=item.name,
                applied=result.applied,
                messages=list(result.messages),
            )
        ]
        events.extend(FlagSetEvent(flag=flag) for flag in result.flags_set)
        if not result.applied:
            return events
        gained = result.experience_gained
        if player.gain_experience(USE_EXPERIENCE):
            gained += USE_EXPERIENCE
        events.append(ExpGainedEvent(amount=gained, total_exp=player.experience))
        return events

    # ------------------------------------------------------------------ Helpers
    @staticmethod
    def _location_items(state: GameState) -> List[str]:
        return state.location_items.setdefault(state.current_location_id, [])

    @staticmethod
    def _to_view(item: ItemDef) -> ItemView:
        return ItemView(
            item_id=item.id,
            name=item.name,
            description=item.description,
            use_description=item.use_description,
            usable=item.usable,
            pickable=item.pickable,
        )
