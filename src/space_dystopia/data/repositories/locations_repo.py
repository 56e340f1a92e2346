"""Repository for station locations."""
from __future__ import annotations

from typing import Dict, List

from space_dystopia.data.errors import DataReferenceError, DataValidationError
from space_dystopia.data.repositories.base import RepositoryBase
from space_dystopia.data.repositories.enemies_repo import EnemiesRepository
from space_dystopia.data.repositories.items_repo import ItemsRepository
from space_dystopia.domain.defs import InteractionDef, LocationDef


class LocationsRepository(RepositoryBase[LocationDef]):
    """Loads locations in their travel-menu order and validates references."""

    def __init__(
        self,
        *,
        items_repo: ItemsRepository,
        enemies_repo: EnemiesRepository,
        base_path=None,
    ) -> None:
        super().__init__("locations.json", base_path)
        self._items_repo = items_repo
        self._enemies_repo = enemies_repo
        self._order: List[str] = []

    def ordered(self) -> List[LocationDef]:
        """Return locations in the order they are declared."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[location_id] for location_id in self._order]

    def _build(self, raw: dict[str, object]) -> Dict[str, LocationDef]:
        entries = self._require_list(raw.get("locations"), "locations.json.locations")
        if not entries:
            raise DataValidationError("locations.json must define at least one location.")
        definitions: Dict[str, LocationDef] = {}
        order: List[str] = []
        claimed_items: Dict[str, str] = {}
        for index, entry in enumerate(entries):
            ctx = f"locations[{index}]"
            mapping = self._require_mapping(entry, ctx)
            self._assert_allowed_fields(
                mapping, {"id", "name", "description", "interactions"}, {"items", "art"}, ctx
            )
            location_id = self._require_str(mapping["id"], f"{ctx}.id")
            if location_id in definitions:
                raise DataValidationError(f"Duplicate location id '{location_id}'.")
            item_ids = tuple(self._require_str_list(mapping.get("items", []), f"{ctx}.items"))
            for item_id in item_ids:
                self._validate_item_id(item_id, ctx)
                if item_id in claimed_items:
                    raise DataValidationError(
                        f"{ctx} item '{item_id}' is already placed at '{claimed_items[item_id]}'."
                    )
                claimed_items[item_id] = location_id
            definitions[location_id] = LocationDef(
                id=location_id,
                name=self._require_str(mapping["name"], f"{ctx}.name"),
                description=self._require_str(mapping["description"], f"{ctx}.description"),
                interactions=self._parse_interactions(mapping["interactions"], ctx),
                item_ids=item_ids,
                art=self._optional_str(mapping.get("art"), f"{ctx}.art"),
            )
            order.append(location_id)
        self._order = order
        return definitions

    def _parse_interactions(self, value: object, ctx: str) -> tuple[InteractionDef, ...]:
        entries = self._require_list(value, f"{ctx}.interactions")
        interactions: List[InteractionDef] = []
        seen: set[str] = set()
        for index, entry in enumerate(entries):
            ictx = f"{ctx}.interactions[{index}]"
            mapping = self._require_mapping(entry, ictx)
            self._assert_allowed_fields(
                mapping,
                {"key", "response"},
                {
                    "set_flags",
                    "experience",
                    "once_flag",
                    "battle_enemy_id",
                    "battle_skip_flag",
                    "required_flags",
                    "blocked_response",
                    "escape",
                },
                ictx,
            )
            key = self._require_str(mapping["key"], f"{ictx}.key")
            if key in seen:
                raise DataValidationError(f"{ictx} duplicates interaction '{key}'.")
            seen.add(key)
            battle_enemy_id = self._optional_str(mapping.get("battle_enemy_id"), f"{ictx}.battle_enemy_id")
            if battle_enemy_id is not None:
                self._validate_enemy_id(battle_enemy_id, ictx)
            interactions.append(
                InteractionDef(
                    key=key,
                    response=self._require_str(mapping["response"], f"{ictx}.response"),
                    set_flags=tuple(self._require_str_list(mapping.get("set_flags", []), f"{ictx}.set_flags")),
                    experience=self._require_int(mapping.get("experience", 0), f"{ictx}.experience"),
                    once_flag=self._optional_str(mapping.get("once_flag"), f"{ictx}.once_flag"),
                    battle_enemy_id=battle_enemy_id,
                    battle_skip_flag=self._optional_str(mapping.get("battle_skip_flag"), f"{ictx}.battle_skip_flag"),
                    required_flags=tuple(
                        self._require_str_list(mapping.get("required_flags", []), f"{ictx}.required_flags")
                    ),
                    blocked_response=self._optional_str(mapping.get("blocked_response"), f"{ictx}.blocked_response"),
                    escape=self._require_bool(mapping.get("escape", False), f"{ictx}.escape"),
                )
            )
        return tuple(interactions)

    def _validate_item_id(self, item_id: str, ctx: str) -> None:
        try:
            self._items_repo.get(item_id)
        except KeyError as exc:
            raise DataReferenceError(f"{ctx} references unknown item '{item_id}'.") from exc

    def _validate_enemy_id(self, enemy_id: str, ctx: str) -> None:
        try:
            self._enemies_repo.get(enemy_id)
        except KeyError as exc:
            raise DataReferenceError(f"{ctx} references unknown enemy '{enemy_id}'.") from exc
