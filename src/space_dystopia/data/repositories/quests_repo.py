"""Repository for quest definitions."""
from __future__ import annotations

from typing import Dict, List

from space_dystopia.data.errors import DataValidationError
from space_dystopia.data.repositories.base import RepositoryBase
from space_dystopia.domain.defs import QuestDef, QuestObjectiveDef


class QuestsRepository(RepositoryBase[QuestDef]):
    """Loads and validates quest definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("quests.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, QuestDef]:
        raw_quests = self._require_mapping(raw.get("quests"), "quests.json.quests")
        definitions: Dict[str, QuestDef] = {}
        for quest_id, quest_payload in raw_quests.items():
            quest_map = self._require_mapping(quest_payload, f"quest '{quest_id}'")
            self._assert_allowed_fields(quest_map, {"name", "description", "objectives"}, set(), f"quest '{quest_id}'")
            definitions[quest_id] = QuestDef(
                quest_id=quest_id,
                name=self._require_str(quest_map["name"], f"quest '{quest_id}' name"),
                description=self._require_str(quest_map["description"], f"quest '{quest_id}' description"),
                objectives=tuple(self._parse_objectives(quest_map["objectives"], quest_id)),
            )
        return definitions

    def _parse_objectives(self, value: object, quest_id: str) -> List[QuestObjectiveDef]:
        objectives_data = self._require_list(value, f"quest '{quest_id}' objectives")
        if not objectives_data:
            raise DataValidationError(f"quest '{quest_id}' must define at least one objective.")
        objectives: List[QuestObjectiveDef] = []
        for index, entry in enumerate(objectives_data):
            ctx = f"quest '{quest_id}' objectives[{index}]"
            mapping = self._require_mapping(entry, ctx)
            self._assert_allowed_fields(mapping, {"label"}, {"target", "flag"}, ctx)
            target = self._require_int(mapping.get("target", 1), f"{ctx}.target")
            if target <= 0:
                raise DataValidationError(f"{ctx}.target must be a positive integer.")
            objectives.append(
                QuestObjectiveDef(
                    label=self._require_str(mapping["label"], f"{ctx}.label"),
                    target=target,
                    flag=self._optional_str(mapping.get("flag"), f"{ctx}.flag"),
                )
            )
        return objectives
