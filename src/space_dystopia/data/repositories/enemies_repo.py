"""Enemies repository."""
from __future__ import annotations

from typing import Dict

from space_dystopia.data.errors import DataValidationError
from space_dystopia.data.repositories.base import RepositoryBase
from space_dystopia.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            self._assert_allowed_fields(
                enemy_data,
                {"name", "type", "hp", "attack", "defense", "xp_reward"},
                {"defeat_flags", "tags", "drops"},
                context,
            )
            hp = self._require_int(enemy_data["hp"], f"{context} hp")
            if hp <= 0:
                raise DataValidationError(f"{context} hp must be positive.")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                enemy_type=self._require_str(enemy_data["type"], f"{context} type"),
                hp=hp,
                attack=self._require_int(enemy_data["attack"], f"{context} attack"),
                defense=self._require_int(enemy_data["defense"], f"{context} defense"),
                xp_reward=self._require_int(enemy_data["xp_reward"], f"{context} xp_reward"),
                defeat_flags=tuple(
                    self._require_str_list(enemy_data.get("defeat_flags", []), f"{context} defeat_flags")
                ),
                tags=tuple(self._require_str_list(enemy_data.get("tags", []), f"{context} tags")),
                drop_item_ids=tuple(self._require_str_list(enemy_data.get("drops", []), f"{context} drops")),
            )
        return enemies
