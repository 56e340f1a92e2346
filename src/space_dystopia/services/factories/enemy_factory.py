"""Factory for creating enemy combatants from definitions."""
from __future__ import annotations

from space_dystopia.data.repositories import EnemiesRepository
from space_dystopia.domain.entities import Combatant
from space_dystopia.services.errors import FactoryError


def create_enemy_combatant(enemy_id: str, enemies_repo: EnemiesRepository) -> Combatant:
    """Instantiate a fresh, full-health enemy."""
    try:
        enemy_def = enemies_repo.get(enemy_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc

    return Combatant(
        kind="enemy",
        name=enemy_def.name,
        health=enemy_def.hp,
        attack=enemy_def.attack,
        defense=enemy_def.defense,
        enemy_id=enemy_def.id,
        enemy_type=enemy_def.enemy_type,
        tags=enemy_def.tags,
        drop_item_ids=list(enemy_def.drop_item_ids),
    )
