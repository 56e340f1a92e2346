"""Pure helpers for applying item effect descriptors to the player."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from space_dystopia.domain.defs import ItemDef
from space_dystopia.domain.entities import Player


@dataclass(slots=True)
class ItemEffectResult:
    """Summary of what using an item did."""

    applied: bool = False
    messages: List[str] = field(default_factory=list)
    flags_set: List[str] = field(default_factory=list)
    experience_gained: int = 0

    @property
    def had_effect(self) -> bool:
        return bool(self.flags_set) or self.experience_gained > 0


def apply_item_effects(player: Player, item: ItemDef, *, location_id: str) -> ItemEffectResult:
    """Interpret the item's effect descriptors at ``location_id``."""

    result = ItemEffectResult()
    if not item.usable:
        result.messages.append("This item cannot be used.")
        return result

    if item.required_location_id and item.required_location_id != location_id:
        result.messages.append(item.wrong_location_text or "You can't use that here.")
        return result

    result.applied = True
    for effect in item.effects:
        if effect.kind == "message":
            if effect.text:
                result.messages.append(effect.text)
        elif effect.kind == "set_flag":
            if effect.flag and player.set_quest_flag(effect.flag):
                result.flags_set.append(effect.flag)
        elif effect.kind == "gain_experience":
            if player.gain_experience(effect.amount):
                result.experience_gained += effect.amount
        else:
            raise ValueError(f"Unknown effect kind '{effect.kind}' on item '{item.id}'.")
    return result
