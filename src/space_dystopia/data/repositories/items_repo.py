"""Items repository."""
from __future__ import annotations

from typing import Dict, List

from space_dystopia.data.errors import DataValidationError
from space_dystopia.data.repositories.base import RepositoryBase
from space_dystopia.domain.defs import EffectDef, ItemDef
from space_dystopia.domain.defs.item_def import DEFAULT_USE_DESCRIPTION

_EFFECT_KINDS = {"message", "set_flag", "gain_experience"}
_COMBAT_EFFECTS = {"emp"}


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates item definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            context = f"item '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            self._assert_allowed_fields(
                item_data,
                {"name", "description"},
                {
                    "usable",
                    "pickable",
                    "use_description",
                    "required_location_id",
                    "wrong_location_text",
                    "combat_effect",
                    "effects",
                },
                context,
            )
            combat_effect = self._optional_str(item_data.get("combat_effect"), f"{context} combat_effect")
            if combat_effect is not None and combat_effect not in _COMBAT_EFFECTS:
                raise DataValidationError(f"{context} combat_effect must be one of {sorted(_COMBAT_EFFECTS)}.")

            effects = self._parse_effects(item_data.get("effects", []), raw_id)
            usable = self._require_bool(item_data.get("usable", bool(effects)), f"{context} usable")
            items[raw_id] = ItemDef(
                id=raw_id,
                name=self._require_str(item_data["name"], f"{context} name"),
                description=self._require_str(item_data["description"], f"{context} description"),
                usable=usable,
                pickable=self._require_bool(item_data.get("pickable", True), f"{context} pickable"),
                use_description=self._require_str(
                    item_data.get("use_description", DEFAULT_USE_DESCRIPTION), f"{context} use_description"
                ),
                required_location_id=self._optional_str(
                    item_data.get("required_location_id"), f"{context} required_location_id"
                ),
                wrong_location_text=self._optional_str(
                    item_data.get("wrong_location_text"), f"{context} wrong_location_text"
                ),
                combat_effect=combat_effect,
                effects=effects,
            )
        return items

    def _parse_effects(self, raw_effects: object, item_id: str) -> List[EffectDef]:
        entries = self._require_list(raw_effects, f"item '{item_id}' effects")
        effects: List[EffectDef] = []
        for index, entry in enumerate(entries):
            effect_context = f"item '{item_id}' effects[{index}]"
            effect_data = self._require_mapping(entry, effect_context)
            self._assert_allowed_fields(effect_data, {"kind"}, {"text", "flag", "amount"}, effect_context)
            kind = self._require_str(effect_data["kind"], f"{effect_context} kind")
            if kind not in _EFFECT_KINDS:
                raise DataValidationError(f"{effect_context} kind must be one of {sorted(_EFFECT_KINDS)}.")
            text = self._optional_str(effect_data.get("text"), f"{effect_context} text")
            flag = self._optional_str(effect_data.get("flag"), f"{effect_context} flag")
            amount = self._require_int(effect_data.get("amount", 0), f"{effect_context} amount")
            if kind == "message" and not text:
                raise DataValidationError(f"{effect_context} message effects require text.")
            if kind == "set_flag" and not flag:
                raise DataValidationError(f"{effect_context} set_flag effects require a flag.")
            if kind == "gain_experience" and amount <= 0:
                raise DataValidationError(f"{effect_context} gain_experience amount must be positive.")
            effects.append(EffectDef(kind=kind, text=text, flag=flag, amount=amount))  # type: ignore[arg-type]
        return effects
