"""Item definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .effect_def import EffectDef

DEFAULT_USE_DESCRIPTION = "No specific use instructions."


@dataclass(slots=True)
class ItemDef:
    """Describable item that can sit at a location or in the inventory."""

    id: str
    name: str
    description: str
    usable: bool = False
    pickable: bool = True
    use_description: str = DEFAULT_USE_DESCRIPTION
    required_location_id: str | None = None
    wrong_location_text: str | None = None
    combat_effect: str | None = None
    effects: List[EffectDef] = field(default_factory=list)
