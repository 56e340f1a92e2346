"""Effect definition primitives."""
from __future__ import annotations

from dataclasses import dataclass

from space_dystopia.core.types import EffectKind


@dataclass(slots=True)
class EffectDef:
    """Single effect entry attached to an item (e.g., set a quest flag)."""

    kind: EffectKind
    text: str | None = None
    flag: str | None = None
    amount: int = 0
