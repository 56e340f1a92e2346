"""Capability protocols shared by runtime entities."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from space_dystopia.core.rng import RNG


@runtime_checkable
class Describable(Protocol):
    name: str
    description: str


@runtime_checkable
class Damageable(Protocol):
    name: str
    health: int

    @property
    def is_alive(self) -> bool: ...

    def receive_damage(self, amount: int) -> int: ...


@runtime_checkable
class DamageRoller(Protocol):
    def roll_damage(self, rng: RNG) -> int: ...
