"""Bounded numeric stat model."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Stat:
    """A named current/maximum pair kept within ``0 <= current <= maximum``."""

    name: str
    current: int
    maximum: int

    def __post_init__(self) -> None:
        if self.maximum < 0:
            raise ValueError(f"{self.name} maximum cannot be negative.")
        if not 0 <= self.current <= self.maximum:
            raise ValueError(f"{self.name} must stay within 0..{self.maximum}, got {self.current}.")

    @classmethod
    def full(cls, name: str, maximum: int) -> "Stat":
        return cls(name=name, current=maximum, maximum=maximum)

    def modify(self, amount: int) -> int:
        """Add ``amount`` (clamped) and return the change actually applied."""
        before = self.current
        self.current = max(0, min(self.maximum, self.current + amount))
        return self.current - before

    @property
    def is_empty(self) -> bool:
        return self.current == 0

    def __str__(self) -> str:
        return f"{self.name}: {self.current}/{self.maximum}"
