"""Shared CLI rendering helpers: ANSI styling, art and narration."""
from __future__ import annotations

import os
import sys
import time
from typing import Callable, Iterable, Sequence

from space_dystopia.core.types import TextDisplayMode

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CLEAR_SCREEN = "\033[2J\033[H"

SCREEN_WIDTH = 80
GAME_TITLE = "SPACE DYSTOPIA: THE LAST FRONTIER"

SPACE_STATION_ART = r"""
     _____
    /=====/\
   /=====/  \
  /=====/    \
 /=====/      \
(=================)
 \====/        /
  \==/        /
   \/________/
"""

MONOLITH_ART = r"""
    ____________
   |            |
   |            |
   |            |
   |            |
   |            |
   |            |
   |            |
   |____________|
"""

_ART_BY_KEY = {
    "space_station": SPACE_STATION_ART,
    "monolith": MONOLITH_ART,
}


def debug_enabled() -> bool:
    """Return True only when SPACE_DYSTOPIA_DEBUG is explicitly set to '1'."""
    return os.getenv("SPACE_DYSTOPIA_DEBUG") == "1"


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"


def clear_screen() -> None:
    print(CLEAR_SCREEN, end="")


def print_centered(text: str, width: int = SCREEN_WIDTH) -> None:
    padding = max(0, (width - len(text)) // 2)
    print(" " * padding + text)


def render_title() -> None:
    """Print the game banner with the station art."""
    print(BLUE, end="")
    print_centered(GAME_TITLE)
    print_centered("=" * 32)
    print(SPACE_STATION_ART)
    print(RESET, end="")


def render_art(key: str | None) -> None:
    """Print the named ASCII art, ignoring unknown keys."""
    if key is None:
        return
    art = _ART_BY_KEY.get(key)
    if art is not None:
        print(art)


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")


class Console:
    """Narration output honouring the configured text display mode."""

    def __init__(
        self,
        mode: TextDisplayMode = "typewriter",
        delay_ms: int = 30,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.mode = mode
        self.delay_ms = delay_ms
        self._sleep = sleep

    @property
    def is_typewriter(self) -> bool:
        return self.mode == "typewriter" and self.delay_ms > 0

    def narrate(self, text: str) -> None:
        """Print ``text``, one character at a time in typewriter mode."""
        if not self.is_typewriter:
            print(text)
            return
        delay = self.delay_ms / 1000
        for char in text:
            sys.stdout.write(char)
            sys.stdout.flush()
            self._sleep(delay)
        sys.stdout.write("\n")
        sys.stdout.flush()
