from pathlib import Path
from typing import Iterable

import pytest

from space_dystopia.data import paths
from space_dystopia.domain.battle_models import CombatantView
from space_dystopia.presentation.cli import app
from space_dystopia.services.battle_service import EncounterView


def _instant_config() -> dict:
    return {
        "text_display_mode": "instant",
        "typewriter_delay_ms": 0,
        "defeat_ends_encounter": True,
        "monotone_objectives": False,
    }


def _script(monkeypatch, answers: Iterable[str]) -> None:
    """Feed menu answers in order; every combat prompt picks a basic attack."""
    iterator = iter(answers)

    def fake_input(prompt: str = "") -> str:
        if prompt.startswith("Choose action"):
            return "1"
        try:
            return next(iterator)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.fixture(autouse=True)
def _cli_environment(monkeypatch) -> None:
    monkeypatch.setattr(app, "ensure_config", _instant_config)
    monkeypatch.setenv("SPACE_DYSTOPIA_SEED", "42")
    monkeypatch.delenv("SPACE_DYSTOPIA_DEBUG", raising=False)


def test_full_escape_playthrough(monkeypatch, capsys) -> None:
    _script(
        monkeypatch,
        [
            "Ava",
            "5", "1",  # pick up datapad
            "5", "1",  # pick up keycard
            "6", "1",  # read the datapad
            "3", "2",  # go to the terminal room
            "6", "2",  # swipe the keycard, which alerts security
            "3", "5",  # go to the airlock
            "5", "1",  # pick up the spacesuit
            "6", "3",  # put on the spacesuit
        ],
    )

    exit_code = app.main()

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Combat with Security Bot initiated!" in out
    assert "You defeated Security Bot!" in out
    assert "Quest completed: Escape Europa" in out
    assert "VICTORY!" in out
    assert "Items collected: 3" in out
    assert "Locations explored: 3/5" in out
    assert "security_defeated" in out


def test_invalid_menu_input_keeps_looping(monkeypatch, capsys) -> None:
    _script(monkeypatch, ["Ava", "abc", "9", "0", "8", "n", "8", "y"])

    exit_code = app.main()

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.count("Invalid choice.") == 3
    assert "Final Statistics" in out
    assert "VICTORY!" not in out


def test_submenu_zero_cancels(monkeypatch, capsys) -> None:
    _script(monkeypatch, ["Ava", "3", "0", "8", "y"])

    assert app.main() == 0

    out = capsys.readouterr().out
    assert "Steps taken: 0" in out
    assert "You travel from" not in out


def test_examine_lists_items_and_interactions(monkeypatch, capsys) -> None:
    _script(monkeypatch, ["Ava", "1", "8", "y"])

    app.main()

    out = capsys.readouterr().out
    assert "A sterile white room" in out
    assert "- Datapad" in out
    assert "- examine tools" in out


def test_empty_name_is_fatal(monkeypatch, capsys) -> None:
    _script(monkeypatch, ["   "])

    exit_code = app.main()

    assert exit_code == 1
    assert "Fatal error: Name cannot be empty!" in capsys.readouterr().out


def test_unreadable_definitions_are_fatal(monkeypatch, capsys, tmp_path: Path) -> None:
    monkeypatch.setattr(paths, "get_definitions_path", lambda base_path=None: tmp_path)
    _script(monkeypatch, ["Ava"])

    assert app.main() == 1
    assert "Fatal error" in capsys.readouterr().out


def test_end_of_input_exits_cleanly(monkeypatch, capsys) -> None:
    monkeypatch.setenv("SPACE_DYSTOPIA_DEBUG", "1")
    _script(monkeypatch, ["Ava"])

    assert app.main() == 0

    out = capsys.readouterr().out
    assert "Game started with seed: 42" in out
    assert "Goodbye!" in out


def test_intro_greets_player_by_name(monkeypatch, capsys) -> None:
    _script(monkeypatch, ["Ava", "8", "y"])

    app.main()

    out = capsys.readouterr().out
    assert "Chapter 1: The Discovery" in out
    assert "You are Ava, a maintenance worker on Europa Station." in out
    assert out.index("Chapter 1: The Discovery") > out.index("Welcome to Space Station Europa.")


def _encounter_view(emp_available: bool) -> EncounterView:
    return EncounterView(
        encounter_id="enc-1",
        round=0,
        player=CombatantView(name="Ava", health=100, attack=15, defense=5, is_alive=True),
        enemy=CombatantView(name="Security Bot", health=80, attack=10, defense=5, is_alive=True),
        emp_available=emp_available,
    )


@pytest.mark.parametrize("raw", ["", "abc", "7"])
def test_battle_prompt_falls_back_to_attack(monkeypatch, capsys, raw: str) -> None:
    prompts = []

    def fake_input(prompt: str = "") -> str:
        prompts.append(prompt)
        return raw

    monkeypatch.setattr("builtins.input", fake_input)

    assert app._prompt_battle_action(_encounter_view(emp_available=True)) == "attack"
    assert prompts == ["Choose action: "]
    assert "Invalid choice. You make a basic attack." in capsys.readouterr().out


def test_battle_prompt_selects_emp(monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt="": "2")
    assert app._prompt_battle_action(_encounter_view(emp_available=True)) == "emp"
