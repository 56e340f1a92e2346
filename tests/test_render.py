"""Tests for CLI rendering utilities."""
from space_dystopia.presentation.cli.render import (
    GAME_TITLE,
    MONOLITH_ART,
    RED,
    RESET,
    Console,
    colorize,
    debug_enabled,
    print_centered,
    render_art,
    render_menu,
    render_title,
)


def test_typewriter_sleeps_per_character(capsys) -> None:
    sleeps: list[float] = []
    console = Console("typewriter", 10, sleep=sleeps.append)

    console.narrate("abc")

    assert capsys.readouterr().out == "abc\n"
    assert sleeps == [0.01, 0.01, 0.01]


def test_instant_mode_never_sleeps(capsys) -> None:
    sleeps: list[float] = []
    console = Console("instant", 30, sleep=sleeps.append)

    console.narrate("Hello there")

    assert capsys.readouterr().out == "Hello there\n"
    assert sleeps == []
    assert not console.is_typewriter


def test_zero_delay_behaves_like_instant() -> None:
    assert not Console("typewriter", 0).is_typewriter


def test_colorize_wraps_with_reset() -> None:
    assert colorize("Danger", RED) == f"{RED}Danger{RESET}"


def test_print_centered_pads_to_width(capsys) -> None:
    print_centered("abcd", width=10)
    assert capsys.readouterr().out == "   abcd\n"


def test_render_title_includes_banner(capsys) -> None:
    render_title()
    out = capsys.readouterr().out
    assert GAME_TITLE in out
    assert "(=================)" in out


def test_render_art_known_and_unknown_keys(capsys) -> None:
    render_art("monolith")
    render_art("nothing_here")
    render_art(None)
    assert capsys.readouterr().out == MONOLITH_ART + "\n"


def test_render_menu_numbers_options(capsys) -> None:
    render_menu("Options", ["Examine area", "Quit"])
    out = capsys.readouterr().out
    assert "=== Options ===" in out
    assert "1. Examine area" in out
    assert "2. Quit" in out


def test_debug_enabled_requires_exact_flag(monkeypatch) -> None:
    monkeypatch.delenv("SPACE_DYSTOPIA_DEBUG", raising=False)
    assert not debug_enabled()
    monkeypatch.setenv("SPACE_DYSTOPIA_DEBUG", "true")
    assert not debug_enabled()
    monkeypatch.setenv("SPACE_DYSTOPIA_DEBUG", "1")
    assert debug_enabled()
