"""Console-driven UI loop for Space Dystopia."""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Sequence

from space_dystopia.core.types import CombatActionType
from space_dystopia.data import DataError
from space_dystopia.data.repositories import (
    EnemiesRepository,
    ItemsRepository,
    LocationsRepository,
    QuestsRepository,
)
from space_dystopia.domain.state import GameState
from space_dystopia.presentation.cli.config import ensure_config, seed_from_env
from space_dystopia.presentation.cli.render import (
    BLUE,
    GREEN,
    RED,
    YELLOW,
    Console,
    clear_screen,
    colorize,
    debug_enabled,
    render_art,
    render_bullet_lines,
    render_heading,
    render_menu,
    render_title,
)
from space_dystopia.services import (
    AreaService,
    BattleRequestedEvent,
    BattleService,
    GameInitError,
    InventoryService,
    ItemUnavailableError,
    QuestService,
)
from space_dystopia.services.area_service import (
    EscapeEvent,
    InteractionBlockedEvent,
    InteractionResolvedEvent,
    TravelPerformedEvent,
)
from space_dystopia.services.battle_service import (
    BattleEvent,
    EmpUnavailableEvent,
    EncounterResolvedEvent,
    EncounterStartedEvent,
    EncounterView,
    EnemyAttackEvent,
    EnemyDefeatedEvent,
    ExperienceGainedEvent,
    PlayerAttackEvent,
    PlayerDefeatedEvent,
    RoundSummaryEvent,
)
from space_dystopia.services.controllers import BattleController
from space_dystopia.services.events import ExpGainedEvent, FlagSetEvent, GameEvent, QuestCompletedEvent
from space_dystopia.services.inventory_service import ItemPickedUpEvent, ItemUsedEvent, PickupFailedEvent

MenuAction = Literal["examine", "status", "move", "interact", "pick_up", "use_item", "quests", "quit"]

_MAX_RANDOM_SEED = 2**31 - 1
_WELCOME_TEXT = "Welcome to Space Station Europa. Your mission: Escape and reveal the truth."
_CHAPTER_TITLE = "Chapter 1: The Discovery"
_INTRO_LINES = (
    "You are {player_name}, a maintenance worker on Europa Station.",
    "You've discovered evidence of a habitable planet beyond our solar system...",
    "This information could save humanity, but the Confederation wants to suppress it.",
)
_MENU_OPTIONS: Sequence[tuple[MenuAction, str]] = (
    ("examine", "Examine area"),
    ("status", "Check status"),
    ("move", "Move to another location"),
    ("interact", "Interact with environment"),
    ("pick_up", "Pick up item"),
    ("use_item", "Use item"),
    ("quests", "View quests"),
    ("quit", "Quit"),
)


@dataclass(slots=True)
class _Session:
    """Services and output wiring for one running game."""

    area_service: AreaService
    inventory_service: InventoryService
    quest_service: QuestService
    battle_controller: BattleController
    enemies_repo: EnemiesRepository
    console: Console
    encounter_ran: bool = False


def main() -> int:
    """Run an interactive session and return the process exit code."""
    config = ensure_config()
    console = Console(
        mode="instant" if config["text_display_mode"] == "instant" else "typewriter",
        delay_ms=int(config["typewriter_delay_ms"]),
    )
    try:
        session = _build_session(config, console)
        render_title()
        console.narrate(_WELCOME_TEXT)
        state = _start_new_game(session)
    except (GameInitError, DataError) as exc:
        print(colorize(f"Fatal error: {exc}", RED))
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
        return 0

    _narrate_intro(session.console, state)
    try:
        _run_game_loop(session, state)
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
        return 0
    _render_end_game(session, state)
    return 0


def _build_session(config: Dict[str, object], console: Console) -> _Session:
    """Construct the services with concrete repositories."""
    items_repo = ItemsRepository()
    enemies_repo = EnemiesRepository()
    locations_repo = LocationsRepository(items_repo=items_repo, enemies_repo=enemies_repo)
    quest_service = QuestService(
        QuestsRepository(), monotone_objectives=bool(config["monotone_objectives"])
    )
    battle_service = BattleService(
        enemies_repo,
        items_repo,
        defeat_ends_encounter=bool(config["defeat_ends_encounter"]),
    )
    return _Session(
        area_service=AreaService(locations_repo, items_repo, quest_service=quest_service),
        inventory_service=InventoryService(items_repo),
        quest_service=quest_service,
        battle_controller=BattleController(battle_service),
        enemies_repo=enemies_repo,
        console=console,
    )


def _start_new_game(session: _Session) -> GameState:
    player_name = input("\nEnter your name: ")
    seed = seed_from_env()
    if seed is None:
        seed = secrets.randbelow(_MAX_RANDOM_SEED)
    state = session.area_service.start_new_game(seed=seed, player_name=player_name)
    if debug_enabled():
        print(f"[debug] Game started with seed: {seed}")
    return state


def _narrate_intro(console: Console, state: GameState) -> None:
    console.narrate(colorize(f"\n{_CHAPTER_TITLE}", YELLOW))
    for line in _INTRO_LINES:
        console.narrate(line.format(player_name=state.player.name))


# ---------------------------------------------------------------------------
# Main loop
# ---------------------------------------------------------------------------
def _run_game_loop(session: _Session, state: GameState) -> None:
    handlers: Dict[MenuAction, Callable[[_Session, GameState], None]] = {
        "examine": _handle_examine,
        "status": _handle_status,
        "move": _handle_move,
        "interact": _handle_interact,
        "pick_up": _handle_pick_up,
        "use_item": _handle_use_item,
        "quests": _handle_quests,
    }
    while not state.game_over:
        location = session.area_service.get_current_location_view(state)
        print(colorize(f"\nLocation: {location.name}", BLUE))
        render_menu("Options", [label for _, label in _MENU_OPTIONS])
        action = _prompt_menu_action()
        if action is None:
            print("Invalid choice.")
            continue
        if action == "quit":
            if _confirm_quit():
                state.game_over = True
            continue
        session.encounter_ran = False
        handlers[action](session, state)
        _after_action(session, state)
        if not state.game_over:
            _pause(session.console)


def _prompt_menu_action() -> MenuAction | None:
    raw = input(f"\nEnter your choice (1-{len(_MENU_OPTIONS)}): ").strip()
    try:
        index = int(raw) - 1
    except ValueError:
        return None
    if 0 <= index < len(_MENU_OPTIONS):
        return _MENU_OPTIONS[index][0]
    return None


def _prompt_submenu_index(count: int, prompt: str) -> int | None:
    """Return a zero-based selection, or None when cancelled or invalid."""
    raw = input(f"{prompt} (1-{count}) or 0 to cancel: ").strip()
    try:
        choice = int(raw)
    except ValueError:
        print("Invalid choice.")
        return None
    if choice == 0:
        return None
    if 1 <= choice <= count:
        return choice - 1
    print("Invalid choice.")
    return None


def _confirm_quit() -> bool:
    answer = input("Are you sure you want to quit? (y/n): ").strip().lower()
    return answer in ("y", "yes")


def _pause(console: Console) -> None:
    if not console.is_typewriter:
        return
    input("\nPress Enter to continue...")
    clear_screen()


def _after_action(session: _Session, state: GameState) -> None:
    """Apply the checks that run after every player action."""
    if not session.encounter_ran:
        enemy_id = session.area_service.pending_encounter(state)
        if enemy_id is not None:
            enemy_name = session.enemies_repo.get(enemy_id).name
            print(colorize(f"\nA {enemy_name} has detected your presence!", RED))
            _run_encounter(session, state, enemy_id)
    _render_game_events(session.console, session.area_service.check_escape(state))
    _render_game_events(session.console, session.quest_service.refresh_from_flags(state))
    if not state.player.is_alive:
        state.game_over = True


# ---------------------------------------------------------------------------
# Menu handlers
# ---------------------------------------------------------------------------
def _handle_examine(session: _Session, state: GameState) -> None:
    location = session.area_service.get_current_location_view(state)
    render_heading(location.name)
    session.console.narrate(location.description)
    render_art(location.art)
    if location.items:
        print("\nYou see:")
        render_bullet_lines(item.name for item in location.items)
    if location.interaction_keys:
        print("\nPossible interactions:")
        render_bullet_lines(location.interaction_keys)


def _handle_status(session: _Session, state: GameState) -> None:
    status = session.area_service.build_status_view(state)
    render_heading("Status")
    print(f"Name: {status.name}")
    print(status.description)
    print(status.health)
    print(status.energy)
    print(f"Experience: {status.experience}")
    print(f"Location: {status.location_name}")
    if status.inventory:
        print("Inventory:")
        render_bullet_lines(status.inventory)
    else:
        print("Inventory: empty")
    if debug_enabled():
        print(f"[debug] seed={state.seed} flags={sorted(state.player.quest_flags)}")


def _handle_move(session: _Session, state: GameState) -> None:
    destinations = session.area_service.list_destinations(state)
    render_heading("Available locations")
    for destination in destinations:
        marker = " (current)" if destination.is_current else ""
        print(f"{destination.index + 1}. {destination.name}{marker}")
    index = _prompt_submenu_index(len(destinations), "Choose location")
    if index is None:
        return
    try:
        events = session.area_service.travel_to(state, index)
    except ValueError as exc:
        print(exc)
        return
    _render_game_events(session.console, events)


def _handle_interact(session: _Session, state: GameState) -> None:
    location = session.area_service.get_current_location_view(state)
    keys = location.interaction_keys
    if not keys:
        print("No interactions available here.")
        return
    render_menu("Available interactions", keys)
    index = _prompt_submenu_index(len(keys), "Choose interaction")
    if index is None:
        return
    events = session.area_service.interact(state, keys[index])
    _render_game_events(session.console, events)
    for event in events:
        if isinstance(event, BattleRequestedEvent):
            _run_encounter(session, state, event.enemy_id)


def _handle_pick_up(session: _Session, state: GameState) -> None:
    items = session.inventory_service.list_location_items(state)
    if not items:
        print("There are no items to pick up here.")
        return
    render_heading("Available items to pick up")
    for idx, item in enumerate(items, start=1):
        print(f"{idx}. {item.name}: {item.description}")
    index = _prompt_submenu_index(len(items), "Choose item to pick up")
    if index is None:
        return
    try:
        events = session.inventory_service.pick_up(state, items[index].item_id)
    except ItemUnavailableError as exc:
        print(exc)
        return
    _render_game_events(session.console, events)


def _handle_use_item(session: _Session, state: GameState) -> None:
    items = session.inventory_service.list_inventory(state)
    if not items:
        print("Your inventory is empty.")
        return
    render_heading("Inventory")
    for idx, item in enumerate(items, start=1):
        print(f"{idx}. {item.name}: {item.use_description}")
    index = _prompt_submenu_index(len(items), "Choose item to use")
    if index is None:
        return
    try:
        events = session.inventory_service.use_item(state, items[index].item_id)
    except ItemUnavailableError as exc:
        print(exc)
        return
    _render_game_events(session.console, events)


def _handle_quests(session: _Session, state: GameState) -> None:
    journal = session.quest_service.build_journal_view(state)
    render_heading("Quests")
    if not journal:
        print("No quests.")
        return
    for quest in journal:
        status = "COMPLETED" if quest.is_completed else "In progress"
        print(f"{quest.name} [{status}]")
        print(f"  {quest.description}")
        for objective in quest.objectives:
            mark = "x" if objective.completed else " "
            print(f"  [{mark}] {objective.label} ({objective.current}/{objective.target})")


# ---------------------------------------------------------------------------
# Combat
# ---------------------------------------------------------------------------
def _run_encounter(session: _Session, state: GameState, enemy_id: str) -> None:
    session.encounter_ran = True
    console = session.console
    encounter = session.battle_controller.run_encounter(
        state,
        enemy_id,
        choose_action=_prompt_battle_action,
        on_events=lambda events: _render_battle_events(console, events),
    )
    if debug_enabled():
        print(f"[debug] encounter {encounter.encounter_id} ended: {encounter.outcome}")


def _prompt_battle_action(view: EncounterView) -> CombatActionType:
    print(f"\n--- Round {view.round + 1} ---")
    print(f"{view.player.name}: HP {view.player.health}")
    print(f"{view.enemy.name}: HP {view.enemy.health}")
    emp_label = "Use EMP" if view.emp_available else "Use EMP (unavailable)"
    options: List[tuple[CombatActionType, str]] = [("attack", "Attack"), ("emp", emp_label)]
    for idx, (_, label) in enumerate(options, start=1):
        print(f"{idx}. {label}")
    raw = input("Choose action: ").strip()
    for idx, (action, _) in enumerate(options, start=1):
        if raw == str(idx):
            return action
    print("Invalid choice. You make a basic attack.")
    return "attack"


def _render_battle_events(console: Console, events: List[BattleEvent]) -> None:
    for event in events:
        if isinstance(event, EncounterStartedEvent):
            print(colorize(f"\nCombat with {event.enemy_name} initiated!", RED))
            if debug_enabled():
                print(f"[debug] encounter id: {event.encounter_id}")
        elif isinstance(event, EmpUnavailableEvent):
            print("The EMP cannot be used here. You attack instead.")
        elif isinstance(event, PlayerAttackEvent):
            if event.used_emp:
                print(colorize("EMP deployed successfully!", YELLOW))
            console.narrate(f"You deal {event.damage} damage!")
        elif isinstance(event, EnemyAttackEvent):
            console.narrate(f"{event.attacker_name} deals {event.damage} damage!")
        elif isinstance(event, RoundSummaryEvent):
            print(f"\nYour Health: {event.player_health}")
            print(f"{event.enemy_name}'s Health: {event.enemy_health}")
        elif isinstance(event, EnemyDefeatedEvent):
            console.narrate(colorize(f"You defeated {event.enemy_name}!", GREEN))
        elif isinstance(event, ExperienceGainedEvent):
            print(f"- Gained {event.amount} experience (Total: {event.total_exp}).")
        elif isinstance(event, PlayerDefeatedEvent):
            console.narrate(colorize("You were overpowered and dragged back, bruised.", RED))
            print(f"- Lost {event.penalty} health (Health: {event.overworld_health}).")
        elif isinstance(event, EncounterResolvedEvent):
            if debug_enabled():
                print(f"[debug] outcome: {event.outcome}")
        else:
            print(f"- {event}")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
def _render_game_events(console: Console, events: Sequence[GameEvent]) -> None:
    for event in events:
        if isinstance(event, TravelPerformedEvent):
            print(f"You travel from {event.from_location_name} to {event.to_location_name}.")
        elif isinstance(event, (InteractionResolvedEvent, InteractionBlockedEvent)):
            console.narrate(event.response)
        elif isinstance(event, ItemPickedUpEvent):
            print(f"Picked up {event.item_name}")
        elif isinstance(event, PickupFailedEvent):
            print(event.message)
        elif isinstance(event, ItemUsedEvent):
            for message in event.messages:
                console.narrate(message)
        elif isinstance(event, ExpGainedEvent):
            print(f"- Gained {event.amount} experience (Total: {event.total_exp}).")
        elif isinstance(event, FlagSetEvent):
            if debug_enabled():
                print(f"[debug] flag set: {event.flag}")
        elif isinstance(event, QuestCompletedEvent):
            print(colorize(f"Quest completed: {event.quest_name}", YELLOW))
        elif isinstance(event, EscapeEvent):
            console.narrate(colorize("Congratulations! You've successfully escaped!", GREEN))
        elif isinstance(event, BattleRequestedEvent):
            continue
        else:
            print(f"- {event}")


def _render_end_game(session: _Session, state: GameState) -> None:
    if state.has_escaped:
        print(colorize("\nVICTORY!", GREEN))
    elif not state.player.is_alive:
        print(colorize("\nGAME OVER", RED))
    stats = session.area_service.build_end_game_stats(state)
    print(colorize("\n=== Final Statistics ===", YELLOW))
    print(f"Name: {stats.player_name}")
    print(stats.health)
    print(stats.energy)
    print(f"Experience: {stats.experience}")
    print(f"Steps taken: {stats.total_steps}")
    print(f"Items collected: {stats.items_collected}")
    print(f"Locations explored: {stats.locations_explored}/{stats.locations_total}")
    print(f"Interactions discovered: {stats.interactions_discovered}")
    if stats.quest_flags:
        print("Quest flags:")
        render_bullet_lines(stats.quest_flags)
    print("\nThanks for playing!")
