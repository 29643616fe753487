"""Command dispatch and handler functions.

execute(world, state, raw_input, say) is the main entry point. It parses the
line, dispatches to a builtin handler or to thing usage, advances the clock
and ends the game once time runs out. Every handler mutates state in place
and narrates through `say`; nothing is returned and nothing is raised for
player mistakes.
"""

import datetime as dt
import json
from collections.abc import Callable
from dataclasses import asdict

from . import things
from .parser import Command, parse
from .scoring import calculate_score, ending_for
from .state import (
    GameState,
    find_in_inventory,
    find_in_room,
    find_reachable,
    top_level_things,
)
from .things import Say
from .world import VERBS, World

GAME_OVER_MESSAGE = "The game is over. You've had your fun, now let me nap."


def format_time(world: World, state: GameState) -> str:
    """Wall-clock time and minutes left, e.g. '16:45 (75 minutes remaining)'."""
    start = dt.datetime.strptime(world.start_time, "%H:%M")
    now = start + dt.timedelta(minutes=state.time)
    remaining = max(state.time_limit - state.time, 0)
    return f"{now:%H:%M} ({remaining} minutes remaining)"


def advance_clock(world: World, state: GameState, say: Say, minutes: int = 1) -> None:
    """Move time forward and let every top-level thing react."""
    state.time += minutes
    for thing in top_level_things(state):
        things.tick(world, state, say, thing, minutes)


def get_inventory(world: World, state: GameState) -> list[str]:
    """Full names of carried things."""
    return [
        things.full_name(world, state, state.things[name]) for name in state.inventory
    ]


def get_visible_things(world: World, state: GameState) -> list[str]:
    """Full names of things lying in the current room."""
    return [
        things.full_name(world, state, state.things[name])
        for name in state.room_things[state.current_room]
    ]


def get_exits(world: World, state: GameState) -> list[str]:
    return list(world.rooms[state.current_room].exits)


def describe_room(world: World, state: GameState, say: Say) -> None:
    """Narrate the current room, what's in it and the way out."""
    say(world.rooms[state.current_room].description)
    visible = get_visible_things(world, state)
    if visible:
        say("You can see: " + ", ".join(visible))
    exits = get_exits(world, state)
    if exits:
        say("Exits: " + ", ".join(exits))


def intro_lines(world: World) -> list[str]:
    """What a player sees before their first command."""
    return [world.title, *world.intro]


# --- Builtins ---------------------------------------------------------------


def _cmd_help(world: World, state: GameState, say: Say, command: Command) -> None:
    say(
        "Available commands are: look, time, examine, go, take, drop, buy, "
        f"wait, inventory, {', '.join(VERBS)}."
    )


def _cmd_time(world: World, state: GameState, say: Say, command: Command) -> None:
    say(format_time(world, state))


def _describe_target(
    world: World, state: GameState, say: Say, target: str,
) -> None:
    thing = find_in_room(state, target) or find_in_inventory(state, target)
    if thing is None:
        say("You can't see that.")
        return
    things.describe(world, state, say, thing)
    advance_clock(world, state, say)


def _cmd_look(world: World, state: GameState, say: Say, command: Command) -> None:
    if not command.args:
        say(state.current_room)
        describe_room(world, state, say)
        advance_clock(world, state, say)
        return
    if command.args[0] != "at":
        say("Look where?")
        return
    target = " ".join(command.args[1:])
    if not target:
        say("Look at what?")
        return
    _describe_target(world, state, say, target)


def _cmd_examine(world: World, state: GameState, say: Say, command: Command) -> None:
    target = " ".join(command.args)
    if not target:
        say("Examine what?")
        return
    _describe_target(world, state, say, target)


def _cmd_go(world: World, state: GameState, say: Say, command: Command) -> None:
    direction = " ".join(arg for arg in command.args if arg != "to").lower()
    if not direction:
        say("Go where?")
        return

    exit_name = next(
        (name for name in get_exits(world, state) if direction in name.lower()),
        None,
    )
    room = world.room_named(exit_name) if exit_name is not None else None
    if room is None:
        say("You can't go that way.")
        return

    say(f"You go to the {exit_name}...")
    state.current_room = room.name
    describe_room(world, state, say)
    advance_clock(world, state, say)


def _room_action(action: Callable, verb: str, carried: bool = False) -> Callable:
    """Handler for take/buy/drop: resolve a top-level thing, act, tick."""

    def handler(world: World, state: GameState, say: Say, command: Command) -> None:
        target = " ".join(command.args)
        if not target:
            say(f"{verb.capitalize()} what?")
            return
        if carried:
            thing = find_in_inventory(state, target, recursive=False)
        else:
            thing = find_in_room(state, target, recursive=False)
        if thing is None:
            say(f"You can't {verb} that.")
            return
        action(world, state, say, thing)
        advance_clock(world, state, say)

    return handler


def _cmd_wait(world: World, state: GameState, say: Say, command: Command) -> None:
    minutes = 0
    if command.args and command.args[0].isdigit():
        minutes = int(command.args[0])
    if minutes <= 0:
        say("Wait for how many minutes?")
        return
    advance_clock(world, state, say, minutes)
    say("Time passes.")


def _cmd_inventory(world: World, state: GameState, say: Say, command: Command) -> None:
    carried = get_inventory(world, state)
    if carried:
        say("You're carrying: " + ", ".join(carried))
    else:
        say("You're carrying nothing.")


def _cmd_state(world: World, state: GameState, say: Say, command: Command) -> None:
    say(json.dumps(asdict(state), indent=2))


def _cmd_kill(world: World, state: GameState, say: Say, command: Command) -> None:
    if command.args[:1] == ("jester",):
        say("Jingle is dead. Game over.")
        state.game_over = True
        return
    say("You can't kill that.")


def _cmd_use(world: World, state: GameState, say: Say, command: Command) -> None:
    """Handle `<verb> <subject> [in|from|on <object>]`."""
    if command.verb is None:
        say("I don't know how to do that.")
        return
    if not command.subject:
        say(f"What do you want to {command.verb}?")
        return

    thing = find_reachable(state, command.subject)
    if thing is None:
        say("You can't do that.")
        return

    obj = None
    if command.obj:
        obj = find_reachable(state, command.obj)
        if obj is None:
            say("You can't do that.")
            return

    things.use(world, state, say, thing, command.verb, obj)
    advance_clock(world, state, say)


_BUILTINS: dict[str, Callable] = {
    "help": _cmd_help,
    "time": _cmd_time,
    "look": _cmd_look,
    "examine": _cmd_examine,
    "go": _cmd_go,
    "take": _room_action(things.take, "take"),
    "buy": _room_action(things.buy, "buy"),
    "drop": _room_action(things.drop, "drop", carried=True),
    "wait": _cmd_wait,
    "inventory": _cmd_inventory,
    "state": _cmd_state,
    "kill": _cmd_kill,
}


# --- Ending -------------------------------------------------------------------


def _finish(world: World, state: GameState, say: Say) -> None:
    """Time's up: score the dinner and end the game."""
    say(world.arrival_message)
    score = calculate_score(world, state)
    say(f"You scored {score.total} out of {score.max_score} points.")
    say(ending_for(world, score))
    say("Score breakdown:")
    for label, points in score.parts:
        say(f"{label}: {points}")
    state.game_over = True


def execute(world: World, state: GameState, raw_input: str, say: Say) -> None:
    """Process one line of input, narrating through `say`."""
    if state.game_over:
        say(GAME_OVER_MESSAGE)
        return

    command = parse(raw_input)
    handler = _BUILTINS.get(command.name, _cmd_use)
    handler(world, state, say, command)

    if state.time >= state.time_limit and not state.game_over:
        _finish(world, state, say)


def handle_command(world: World, state: GameState, raw_input: str) -> list[str]:
    """Process a command and return the narrated lines."""
    lines: list[str] = []
    execute(world, state, raw_input, lines.append)
    return lines
