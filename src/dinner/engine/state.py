"""Mutable per-player game state and structural queries over it.

Things live in an arena keyed by their unique name. Rooms, the inventory
and containers hold ordered lists of names; a thing's `contained_by` names
its container. All values are plain strings, ints, lists and dicts, so a
state can be dumped or copied without touching the World.
"""

from dataclasses import dataclass, field

from .world import ThingSpec, World


class ContainmentError(ValueError):
    """A move would make a thing its own ancestor."""


@dataclass
class Thing:
    """A live thing in one game."""

    name: str
    properties: list[str] = field(default_factory=list)
    contents: list[str] = field(default_factory=list)
    contained_by: str | None = None
    cooked_for: int = 0
    steeped_for: dict[str, int] = field(default_factory=dict)
    on: bool = False
    on_at: int | None = None

    def add_property(self, prop: str) -> None:
        if prop not in self.properties:
            self.properties.append(prop)

    def has_property(self, prop: str) -> bool:
        return prop in self.properties


@dataclass
class GameState:
    """All mutable per-player state."""

    current_room: str = ""
    time: int = 0
    time_limit: int = 90
    game_over: bool = False
    inventory: list[str] = field(default_factory=list)
    room_things: dict[str, list[str]] = field(default_factory=dict)
    things: dict[str, Thing] = field(default_factory=dict)

    def get(self, name: str) -> Thing:
        return self.things[name]


def spawn_thing(spec: ThingSpec) -> Thing:
    """Create a fresh live thing from its kind."""
    return Thing(name=spec.name)


def new_game_state(world: World) -> GameState:
    """Create a fresh game state with things in their starting rooms."""
    state = GameState(
        current_room=world.start_room,
        time_limit=world.time_limit,
    )
    for room in world.rooms.values():
        state.room_things[room.name] = list(room.things)
        for thing_name in room.things:
            state.things[thing_name] = spawn_thing(world.things[thing_name])
    return state


# --- Lookup -----------------------------------------------------------------


def _search(state: GameState, names: list[str], fragment: str) -> Thing | None:
    """Direct members first, then each member's contents depth-first."""
    for name in names:
        if fragment in name.lower():
            return state.things[name]
    for name in names:
        found = _search(state, state.things[name].contents, fragment)
        if found is not None:
            return found
    return None


def _search_top(state: GameState, names: list[str], fragment: str) -> Thing | None:
    for name in names:
        if fragment in name.lower():
            return state.things[name]
    return None


def find_in_room(
    state: GameState, fragment: str, recursive: bool = True,
) -> Thing | None:
    """First thing in the current room whose name contains `fragment`."""
    names = state.room_things[state.current_room]
    if recursive:
        return _search(state, names, fragment.lower())
    return _search_top(state, names, fragment.lower())


def find_in_inventory(
    state: GameState, fragment: str, recursive: bool = True,
) -> Thing | None:
    """First carried thing whose name contains `fragment`."""
    if recursive:
        return _search(state, state.inventory, fragment.lower())
    return _search_top(state, state.inventory, fragment.lower())


def find_reachable(state: GameState, fragment: str) -> Thing | None:
    """Inventory first, then the current room, both recursively."""
    found = find_in_inventory(state, fragment)
    if found is None:
        found = find_in_room(state, fragment)
    return found


def is_carrying(state: GameState, name: str) -> bool:
    """True if `name` is directly in the inventory."""
    return name in state.inventory


def top_level_container(state: GameState, thing: Thing) -> Thing:
    """Follow `contained_by` to the root of the containment chain."""
    while thing.contained_by is not None:
        thing = state.things[thing.contained_by]
    return thing


def is_ancestor(state: GameState, candidate: Thing, thing: Thing) -> bool:
    """True if `candidate` is `thing` or (transitively) contains it."""
    current: Thing | None = thing
    while current is not None:
        if current.name == candidate.name:
            return True
        current = (
            state.things[current.contained_by]
            if current.contained_by is not None
            else None
        )
    return False


def is_reachable(state: GameState, thing: Thing) -> bool:
    """True if `thing` is carried or in the current room, at any depth."""
    root = top_level_container(state, thing).name
    return root in state.inventory or root in state.room_things[state.current_room]


def top_level_things(state: GameState) -> list[Thing]:
    """Every thing in every room, then every carried thing."""
    names = [name for names in state.room_things.values() for name in names]
    names.extend(state.inventory)
    return [state.things[name] for name in names]


# --- Movement ---------------------------------------------------------------


def _holder(state: GameState, thing: Thing) -> list[str] | None:
    """The list that currently holds `thing`."""
    if thing.contained_by is not None:
        return state.things[thing.contained_by].contents
    if thing.name in state.inventory:
        return state.inventory
    for names in state.room_things.values():
        if thing.name in names:
            return names
    return None


def detach(state: GameState, thing: Thing) -> None:
    """Take `thing` out of whatever holds it."""
    holder = _holder(state, thing)
    if holder is not None:
        holder.remove(thing.name)
    thing.contained_by = None


def move_to_inventory(state: GameState, thing: Thing) -> None:
    detach(state, thing)
    state.inventory.append(thing.name)


def move_to_room(state: GameState, thing: Thing) -> None:
    detach(state, thing)
    state.room_things[state.current_room].append(thing.name)


def put_into(state: GameState, thing: Thing, container: Thing) -> None:
    """Move `thing` into `container`, keeping containment a forest."""
    if is_ancestor(state, thing, container):
        raise ContainmentError(f"{thing.name!r} cannot go inside {container.name!r}")
    detach(state, thing)
    container.contents.append(thing.name)
    thing.contained_by = container.name


def remove_from_game(state: GameState, thing: Thing) -> None:
    """Delete `thing`, and anything inside it, for good."""
    detach(state, thing)
    pending = [thing.name]
    while pending:
        name = pending.pop()
        pending.extend(state.things[name].contents)
        del state.things[name]
