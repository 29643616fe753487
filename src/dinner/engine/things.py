"""Per-kind thing behaviour: take, drop, buy, use, tick and descriptions.

Kinds differ only in data (their ThingSpec). Shared containment verbs are
handled here for every kind; anything else is the kind's configured
Reaction, whose effect is looked up in _EFFECTS.
"""

from collections.abc import Callable

from .state import (
    GameState,
    Thing,
    is_ancestor,
    is_carrying,
    is_reachable,
    move_to_inventory,
    move_to_room,
    put_into,
    remove_from_game,
    spawn_thing,
    top_level_container,
)
from .world import Reaction, ThingSpec, World

Say = Callable[[str], None]

# Buying needs this thing in the inventory.
WALLET = "wallet"


def cooked_state(spec: ThingSpec, thing: Thing) -> str | None:
    """raw -> cooked -> burnt by cumulative heat minutes; None if uncookable."""
    if spec.cooking is None:
        return None
    if thing.cooked_for < spec.cooking.cooked:
        return "raw"
    if thing.cooked_for < spec.cooking.burnt:
        return "cooked"
    return "burnt"


def is_heating(world: World, thing: Thing) -> bool:
    """True for a heat source that is switched on."""
    return world.things[thing.name].heat_source and thing.on


def _properties_text(thing: Thing) -> str:
    if not thing.properties:
        return ""
    return f" ({', '.join(thing.properties)})"


def describe_contents(world: World, state: GameState, thing: Thing) -> str:
    if not thing.contents:
        return ""
    inside = ", ".join(
        full_name(world, state, state.things[name]) for name in thing.contents
    )
    return f" (containing: {inside})"


def full_name(world: World, state: GameState, thing: Thing) -> str:
    """Article, name and a parenthesised summary of its condition."""
    spec = world.things[thing.name]
    text = f"{spec.article} {spec.name}"
    if spec.heat_source:
        text += " (on)" if thing.on else " (off)"
    cooked = cooked_state(spec, thing)
    if cooked:
        text += f" ({cooked})"
    return text + describe_contents(world, state, thing) + _properties_text(thing)


def describe(world: World, state: GameState, say: Say, thing: Thing) -> None:
    spec = world.things[thing.name]
    say(spec.description + describe_contents(world, state, thing) + _properties_text(thing))


# --- Moving things around -----------------------------------------------------


def take(world: World, state: GameState, say: Say, thing: Thing) -> None:
    """Pick up a thing from the current room."""
    spec = world.things[thing.name]
    if spec.stationary:
        say(f"The {spec.name} is too heavy to pick up.")
        return
    if spec.purchaseable:
        say(
            "You're not a thief! Except for that one time when Mahesh and Raph "
            "made you steal a hairclip in Accessorize, but you felt really bad "
            "about that afterwards."
        )
        return
    say(f"You take the {spec.name}.")
    move_to_inventory(state, thing)


def buy(world: World, state: GameState, say: Say, thing: Thing) -> None:
    """Pay for a purchaseable thing in the current room."""
    spec = world.things[thing.name]
    if not spec.purchaseable:
        say("You already own that. Congratulations! You're moving up in the world!")
        return
    if not is_carrying(state, WALLET):
        say(
            "You don't have any money, and apparently this is set in 2013 or "
            "something so you can't pay with your phone."
        )
        return
    say(f"You buy the {spec.name}.")
    move_to_inventory(state, thing)


def drop(world: World, state: GameState, say: Say, thing: Thing) -> None:
    say(f"You drop the {thing.name}.")
    move_to_room(state, thing)


def _put(
    world: World, state: GameState, say: Say, thing: Thing, container: Thing | None,
) -> None:
    if container is None:
        say(f"Put the {thing.name} in what?")
        return
    if not is_carrying(state, thing.name):
        say("You aren't carrying that.")
        return
    if not is_reachable(state, container):
        say("You can't see that here.")
        return
    target = world.things[container.name]
    if not target.container:
        say(f"You can't put things in the {target.name}.")
        return
    if is_ancestor(state, thing, container):
        say(
            f"You put the {thing.name} in itself. "
            "The universe gently explodes around you."
        )
        say("Game over.")
        state.game_over = True
        return

    put_into(state, thing, container)
    say(f"You put the {thing.name} in the {container.name}.")
    if target.heat_source and not container.on:
        say("You know the oven is off, right?")


def _remove(world: World, state: GameState, say: Say, thing: Thing) -> None:
    if thing.contained_by is None:
        say(f"The {thing.name} isn't inside anything.")
        return
    container = thing.contained_by
    move_to_inventory(state, thing)
    say(f"You take the {thing.name} out of the {container}.")


# --- Reaction effects ---------------------------------------------------------


def _consume(world: World, state: GameState, thing: Thing, reaction: Reaction) -> None:
    remove_from_game(state, thing)


def _add_property(
    world: World, state: GameState, thing: Thing, reaction: Reaction,
) -> None:
    thing.add_property(reaction.property)


def _transform(
    world: World, state: GameState, thing: Thing, reaction: Reaction,
) -> None:
    """Replace `thing` with a new kind that keeps its properties."""
    remove_from_game(state, thing)
    replacement = spawn_thing(world.things[reaction.becomes])
    replacement.properties = list(thing.properties)
    state.things[replacement.name] = replacement
    state.inventory.append(replacement.name)


def _heat_on(world: World, state: GameState, thing: Thing, reaction: Reaction) -> None:
    thing.on = True
    thing.on_at = state.time


def _heat_off(world: World, state: GameState, thing: Thing, reaction: Reaction) -> None:
    thing.on = False


_EFFECTS: dict[str, Callable] = {
    "consume": _consume,
    "add_property": _add_property,
    "transform": _transform,
    "heat_on": _heat_on,
    "heat_off": _heat_off,
}


def use(
    world: World,
    state: GameState,
    say: Say,
    thing: Thing,
    verb: str,
    obj: Thing | None = None,
) -> None:
    """Apply a usage verb to `thing`, optionally with an object."""
    if verb == "put":
        _put(world, state, say, thing, obj)
        return
    if verb == "remove":
        _remove(world, state, say, thing)
        return

    spec = world.things[thing.name]
    if verb not in spec.verbs:
        say(f"You can't {verb} the {spec.name}.")
        return

    reaction = spec.reactions.get(verb)
    if reaction is None:
        say("Nothing happens.")
        return
    say(reaction.message)
    if reaction.effect is not None:
        _EFFECTS[reaction.effect](world, state, thing, reaction)


# --- Time -------------------------------------------------------------------


def _tick_cooking(
    world: World, state: GameState, say: Say, thing: Thing, minutes: int,
) -> None:
    spec = world.things[thing.name]
    if spec.cooking is None:
        return
    heater = top_level_container(state, thing)
    if not is_heating(world, heater):
        return
    thing.cooked_for += minutes
    if (
        cooked_state(spec, thing) == "burnt"
        and state.current_room in world.things[heater.name].smell_rooms
    ):
        say("An unpleasant burning smell wafts from the oven.")


def _tick_steeping(world: World, state: GameState, thing: Thing, minutes: int) -> None:
    spec = world.things[thing.name]
    if not spec.steeping:
        return
    vessel = top_level_container(state, thing)
    for profile in spec.steeping:
        if profile.reagent not in vessel.contents:
            continue
        steeped = thing.steeped_for.get(profile.property, 0) + minutes
        thing.steeped_for[profile.property] = steeped
        if steeped >= profile.minutes:
            thing.add_property(profile.property)


def tick(world: World, state: GameState, say: Say, thing: Thing, minutes: int) -> None:
    """Advance one thing, and everything inside it, by `minutes`."""
    for name in list(thing.contents):
        tick(world, state, say, state.things[name], minutes)
    _tick_cooking(world, state, say, thing, minutes)
    _tick_steeping(world, state, thing, minutes)
