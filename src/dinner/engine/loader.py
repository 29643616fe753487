"""Parse a TOML world file into a World object.

The file has a few top-level settings (title, intro, start room, clock),
then arrays of tables for rooms and things, an ending section and the
scoring table. See dinner/data/kitchen.toml for the reference world.
"""

import tomllib
from pathlib import Path
from typing import Any

from ..logging import get_logger
from .world import (
    CONDITIONS,
    CONTAINMENT_VERBS,
    EFFECTS,
    VERBS,
    CookingProfile,
    EndingTier,
    Reaction,
    RoomSpec,
    ScoreRule,
    SteepProfile,
    ThingSpec,
    World,
)

logger = get_logger(__name__)


class WorldError(ValueError):
    """The world file describes an impossible world."""


def _require(fields: dict[str, Any], key: str, where: str) -> Any:
    """fields[key], or a WorldError naming the section it is missing from."""
    try:
        return fields[key]
    except KeyError:
        raise WorldError(f"{where}: missing {key!r}") from None


def _parse_reaction(thing_name: str, verb: str, fields: dict[str, Any]) -> Reaction:
    effect = fields.get("effect")
    if effect is not None and effect not in EFFECTS:
        raise WorldError(f"{thing_name!r}: unknown effect {effect!r} for {verb!r}")
    if effect == "add_property" and not fields.get("property"):
        raise WorldError(f"{thing_name!r}: {verb!r} adds a property but names none")
    if effect == "transform" and not fields.get("becomes"):
        raise WorldError(f"{thing_name!r}: {verb!r} transforms into nothing")
    return Reaction(
        message=fields.get("message", ""),
        effect=effect,
        property=fields.get("property"),
        becomes=fields.get("becomes"),
    )


def _parse_thing(fields: dict[str, Any]) -> ThingSpec:
    name = _require(fields, "name", "thing")

    verbs = list(CONTAINMENT_VERBS)
    for verb in fields.get("verbs", []):
        if verb not in VERBS:
            raise WorldError(f"{name!r}: unknown verb {verb!r}")
        if verb not in verbs:
            verbs.append(verb)

    reactions = {
        verb: _parse_reaction(name, verb, reaction)
        for verb, reaction in fields.get("reactions", {}).items()
    }
    for verb in reactions:
        if verb not in verbs or verb in CONTAINMENT_VERBS:
            raise WorldError(f"{name!r}: reaction for verb {verb!r} it doesn't accept")

    cooking = None
    if "cooking" in fields:
        where = f"{name!r} cooking"
        cooking = CookingProfile(
            cooked=_require(fields["cooking"], "cooked", where),
            burnt=_require(fields["cooking"], "burnt", where),
        )
        if cooking.burnt < cooking.cooked:
            raise WorldError(f"{name!r}: burns before it cooks")

    steeping = tuple(
        SteepProfile(
            property=_require(entry, "property", f"{name!r} steeping"),
            reagent=_require(entry, "reagent", f"{name!r} steeping"),
            minutes=_require(entry, "minutes", f"{name!r} steeping"),
        )
        for entry in fields.get("steeping", [])
    )

    return ThingSpec(
        name=name,
        article=fields.get("article", "a"),
        description=fields.get("description", ""),
        stationary=fields.get("stationary", False),
        container=fields.get("container", False),
        purchaseable=fields.get("purchaseable", False),
        heat_source=fields.get("heat_source", False),
        smell_rooms=tuple(fields.get("smell_rooms", ())),
        verbs=tuple(verbs),
        reactions=reactions,
        cooking=cooking,
        steeping=steeping,
    )


def _parse_room(fields: dict[str, Any]) -> RoomSpec:
    return RoomSpec(
        name=_require(fields, "name", "room"),
        description=fields.get("description", ""),
        exits=tuple(fields.get("exits", ())),
        things=tuple(fields.get("things", ())),
    )


def _parse_rule(fields: dict[str, Any]) -> ScoreRule:
    label = _require(fields, "label", "score rule")
    where = f"score rule {label!r}"
    condition = _require(fields, "condition", where)
    if condition not in CONDITIONS:
        raise WorldError(f"{where}: unknown condition {condition!r}")
    if condition != "exists" and not fields.get("value"):
        raise WorldError(f"{where}: {condition} needs a value")
    return ScoreRule(
        label=label,
        points=_require(fields, "points", where),
        things=tuple(_require(fields, "things", where)),
        condition=condition,
        value=fields.get("value"),
    )


def _check_rooms(world: World) -> None:
    """Every exit names exactly one room; every placed thing exists once."""
    placed: set[str] = set()
    for room in world.rooms.values():
        for exit_name in room.exits:
            matches = [
                other for other in world.rooms.values()
                if other.name.lower() == exit_name.lower()
            ]
            if len(matches) != 1:
                raise WorldError(
                    f"room {room.name!r}: exit {exit_name!r} matches "
                    f"{len(matches)} rooms"
                )
        for thing_name in room.things:
            if thing_name not in world.things:
                raise WorldError(f"room {room.name!r}: unknown thing {thing_name!r}")
            if thing_name in placed:
                raise WorldError(f"thing {thing_name!r} placed twice")
            placed.add(thing_name)

    if world.start_room not in world.rooms:
        raise WorldError(f"unknown start room {world.start_room!r}")


def _check_things(world: World) -> None:
    """Cross-references between things resolve."""
    for spec in world.things.values():
        for reaction in spec.reactions.values():
            if reaction.effect == "transform" and reaction.becomes not in world.things:
                raise WorldError(
                    f"{spec.name!r}: transforms into unknown {reaction.becomes!r}"
                )
            if reaction.effect in ("heat_on", "heat_off") and not spec.heat_source:
                raise WorldError(f"{spec.name!r}: heats but is not a heat source")
        for profile in spec.steeping:
            if profile.reagent not in world.things:
                raise WorldError(
                    f"{spec.name!r}: steeps in unknown {profile.reagent!r}"
                )
        for room_name in spec.smell_rooms:
            if room_name not in world.rooms:
                raise WorldError(f"{spec.name!r}: smell reaches unknown {room_name!r}")

    for rule in world.score_rules:
        for thing_name in rule.things:
            if thing_name not in world.things:
                raise WorldError(f"score rule {rule.label!r}: unknown {thing_name!r}")


def parse_world(data: dict[str, Any]) -> World:
    """Build and validate a World from already-decoded TOML data."""
    world = World(
        title=data.get("title", ""),
        intro=list(data.get("intro", [])),
        start_room=_require(data, "start_room", "world"),
        start_time=data.get("start_time", "16:30"),
        time_limit=data.get("time_limit", 90),
    )

    for fields in data.get("things", []):
        spec = _parse_thing(fields)
        if spec.name in world.things:
            raise WorldError(f"duplicate thing {spec.name!r}")
        world.things[spec.name] = spec

    for fields in data.get("rooms", []):
        room = _parse_room(fields)
        if room.name in world.rooms:
            raise WorldError(f"duplicate room {room.name!r}")
        world.rooms[room.name] = room

    scoring = data.get("scoring", {})
    world.max_score = scoring.get("max_score", 0)
    world.score_rules = [_parse_rule(fields) for fields in scoring.get("rules", [])]

    ending = data.get("ending", {})
    world.arrival_message = ending.get("arrival", "")
    world.endings = sorted(
        (
            EndingTier(
                fraction=_require(tier, "fraction", "ending tier"),
                text=_require(tier, "text", "ending tier"),
            )
            for tier in ending.get("tiers", [])
        ),
        key=lambda tier: tier.fraction,
        reverse=True,
    )

    _check_rooms(world)
    _check_things(world)
    return world


def load_world(data_path: Path) -> World:
    """Parse a world file and return a populated World."""
    with data_path.open("rb") as fh:
        data = tomllib.load(fh)

    world = parse_world(data)
    logger.debug(
        "world_parsed",
        path=str(data_path),
        rooms=len(world.rooms),
        things=len(world.things),
    )
    return world
