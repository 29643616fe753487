"""Immutable data structures for the dinner party world.

These are loaded once from kitchen.toml at startup and shared across all players.
"""

from dataclasses import dataclass, field

# Usage verbs understood by the parser, in matching order.
VERBS = ("eat", "drink", "dry", "cut", "put", "turn on", "turn off", "remove")

# Verbs every thing accepts; handled identically for all kinds.
CONTAINMENT_VERBS = ("put", "remove")

# Reaction effects a thing kind can declare.
EFFECTS = ("consume", "add_property", "transform", "heat_on", "heat_off")

# Conditions a scoring rule can test.
CONDITIONS = ("exists", "property", "cooked_state", "contained_by")


@dataclass(frozen=True)
class CookingProfile:
    """Minute thresholds at which heat turns a raw thing cooked, then burnt."""

    cooked: int
    burnt: int


@dataclass(frozen=True)
class SteepProfile:
    """Soaking next to a reagent for `minutes` grants `property`."""

    property: str
    reagent: str
    minutes: int


@dataclass(frozen=True)
class Reaction:
    """What happens when a verb is used on a thing."""

    message: str
    effect: str | None = None
    property: str | None = None
    becomes: str | None = None


@dataclass
class ThingSpec:
    """A kind of thing; exactly one instance of each exists in a game."""

    name: str
    article: str = "a"
    description: str = ""
    stationary: bool = False
    container: bool = False
    purchaseable: bool = False
    heat_source: bool = False
    smell_rooms: tuple[str, ...] = ()
    verbs: tuple[str, ...] = CONTAINMENT_VERBS
    reactions: dict[str, Reaction] = field(default_factory=dict)
    cooking: CookingProfile | None = None
    steeping: tuple[SteepProfile, ...] = ()


@dataclass
class RoomSpec:
    """A location and the things it starts with."""

    name: str
    description: str = ""
    exits: tuple[str, ...] = ()
    things: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreRule:
    """One row of the end-of-game scoring table."""

    label: str
    points: int
    things: tuple[str, ...]
    condition: str
    value: str | None = None


@dataclass(frozen=True)
class EndingTier:
    """Vignette narrated when the score fraction reaches `fraction`."""

    fraction: float
    text: str


@dataclass
class World:
    """The complete immutable game world, loaded from kitchen.toml."""

    title: str = ""
    intro: list[str] = field(default_factory=list)
    start_room: str = ""
    start_time: str = "16:30"
    time_limit: int = 90
    rooms: dict[str, RoomSpec] = field(default_factory=dict)
    things: dict[str, ThingSpec] = field(default_factory=dict)
    max_score: int = 0
    score_rules: list[ScoreRule] = field(default_factory=list)
    arrival_message: str = ""
    endings: list[EndingTier] = field(default_factory=list)

    def room_named(self, name: str) -> RoomSpec | None:
        """Case-insensitive exact lookup of a room."""
        lowered = name.lower()
        for room in self.rooms.values():
            if room.name.lower() == lowered:
                return room
        return None
