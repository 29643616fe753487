"""End-of-game scoring from the world's rule table."""

from collections.abc import Callable
from dataclasses import dataclass, field

from .state import GameState
from .things import cooked_state
from .world import ScoreRule, World


@dataclass
class Score:
    total: int = 0
    max_score: int = 0
    parts: list[tuple[str, int]] = field(default_factory=list)

    @property
    def fraction(self) -> float:
        if self.max_score <= 0:
            return 0.0
        return self.total / self.max_score


_CONDITIONS: dict[str, Callable] = {
    "exists": lambda world, thing, value: True,
    "property": lambda world, thing, value: thing.has_property(value),
    "cooked_state": lambda world, thing, value: (
        cooked_state(world.things[thing.name], thing) == value
    ),
    "contained_by": lambda world, thing, value: thing.contained_by == value,
}


def rule_met(world: World, state: GameState, rule: ScoreRule) -> bool:
    """True if any thing the rule names is still in play and qualifies."""
    check = _CONDITIONS[rule.condition]
    for name in rule.things:
        thing = state.things.get(name)
        if thing is not None and check(world, thing, rule.value):
            return True
    return False


def calculate_score(world: World, state: GameState) -> Score:
    """Score the dinner. The total may exceed the maximum or go negative."""
    score = Score(max_score=world.max_score)
    for rule in world.score_rules:
        if rule_met(world, state, rule):
            score.total += rule.points
            score.parts.append((rule.label, rule.points))
    return score


def ending_for(world: World, score: Score) -> str:
    """The vignette for the highest tier the score reaches."""
    for tier in world.endings:
        if score.fraction >= tier.fraction:
            return tier.text
    return world.endings[-1].text if world.endings else ""
