"""Tests for game state and containment."""

import pytest

from dinner.engine.state import (
    ContainmentError,
    GameState,
    find_in_inventory,
    find_in_room,
    find_reachable,
    is_ancestor,
    move_to_inventory,
    move_to_room,
    new_game_state,
    put_into,
    remove_from_game,
    top_level_container,
    top_level_things,
)
from dinner.engine.world import World


def test_new_game_state(world: World):
    """Fresh game state places things in their starting rooms."""
    state = new_game_state(world)
    assert state.current_room == "Kitchen"
    assert state.time == 0
    assert state.time_limit == 90
    assert not state.game_over
    assert state.inventory == []
    assert state.room_things["Hall"] == ["wallet"]
    assert "oven" in state.things
    assert "cubes of tofu" not in state.things


def test_states_are_independent(world: World):
    first = new_game_state(world)
    second = new_game_state(world)
    move_to_inventory(first, first.get("block of tofu"))
    assert "block of tofu" in second.room_things["Kitchen"]
    assert second.inventory == []


def test_find_is_case_insensitive_substring(state: GameState):
    assert find_in_room(state, "TOFU").name == "block of tofu"
    assert find_in_room(state, "vinegar").name == "red wine vinegar"
    assert find_in_room(state, "wallet") is None


def test_find_first_match_wins(state: GameState):
    """Both bowls match 'bowl'; the first one listed is chosen."""
    assert find_in_room(state, "bowl").name == "marinating bowl"


def test_find_prefers_direct_members(state: GameState):
    """A top-level match beats one nested inside an earlier container."""
    soy = state.get("soy sauce")
    move_to_inventory(state, soy)
    put_into(state, soy, state.get("oven"))
    state.current_room = "Supermarket"
    move_to_inventory(state, state.get("sambal sauce"))
    state.current_room = "Kitchen"
    move_to_room(state, state.get("sambal sauce"))

    assert find_in_room(state, "sauce").name == "sambal sauce"


def test_find_recurses_into_containers(state: GameState):
    cashews = state.get("cashews")
    move_to_inventory(state, cashews)
    put_into(state, cashews, state.get("small tray"))
    put_into(state, state.get("small tray"), state.get("oven"))

    assert find_in_room(state, "cashews") is cashews
    assert find_in_room(state, "cashews", recursive=False) is None


def test_find_reachable_checks_inventory_first(state: GameState):
    move_to_inventory(state, state.get("pickling bowl"))
    assert find_reachable(state, "bowl").name == "pickling bowl"
    assert find_in_inventory(state, "bowl").name == "pickling bowl"


def test_moves_keep_single_holder(state: GameState):
    tofu = state.get("block of tofu")
    bowl = state.get("marinating bowl")

    move_to_inventory(state, tofu)
    assert tofu.name in state.inventory
    assert tofu.name not in state.room_things["Kitchen"]

    put_into(state, tofu, bowl)
    assert tofu.contained_by == bowl.name
    assert bowl.contents == [tofu.name]
    assert tofu.name not in state.inventory

    move_to_inventory(state, tofu)
    assert tofu.contained_by is None
    assert bowl.contents == []
    assert state.inventory == [tofu.name]


def test_top_level_container(state: GameState):
    cashews = state.get("cashews")
    tray = state.get("small tray")
    oven = state.get("oven")
    assert top_level_container(state, cashews) is cashews

    put_into(state, cashews, tray)
    put_into(state, tray, oven)
    assert top_level_container(state, cashews) is oven


def test_put_into_self_raises(state: GameState):
    bowl = state.get("marinating bowl")
    with pytest.raises(ContainmentError):
        put_into(state, bowl, bowl)
    assert bowl.contained_by is None
    assert bowl.contents == []


def test_put_into_descendant_raises(state: GameState):
    bowl = state.get("marinating bowl")
    tray = state.get("small tray")
    put_into(state, tray, bowl)
    assert is_ancestor(state, bowl, tray)
    with pytest.raises(ContainmentError):
        put_into(state, bowl, tray)
    assert bowl.contained_by is None


def test_remove_from_game_takes_contents(state: GameState):
    tray = state.get("small tray")
    put_into(state, state.get("soy sauce"), tray)
    remove_from_game(state, tray)
    assert "small tray" not in state.things
    assert "soy sauce" not in state.things
    assert "small tray" not in state.room_things["Kitchen"]


def test_remove_from_game_inside_container(state: GameState):
    bowl = state.get("marinating bowl")
    put_into(state, state.get("lime juice"), bowl)
    remove_from_game(state, state.get("lime juice"))
    assert bowl.contents == []
    assert "lime juice" not in state.things


def test_top_level_things_skips_nested(state: GameState):
    put_into(state, state.get("soy sauce"), state.get("marinating bowl"))
    names = [thing.name for thing in top_level_things(state)]
    assert "marinating bowl" in names
    assert "soy sauce" not in names
    assert "platter" in names
