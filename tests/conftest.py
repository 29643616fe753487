"""Shared test fixtures for Dinner Party."""

import pytest

from dinner.app import _get_data_path, create_app
from dinner.config import Config
from dinner.engine.loader import load_world
from dinner.engine.state import GameState, new_game_state
from dinner.engine.world import World


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def state(world: World) -> GameState:
    return new_game_state(world)


@pytest.fixture
def test_config() -> Config:
    return Config()


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")
