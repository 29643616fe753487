"""Xitzin application factory for Dinner Party."""

from importlib import resources
from pathlib import Path

from xitzin import Xitzin

from .config import Config
from .engine.loader import load_world
from .logging import get_logger
from .session import SessionStore

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate kitchen.toml via importlib.resources (works when installed in a venv)."""
    return resources.files("dinner.data").joinpath("kitchen.toml")


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Tofu-Eating Wokerati Dinner Party",
        version="0.1.0",
        templates_dir=templates_dir,
    )
    app.state.config = config

    @app.on_startup
    async def startup():
        """Load the world and open the session store."""
        data_path = config.world_file or _get_data_path()
        world = load_world(data_path)
        app.state.world = world
        app.state.sessions = SessionStore(world, max_sessions=config.max_sessions)
        logger.info(
            "world_loaded",
            rooms=len(world.rooms),
            things=len(world.things),
            score_rules=len(world.score_rules),
            time_limit=world.time_limit,
        )
        logger.info("startup_complete")

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app
