"""Gameplay routes."""

from contextlib import contextmanager

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..logging import bind_player, clear_player
from ..session import DinnerSession


@contextmanager
def _game_session(request: Request):
    """Look up and lock the player's session, logging under their fingerprint."""
    identity = get_identity(request)
    bind_player(identity.fingerprint)
    try:
        game = request.app.state.sessions.get_or_create(identity.fingerprint)
        with game.lock:
            yield game
    finally:
        clear_player()


def _exit_slug(name: str) -> str:
    return name.replace(" ", "-")


def _render_play(app: Xitzin, game: DinnerSession):
    """Render the main play view."""
    return app.template(
        "play.gmi",
        room=game.room_name,
        description=game.get_room_description(),
        things=game.get_visible_things(),
        exits=[(_exit_slug(name), name) for name in game.get_exits()],
        inventory=game.get_inventory(),
        transcript=game.transcript,
        clock=game.clock,
        is_finished=game.state.game_over,
    )


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with _game_session(request) as game:
            return _render_play(app, game)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable exit link."""
        with _game_session(request) as game:
            game.process_command("go " + direction.replace("-", " "))
            return _render_play(app, game)

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        with _game_session(request) as game:
            game.process_command(query)
            return _render_play(app, game)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        with _game_session(request) as game:
            game.process_command("look")
            return _render_play(app, game)


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried things."""
        with _game_session(request) as game:
            game.process_command("inventory")
            return _render_play(app, game)

    @app.gemini("/time", name="time")
    @require_certificate
    def time(request: Request):
        """Show the clock."""
        with _game_session(request) as game:
            game.process_command("time")
            return _render_play(app, game)

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        with _game_session(request) as game:
            if query.strip().upper() == "YES":
                game.reset()
                return _render_play(app, game)
            return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
