"""Session layer bridging the game engine and its players.

Each player (identified by client-certificate fingerprint) gets their own
GameState, kept in memory for the life of the process. The World is shared.

Xitzin runs handlers on a thread pool, so the store and each session carry
their own lock. A request holds its session's lock from lookup to render.
"""

import threading
from collections import OrderedDict

from .engine.commands import (
    execute,
    format_time,
    get_exits,
    get_inventory,
    get_visible_things,
    intro_lines,
)
from .engine.state import GameState, new_game_state
from .engine.world import World
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class DinnerSession:
    """One player's game plus the narration from their last command."""

    def __init__(self, fingerprint: str, world: World, game_state: GameState):
        self.fingerprint = fingerprint
        self.world = world
        self.state = game_state
        self.transcript: list[str] = intro_lines(world)
        # Reentrant: routes hold it around process_command.
        self.lock = threading.RLock()

    def process_command(self, raw_input: str) -> list[str]:
        """Run one command through the engine and return what it narrated."""
        with self.lock:
            was_over = self.state.game_over
            lines: list[str] = []
            execute(self.world, self.state, raw_input, lines.append)
            self.transcript = lines
        logger.debug(
            "command_processed",
            command=raw_input,
            time=self.state.time,
            lines=len(lines),
        )
        if self.state.game_over and not was_over:
            logger.info("game_finished", time=self.state.time)
        return lines

    @property
    def clock(self) -> str:
        return format_time(self.world, self.state)

    @property
    def room_name(self) -> str:
        return self.state.current_room

    def get_room_description(self) -> str:
        return self.world.rooms[self.state.current_room].description

    def get_exits(self) -> list[str]:
        return get_exits(self.world, self.state)

    def get_visible_things(self) -> list[str]:
        return get_visible_things(self.world, self.state)

    def get_inventory(self) -> list[str]:
        return get_inventory(self.world, self.state)

    def reset(self) -> None:
        """Start over with a fresh game."""
        with self.lock:
            self.state = new_game_state(self.world)
            self.transcript = intro_lines(self.world)
        logger.info("game_reset")


class SessionStore:
    """In-memory sessions keyed by certificate fingerprint.

    Holds at most `max_sessions`; the least recently used game is dropped
    to make room for a new player.
    """

    def __init__(self, world: World, max_sessions: int = DEFAULT_MAX_SESSIONS):
        self.world = world
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, DinnerSession] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, fingerprint: str) -> DinnerSession:
        with self._lock:
            session = self._sessions.get(fingerprint)
            if session is not None:
                self._sessions.move_to_end(fingerprint)
                return session

            session = DinnerSession(fingerprint, self.world, new_game_state(self.world))
            self._sessions[fingerprint] = session
            evicted = None
            if len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)

        logger.info("new_game_started", fingerprint=fingerprint)
        if evicted is not None:
            logger.info("session_evicted", fingerprint=evicted)
        return session

    def __contains__(self, fingerprint: str) -> bool:
        return fingerprint in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
