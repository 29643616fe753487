"""Configuration for Dinner Party."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Application configuration."""

    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    world_file: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        certfile = os.getenv("DINNER_CERTFILE")
        keyfile = os.getenv("DINNER_KEYFILE")
        world_file = os.getenv("DINNER_WORLD_FILE")
        log_file = os.getenv("DINNER_LOG_FILE")

        return cls(
            host=os.getenv("DINNER_HOST", cls.host),
            port=int(os.getenv("DINNER_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            world_file=Path(world_file) if world_file else None,
            log_level=os.getenv("DINNER_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("DINNER_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            hash_fingerprints=os.getenv("DINNER_HASH_FINGERPRINTS", "true").lower()
            not in ("false", "0", "no"),
            max_sessions=int(os.getenv("DINNER_MAX_SESSIONS", str(cls.max_sessions))),
        )
