"""Structured logging for Dinner Party.

Logs carry a hashed client-certificate fingerprint instead of the raw one.
Request handlers bind the player for the duration of a request with
`bind_player`, so engine-adjacent events don't need to pass it along.
"""

import hashlib
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def fingerprint_hash(fingerprint: str) -> str:
    """Short, stable, non-reversible tag for a certificate fingerprint."""
    return hashlib.sha256(fingerprint.encode()).hexdigest()[:12]


def hash_fingerprint_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace `fingerprint` with `fingerprint_hash` in every event."""
    fp = event_dict.pop("fingerprint", None)
    if fp and fp != "unknown":
        event_dict["fingerprint_hash"] = fingerprint_hash(fp)
    elif fp:
        event_dict["fingerprint"] = fp
    return event_dict


def _processors(json_logs: bool, hash_fingerprints: bool, colors: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
    ]
    if hash_fingerprints:
        processors.append(hash_fingerprint_processor)
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def _output_stream(log_file: Path | None) -> TextIO:
    if log_file:
        return open(log_file, "a")
    return sys.stdout


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
    hash_fingerprints: bool = True,
) -> None:
    """Configure structured logging for the application."""
    stream = _output_stream(log_file)

    structlog.configure(
        processors=_processors(json_logs, hash_fingerprints, stream.isatty()),
        wrapper_class=structlog.make_filtering_bound_logger(
            LEVELS.get(log_level.upper(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def bind_player(fingerprint: str) -> None:
    """Attach the current player to every event logged in this context."""
    structlog.contextvars.bind_contextvars(fingerprint=fingerprint)


def clear_player() -> None:
    structlog.contextvars.unbind_contextvars("fingerprint")


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
