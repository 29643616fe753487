"""Turn a raw input line into a Command.

Builtins are selected by their exact first word. Anything else is a usage
sentence: `<verb> <subject> [in|from|on <object>]`.
"""

from dataclasses import dataclass

from .world import VERBS

BUILTINS = (
    "help",
    "time",
    "look",
    "examine",
    "go",
    "take",
    "drop",
    "buy",
    "wait",
    "inventory",
    "state",
    "kill",
)

# Checked in this order; the first one present splits subject from object.
SEPARATORS = ("in", "from", "on")

USAGE = "use"


@dataclass(frozen=True)
class Command:
    """A parsed line.

    For builtins `name` is the keyword and `args` the remaining words. For
    usage sentences `name` is USAGE; `verb` is None when no known verb
    starts the line.
    """

    name: str
    args: tuple[str, ...] = ()
    verb: str | None = None
    subject: str = ""
    obj: str = ""


def match_verb(text: str) -> tuple[str | None, str]:
    """Split a known verb off the front of `text`, ignoring case."""
    lowered = text.lower()
    for verb in VERBS:
        if lowered == verb or lowered.startswith(verb + " "):
            return verb, text[len(verb):].strip()
    return None, text


def parse_usage(text: str) -> Command:
    verb, rest = match_verb(text.strip())
    words = rest.split()

    split_at = None
    for separator in SEPARATORS:
        if separator in words:
            split_at = words.index(separator)
            break

    if split_at is None:
        return Command(name=USAGE, verb=verb, subject=" ".join(words))
    return Command(
        name=USAGE,
        verb=verb,
        subject=" ".join(words[:split_at]),
        obj=" ".join(words[split_at + 1:]),
    )


def parse(raw_input: str) -> Command:
    """Parse one line of player input."""
    words = raw_input.split()
    if words and words[0] in BUILTINS:
        return Command(name=words[0], args=tuple(words[1:]))
    return parse_usage(raw_input)
