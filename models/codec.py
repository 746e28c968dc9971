from __future__ import annotations
"""Text codec for /particle commands.

Canonical form:

    [/]particle <id-tokens...> <x> <y> <z> <dx> <dy> <dz> <speed> <count> <mode>

The particle id may carry its own arguments (``dust 1.0 0.0 0.0 1.0``), so the
id segment has no fixed width. Decoding therefore anchors on the last nine
tokens and gives everything before them to ``particle``.
"""

from typing import List, Optional

from .command import CommandState, FIELD_ORDER

COMMAND_KEYWORD = "particle"

# Number of fixed scalar tokens after the particle id.
TRAILING_TOKENS = len(FIELD_ORDER) - 1


class CommandDecodeError(ValueError):
    pass


def encode(state: CommandState) -> str:
    """Render a state to command text. Never validates."""
    return "/" + COMMAND_KEYWORD + " " + " ".join(state.values())


def _tokens(text: str) -> List[str]:
    s = str(text or "").strip()
    if s.startswith("/"):
        s = s[1:]
    toks = s.split()
    if toks and toks[0] == COMMAND_KEYWORD:
        toks = toks[1:]
    return toks


def decode(text: str) -> Optional[CommandState]:
    """Parse command text. Returns None when there are not enough tokens."""
    toks = _tokens(text)
    if len(toks) < TRAILING_TOKENS + 1:
        return None
    head, tail = toks[:-TRAILING_TOKENS], toks[-TRAILING_TOKENS:]
    x, y, z, dx, dy, dz, speed, count, mode = tail
    return CommandState(
        particle=" ".join(head),
        x=x, y=y, z=z,
        dx=dx, dy=dy, dz=dz,
        speed=speed, count=count, mode=mode,
    )


def decode_or_raise(text: str) -> CommandState:
    st = decode(text)
    if st is None:
        n = len(_tokens(text))
        raise CommandDecodeError(
            f"expected a particle id followed by {TRAILING_TOKENS} arguments, got {n} token(s)"
        )
    return st
