from __future__ import annotations
from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Dict, Tuple

# Field order of the canonical command text (after the keyword).
FIELD_ORDER: Tuple[str, ...] = ("particle", "x", "y", "z", "dx", "dy", "dz", "speed", "count", "mode")

COORD_FIELDS = ("x", "y", "z")
DELTA_FIELDS = ("dx", "dy", "dz")

MODES = ("normal", "force")

# Values of `count` that select color mode for the color-capable kinds.
COUNT_ZERO_SENTINELS = ("0", "0.0")


@dataclass(frozen=True)
class CommandState:
    """One /particle command as edited in the builder.

    Every field is kept as the raw string the user typed. Parsing happens
    where a value is consumed (validator, resolver, preview), and may fail
    there without affecting what is stored here.
    """
    particle: str = "flame"
    x: str = "~"
    y: str = "~1"
    z: str = "~"
    dx: str = "0"
    dy: str = "0"
    dz: str = "0"
    speed: str = "0.1"
    count: str = "10"
    mode: str = "normal"  # normal|force

    def replace(self, **changes: str) -> "CommandState":
        unknown = [k for k in changes if k not in FIELD_ORDER]
        if unknown:
            raise KeyError(f"unknown command field(s): {', '.join(unknown)}")
        return _dc_replace(self, **{k: str(v) for k, v in changes.items()})

    def get(self, name: str) -> str:
        if name not in FIELD_ORDER:
            raise KeyError(name)
        return getattr(self, name)

    def values(self) -> Tuple[str, ...]:
        return tuple(getattr(self, f) for f in FIELD_ORDER)

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_STATE = CommandState()
