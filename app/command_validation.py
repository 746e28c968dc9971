from __future__ import annotations

"""Field validation for the command builder.

UI-agnostic and side-effect free. Used by:
- the builder session (inline errors, history gate)
- the CLI `validate` command
- selftests

Validation is advisory: an invalid state still encodes to text.
"""

from enum import Enum
import math
import re
from typing import Any, Dict, List, Optional

from models.command import CommandState, COORD_FIELDS, DELTA_FIELDS, FIELD_ORDER


class ErrorKind(str, Enum):
    REQUIRED = "required"
    INVALID_COORDINATE = "invalid_coord"
    INVALID_NUMBER = "invalid_number"
    INVALID_INTEGER = "invalid_integer"
    MIN_ZERO = "min_zero"


# Optional ~ (relative) or ^ (local) marker, then an optional signed decimal.
# A bare marker means zero offset.
_COORD_RE = re.compile(r"[~^]?(-?[0-9]*(\.[0-9]+)?)?")

VALIDATION_MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "required": "REQUIRED",
        "invalid_coord": "INVALID COORD",
        "invalid_number": "MUST BE NUMBER",
        "invalid_integer": "MUST BE INTEGER",
        "min_zero": "MUST BE >= 0",
    },
    "zh": {
        "required": "必填项",
        "invalid_coord": "坐标格式错误",
        "invalid_number": "必须是数字",
        "invalid_integer": "必须是整数",
        "min_zero": "必须 >= 0",
    },
}


def parse_number(raw: str) -> Optional[float]:
    """Parse a finite real number, or None."""
    s = str(raw).strip()
    if not s or "_" in s or not s.isascii():
        return None
    try:
        v = float(s)
    except ValueError:
        return None
    if not math.isfinite(v):
        return None
    return v


def validate_field(name: str, raw: str) -> Optional[ErrorKind]:
    value = "" if raw is None else str(raw)
    if not value.strip():
        return ErrorKind.REQUIRED

    if name in COORD_FIELDS:
        if _COORD_RE.fullmatch(value) is None:
            return ErrorKind.INVALID_COORDINATE
        return None

    if name in DELTA_FIELDS:
        if parse_number(value) is None:
            return ErrorKind.INVALID_NUMBER
        return None

    if name == "speed":
        s = parse_number(value)
        if s is None:
            return ErrorKind.INVALID_NUMBER
        if s < 0:
            return ErrorKind.MIN_ZERO
        return None

    if name == "count":
        c = parse_number(value)
        if c is None:
            return ErrorKind.INVALID_NUMBER
        if not c.is_integer():
            return ErrorKind.INVALID_INTEGER
        if c < 0:
            return ErrorKind.MIN_ZERO
        return None

    # particle, mode: presence only
    return None


def validate_state(state: CommandState) -> Dict[str, ErrorKind]:
    """Return {field: error} for every failing field (empty dict when valid)."""
    out: Dict[str, ErrorKind] = {}
    for name in FIELD_ORDER:
        err = validate_field(name, state.get(name))
        if err is not None:
            out[name] = err
    return out


def message_for(kind: ErrorKind, lang: str = "en") -> str:
    table = VALIDATION_MESSAGES.get(lang) or VALIDATION_MESSAGES["en"]
    return table.get(kind.value, kind.value)


def validation_snapshot(state: CommandState, lang: str = "en") -> Dict[str, Any]:
    """Return validation snapshot: {'ok': bool, 'errors': [...], 'warnings': [...]}"""
    errors: List[str] = []
    warnings: List[str] = []
    for name, kind in validate_state(state).items():
        errors.append(f"{name}: {message_for(kind, lang)}")
    if not errors and state.mode not in ("normal", "force"):
        warnings.append(f"mode '{state.mode}' is not one of normal|force")
    return {"ok": len(errors) == 0, "errors": errors, "warnings": warnings}
