from __future__ import annotations
from collections import deque
import time
from typing import Deque, List

_MAX = 400
_buf: Deque[str] = deque(maxlen=_MAX)

# Set by the CLI / GUI entry points to mirror lines to stderr.
echo = False


def push(line: str) -> None:
    """Append one line to the in-memory log (oldest lines fall off)."""
    stamped = time.strftime("%H:%M:%S") + " " + str(line)
    _buf.append(stamped + "\n")
    if echo:
        import sys
        sys.stderr.write(stamped + "\n")


def tail(n: int = 200) -> List[str]:
    if n <= 0:
        return []
    return list(_buf)[-n:]


def clear() -> None:
    _buf.clear()
