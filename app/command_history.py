from __future__ import annotations
from typing import Iterator, List, Optional

from models.codec import encode
from models.command import CommandState

HISTORY_CAPACITY = 10


class CommandHistory:
    """Newest-first log of copied commands.

    The caller only records states that validated cleanly. Adjacent
    duplicates (same encoded text) are collapsed; the oldest entry is dropped
    once capacity is exceeded.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self.capacity = max(1, int(capacity))
        self._entries: List[CommandState] = []

    def record(self, state: CommandState) -> bool:
        """Push state to the front. Returns False when it was skipped as a duplicate."""
        if self._entries and encode(self._entries[0]) == encode(state):
            return False
        self._entries.insert(0, state)
        del self._entries[self.capacity:]
        return True

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> List[CommandState]:
        return list(self._entries)

    @property
    def newest(self) -> Optional[CommandState]:
        return self._entries[0] if self._entries else None

    def commands(self) -> List[str]:
        return [encode(e) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CommandState]:
        return iter(list(self._entries))

    def __getitem__(self, idx: int) -> CommandState:
        return self._entries[idx]
