from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Literal


DEFAULT_MEMORY_WINDOW = 5


@dataclass(frozen=True)
class Exchange:
    message: str
    reply: str


class MemoryStore:
    """Bounded FIFO of the most recent exchanges, oldest first.

    No locking: concurrent requests sharing one store may interleave their
    appends, which is accepted.
    """

    def __init__(self, capacity: int = DEFAULT_MEMORY_WINDOW) -> None:
        self.capacity = max(1, int(capacity))
        self._exchanges: list[Exchange] = []

    def append(self, message: str, reply: str) -> None:
        self._exchanges.append(Exchange(message=message, reply=reply))
        while len(self._exchanges) > self.capacity:
            self._exchanges.pop(0)

    def recent(self) -> list[Exchange]:
        return list(self._exchanges)

    def __len__(self) -> int:
        return len(self._exchanges)


class SessionMemoryRegistry:
    """Hands out one MemoryStore per session id.

    In "shared" scope every session id resolves to the same process-wide
    store. Session stores beyond ``max_sessions`` are evicted least recently
    used first.
    """

    def __init__(
        self,
        *,
        capacity: int = DEFAULT_MEMORY_WINDOW,
        scope: Literal["session", "shared"] = "session",
        max_sessions: int = 1000,
    ) -> None:
        self.capacity = capacity
        self.scope = scope
        self.max_sessions = max(1, int(max_sessions))
        self._shared = MemoryStore(capacity)
        self._sessions: OrderedDict[str, MemoryStore] = OrderedDict()

    def for_session(self, session_id: str) -> MemoryStore:
        if self.scope == "shared":
            return self._shared

        store = self._sessions.get(session_id)
        if store is None:
            store = MemoryStore(self.capacity)
            self._sessions[session_id] = store
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
        else:
            self._sessions.move_to_end(session_id)
        return store

    def __len__(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        self._shared = MemoryStore(self.capacity)
        self._sessions.clear()
