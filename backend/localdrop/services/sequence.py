"""Id allocation and presentation order shared by both registries.

Ids come from a per-registry counter that starts at 1 and only moves
forward. Gaps left by deletions are never filled; the counter goes back to
1 only when the whole registry is cleared.

Storage order is insertion order. Newest-first order is computed on every
read instead of being kept in storage.
"""
from typing import Iterable, Protocol, TypeVar
from datetime import datetime


class IdSequence:
    """Monotonic id counter. Not thread-safe: callers hold their registry lock."""

    def __init__(self, start: int = 1):
        self._start = start
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    def reset(self) -> None:
        self._next = self._start


class _Ordered(Protocol):
    id: int
    created_at: datetime


E = TypeVar("E", bound=_Ordered)


def newest_first(entries: Iterable[E]) -> list[E]:
    """Sort by creation time, newest first. Equal timestamps put the higher id first."""
    return sorted(entries, key=lambda e: (e.created_at, e.id), reverse=True)
