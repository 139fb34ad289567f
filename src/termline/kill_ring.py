"""Bounded ring of killed text spans, most recent first."""

from __future__ import annotations

from dataclasses import dataclass

KILL_RING_CAPACITY = 10


@dataclass(frozen=True)
class KillRing:
    """Tracks killed (deleted) text entries.

    The ring is immutable: ``push`` returns a new ring. Entries are stored
    newest first and the ring never holds more than ``capacity`` entries;
    pushing onto a full ring discards the oldest one.
    """

    entries: tuple[str, ...] = ()
    capacity: int = KILL_RING_CAPACITY

    def push(self, text: str) -> KillRing:
        """Return a ring with *text* at the front. Empty text is ignored."""
        if not text:
            return self
        entries = (text,) + self.entries
        return KillRing(entries[: self.capacity], self.capacity)

    def peek(self) -> str | None:
        """Get the most recent entry without modifying the ring."""
        return self.entries[0] if self.entries else None

    @property
    def length(self) -> int:
        return len(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
