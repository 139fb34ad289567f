"""Edit buffer: single-line text, cursor and kill ring."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from termline.kill_ring import KillRing
from termline.utils import is_word_char


@dataclass(frozen=True)
class EditBuffer:
    """Immutable line-editing state.

    ``cursor`` indexes Unicode scalar values in ``text`` and always satisfies
    ``0 <= cursor <= len(text)``. Every operation returns a new buffer;
    operations that cannot apply (deleting at a boundary, moving past an
    end) return the buffer unchanged.
    """

    text: str = ""
    cursor: int = 0
    kill_ring: KillRing = field(default_factory=KillRing)

    def __post_init__(self) -> None:
        clamped = max(0, min(self.cursor, len(self.text)))
        if clamped != self.cursor:
            object.__setattr__(self, "cursor", clamped)

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def before_cursor(self) -> str:
        return self.text[: self.cursor]

    @property
    def after_cursor(self) -> str:
        return self.text[self.cursor :]

    # -- insertion ------------------------------------------------------------

    def insert(self, char: str) -> EditBuffer:
        """Splice *char* in at the cursor and advance past it."""
        if not char:
            return self
        return replace(
            self,
            text=self.before_cursor + char + self.after_cursor,
            cursor=self.cursor + len(char),
        )

    def replace_text(self, text: str) -> EditBuffer:
        """Load *text* into the buffer with the cursor at its end."""
        return replace(self, text=text, cursor=len(text))

    # -- character deletion ---------------------------------------------------

    def backward_delete(self) -> EditBuffer:
        if self.cursor == 0:
            return self
        return replace(
            self,
            text=self.text[: self.cursor - 1] + self.after_cursor,
            cursor=self.cursor - 1,
        )

    def forward_delete(self) -> EditBuffer:
        if self.cursor >= len(self.text):
            return self
        return replace(self, text=self.before_cursor + self.text[self.cursor + 1 :])

    # -- movement -------------------------------------------------------------

    def move_left(self) -> EditBuffer:
        if self.cursor == 0:
            return self
        return replace(self, cursor=self.cursor - 1)

    def move_right(self) -> EditBuffer:
        if self.cursor >= len(self.text):
            return self
        return replace(self, cursor=self.cursor + 1)

    def move_to_start(self) -> EditBuffer:
        return replace(self, cursor=0)

    def move_to_end(self) -> EditBuffer:
        return replace(self, cursor=len(self.text))

    def move_word_backward(self) -> EditBuffer:
        return replace(self, cursor=self.word_boundary_backward(self.cursor))

    def move_word_forward(self) -> EditBuffer:
        return replace(self, cursor=self.word_boundary_forward(self.cursor))

    # -- word boundaries ------------------------------------------------------

    def word_boundary_backward(self, pos: int) -> int:
        """Skip non-word characters, then word characters, going backward."""
        pos = max(0, min(pos, len(self.text)))
        while pos > 0 and not is_word_char(self.text[pos - 1]):
            pos -= 1
        while pos > 0 and is_word_char(self.text[pos - 1]):
            pos -= 1
        return pos

    def word_boundary_forward(self, pos: int) -> int:
        """Skip non-word characters, then word characters, going forward."""
        end = len(self.text)
        pos = max(0, min(pos, end))
        while pos < end and not is_word_char(self.text[pos]):
            pos += 1
        while pos < end and is_word_char(self.text[pos]):
            pos += 1
        return pos

    # -- kills ----------------------------------------------------------------

    def kill_to_end(self) -> EditBuffer:
        killed = self.after_cursor
        if not killed:
            return self
        return replace(
            self,
            text=self.before_cursor,
            kill_ring=self.kill_ring.push(killed),
        )

    def kill_to_start(self) -> EditBuffer:
        killed = self.before_cursor
        return replace(
            self,
            text=self.after_cursor,
            cursor=0,
            kill_ring=self.kill_ring.push(killed),
        )

    def kill_word_backward(self) -> EditBuffer:
        start = self.word_boundary_backward(self.cursor)
        killed = self.text[start : self.cursor]
        if not killed:
            return self
        return replace(
            self,
            text=self.text[:start] + self.after_cursor,
            cursor=start,
            kill_ring=self.kill_ring.push(killed),
        )

    def delete_word_forward(self) -> EditBuffer:
        """Remove up to the next word boundary without touching the kill ring."""
        end = self.word_boundary_forward(self.cursor)
        if end == self.cursor:
            return self
        return replace(self, text=self.before_cursor + self.text[end:])
