"""Session state for one read_line call."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Sequence, Union

from termline.buffer import EditBuffer
from termline.history import HistoryNavigator

CancelReason = Literal["interrupt", "eof", "io-error"]


@dataclass(frozen=True)
class LineState:
    """Everything the dispatcher reads and updates while editing."""

    prompt: str = ""
    buffer: EditBuffer = field(default_factory=EditBuffer)
    navigator: HistoryNavigator = field(default_factory=HistoryNavigator)

    @classmethod
    def new(cls, prompt: str = "", history: Sequence[str] = ()) -> LineState:
        return cls(prompt=prompt, navigator=HistoryNavigator.start(history))

    def with_buffer(self, buffer: EditBuffer) -> LineState:
        return replace(self, buffer=buffer)


@dataclass(frozen=True)
class Accepted:
    text: str


@dataclass(frozen=True)
class Cancelled:
    reason: CancelReason = "interrupt"


Outcome = Union[Accepted, Cancelled]


@dataclass(frozen=True)
class Editing:
    line: LineState


@dataclass(frozen=True)
class Done:
    outcome: Outcome


SessionState = Union[Editing, Done]
