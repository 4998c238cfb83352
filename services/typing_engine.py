# services/typing_engine.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import time

from app.errors import FailedPrecondition
from app.state import Passage, Phase, SessionSnapshot, SessionState, Verdict


class Direction(Enum):
    FORWARD = "forward"
    BACK = "back"


class StepKind(Enum):
    STEPPED = "stepped"
    COMPLETED = "completed"
    IGNORED = "ignored"


@dataclass(frozen=True)
class StepResult:
    kind: StepKind
    direction: Direction | None = None
    index: int | None = None

    @classmethod
    def stepped(cls, direction: Direction, index: int) -> StepResult:
        return cls(StepKind.STEPPED, direction, index)

    @property
    def is_completed(self) -> bool:
        return self.kind is StepKind.COMPLETED

    @property
    def is_ignored(self) -> bool:
        return self.kind is StepKind.IGNORED


StepResult.COMPLETED = StepResult(StepKind.COMPLETED)
StepResult.IGNORED = StepResult(StepKind.IGNORED)


class ClockKind(Enum):
    CONTINUING = "continuing"
    EXPIRED = "expired"


@dataclass(frozen=True)
class ClockResult:
    kind: ClockKind
    remaining: int = 0

    @classmethod
    def continuing(cls, remaining: int) -> ClockResult:
        return cls(ClockKind.CONTINUING, remaining)

    @classmethod
    def expired(cls) -> ClockResult:
        return cls(ClockKind.EXPIRED, 0)

    @property
    def is_expired(self) -> bool:
        return self.kind is ClockKind.EXPIRED


class TypingEngine:
    """
    Reconciles raw input-buffer changes against a passage.
    Works on the SessionState and Passage it is bound to; the owner swaps
    them out with bind() on reset.
    """

    def __init__(
        self,
        state: SessionState,
        passage: Passage | None = None,
        now: Callable[[], float] = time.time,
    ):
        self._now = now
        self.bind(state, passage)

    def bind(self, state: SessionState, passage: Passage | None):
        self.state = state
        self.passage = passage

    def start(self):
        if self.state.phase is Phase.IDLE:
            self.state.phase = Phase.RUNNING
            self.state.started_at = self._now()

    def apply_input(self, previous_raw_length: int, new_raw_length: int, last_typed_char: str) -> StepResult:
        if self.passage is None:
            raise FailedPrecondition("apply_input called before a passage exists")

        s = self.state
        if s.phase is Phase.FINISHED:
            return StepResult.IGNORED
        # expiry wins over input that arrives in the same instant
        if s.phase is Phase.RUNNING and s.time_remaining <= 0:
            return StepResult.IGNORED

        self.start()
        length = len(self.passage)

        # any shrink of the buffer is one step back
        if new_raw_length < previous_raw_length:
            if s.cursor == 0:
                return StepResult.IGNORED
            s.cursor -= 1
            ch = self.passage[s.cursor]
            if ch.verdict is Verdict.INCORRECT:
                s.mistakes -= 1
            ch.verdict = Verdict.PENDING
            return StepResult.stepped(Direction.BACK, s.cursor)

        if s.cursor >= length:
            return StepResult.IGNORED

        # growth by several chars (paste, IME) is one step with the last char
        ch = self.passage[s.cursor]
        if last_typed_char == ch.expected:
            ch.verdict = Verdict.CORRECT
        else:
            ch.verdict = Verdict.INCORRECT
            s.mistakes += 1
        s.cursor += 1

        if s.cursor == length:
            s.phase = Phase.FINISHED
            return StepResult.COMPLETED
        return StepResult.stepped(Direction.FORWARD, s.cursor)

    def tick(self) -> ClockResult:
        s = self.state
        if s.phase is not Phase.RUNNING:
            if s.time_remaining <= 0:
                return ClockResult.expired()
            return ClockResult.continuing(s.time_remaining)

        s.time_remaining = max(0, s.time_remaining - 1)
        if s.time_remaining == 0:
            s.phase = Phase.FINISHED
            return ClockResult.expired()
        return ClockResult.continuing(s.time_remaining)

    def snapshot(self) -> SessionSnapshot:
        s = self.state
        return SessionSnapshot(
            cursor=s.cursor,
            mistakes=s.mistakes,
            phase=s.phase,
            time_remaining=s.time_remaining,
            started_at=s.started_at,
            length=len(self.passage) if self.passage is not None else 0,
        )
