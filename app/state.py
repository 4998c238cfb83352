from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List


class Verdict(Enum):
    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class Character:
    expected: str
    verdict: Verdict = Verdict.PENDING
    is_space: bool = False


@dataclass
class Passage:
    characters: List[Character] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.characters)

    def __getitem__(self, index: int) -> Character:
        return self.characters[index]

    def __iter__(self) -> Iterator[Character]:
        return iter(self.characters)

    @property
    def text(self) -> str:
        return "".join(c.expected for c in self.characters)

    def count_incorrect(self, upto: int) -> int:
        return sum(1 for c in self.characters[:upto] if c.verdict is Verdict.INCORRECT)


@dataclass
class SessionState:
    cursor: int = 0
    mistakes: int = 0
    phase: Phase = Phase.IDLE
    time_remaining: int = 0
    started_at: float = 0.0

    def reset(self, duration: int):
        self.cursor = 0
        self.mistakes = 0
        self.phase = Phase.IDLE
        self.time_remaining = duration
        self.started_at = 0.0


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session handed to rendering and metrics."""

    cursor: int
    mistakes: int
    phase: Phase
    time_remaining: int
    started_at: float
    length: int

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED
