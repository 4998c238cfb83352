from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math


@dataclass(frozen=True)
class Metrics:
    wpm: int
    accuracy: int
    mistakes: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute(cursor: int, mistakes: int, duration_seconds: float) -> Metrics:
    """
    Final score for a session.
    WPM = (correct chars / 5) / (duration minutes), rounded half up.
    Accuracy = correct chars / typed chars, floored percent.
    """
    mistakes = max(0, int(mistakes))
    correct = max(0, cursor - mistakes)

    wpm = 0
    minutes = duration_seconds / 60.0 if duration_seconds else 0.0
    if minutes > 0:
        raw = (correct / 5.0) / minutes
        if math.isfinite(raw) and raw > 0:
            wpm = _round_half_up(raw)

    accuracy = 0
    if cursor > 0:
        accuracy = min(100, (correct * 100) // cursor)

    return Metrics(wpm=wpm, accuracy=accuracy, mistakes=mistakes)


def progress_wpm(samples: Sequence[Tuple[float, int, int]]) -> Tuple[List[float], List[float]]:
    """
    WPM over time from (elapsed_seconds, cursor, mistakes) samples.
    Uses elapsed time, not the configured duration, so early points are meaningful.
    """
    times: List[float] = []
    values: List[float] = []
    for elapsed, cursor, mistakes in samples:
        if elapsed <= 0:
            continue
        correct = max(0, cursor - mistakes)
        times.append(float(elapsed))
        values.append((correct / 5.0) / (elapsed / 60.0))
    return times, values


def smooth(values: List[float], factor: float = 0.25) -> List[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out
