from __future__ import annotations

import random
from collections.abc import Iterator
from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from app.settings import Difficulty
from app.state import Passage, SessionState
from services.passage_generator import PassageGenerator, generate
from utils.db_helper import ResultStore


@pytest.fixture(scope="session", autouse=True)
def qapp() -> Iterator[QCoreApplication]:
    """One Qt core application for the whole run; timers need an event dispatcher."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def store(tmp_path: Path) -> ResultStore:
    return ResultStore(str(tmp_path / "data" / "test.db"))


@pytest.fixture
def generator() -> PassageGenerator:
    pools = {
        Difficulty.SHORT: ["ab", "cd"],
        Difficulty.LONG: ["klawiatura", "monitor"],
    }
    return PassageGenerator(pools, word_count=3, rng=random.Random(7))


@pytest.fixture
def passage() -> Passage:
    return generate(["abc"], 2, random.Random(0))


@pytest.fixture
def state() -> SessionState:
    s = SessionState()
    s.reset(30)
    return s
