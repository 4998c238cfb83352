# services/passage_generator.py
from __future__ import annotations
import random
from typing import Mapping, Sequence

from app.errors import InvalidConfiguration
from app.settings import Difficulty, WORDS_PER_PASSAGE
from app.state import Character, Passage
from utils.file_handler import load_word_pools


def generate(pool: Sequence[str], word_count: int, rng: random.Random | None = None) -> Passage:
    """
    Draw ``word_count`` words with replacement from ``pool`` and lay them out
    one character per code point, each word followed by a single space.
    """
    if not pool:
        raise InvalidConfiguration("Word pool is empty")
    if word_count < 1:
        raise InvalidConfiguration(f"Word count must be at least 1, got {word_count}")

    rng = rng or random
    chars: list[Character] = []
    for _ in range(word_count):
        word = rng.choice(pool)
        for ch in word:
            chars.append(Character(expected=ch, is_space=ch.isspace()))
        chars.append(Character(expected=" ", is_space=True))
    return Passage(chars)


class PassageGenerator:
    def __init__(
        self,
        word_pools: Mapping[Difficulty, Sequence[str]] | None = None,
        word_count: int = WORDS_PER_PASSAGE,
        rng: random.Random | None = None,
    ):
        if word_pools is None:
            word_pools = load_word_pools()
        self.word_pools = dict(word_pools)
        self.word_count = word_count
        self.rng = rng or random.Random()

    def for_difficulty(self, difficulty: Difficulty) -> Passage:
        pool = self.word_pools.get(Difficulty(difficulty), ())
        return generate(pool, self.word_count, self.rng)
