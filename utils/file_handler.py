import logging
import os
from pathlib import Path
from typing import Dict, List

from app.settings import Difficulty
from app.words import WORD_LISTS

logger = logging.getLogger(__name__)

WORDS_DIR = Path("assets/words")


def ensure_app_files():
    # Data dir for the sqlite store
    os.makedirs("data", exist_ok=True)

    # SFX placeholder so QSoundEffect has a valid target
    os.makedirs("assets/sfx", exist_ok=True)
    p = os.path.join("assets/sfx", "key_click.wav")
    if not os.path.exists(p):
        open(p, "ab").close()

    os.makedirs(WORDS_DIR, exist_ok=True)


def _read_words(path: Path) -> List[str]:
    # one word per line; blank lines and "#" comments are skipped
    words = []
    for line in path.read_text(encoding="utf-8").splitlines():
        word = line.strip()
        if word and not word.startswith("#"):
            words.append(word)
    return words


def load_word_pool(difficulty: Difficulty, base: Path = WORDS_DIR) -> List[str]:
    """Word pool for a difficulty, from ``<base>/<difficulty>.txt`` when present."""
    difficulty = Difficulty(difficulty)
    path = Path(base) / f"{difficulty.value}.txt"
    try:
        if path.exists():
            words = _read_words(path)
            if words:
                return words
            logger.warning("Word file %s is empty, using built-in list", path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read word file %s: %s", path, e)
    return list(WORD_LISTS[difficulty])


def load_word_pools(base: Path = WORDS_DIR) -> Dict[Difficulty, List[str]]:
    return {d: load_word_pool(d, base) for d in Difficulty}
