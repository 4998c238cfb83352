# app/words.py
from __future__ import annotations
from typing import Dict, List

from app.settings import Difficulty

# Turkmen word pools. "tiz ýazmak" keeps its inner space on purpose.
SHORT_WORDS: List[str] = [
    "kod", "wagt", "ömür", "adam", "iş", "söz", "ýer", "ýüz",
    "dost", "göz", "öý", "dünýä", "gezek", "el", "gün", "mesele", "fakt",
    "mysal", "topar", "san", "ýol", "bölek", "sorag", "ýyl",
    "iş", "görnüş", "waka", "güýç", "suw", "ata", "aýal", "ýurt",
    "şäher", "ýer", "ulag", "kanun", "ses", "kitap", "tema", "ýagty", "gara", "ak",
]

LONG_WORDS: List[str] = [
    "minimalizm", "tiz ýazmak", "klawiatura", "monitor", "programma",
    "häsiýetnama", "internet", "işjeňlik", "synaglar", "çözgüt",
    "düşünmek", "başlangyç", "döwrebap", "tehnologiýa", "kommunikasiýa",
    "geljekde", "ünsli", "gymmatly", "tizligi", "netijelilik",
    "aýratynlyk", "seresaply", "ýazmaly", "kompýuter", "Türkmenistan",
    "düzgünnama", "amatlylyk", "doly",
]

WORD_LISTS: Dict[Difficulty, List[str]] = {
    Difficulty.SHORT: SHORT_WORDS,
    Difficulty.LONG: LONG_WORDS,
}
