import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import httpx

from boggle.trie import Trie, build_trie

logger = logging.getLogger("boggle")

_WORD_RE = re.compile(r"^[A-Z]+$")

# Small fallback list so a round can still be played without a word file
DEMO_WORDS = (
    "CAT", "CATS", "DOG", "DOGS", "TREE", "TREES", "BIRD", "BIRDS", "FISH",
    "NOTE", "NOTES", "TONE", "TONES", "STONE", "STONES", "ONES", "ONE",
    "EAT", "ATE", "TEA", "SEA", "SEAT", "SEATS", "EARS", "EAR", "ARE", "AREA",
    "RATE", "RATED", "RATES", "TAR", "RAT", "ART",
    "SAND", "AND", "HAND", "HANDS", "HARD", "HARE", "HEAR", "HEARD", "READ", "READS",
    "QUIET", "QUIT", "QUITE", "QUEST", "QUESTION", "QUEUE", "QUART", "QUARTS",
    "HOME", "HOMES", "SOME", "SAME", "NAME", "NAMES", "GAME", "GAMES",
    "MIND", "MINDS", "TIME", "TIMES", "TIMER", "TAME", "TAMES",
    "WORD", "WORDS", "BOARD", "BOARDS", "GRID", "GRIDS",
)


@dataclass(frozen=True)
class Dictionary:
    words: frozenset
    trie: Trie
    source: str

    def __len__(self) -> int:
        return len(self.words)


def parse_words(lines: Iterable[str], min_length: int = 3) -> set[str]:
    words = set()
    for line in lines:
        word = line.strip().upper()
        if len(word) >= min_length and _WORD_RE.match(word):
            words.add(word)
    return words


def load_words(path: str, min_length: int = 3) -> set[str]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_words(f, min_length)


def fetch_words(url: str, min_length: int = 3, timeout: float = 10.0) -> set[str]:
    resp = httpx.get(url, timeout=timeout, follow_redirects=True)
    resp.raise_for_status()
    return parse_words(resp.text.splitlines(), min_length)


def load_dictionary(cfg) -> Dictionary:
    """Load words from DICTIONARY_URL, then DICTIONARY_PATH, then the demo list."""
    if cfg.DICTIONARY_URL:
        try:
            words = fetch_words(cfg.DICTIONARY_URL, cfg.MIN_WORD_LENGTH, cfg.DICTIONARY_TIMEOUT)
        except httpx.HTTPError as e:
            logger.warning("Could not fetch dictionary from %s: %s", cfg.DICTIONARY_URL, e)
        else:
            if words:
                return _make("url", words)
            logger.warning("Dictionary at %s has no usable words", cfg.DICTIONARY_URL)

    path = Path(cfg.DICTIONARY_PATH)
    if path.is_file():
        try:
            words = load_words(str(path), cfg.MIN_WORD_LENGTH)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read dictionary file %s: %s", path, e)
        else:
            if words:
                return _make("file", words)
            logger.warning("Dictionary file %s has no usable words", path)
    else:
        logger.warning("Dictionary file %s not found", path)

    logger.warning("Using demo dictionary; place a word list at %s for the full game", path)
    return _make("demo", parse_words(DEMO_WORDS, cfg.MIN_WORD_LENGTH))


def _make(source: str, words: set[str]) -> Dictionary:
    trie = build_trie(words)
    logger.info("Dictionary loaded from %s (%d words)", source, len(words))
    return Dictionary(words=frozenset(words), trie=trie, source=source)
