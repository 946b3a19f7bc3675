"""Round state: the board, accepted words, path cache and grading."""
from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from boggle.board import Grid
from boggle.solver import Path, enumerate_words, locate_path, rank_words, score_path
from boggle.trie import Trie

logger = logging.getLogger("boggle")


class Rejection(str, enum.Enum):
    ROUND_OVER = "round_over"
    EMPTY = "empty"
    INVALID_CHARS = "invalid_chars"
    TOO_SHORT = "too_short"
    DUPLICATE = "duplicate"
    NOT_IN_DICTIONARY = "not_in_dictionary"
    NOT_ON_BOARD = "not_on_board"


class SubmissionRejected(Exception):
    def __init__(self, reason: Rejection, word: str = "", message: str = ""):
        self.reason = reason
        self.word = word
        self.message = message or reason.value
        super().__init__(self.message)


class RoundStillActive(Exception):
    pass


@dataclass
class Acceptance:
    word: str
    score: int
    path: Path


@dataclass
class ChallengeResult:
    found_count: int
    total_possible: int
    max_score: int
    missed: list[tuple[str, int]] = field(default_factory=list)


def normalize_word(raw: str | None) -> str:
    word = (raw or "").strip().upper()
    if not word:
        raise SubmissionRejected(Rejection.EMPTY, word, "Please enter a word.")
    if not (word.isascii() and word.isalpha()):
        raise SubmissionRejected(Rejection.INVALID_CHARS, word, "Invalid characters: only A-Z allowed.")
    return word


class RoundSession:
    """One player's round. A new round means a new session; nothing carries over."""

    def __init__(
        self,
        grid: Grid,
        dictionary: set[str] | frozenset[str],
        trie: Trie,
        min_length: int = 3,
        round_seconds: float = 60,
        clock: Callable[[], float] | None = None,
    ):
        self.grid = grid
        self.dictionary = dictionary
        self.trie = trie
        self.min_length = min_length
        self.round_seconds = round_seconds
        self._clock = clock or time.monotonic
        self._deadline = self._clock() + round_seconds if round_seconds > 0 else None

        self.accepted: dict[str, int] = {}
        self.total_score = 0
        self._ended = False
        self._path_cache: dict[str, Path] = {}
        self._solution: dict[str, int] | None = None

    @property
    def active(self) -> bool:
        if self._ended:
            return False
        return self._deadline is None or self._clock() < self._deadline

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def time_remaining(self) -> float:
        if not self.active:
            return 0.0
        if self._deadline is None:
            return float("inf")
        return max(0.0, self._deadline - self._clock())

    def end(self) -> int:
        if not self._ended:
            self._ended = True
            logger.info("Round ended: %d words, score %d", len(self.accepted), self.total_score)
        return self.total_score

    def find_path(self, word: str) -> Path | None:
        path = self._path_cache.get(word)
        if path is None:
            path = locate_path(self.grid, word, self.min_length)
            if path is not None:
                self._path_cache[word] = path
        return path

    def submit(self, raw: str | None) -> Acceptance:
        if not self.active:
            raise SubmissionRejected(Rejection.ROUND_OVER, (raw or "").strip().upper(), "The round is over.")

        word = normalize_word(raw)
        if len(word) < self.min_length:
            raise SubmissionRejected(
                Rejection.TOO_SHORT, word, f"Too short: minimum length is {self.min_length}."
            )
        if word in self.accepted:
            raise SubmissionRejected(Rejection.DUPLICATE, word, "Duplicate: already accepted.")
        if word not in self.dictionary:
            raise SubmissionRejected(Rejection.NOT_IN_DICTIONARY, word, "Not in dictionary.")

        path = self.find_path(word)
        if path is None:
            raise SubmissionRejected(Rejection.NOT_ON_BOARD, word, "Cannot be formed on this grid.")

        score = score_path(self.grid, path)
        self.accepted[word] = score
        self.total_score += score
        logger.info("Accepted %s (+%d, total %d)", word, score, self.total_score)
        return Acceptance(word=word, score=score, path=list(path))

    def solution(self) -> dict[str, int]:
        if self._solution is None:
            self._solution = enumerate_words(self.grid, self.trie, self.min_length)
        return self._solution

    def challenge(self, max_missed: int = 0) -> ChallengeResult:
        """Grade the finished round against every word on the board."""
        if self.active:
            raise RoundStillActive("Finish the round before grading it")

        solution = self.solution()
        missed = rank_words({w: s for w, s in solution.items() if w not in self.accepted})
        if max_missed > 0:
            missed = missed[:max_missed]
        return ChallengeResult(
            found_count=len(self.accepted),
            total_possible=len(solution),
            max_score=sum(solution.values()),
            missed=missed,
        )
