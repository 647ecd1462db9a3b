from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from boggle.grid import Grid
from boggle.metrics import StageTimer
from boggle.parallel import find_words_parallel, verify_words_parallel
from boggle.search import MIN_WORD_LENGTH, SearchEngine
from boggle.settings import STRATEGIES

logger = logging.getLogger("boggle")


@dataclass
class SolveResult:
    words: list[str]
    strategy: str
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.words)


def parse_dictionary(text: str) -> list[str]:
    """One candidate per line; lowercased, blank lines and repeats dropped, order kept."""
    words = (line.strip().lower() for line in text.splitlines())
    return list(dict.fromkeys(w for w in words if w))


def load_dictionary(path: str | Path) -> list[str]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_dictionary(f.read())


def _as_grid(board: Grid | str) -> Grid:
    return board if isinstance(board, Grid) else Grid.parse(board)


def _as_words(dictionary: str | Iterable[str]) -> list[str]:
    if isinstance(dictionary, str):
        return parse_dictionary(dictionary)
    return list(dict.fromkeys(w.strip().lower() for w in dictionary if w.strip()))


def solve(
    board: Grid | str,
    dictionary: str | Iterable[str],
    *,
    strategy: str = "trie",
    parallel: bool = False,
    workers: int | None = None,
    min_word_length: int = MIN_WORD_LENGTH,
    timer: StageTimer | None = None,
) -> SolveResult:
    """Find every dictionary word that can be traced on the board.

    ``strategy`` is "trie" (one prefix-tree-guided sweep of the board) or
    "filter" (per-word approximate filter followed by exact search); both
    return the same words. Words come back in discovery order.

    Raises BoardSizeError for a board smaller than 3 x 3 or not square.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"unknown strategy {strategy!r}, expected one of {STRATEGIES}")
    timer = timer or StageTimer()

    with timer.stage("parse"):
        grid = _as_grid(board)
        words = _as_words(dictionary)
    logger.info("Board %dx%d, %d dictionary words, strategy=%s parallel=%s",
                grid.size, grid.size, len(words), strategy, parallel)

    engine = SearchEngine(grid, min_word_length)
    if strategy == "filter":
        with timer.stage("verify"):
            if parallel:
                found = verify_words_parallel(grid, words, workers, min_word_length)
            else:
                found = engine.verify_words(words)
    else:
        with timer.stage("build_trie"):
            tree = engine.build_tree(words)
        logger.info("Trie built: %d words, %d nodes", len(tree), tree.num_nodes)
        with timer.stage("search"):
            if parallel:
                found = find_words_parallel(grid, tree, workers)
            else:
                found = engine.find_words(tree)

    logger.info("Found %d words", len(found))
    return SolveResult(words=found, strategy=strategy, timings=timer.summary())


def count_words(board: Grid | str, dictionary: str | Iterable[str], **kwargs) -> int:
    return solve(board, dictionary, **kwargs).count


def find_words(board: Grid | str, dictionary: str | Iterable[str], **kwargs) -> set[str]:
    return set(solve(board, dictionary, **kwargs).words)


def sort_words(words: Iterable[str], max_results: int = 0) -> list[str]:
    """Longest first, then alphabetical; ``max_results`` of 0 keeps everything."""
    result = sorted(words, key=lambda w: (-len(w), w))
    return result[:max_results] if max_results > 0 else result
