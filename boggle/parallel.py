"""Data-parallel dispatch of the search over a thread pool.

Workers share only read-only inputs (the Grid and, for the trie-guided search,
the prefix tree). Each task builds its own SearchEngine, so path-state tables
and "seen" flags are never shared, and results are combined by plain
concatenation or summation once every task has finished.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from boggle.grid import Grid
from boggle.search import MIN_WORD_LENGTH, SearchEngine
from boggle.trie import Trie

logger = logging.getLogger("boggle")

T = TypeVar("T")
R = TypeVar("R")


def resolve_workers(workers: int | None = None) -> int:
    """Worker count to use; None or 0 means one per available core."""
    if workers is None or workers == 0:
        return os.cpu_count() or 1
    if workers < 0:
        raise ValueError(f"workers must be positive, got {workers}")
    return workers


def partition(items: Sequence[T], parts: int) -> list[Sequence[T]]:
    """Split ``items`` into at most ``parts`` contiguous, non-empty slices of near-equal size."""
    if parts < 1:
        raise ValueError(f"parts must be positive, got {parts}")
    parts = min(parts, len(items))
    if parts == 0:
        return []
    size, extra = divmod(len(items), parts)
    out = []
    start = 0
    for i in range(parts):
        end = start + size + (1 if i < extra else 0)
        out.append(items[start:end])
        start = end
    return out


def _run_partitions(task: Callable[[Sequence[T]], R], chunks: list[Sequence[T]],
                    workers: int) -> list[R]:
    """Run ``task`` on each chunk and return the results in chunk order."""
    results: list[R | None] = [None] * len(chunks)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(task, chunk): i for i, chunk in enumerate(chunks)}
        for future in as_completed(futures):
            i = futures[future]
            # Worker errors propagate to the caller
            results[i] = future.result()
            logger.debug("partition %d/%d done (%d items)", i + 1, len(chunks), len(chunks[i]))
    return results


def verify_words_parallel(grid: Grid, words: Sequence[str], workers: int | None = None,
                          min_word_length: int = MIN_WORD_LENGTH) -> list[str]:
    """Filter-then-verify with the word list split across worker threads."""
    workers = resolve_workers(workers)
    words = list(dict.fromkeys(words))
    chunks = partition(words, workers)
    logger.info("verifying %d words across %d partitions", len(words), len(chunks))

    def task(chunk: Sequence[str]) -> list[str]:
        return SearchEngine(grid, min_word_length).verify_words(chunk)

    found: list[str] = []
    for part in _run_partitions(task, chunks, workers):
        found.extend(part)
    return found


def count_words_parallel(grid: Grid, words: Sequence[str], workers: int | None = None,
                         min_word_length: int = MIN_WORD_LENGTH) -> int:
    workers = resolve_workers(workers)
    words = list(dict.fromkeys(words))
    chunks = partition(words, workers)

    def task(chunk: Sequence[str]) -> int:
        return len(SearchEngine(grid, min_word_length).verify_words(chunk))

    return sum(_run_partitions(task, chunks, workers))


def find_words_parallel(grid: Grid, tree: Trie, workers: int | None = None) -> list[str]:
    """Trie-guided search with the root cells split across worker threads.

    Every partition keeps its own "seen" flags, so a word reachable from roots
    in two partitions is reported by both; duplicates are dropped afterwards,
    keeping the earliest partition's order.
    """
    workers = resolve_workers(workers)
    roots = range(grid.size * grid.size)
    chunks = partition(roots, workers)
    logger.info("searching %d root cells across %d partitions", len(roots), len(chunks))

    def task(chunk: Sequence[int]) -> list[str]:
        return SearchEngine(grid).find_words_from(tree, chunk)

    found: dict[str, None] = {}
    for part in _run_partitions(task, chunks, workers):
        found.update(dict.fromkeys(part))
    return list(found)
