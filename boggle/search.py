from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from boggle.grid import DIRECTIONS, LETTER_A, Grid, Position
from boggle.pathstate import PathStateTable
from boggle.trie import Trie

logger = logging.getLogger("boggle")

MIN_WORD_LENGTH = 4


def spread(layer: np.ndarray) -> np.ndarray:
    """Cells with at least one of their 8 neighbours set in ``layer``."""
    n = layer.shape[0]
    padded = np.pad(layer, 1)
    out = np.zeros_like(layer)
    for dr, dc in DIRECTIONS:
        out |= padded[1 + dr:1 + dr + n, 1 + dc:1 + dc + n]
    return out


@dataclass
class SearchStats:
    candidates: int = 0
    filtered_out: int = 0
    rejected_by_filter: int = 0
    verified: int = 0


class SearchEngine:
    """Word search over one board.

    Holds private scratch state (the path-state table), so an engine must not
    be shared between threads; the grid it reads may be.
    """

    def __init__(self, grid: Grid, min_word_length: int = MIN_WORD_LENGTH,
                 table: PathStateTable | None = None):
        self.grid = grid
        self.min_word_length = min_word_length
        self.table = table if table is not None else PathStateTable(max_size=grid.size)
        self.stats = SearchStats()

    def is_candidate(self, word: str) -> bool:
        # A simple path visits each cell at most once
        cells = self.grid.size * self.grid.size
        return self.min_word_length <= len(word) <= cells and self.grid.has_letters(word)

    def might_contain(self, word: str) -> bool:
        """Cheap necessary condition for ``contains_word``.

        Lets a path use the same cell more than once, so a True answer still
        has to be confirmed by the exact search.
        """
        if not self.is_candidate(word):
            return False

        grid = self.grid.array
        table = self.table
        table.reset(len(word), self.grid.size)

        if not table.mark_layer(0, grid == ord(word[0]) - LETTER_A):
            return False
        last = len(word) - 1
        for k in range(1, len(word)):
            reachable = (grid == ord(word[k]) - LETTER_A) & spread(table.layer(k - 1))
            if not table.mark_layer(k, reachable):
                return False
            if k == last:
                return True
        return last == 0

    def word_path(self, word: str) -> list[Position] | None:
        """First simple path spelling ``word``, in root then direction order."""
        if not word or len(word) > self.grid.size * self.grid.size:
            return None
        cells = self.grid.cells
        adjacency = self.grid.adjacency
        last = len(word) - 1
        path: list[int] = []

        def dfs(idx: int, depth: int, visited: int) -> bool:
            path.append(idx)
            if depth == last:
                return True
            nxt = word[depth + 1]
            for nidx in adjacency[idx]:
                if cells[nidx] == nxt and not visited & (1 << nidx):
                    if dfs(nidx, depth + 1, visited | (1 << nidx)):
                        return True
            path.pop()
            return False

        first = word[0]
        for start, ch in enumerate(cells):
            if ch == first and dfs(start, 0, 1 << start):
                return [self.grid.position(idx) for idx in path]
        return None

    def contains_word(self, word: str) -> bool:
        """True iff a path of adjacent, distinct cells spells ``word``."""
        return self.word_path(word) is not None

    def verify_words(self, words: Iterable[str]) -> list[str]:
        """Filter-then-verify: letters and length, approximate filter, exact search.

        Repeated words are checked and reported once.
        """
        stats = self.stats
        found = []
        for word in dict.fromkeys(words):
            stats.candidates += 1
            if not self.is_candidate(word):
                stats.filtered_out += 1
                continue
            if not self.might_contain(word):
                stats.rejected_by_filter += 1
                continue
            if self.contains_word(word):
                stats.verified += 1
                found.append(word)
            else:
                logger.debug("word=%s passed filter but has no simple path", word)
        logger.debug("verify stats: %s", stats)
        return found

    def build_tree(self, words: Iterable[str]) -> Trie:
        return Trie.from_words(w for w in words if self.is_candidate(w))

    def find_words(self, tree: Trie) -> list[str]:
        """Every word of ``tree`` present on the board, in a single traversal."""
        return self.find_words_from(tree, range(self.grid.size * self.grid.size))

    def find_words_from(self, tree: Trie, roots: Iterable[int],
                        seen: bytearray | None = None) -> list[str]:
        """Trie-guided search started only from the flat cell indices in ``roots``.

        A word is reported the first time any path reaches it; ``seen`` may be
        passed in to share that bookkeeping across calls.
        """
        codes = self.grid.codes
        adjacency = self.grid.adjacency
        if seen is None:
            seen = tree.new_seen()
        found: list[str] = []

        def dfs(idx: int, node, visited: int):
            if node.word is not None and not seen[node.index]:
                seen[node.index] = 1
                found.append(node.word)

            if node.branches:  # prune if no further prefixes
                children = node.children
                for nidx in adjacency[idx]:
                    if visited & (1 << nidx):
                        continue
                    child = children[codes[nidx]]
                    if child is not None:
                        dfs(nidx, child, visited | (1 << nidx))

        root = tree.root
        for start in roots:
            child = root.children[codes[start]]
            if child is not None:
                dfs(start, child, 1 << start)
        return found
