from __future__ import annotations

import numpy as np

from boggle.grid import Position

DEFAULT_WORD_LENGTH = 16


class PathStateTable:
    """Reusable scratch table for the approximate word filter.

    ``table[k, i, j]`` is True when the first ``k + 1`` letters of the current
    word can be traced along adjacent cells ending at ``(i, j)``, cells may
    repeat. The backing array keeps its capacity between words; ``reset``
    clears only the region the next word needs.
    """

    def __init__(self, max_word_length: int = DEFAULT_WORD_LENGTH, max_size: int = 4):
        self._buf = np.zeros((max_word_length, max_size, max_size), dtype=bool)
        self.word_length = 0
        self.size = 0

    @property
    def capacity(self) -> tuple[int, int]:
        return self._buf.shape[0], self._buf.shape[1]

    def reset(self, word_length: int, size: int):
        cap_length, cap_size = self.capacity
        if word_length > cap_length or size > cap_size:
            cap_length = max(word_length, cap_length)
            cap_size = max(size, cap_size)
            self._buf = np.zeros((cap_length, cap_size, cap_size), dtype=bool)
        else:
            self._buf[:word_length, :size, :size] = False
        self.word_length = word_length
        self.size = size

    def _check(self, k: int, i: int, j: int):
        if not (0 <= k < self.word_length and 0 <= i < self.size and 0 <= j < self.size):
            raise IndexError(f"index out of bounds: {(k, i, j)}")

    def __getitem__(self, idx: tuple[int, int, int]) -> bool:
        self._check(*idx)
        return bool(self._buf[idx])

    def visit(self, idx: tuple[int, int, int]):
        self._check(*idx)
        self._buf[idx] = True

    def layer(self, k: int) -> np.ndarray:
        """Writable view of position ``k`` over the active board area."""
        if not 0 <= k < self.word_length:
            raise IndexError(f"index out of bounds: {k}")
        return self._buf[k, :self.size, :self.size]

    def mark_layer(self, k: int, reachable: np.ndarray) -> bool:
        """Store ``reachable`` as position ``k``; returns whether any cell is set."""
        layer = self.layer(k)
        layer[...] = reachable
        return bool(layer.any())

    def reachable(self, k: int) -> list[Position]:
        return [(int(i), int(j)) for i, j in np.argwhere(self.layer(k))]
