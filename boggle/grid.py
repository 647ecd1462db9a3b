from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from boggle.errors import BoardSizeError

MIN_SIZE = 3
ALPHABET = 26
LETTER_A = ord("a")

# Clockwise, starting at east.
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)

Position = tuple[int, int]


def letter_index(ch: str) -> int:
    """Map 'a'..'z' to 0..25."""
    if not "a" <= ch <= "z":
        raise ValueError(f"not a lowercase ASCII letter: {ch!r}")
    return ord(ch) - LETTER_A


class Grid:
    """Immutable square letter board.

    Cells are stored row-major in ``cells``; ``codes`` holds the same letters
    as 0..25 and ``adjacency`` the flat indices of each cell's neighbours in
    ``DIRECTIONS`` order. Nothing is mutated after construction, so a single
    Grid can be shared between worker threads.
    """

    __slots__ = ("size", "cells", "codes", "letter_mask", "adjacency", "array")

    def __init__(self, rows: list[str]):
        size = len(rows)
        if size < MIN_SIZE:
            raise BoardSizeError("board must be at least 3 x 3")
        for row in rows:
            if len(row) != size:
                raise BoardSizeError("row sizes are not equal")

        cells = "".join(rows).lower()
        for ch in cells:
            letter_index(ch)

        self.size = size
        self.cells = cells
        self.codes: tuple[int, ...] = tuple(ord(ch) - LETTER_A for ch in cells)

        mask = 0
        for code in self.codes:
            mask |= 1 << code
        self.letter_mask = mask

        # Precompute adjacency lists
        adjacency = []
        for idx in range(size * size):
            r, c = divmod(idx, size)
            adjacency.append(tuple(nr * size + nc for nr, nc in self.neighbors((r, c))))
        self.adjacency: tuple[tuple[int, ...], ...] = tuple(adjacency)

        self.array = np.array(self.codes, dtype=np.uint8).reshape(size, size)
        self.array.flags.writeable = False

    @classmethod
    def parse(cls, text: str) -> Grid:
        """Parse a board given as one row of letters per line."""
        if not text.isascii():
            raise ValueError("board must be ASCII")
        rows = [line.rstrip() for line in text.splitlines()]
        while rows and not rows[-1]:
            rows.pop()
        return cls(rows)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Grid({self.rows()!r})"

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.cells)

    def rows(self) -> list[str]:
        n = self.size
        return [self.cells[r * n:(r + 1) * n] for r in range(n)]

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.size and 0 <= c < self.size

    def index(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise IndexError(f"index out of bounds: {pos}")
        return pos[0] * self.size + pos[1]

    def position(self, idx: int) -> Position:
        if not 0 <= idx < self.size * self.size:
            raise IndexError(f"index out of bounds: {idx}")
        return divmod(idx, self.size)

    def get(self, pos: Position) -> str | None:
        """Letter at ``pos``, or None when the (possibly negative) coordinates fall outside."""
        if not self.in_bounds(pos):
            return None
        return self.cells[pos[0] * self.size + pos[1]]

    def __getitem__(self, pos: Position) -> str:
        return self.cells[self.index(pos)]

    def neighbors(self, pos: Position) -> Iterator[Position]:
        r, c = pos
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                yield nr, nc

    def has_letters(self, word: str) -> bool:
        """True when every letter of ``word`` appears somewhere on the board."""
        mask = self.letter_mask
        for ch in word:
            if not "a" <= ch <= "z" or not mask >> (ord(ch) - LETTER_A) & 1:
                return False
        return True
