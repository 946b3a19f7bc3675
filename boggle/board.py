from __future__ import annotations

import random
from typing import Sequence

from boggle.tiles import Tile, tile_from_face


def _neighbor_table(size: int) -> tuple[tuple[int, ...], ...]:
    # Direction order is fixed: NW, N, NE, W, E, SW, S, SE
    neighbors = []
    for idx in range(size * size):
        r, c = divmod(idx, size)
        adj = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = r + dr, c + dc
                if 0 <= nr < size and 0 <= nc < size:
                    adj.append(nr * size + nc)
        neighbors.append(tuple(adj))
    return tuple(neighbors)


class Grid:
    """Immutable NxN board of tiles, addressed by (row, col) or row-major index."""

    __slots__ = ("size", "cells", "neighbors")

    def __init__(self, tiles: Sequence[Tile], size: int):
        if size <= 0 or len(tiles) != size * size:
            raise ValueError(f"Expected {size}x{size} tiles, got {len(tiles)}")
        self.size = size
        self.cells: tuple[Tile, ...] = tuple(tiles)
        self.neighbors = _neighbor_table(size)

    @classmethod
    def from_letters(cls, rows: Sequence[Sequence[str]]) -> Grid:
        """Build a grid from rows of faces, e.g. [["QU", "I"], ["C", "K"]]."""
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise ValueError("Board must be a non-empty square")
        if any(face.upper() == "Q" for row in rows for face in row):
            raise ValueError('A bare "Q" face is not a tile, use "Qu"')
        return cls([tile_from_face(face) for row in rows for face in row], size)

    def tile(self, row: int, col: int) -> Tile:
        return self.cells[row * self.size + col]

    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def coord(self, idx: int) -> tuple[int, int]:
        return divmod(idx, self.size)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(t.token for t in self.cells)

    def rows(self) -> list[list[Tile]]:
        return [list(self.cells[r * self.size:(r + 1) * self.size]) for r in range(self.size)]

    def __repr__(self) -> str:
        return "Grid(" + " / ".join(" ".join(t.display for t in row) for row in self.rows()) + ")"


def generate_grid(dice: Sequence[Sequence[str]], size: int, rng: random.Random | None = None) -> Grid:
    """Roll a fresh board: shuffle the dice, then pick one face per die.

    Both stages are needed to keep the letter distribution of physical dice.
    """
    if len(dice) != size * size:
        raise ValueError(f"A {size}x{size} board needs {size * size} dice, got {len(dice)}")
    rng = rng or random
    shuffled = [list(die) for die in dice]
    rng.shuffle(shuffled)
    tiles = [tile_from_face(rng.choice(die)) for die in shuffled]
    return Grid(tiles, size)
