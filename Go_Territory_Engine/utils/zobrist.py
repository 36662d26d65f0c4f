"""Zobrist hashing for board content keys."""

import random


def zobrist_init(size=19, seed=None):
    """Return one (black, white) pair of 64-bit keys per cell, indexed by y * size + x."""
    rng = random.Random(seed)
    return [[rng.getrandbits(64) for _ in range(2)] for _ in range(size * size)]


def stone_key(table, index, color):
    """Key for a stone of `color` (1 black, 2 white) at flat `index`; 0 for empty."""
    if not color:
        return 0
    return table[index][int(color) - 1]


def hash_cells(cells, table):
    """Compute the Zobrist hash of a row-major grid from scratch."""
    h = 0
    size = len(cells)
    for y in range(size):
        for x in range(size):
            v = cells[y][x]
            if not v:
                continue
            h ^= table[y * size + x][int(v) - 1]
    return h
