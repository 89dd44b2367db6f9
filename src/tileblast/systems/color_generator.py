"""Color production for fills, reshuffles and gravity refills.

Clustering looks only at the left and below neighbors: when the board is
filled in raster order from row 0 upward those two are always placed already
(or legitimately absent at a border).
"""
from __future__ import annotations

import random
from typing import List

from tileblast.components.board import EMPTY, Board, Position
from tileblast.components.board_config import BoardConfig
from tileblast.errors import PoolExhausted


def neighbor_colors(position: Position, board: Board) -> List[int]:
    """Colors of the left and below neighbors that are in bounds and occupied."""
    row, col = position
    candidates: List[int] = []
    if col > 0:
        left = board.get(row, col - 1)
        if left is not EMPTY:
            candidates.append(left)
    if row > 0:
        below = board.get(row - 1, col)
        if below is not EMPTY:
            candidates.append(below)
    return candidates


def random_color(config: BoardConfig, rng: random.Random) -> int:
    return rng.choice(config.active_colors())


def initial_color(position: Position, board: Board, config: BoardConfig, rng: random.Random) -> int:
    candidates = neighbor_colors(position, board)
    if candidates and rng.random() < config.cluster_chance:
        return rng.choice(candidates)
    return random_color(config, rng)


def refill_color_from_pool(
    position: Position,
    board: Board,
    pool: List[int],
    config: BoardConfig,
    rng: random.Random,
) -> int:
    """Take a color out of ``pool``, preferring one a neighbor already shows.

    The pool is consumed in place so the board's color multiset is preserved
    across a reshuffle.
    """
    if not pool:
        raise PoolExhausted(f"Color pool empty while refilling {position}")
    candidates = neighbor_colors(position, board)
    if candidates and rng.random() < config.cluster_chance:
        preferred = rng.choice(candidates)
        if preferred in pool:
            pool.remove(preferred)
            return preferred
    return pool.pop()
