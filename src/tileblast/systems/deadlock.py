from __future__ import annotations

import logging
import random
from typing import Iterator, List, Tuple

from tileblast.components.board import EMPTY, Board, Position
from tileblast.components.board_config import BoardConfig
from tileblast.errors import PoolExhausted
from tileblast.systems.color_generator import refill_color_from_pool
from tileblast.systems.group_finder import ScanResult

logger = logging.getLogger(__name__)


def is_deadlocked(scan: ScanResult) -> bool:
    return not scan.has_breakable_group


def reshuffle_board(board: Board, config: BoardConfig, rng: random.Random) -> None:
    """Redistribute the board's own colors with the neighbor clustering bias.

    Occupied cells stay occupied and the color multiset is unchanged; a single
    pass is not guaranteed to produce a breakable group.
    """
    occupied = list(board.occupied())
    pool: List[int] = [board.get(row, col) for row, col in occupied]
    rng.shuffle(pool)
    for row, col in occupied:
        try:
            color = refill_color_from_pool((row, col), board, pool, config, rng)
        except PoolExhausted:
            logger.error("Reshuffle pool exhausted at %s; leaving cell empty", (row, col))
            board.set(row, col, EMPTY)
            continue
        board.set(row, col, color)


def _adjacent_pairs(board: Board) -> Iterator[Tuple[Position, Position]]:
    for row, col in board.occupied():
        for n_row, n_col in ((row, col + 1), (row + 1, col)):
            if board.in_bounds(n_row, n_col) and not board.is_empty(n_row, n_col):
                yield (row, col), (n_row, n_col)


def can_recover(board: Board) -> bool:
    """True when some color repeats and two occupied cells touch."""
    counts = board.color_counts()
    if not counts or max(counts.values()) < 2:
        return False
    return next(_adjacent_pairs(board), None) is not None


def force_breakable_pair(board: Board) -> bool:
    """Swap colors so two touching cells match, keeping the color multiset.

    Returns False when no such arrangement exists.
    """
    if not can_recover(board):
        return False
    counts = board.color_counts()
    first, second = next(_adjacent_pairs(board))
    first_color = board.get(*first)
    second_color = board.get(*second)
    if first_color == second_color:
        return True
    if counts[first_color] >= 2:
        target = first_color
    elif counts[second_color] >= 2:
        target = second_color
    else:
        target = max(counts, key=lambda color: counts[color])
    holders = [
        pos for pos in board.occupied()
        if board.get(*pos) == target and pos not in (first, second)
    ]
    for cell in (first, second):
        current = board.get(*cell)
        if current == target:
            continue
        donor = holders.pop()
        board.set(donor[0], donor[1], current)
        board.set(cell[0], cell[1], target)
    logger.info("Forced matching pair at %s/%s with color %s", first, second, target)
    return True
