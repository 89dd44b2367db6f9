from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from esper import World

from tileblast.components.board import EMPTY, Board, Position
from tileblast.components.board_config import BoardConfig

ColorSource = Callable[[Position, Board], int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: int


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def get_board_config(world: World) -> BoardConfig:
    for _, config in world.get_component(BoardConfig):
        return config
    raise RuntimeError("BoardConfig not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    board = get_board(world)
    if board is None:
        return None
    return board.rows, board.cols


def clear_group(board: Board, positions: Iterable[Position]) -> None:
    """Empty every given cell; callers pass a group found by ``group_at``."""
    for row, col in positions:
        board.set(row, col, EMPTY)


def compact_column(board: Board, col: int) -> List[GravityMove]:
    """Drop the blocks of one column onto row 0, keeping their order.

    Returns the moves made; rows from ``len(filled)`` upward are left empty and
    are the refill targets.
    """
    moves: List[GravityMove] = []
    write_row = 0
    for row in range(board.rows):
        color = board.get(row, col)
        if color is EMPTY:
            continue
        if row != write_row:
            board.set(write_row, col, color)
            board.set(row, col, EMPTY)
            moves.append(GravityMove(source=(row, col), target=(write_row, col), color=color))
        write_row += 1
    return moves


def first_empty_row(board: Board, col: int) -> int:
    """Lowest empty row of a compacted column (``rows`` when full)."""
    for row in range(board.rows):
        if board.get(row, col) is EMPTY:
            return row
    return board.rows


def refill_column(
    board: Board,
    col: int,
    from_row: int,
    to_row_exclusive: int,
    color_source: ColorSource,
) -> List[Position]:
    """Fill ``[from_row, to_row_exclusive)`` bottom-up from ``color_source``.

    Each call sees the cells placed earlier in the same pass.
    """
    spawned: List[Position] = []
    for row in range(from_row, to_row_exclusive):
        position = (row, col)
        board.set(row, col, color_source(position, board))
        spawned.append(position)
    return spawned


def fill_board(board: Board, color_source: ColorSource) -> None:
    """Assign every cell in raster order, row 0 first."""
    for position in board.positions():
        board.set(position[0], position[1], color_source(position, board))
