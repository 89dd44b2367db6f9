from tileblast.components.board import EMPTY, Board
from tileblast.components.board_config import BoardConfig
from tileblast.systems.board_ops import board_dimensions, get_board, get_board_config
from tests.helpers import make_engine


def test_new_board_starts_empty():
    board = Board(rows=2, cols=3)
    assert board.snapshot() == ((EMPTY, EMPTY, EMPTY), (EMPTY, EMPTY, EMPTY))
    assert board.occupied_count() == 0


def test_from_rows_keeps_bottom_row_first():
    board = Board.from_rows([[1, 0], [None, 2]])
    assert (board.rows, board.cols) == (2, 2)
    assert board.get(0, 0) == 1
    assert board.is_empty(1, 0)
    assert board.column(1) == [0, 2]
    assert list(board.occupied()) == [(0, 0), (0, 1), (1, 1)]
    assert board.color_counts() == {0: 1, 1: 1, 2: 1}


def test_in_bounds():
    board = Board(rows=2, cols=2)
    assert board.in_bounds(1, 1)
    assert not board.in_bounds(2, 0)
    assert not board.in_bounds(0, -1)


def test_board_component_exists():
    bus, engine = make_engine()
    engine.initialize(BoardConfig(), rows=6, cols=7)
    board = get_board(engine.world)
    assert board is not None, 'Board component missing'
    assert board.rows == 6 and board.cols == 7
    assert board_dimensions(engine.world) == (6, 7)
    assert get_board_config(engine.world).rows == 6
    assert board.occupied_count() == 42
