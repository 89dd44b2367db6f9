import random

from tileblast.components.board import Board
from tileblast.systems.group_finder import group_at, scan_all, tier_for_size


def test_tier_for_size_uses_exclusive_thresholds():
    thresholds = [3, 5, 8]
    assert [tier_for_size(size, thresholds) for size in range(1, 12)] == [0, 0, 0, 1, 1, 2, 2, 2, 3, 3, 3]


def test_tier_for_size_without_thresholds_is_default():
    assert tier_for_size(50, []) == 0


def test_tier_never_decreases_with_group_size():
    thresholds = [4, 7, 9]
    tiers = [tier_for_size(size, thresholds) for size in range(1, 40)]
    assert tiers == sorted(tiers)


def test_single_color_board_is_one_group():
    board = Board.from_rows([[2, 2, 2], [2, 2, 2]])
    scan = scan_all(board, [3])
    assert scan.has_breakable_group
    assert scan.group_count == 1
    assert scan.largest_group == 6
    assert set(scan.tiers.values()) == {1}
    assert len(scan.tiers) == 6


def test_checkerboard_has_no_breakable_group():
    board = Board.from_rows([[(r + c) % 2 for c in range(4)] for r in range(4)])
    scan = scan_all(board, [3])
    assert not scan.has_breakable_group
    assert scan.group_count == 16
    assert set(scan.tiers.values()) == {0}


def test_groups_are_four_connected_only():
    # Diagonal neighbours of the same color do not join a group.
    board = Board.from_rows([[0, 1], [1, 0]])
    assert group_at(board, (0, 0)) == {(0, 0)}


def test_scan_skips_empty_cells():
    board = Board.from_rows([[0, None, 0], [0, None, 1]])
    scan = scan_all(board, [1])
    assert (0, 1) not in scan.tiers
    assert scan.tiers[(0, 0)] == 1
    assert scan.tiers[(0, 2)] == 0
    assert scan.group_count == 3


def test_group_at_collects_whole_group():
    board = Board.from_rows(
        [
            [0, 0, 1],
            [1, 0, 1],
            [0, 0, 1],
        ]
    )
    assert group_at(board, (2, 1)) == {(0, 0), (0, 1), (1, 1), (2, 0), (2, 1)}
    assert group_at(board, (0, 2)) == {(0, 2), (1, 2), (2, 2)}


def test_group_at_out_of_bounds_or_empty_is_empty_set():
    board = Board.from_rows([[0, None]])
    assert group_at(board, (5, 0)) == set()
    assert group_at(board, (0, -1)) == set()
    assert group_at(board, (0, 1)) == set()


def test_scan_is_idempotent():
    rng = random.Random(3)
    board = Board.from_rows([[rng.randrange(3) for _ in range(6)] for _ in range(5)])
    before = board.snapshot()
    first = scan_all(board, [2, 4])
    second = scan_all(board, [2, 4])
    assert first.tiers == second.tiers
    assert first.has_breakable_group == second.has_breakable_group
    assert board.snapshot() == before


def test_scan_tiers_match_group_sizes():
    rng = random.Random(11)
    board = Board.from_rows([[rng.randrange(2) for _ in range(5)] for _ in range(5)])
    thresholds = [2, 4]
    scan = scan_all(board, thresholds)
    for position, tier in scan.tiers.items():
        assert tier == tier_for_size(len(group_at(board, position)), thresholds)
