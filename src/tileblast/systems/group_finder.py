from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from tileblast.components.board import EMPTY, Board, Position
from tileblast.constants import MIN_BREAKABLE_GROUP

# Right, left, up, down.
_DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(slots=True)
class ScanResult:
    tiers: Dict[Position, int] = field(default_factory=dict)
    has_breakable_group: bool = False
    group_count: int = 0
    largest_group: int = 0


def tier_for_size(size: int, thresholds: Sequence[int]) -> int:
    """Return the highest tier whose threshold the group size exceeds.

    Thresholds are checked largest first so the top qualifying tier wins:
    with ``(4, 7, 9)`` sizes 1-4 give 0, 5-7 give 1, 8-9 give 2, 10+ give 3.
    """
    for index in range(len(thresholds) - 1, -1, -1):
        if thresholds[index] < size:
            return index + 1
    return 0


def _flood(board: Board, start: Position, visited: Set[Position]) -> List[Position]:
    row, col = start
    color = board.get(row, col)
    group = [start]
    visited.add(start)
    queue = deque([start])
    while queue:
        cur_row, cur_col = queue.popleft()
        for d_row, d_col in _DIRECTIONS:
            n_row, n_col = cur_row + d_row, cur_col + d_col
            if not board.in_bounds(n_row, n_col):
                continue
            neighbor = (n_row, n_col)
            if neighbor in visited or board.get(n_row, n_col) != color:
                continue
            visited.add(neighbor)
            queue.append(neighbor)
            group.append(neighbor)
    return group


def scan_all(board: Board, thresholds: Sequence[int]) -> ScanResult:
    """Classify every non-empty cell by the size of its connected group."""
    result = ScanResult()
    visited: Set[Position] = set()
    for position in board.positions():
        if position in visited:
            continue
        if board.get(*position) is EMPTY:
            visited.add(position)
            continue
        group = _flood(board, position, visited)
        result.group_count += 1
        result.largest_group = max(result.largest_group, len(group))
        if len(group) >= MIN_BREAKABLE_GROUP:
            result.has_breakable_group = True
        tier = tier_for_size(len(group), thresholds)
        for member in group:
            result.tiers[member] = tier
    return result


def group_at(board: Board, position: Position) -> Set[Position]:
    """Return the connected same-color group containing ``position``.

    Out-of-bounds or empty positions yield an empty set.
    """
    row, col = position
    if not board.in_bounds(row, col) or board.get(row, col) is EMPTY:
        return set()
    return set(_flood(board, (row, col), set()))
