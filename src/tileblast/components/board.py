from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

Position = Tuple[int, int]
Cell = Optional[int]

# Empty cells hold None so no color index can ever be mistaken for a hole.
EMPTY: Cell = None


@dataclass(slots=True)
class Board:
    """Grid of color cells for one session.

    ``cells[row][col]`` holds a color index or ``EMPTY``. Row 0 is the bottom
    of the board: gravity pulls blocks toward it and new blocks enter from
    ``rows - 1``. Dimensions never change after creation.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        """Build a board from row lists, bottom row first."""
        data = [list(row) for row in rows]
        cols = len(data[0]) if data else 0
        return cls(rows=len(data), cols=cols, cells=data)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def set(self, row: int, col: int, value: Cell) -> None:
        self.cells[row][col] = value

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] is EMPTY

    def positions(self) -> Iterator[Position]:
        """Raster order: row 0 first, left to right."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def occupied(self) -> Iterator[Position]:
        for row, col in self.positions():
            if self.cells[row][col] is not EMPTY:
                yield row, col

    def occupied_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def color_counts(self) -> Counter:
        return Counter(self.cells[r][c] for r, c in self.occupied())

    def column(self, col: int) -> List[Cell]:
        return [self.cells[row][col] for row in range(self.rows)]

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
