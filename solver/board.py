# solver/board.py
from typing import Dict, Iterable, List, Optional

from models import BLOCKED, EMPTY, Cell, Grid, Orientation


class Board:
    """Grid of cell states: ``EMPTY``, ``BLOCKED`` or a piece id (>= 0).

    ``place`` and ``remove`` do no checking of their own; callers test with
    ``can_place`` first and undo with the exact arguments they placed with.
    """

    def __init__(self, width: int = 0, height: int = 0, blocked_cells: Iterable[Cell] = ()):
        self.width = 0
        self.height = 0
        self.cells: Grid = []
        self.init(width, height, blocked_cells)

    def init(self, width: int, height: int, blocked_cells: Iterable[Cell] = ()) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.cells = [[EMPTY] * self.width for _ in range(self.height)]
        for x, y in blocked_cells:
            # out-of-range blocked cells are ignored
            if self.in_bounds(x, y):
                self.cells[y][x] = BLOCKED

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, orientation: Orientation, origin: Cell) -> bool:
        ox, oy = origin
        W, H = self.width, self.height
        rows = self.cells
        for dx, dy in orientation.cells:
            x = ox + dx
            y = oy + dy
            if x < 0 or y < 0 or x >= W or y >= H:
                return False
            if rows[y][x] != EMPTY:
                return False
        return True

    def place(self, orientation: Orientation, origin: Cell, piece_id: int) -> None:
        ox, oy = origin
        for dx, dy in orientation.cells:
            self.cells[oy + dy][ox + dx] = piece_id

    def remove(self, orientation: Orientation, origin: Cell) -> None:
        ox, oy = origin
        for dx, dy in orientation.cells:
            self.cells[oy + dy][ox + dx] = EMPTY

    def find_first_empty(self) -> Optional[Cell]:
        for y, row in enumerate(self.cells):
            for x, value in enumerate(row):
                if value == EMPTY:
                    return (x, y)
        return None

    def count_empty(self) -> int:
        return sum(row.count(EMPTY) for row in self.cells)

    def piece_cell_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for row in self.cells:
            for value in row:
                if value >= 0:
                    counts[value] = counts.get(value, 0) + 1
        return counts

    def snapshot(self) -> Grid:
        return [list(row) for row in self.cells]

    def load(self, grid: Grid) -> None:
        if len(grid) != self.height or any(len(row) != self.width for row in grid):
            raise ValueError(
                f"Grid shape does not match board {self.width}×{self.height}"
            )
        self.cells = [list(row) for row in grid]

    def __repr__(self) -> str:
        return f"Board({self.width}×{self.height}, empty={self.count_empty()})"
