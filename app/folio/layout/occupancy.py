"""Grid occupancy for a fixed number of rows and unbounded columns.

Placement is column-major first-fit: walk columns left to right and, within a
column, rows top to bottom, taking the first slot the span fits. One-row
cards therefore stack two to a column before a two-row card opens a new
column, which keeps the page in left-to-right reading order.
"""

from __future__ import annotations

from typing import List, Tuple

from app.folio.config import GRID_ROWS


class GridOccupancy:
    def __init__(self, rows: int = GRID_ROWS) -> None:
        if rows <= 0:
            raise ValueError("rows must be > 0")
        self.rows = rows
        self._cells: List[List[bool]] = [[] for _ in range(rows)]
        self.max_column_used = -1

    def is_occupied(self, row: int, col: int) -> bool:
        cells = self._cells[row]
        return col < len(cells) and cells[col]

    def can_fit(self, row: int, col: int, rows: int, cols: int) -> bool:
        if row < 0 or col < 0:
            return False
        if row + rows > self.rows:
            return False
        for r in range(row, row + rows):
            for c in range(col, col + cols):
                if self.is_occupied(r, c):
                    return False
        return True

    def mark_occupied(self, row: int, col: int, rows: int, cols: int) -> None:
        _check_span(rows, cols)
        if row < 0 or col < 0 or row >= self.rows:
            raise ValueError(f"({row}, {col}) is outside the grid")
        # Spans taller than the grid are clipped to the rows that exist.
        last_row = min(row + rows, self.rows)
        if not self.can_fit(row, col, last_row - row, cols):
            raise ValueError(f"span {rows}x{cols} at ({row}, {col}) overlaps a placed card")

        for r in range(row, last_row):
            cells = self._cells[r]
            if len(cells) < col + cols:
                cells.extend([False] * (col + cols - len(cells)))
            for c in range(col, col + cols):
                cells[c] = True
        self.max_column_used = max(self.max_column_used, col + cols - 1)

    def find_first_fit(self, rows: int, cols: int) -> Tuple[int, int]:
        """Return the first (row, col) where a ``rows`` x ``cols`` span fits."""

        _check_span(rows, cols)
        for col in range(self.max_column_used + 2):
            for row in range(self.rows - rows + 1):
                if self.can_fit(row, col, rows, cols):
                    return row, col
        # Only reachable when the span is taller than the grid.
        return 0, self.max_column_used + 1


def _check_span(rows: int, cols: int) -> None:
    if rows <= 0 or cols <= 0:
        raise ValueError("span rows and cols must be > 0")
