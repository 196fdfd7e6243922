import unittest

from app.folio.layout.occupancy import GridOccupancy


class TestGridOccupancy(unittest.TestCase):
    def place(self, grid: GridOccupancy, rows: int, cols: int) -> tuple[int, int]:
        row, col = grid.find_first_fit(rows, cols)
        grid.mark_occupied(row, col, rows, cols)
        return row, col

    def test_single_cells_fill_columns_top_to_bottom(self):
        grid = GridOccupancy(2)
        slots = [self.place(grid, 1, 1) for _ in range(5)]
        self.assertEqual(slots, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])
        self.assertEqual(grid.max_column_used, 2)

    def test_one_row_cards_double_up_after_a_tall_card(self):
        grid = GridOccupancy(2)
        self.assertEqual(self.place(grid, 2, 2), (0, 0))
        self.assertEqual(self.place(grid, 1, 1), (0, 2))
        self.assertEqual(self.place(grid, 1, 1), (1, 2))
        self.assertEqual(self.place(grid, 1, 2), (0, 3))
        # Row 1 under the wide card stays free; a tall card needs a fresh column.
        self.assertEqual(self.place(grid, 2, 2), (0, 5))

    def test_backfills_earlier_hole(self):
        grid = GridOccupancy(2)
        self.assertEqual(self.place(grid, 1, 1), (0, 0))
        self.assertEqual(self.place(grid, 2, 1), (0, 1))
        self.assertEqual(self.place(grid, 1, 1), (1, 0))

    def test_can_fit_rejects_out_of_grid_and_occupied(self):
        grid = GridOccupancy(2)
        self.assertFalse(grid.can_fit(1, 0, 2, 1))
        self.assertFalse(grid.can_fit(-1, 0, 1, 1))
        grid.mark_occupied(0, 3, 1, 1)
        self.assertFalse(grid.can_fit(0, 2, 1, 2))
        self.assertTrue(grid.can_fit(1, 2, 1, 2))
        self.assertTrue(grid.is_occupied(0, 3))
        self.assertFalse(grid.is_occupied(0, 99))

    def test_span_taller_than_grid_opens_new_column(self):
        grid = GridOccupancy(2)
        self.place(grid, 1, 1)
        self.assertEqual(grid.find_first_fit(3, 1), (0, 1))
        grid.mark_occupied(0, 1, 3, 1)
        self.assertTrue(grid.is_occupied(1, 1))
        self.assertEqual(grid.max_column_used, 1)

    def test_generalizes_to_other_row_counts(self):
        grid = GridOccupancy(3)
        slots = [self.place(grid, 1, 1) for _ in range(4)]
        self.assertEqual(slots, [(0, 0), (1, 0), (2, 0), (0, 1)])

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            GridOccupancy(0)
        grid = GridOccupancy(2)
        with self.assertRaises(ValueError):
            grid.find_first_fit(0, 1)
        with self.assertRaises(ValueError):
            grid.mark_occupied(0, 0, 1, 0)
        grid.mark_occupied(0, 0, 1, 1)
        with self.assertRaises(ValueError):
            grid.mark_occupied(0, 0, 1, 1)
        with self.assertRaises(ValueError):
            grid.mark_occupied(2, 0, 1, 1)


if __name__ == "__main__":
    unittest.main()
