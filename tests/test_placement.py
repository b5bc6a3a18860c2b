import unittest

from seat_layout.aisles import should_skip
from seat_layout.models import CanvasSize, GenerationConfig, SkipPattern
from seat_layout.placement import Geometry, anchor_config, compute_geometry, grid_extent, is_within_bounds


class TestAislePolicy(unittest.TestCase):
    def test_none(self):
        self.assertFalse(any(should_skip(0, c, 10, SkipPattern.none) for c in range(10)))

    def test_center(self):
        skipped = [c for c in range(10) if should_skip(0, c, 10, SkipPattern.aisle_center)]
        self.assertEqual(skipped, [5])
        skipped = [c for c in range(7) if should_skip(0, c, 7, SkipPattern.aisle_center)]
        self.assertEqual(skipped, [3])

    def test_sides(self):
        skipped = [c for c in range(10) if should_skip(0, c, 10, SkipPattern.aisle_sides)]
        self.assertEqual(skipped, [0, 9])

    def test_custom(self):
        self.assertFalse(should_skip(1, 1, 10, SkipPattern.custom))
        self.assertTrue(should_skip(1, 1, 10, SkipPattern.custom, lambda r, c: r == c))
        self.assertFalse(should_skip(1, 2, 10, SkipPattern.custom, lambda r, c: r == c))


class TestPlacementEngine(unittest.TestCase):
    def setUp(self):
        self.config = GenerationConfig(start_x=10, start_y=20, seat_size=24, row_spacing=30, column_spacing=25, rotation=15)

    def test_compute_geometry(self):
        g = compute_geometry(2, 3, self.config)
        self.assertEqual(g, Geometry(x=85, y=80, w=24, h=24, rotation=15))

    def test_bounds(self):
        canvas = CanvasSize(w=100, h=100)
        self.assertTrue(is_within_bounds(Geometry(0, 0, 24, 24, 0), canvas))
        self.assertTrue(is_within_bounds(Geometry(76, 76, 24, 24, 0), canvas))
        self.assertFalse(is_within_bounds(Geometry(77, 0, 24, 24, 0), canvas))
        self.assertFalse(is_within_bounds(Geometry(0, 77, 24, 24, 0), canvas))
        self.assertFalse(is_within_bounds(Geometry(-1, 0, 24, 24, 0), canvas))

    def test_grid_extent(self):
        config = GenerationConfig(rows=5, columns=10)
        self.assertEqual(grid_extent(config), (9 * 25 + 24, 4 * 30 + 24))

    def test_anchor_centres_on_click(self):
        config = GenerationConfig(rows=2, columns=2, seat_size=20, row_spacing=30, column_spacing=30)
        anchored = anchor_config(config, CanvasSize(w=1000, h=1000), 500, 400)
        # extent 50x50
        self.assertEqual((anchored.start_x, anchored.start_y), (475, 375))
        self.assertEqual(anchored.model_copy(update={"start_x": config.start_x, "start_y": config.start_y}), config)

    def test_anchor_clamps_to_canvas(self):
        config = GenerationConfig(rows=2, columns=2, seat_size=20, row_spacing=30, column_spacing=30)
        canvas = CanvasSize(w=200, h=200)
        self.assertEqual(anchor_config(config, canvas, 0, 0).start_x, 0)
        far = anchor_config(config, canvas, 199, 199)
        self.assertEqual((far.start_x, far.start_y), (150, 150))


if __name__ == "__main__":
    unittest.main()
