import unittest

from app.folio.config import LAYOUT_DESKTOP
from app.folio.content.cards import CARD_SIZES
from app.folio.layout.columns import card_dimensions, layout_config_for_width, safe_viewport_width


class TestLayoutConfigForWidth(unittest.TestCase):
    def test_desktop_uses_fixed_columns(self):
        self.assertEqual(layout_config_for_width(1920), LAYOUT_DESKTOP)
        self.assertEqual(layout_config_for_width(640), LAYOUT_DESKTOP)

    def test_narrow_viewport_floors_column_width(self):
        # (375 - 24) / 2 = 175.5 -> 175
        cfg = layout_config_for_width(375)
        self.assertEqual(cfg.column_width, 175)
        self.assertEqual(cfg.row_height, 175)
        self.assertEqual(cfg.gap, 24)
        self.assertEqual(cfg.min_padding, 16)

    def test_invalid_width_falls_back_to_default(self):
        self.assertEqual(safe_viewport_width(0), 1920)
        self.assertEqual(safe_viewport_width(-5), 1920)
        self.assertEqual(safe_viewport_width(float("nan")), 1920)
        self.assertEqual(safe_viewport_width(800), 800)
        self.assertEqual(layout_config_for_width(-1), LAYOUT_DESKTOP)


class TestCardDimensions(unittest.TestCase):
    def test_spans_include_inner_gaps(self):
        dims = {label: card_dimensions(size, LAYOUT_DESKTOP) for label, size in CARD_SIZES.items()}
        self.assertEqual((dims["1x1"].width, dims["1x1"].height), (300, 300))
        self.assertEqual((dims["2x1"].width, dims["2x1"].height), (624, 300))
        self.assertEqual((dims["1x2"].width, dims["1x2"].height), (300, 624))
        self.assertEqual((dims["2x2"].width, dims["2x2"].height), (624, 624))
        self.assertEqual((dims["2x1"].rows, dims["2x1"].cols), (1, 2))


if __name__ == "__main__":
    unittest.main()
