import math
import unittest

from app.folio.config import DEFAULT_PHASES
from app.folio.content.cards import CARD_SIZES, Card, CardKind
from app.folio.layout.grid import compute_layout
from app.folio.scroll.phases import max_scroll, translate_x
from app.folio.scroll.spy import (
    detect_active_category,
    progress_for_category,
    scroll_offset_for_category,
)


def make_cards() -> list[Card]:
    cards = [Card("intro", CardKind.LEAD, CARD_SIZES["2x2"])]
    for category, count in (("Work", 4), ("Lab", 3), ("Life", 5)):
        for i in range(count):
            size = "2x1" if i % 3 == 2 else "1x1"
            cards.append(Card(f"{category}-{i}", CardKind.BODY, CARD_SIZES[size], category=category, sort_key=i + 1))
    cards.append(Card("outro", CardKind.TRAIL, CARD_SIZES["2x2"]))
    return cards


CATEGORIES = ["All", "Work", "Lab", "Life"]


class TestDetectActiveCategory(unittest.TestCase):
    def setUp(self) -> None:
        self.layout = compute_layout(make_cards(), 1920)
        self.anchors = self.layout.category_anchors

    def test_all_before_first_anchor(self):
        self.assertEqual(detect_active_category(0.0, 1920, self.anchors, CATEGORIES), "All")

    def test_left_edge_crossing(self):
        lab = self.anchors["Lab"]
        # Centre exactly on Lab's left edge.
        self.assertEqual(detect_active_category(960 - lab.left, 1920, self.anchors, CATEGORIES), "Lab")
        self.assertEqual(detect_active_category(960 - lab.left + 1, 1920, self.anchors, CATEGORIES), "Work")

    def test_degenerate_inputs(self):
        self.assertEqual(detect_active_category(float("nan"), 1920, self.anchors, CATEGORIES), "All")
        self.assertEqual(detect_active_category(-500, 0, self.anchors, CATEGORIES), "All")
        self.assertEqual(detect_active_category(-500, 1920, {}, CATEGORIES), "All")

    def test_categories_without_anchor_are_skipped(self):
        lab = self.anchors["Lab"]
        result = detect_active_category(960 - lab.left, 1920, self.anchors, ["All", "Work", "Ghost", "Lab"])
        self.assertEqual(result, "Lab")


class TestNavigation(unittest.TestCase):
    def test_round_trip_for_every_category(self):
        for width in (375, 1280, 1920):
            layout = compute_layout(make_cards(), width)
            ms = max_scroll(layout.container_width, width)
            column = layout.config.column_width + layout.config.gap
            for category in CATEGORIES[1:]:
                progress = progress_for_category(category, layout.category_anchors, width, ms)
                self.assertIsNotNone(progress)
                tx = translate_x(progress, ms)
                detected = detect_active_category(tx, width, layout.category_anchors, CATEGORIES)
                self.assertNotEqual(detected, "All")
                gap = abs(layout.category_anchors[detected].left - layout.category_anchors[category].left)
                self.assertLessEqual(gap, column, f"{category} -> {detected} at {width}px")

    def test_centres_the_anchor_when_not_clamped(self):
        layout = compute_layout(make_cards(), 1920)
        ms = max_scroll(layout.container_width, 1920)
        anchor = layout.category_anchors["Lab"]
        progress = progress_for_category("Lab", layout.category_anchors, 1920, ms)
        self.assertAlmostEqual(anchor.center_x + translate_x(progress, ms), 960)

    def test_all_maps_to_top(self):
        self.assertEqual(progress_for_category("All", {}, 1920, 0.0), 0.0)
        self.assertEqual(scroll_offset_for_category("All", {}, 1920, 0.0, 4000), 0.0)

    def test_padded_all_maps_to_top(self):
        with self.assertNoLogs("app.folio.scroll.spy", level="WARNING"):
            self.assertEqual(progress_for_category(" All ", {}, 1920, -500.0), 0.0)

    def test_scroll_offset_scales_progress(self):
        layout = compute_layout(make_cards(), 1920)
        ms = max_scroll(layout.container_width, 1920)
        progress = progress_for_category("Life", layout.category_anchors, 1920, ms)
        offset = scroll_offset_for_category("Life", layout.category_anchors, 1920, ms, 4320)
        self.assertAlmostEqual(offset, progress * 4320)
        self.assertGreaterEqual(progress, DEFAULT_PHASES.horizontal_start)
        self.assertLessEqual(progress, DEFAULT_PHASES.horizontal_end)

    def test_missing_anchor_is_a_logged_noop(self):
        layout = compute_layout(make_cards(), 1920)
        ms = max_scroll(layout.container_width, 1920)
        with self.assertLogs("app.folio.scroll.spy", level="WARNING"):
            self.assertIsNone(scroll_offset_for_category("Ghost", layout.category_anchors, 1920, ms, 4000))

    def test_no_overflow_is_a_noop(self):
        layout = compute_layout(make_cards(), 1920)
        for ms in (0.0, float("nan"), -math.inf):
            self.assertIsNone(progress_for_category("Work", layout.category_anchors, 1920, ms))

    def test_invalid_scroll_height_is_a_noop(self):
        layout = compute_layout(make_cards(), 1920)
        ms = max_scroll(layout.container_width, 1920)
        self.assertIsNone(scroll_offset_for_category("Work", layout.category_anchors, 1920, ms, 0))


if __name__ == "__main__":
    unittest.main()
