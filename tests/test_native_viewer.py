import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from app.folio.content.cards import CARD_SIZES, Card, CardKind
from app.folio.stage import Stage
from native.folio_app.main import FolioWindow


def make_stage() -> Stage:
    cards = [Card("intro", CardKind.LEAD, CARD_SIZES["2x2"], title="Intro")]
    for category in ("Work", "Lab"):
        cards += [
            Card(f"{category}-{i}", CardKind.BODY, CARD_SIZES["1x1"], category=category, sort_key=i)
            for i in range(1, 5)
        ]
    cards.append(Card("outro", CardKind.TRAIL, CARD_SIZES["2x2"]))
    return Stage(cards, ["All", "Work", "Lab"])


class TestFolioWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.win = FolioWindow(make_stage())
        self.win.resize(1280, 720)
        self.win.show()
        QApplication.processEvents()
        self.win._resize_timer.stop()
        self.win._apply_viewport_width()

    def tearDown(self) -> None:
        self.win.close()

    def test_nav_buttons_follow_categories(self) -> None:
        self.assertEqual(list(self.win.nav_buttons), ["All", "Work", "Lab"])
        self.assertTrue(self.win.nav_buttons["All"].isChecked())

    def test_scrollbar_drives_progress(self) -> None:
        bar = self.win.scrollbar
        bar.setValue(bar.maximum())
        self.assertEqual(self.win.stage.progress, 1.0)
        self.assertEqual(self.win.stage.active_category, "Lab")
        self.assertTrue(self.win.nav_buttons["Lab"].isChecked())

    def test_resize_is_debounced(self) -> None:
        self.win._resize_timer.stop()
        self.win.resize(900, 600)
        QApplication.processEvents()
        self.assertTrue(self.win._resize_timer.isActive())
        self.win._resize_timer.stop()
        self.win._apply_viewport_width()
        self.assertEqual(self.win.stage.viewport_width, self.win.canvas.width())

    def test_jump_targets_category(self) -> None:
        target = self.win.jump_to("Lab")
        self.assertIsNotNone(target)
        expected = self.win.stage.jump_to_category("Lab", self.win.scrollbar.maximum())
        self.assertEqual(target, round(expected))
        self.assertIsNone(self.win.jump_to("Nope"))

    def test_paints_without_error(self) -> None:
        self.win.scrollbar.setValue(self.win.scrollbar.maximum() // 2)
        image = self.win.canvas.grab()
        self.assertFalse(image.isNull())


if __name__ == "__main__":
    unittest.main()
