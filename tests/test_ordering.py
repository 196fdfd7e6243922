import unittest

from app.folio.content.cards import Card, CardKind
from app.folio.content.ordering import final_category_order, sandwich_order


def body(card_id: str, category: str | None, sort_key: float = float("inf")) -> Card:
    return Card(card_id, CardKind.BODY, category=category, sort_key=sort_key)


class TestSandwichOrder(unittest.TestCase):
    def test_lead_body_trail(self):
        cards = [
            Card("outro", CardKind.TRAIL),
            body("w2", "Work", 2),
            body("l1", "Life", 1),
            Card("intro", CardKind.LEAD),
            body("w1", "Work", 1),
            body("wx", "Work"),
        ]
        ordered, categories = sandwich_order(cards, ["Work", "Life"])
        self.assertEqual([c.id for c in ordered], ["intro", "w1", "w2", "wx", "l1", "outro"])
        self.assertEqual(categories, ["All", "Work", "Life"])

    def test_unsorted_cards_keep_store_order(self):
        ordered, _ = sandwich_order([body("a", "A"), body("b", "A"), body("c", "A", 1)])
        self.assertEqual([c.id for c in ordered], ["c", "a", "b"])

    def test_uncategorized_cards_come_after_groups(self):
        ordered, categories = sandwich_order([body("u", None), body("a", "A"), Card("intro", CardKind.LEAD)])
        self.assertEqual([c.id for c in ordered], ["intro", "a", "u"])
        self.assertEqual(categories, ["All", "A"])

    def test_extra_bookends_are_dropped(self):
        cards = [Card("i1", CardKind.LEAD), Card("i2", CardKind.LEAD), Card("o1", CardKind.TRAIL), Card("o2", CardKind.TRAIL)]
        with self.assertLogs("app.folio.content.ordering", level="WARNING"):
            ordered, _ = sandwich_order(cards)
        self.assertEqual([c.id for c in ordered], ["i1", "o1"])

    def test_empty(self):
        self.assertEqual(sandwich_order([]), ([], ["All"]))


class TestFinalCategoryOrder(unittest.TestCase):
    def test_preferred_order_then_new_categories(self):
        cards = [body("1", "Life"), body("2", "Work"), body("3", "Side"), body("4", "Lab")]
        self.assertEqual(
            final_category_order(cards, ["Lab", "Gone", "Work", "Life"]),
            ["Lab", "Work", "Life", "Side"],
        )

    def test_first_seen_without_preferred_order(self):
        cards = [body("1", "Life"), body("2", "Work"), body("3", "Life")]
        self.assertEqual(final_category_order(cards), ["Life", "Work"])


if __name__ == "__main__":
    unittest.main()
