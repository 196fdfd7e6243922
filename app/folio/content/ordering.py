"""Sandwich ordering: lead card, body cards by category, trail card.

The layout code trusts input order for first-fit placement and anchor
selection, so this is the one place that decides it.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from app.folio.config import ALL_CATEGORY
from app.folio.content.cards import Card, CardKind


logger = logging.getLogger(__name__)


def final_category_order(body_cards: Iterable[Card], category_order: Sequence[str] = ()) -> list[str]:
    """Categories actually present, in the preferred order.

    Categories named in ``category_order`` come first (in that order, only if
    some card uses them); any other category follows in first-seen order.
    """

    present: list[str] = []
    for card in body_cards:
        if card.category and card.category not in present:
            present.append(card.category)

    if not category_order:
        return present

    ordered = [c for c in dict.fromkeys(category_order) if c in present]
    extra = [c for c in present if c not in ordered]
    return ordered + extra


def sandwich_order(
    cards: Iterable[Card],
    category_order: Sequence[str] = (),
) -> Tuple[List[Card], List[str]]:
    """Return (ordered cards, navigation categories including ``"All"``)."""

    leads: list[Card] = []
    trails: list[Card] = []
    body: list[Card] = []
    for card in cards:
        if card.kind is CardKind.LEAD:
            leads.append(card)
        elif card.kind is CardKind.TRAIL:
            trails.append(card)
        else:
            body.append(card)

    if len(leads) > 1:
        logger.warning("Found %d lead cards; keeping %s", len(leads), leads[0].id)
    if len(trails) > 1:
        logger.warning("Found %d trail cards; keeping %s", len(trails), trails[0].id)

    categories = final_category_order(body, category_order)
    rank = {c: i for i, c in enumerate(categories)}

    # sorted() is stable, so equal keys keep their store order.
    categorized = sorted(
        (c for c in body if c.category in rank),
        key=lambda c: (rank[c.category], c.sort_key),
    )
    uncategorized = sorted((c for c in body if c.category not in rank), key=lambda c: c.sort_key)

    ordered: list[Card] = []
    if leads:
        ordered.append(leads[0])
    ordered.extend(categorized)
    ordered.extend(uncategorized)
    if trails:
        ordered.append(trails[0])

    return ordered, [ALL_CATEGORY, *categories]
