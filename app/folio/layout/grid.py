"""Two-row grid layout (viewport-first) for the horizontal card strip.

This module is intentionally UI-framework agnostic.

Goal: given the viewport width and the cards in sandwich order, compute
absolute pixel positions for every card, the total strip width, and one
navigation anchor per category, without looking at any rendered content.

The result is a pure function of its inputs, so hosts memoize it with
:class:`LayoutCache` and recompute only when the cards or width change.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Optional, Sequence, Tuple

from app.folio.config import GRID_ROWS, LayoutConfig
from app.folio.content.cards import Card, CardKind
from app.folio.layout.columns import (
    CardDimensions,
    card_dimensions,
    layout_config_for_width,
    safe_viewport_width,
)
from app.folio.layout.occupancy import GridOccupancy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardPosition:
    row: int
    col: int
    top: float
    left: float
    width: int
    height: int

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass(frozen=True)
class CategoryAnchor:
    """Position of a category's representative card."""

    category: str
    index: int
    left: float
    center_x: float


@dataclass(frozen=True)
class LayoutResult:
    positions: Tuple[CardPosition, ...]
    container_width: float
    category_anchors: Dict[str, CategoryAnchor]
    content_height: int
    padding_left: float
    padding_right: float
    config: LayoutConfig


def _bookend(cards: Iterable[Card], kind: CardKind, fallback: Card) -> Card:
    for card in cards:
        if card.kind is kind:
            return card
    return fallback


def asymmetric_padding(
    viewport_width: float,
    lead: CardDimensions,
    trail: CardDimensions,
    min_padding: int,
) -> Tuple[float, float]:
    """Paddings that centre the lead card in the first viewport and the trail
    card in the last one."""

    padding_left = max(0.0, (viewport_width - lead.width) / 2)
    padding_right = max(float(min_padding), (viewport_width - trail.width) / 2)
    return padding_left, padding_right


def compute_layout(
    cards: Sequence[Card],
    viewport_width: float,
    categories: Optional[Iterable[str]] = None,
) -> LayoutResult:
    """Place every card and derive strip width and category anchors.

    ``cards`` must already be in sandwich order; placement is first-fit in
    input order. When ``categories`` is given, body cards whose category is
    not listed are left out of anchor tracking.
    """

    width = safe_viewport_width(viewport_width)
    if width != viewport_width:
        logger.warning("Invalid viewport width %r; using %s", viewport_width, width)
    layout = layout_config_for_width(width)

    if not cards:
        return LayoutResult(
            positions=(),
            container_width=0,
            category_anchors={},
            content_height=0,
            padding_left=0.0,
            padding_right=0.0,
            config=layout,
        )

    known = None if categories is None else frozenset(categories)

    lead = _bookend(cards, CardKind.LEAD, cards[0])
    trail = _bookend(reversed(cards), CardKind.TRAIL, cards[-1])
    padding_left, padding_right = asymmetric_padding(
        width,
        card_dimensions(lead.size, layout),
        card_dimensions(trail.size, layout),
        layout.min_padding,
    )

    grid = GridOccupancy(GRID_ROWS)
    positions: list[CardPosition] = []
    best: Dict[str, Tuple[float, CategoryAnchor]] = {}

    for index, card in enumerate(cards):
        dims = card_dimensions(card.size, layout)
        row, col = grid.find_first_fit(dims.rows, dims.cols)
        grid.mark_occupied(row, col, dims.rows, dims.cols)

        position = CardPosition(
            row=row,
            col=col,
            top=row * (layout.row_height + layout.gap),
            left=padding_left + col * (layout.column_width + layout.gap),
            width=dims.width,
            height=dims.height,
        )
        positions.append(position)

        if not card.is_body or not card.category:
            continue
        if known is not None and card.category not in known:
            logger.debug("Card %s has unlisted category %r; not anchoring", card.id, card.category)
            continue

        # Lowest sort key wins; on ties the first card seen keeps the anchor.
        current = best.get(card.category)
        if current is None or card.sort_key < current[0]:
            best[card.category] = (
                card.sort_key,
                CategoryAnchor(
                    category=card.category,
                    index=index,
                    left=position.left,
                    center_x=position.center_x,
                ),
            )

    max_right = max(p.right for p in positions)
    return LayoutResult(
        positions=tuple(positions),
        container_width=max_right + padding_right,
        category_anchors={category: anchor for category, (_, anchor) in best.items()},
        content_height=GRID_ROWS * layout.row_height + (GRID_ROWS - 1) * layout.gap,
        padding_left=padding_left,
        padding_right=padding_right,
        config=layout,
    )


class LayoutCache:
    """Bounded memo for :func:`compute_layout` keyed on its inputs.

    Owned by the caller; least-recently-used entries are evicted first.
    """

    def __init__(self, maxsize: int = 8) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be > 0")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: "OrderedDict[Hashable, LayoutResult]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        cards: Sequence[Card],
        viewport_width: float,
        categories: Optional[Iterable[str]] = None,
    ) -> LayoutResult:
        cats = None if categories is None else tuple(categories)
        key = (tuple(cards), viewport_width, cats)
        try:
            result = self._entries[key]
        except KeyError:
            pass
        else:
            self._entries.move_to_end(key)
            self.hits += 1
            return result

        self.misses += 1
        logger.debug("Layout cache miss: %d card(s) at width %s", len(cards), viewport_width)
        result = compute_layout(cards, viewport_width, cats)
        self._entries[key] = result
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()

