"""Scroll-spy: which category is under the viewport centre, and where to
scroll to bring a category there.

Detection uses left-edge crossing: the active category is the last one (in
navigation order) whose anchor card's left edge has passed the viewport's
horizontal centre. Before the first anchor crosses, the sentinel ``"All"``
is active. Navigation never raises: a stale or unknown category is logged
and ignored.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from app.folio.config import ALL_CATEGORY, DEFAULT_PHASES, ScrollPhaseBoundaries
from app.folio.layout.grid import CategoryAnchor
from app.folio.scroll.phases import progress_for_translate_x


logger = logging.getLogger(__name__)


def detect_active_category(
    translate_x: float,
    viewport_width: float,
    anchors: Mapping[str, CategoryAnchor],
    categories: Iterable[str],
) -> str:
    if not anchors or not math.isfinite(translate_x):
        return ALL_CATEGORY
    if not math.isfinite(viewport_width) or viewport_width <= 0:
        return ALL_CATEGORY

    center_content_x = viewport_width / 2 - translate_x
    active = ALL_CATEGORY
    for category in categories:
        if category == ALL_CATEGORY:
            continue
        anchor = anchors.get(category)
        if anchor is not None and anchor.left <= center_content_x:
            active = category
    return active


def progress_for_category(
    category: str,
    anchors: Mapping[str, CategoryAnchor],
    viewport_width: float,
    max_scroll_px: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
) -> float | None:
    """Progress value that centres ``category``'s anchor card.

    ``"All"`` maps to 0. Returns None (a no-op for the caller) when the strip
    cannot scroll or the category has no anchor.
    """

    category = category.strip()
    if category == ALL_CATEGORY:
        return 0.0

    if not math.isfinite(max_scroll_px) or max_scroll_px >= 0:
        logger.info("Strip does not overflow (max scroll %r); ignoring jump to %r", max_scroll_px, category)
        return None

    anchor = anchors.get(category)
    if anchor is None:
        logger.warning("No anchor for category %r; ignoring jump", category)
        return None

    if not math.isfinite(viewport_width) or viewport_width <= 0:
        logger.warning("Invalid viewport width %r; ignoring jump to %r", viewport_width, category)
        return None

    target_x = viewport_width / 2 - anchor.center_x
    return progress_for_translate_x(target_x, max_scroll_px, phases)


def scroll_offset_for_category(
    category: str,
    anchors: Mapping[str, CategoryAnchor],
    viewport_width: float,
    max_scroll_px: float,
    scrollable_height: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
) -> float | None:
    """Vertical scroll offset the host should smooth-scroll to, or None.

    ``scrollable_height`` is the host's scroll range (the offset at which
    progress reaches 1).
    """

    progress = progress_for_category(category, anchors, viewport_width, max_scroll_px, phases)
    if progress is None:
        return None
    if progress == 0.0:
        return 0.0
    if not math.isfinite(scrollable_height) or scrollable_height <= 0:
        logger.warning("Invalid scrollable height %r; ignoring jump to %r", scrollable_height, category)
        return None
    return progress * scrollable_height
