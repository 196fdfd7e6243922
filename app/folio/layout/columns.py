"""Responsive column sizing for the two-row grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

from app.folio.config import (
    BREAKPOINT_MOBILE_PX,
    DEFAULT_VIEWPORT_WIDTH,
    LAYOUT_DESKTOP,
    MOBILE_GAP_PX,
    MOBILE_MIN_PADDING_PX,
    LayoutConfig,
)
from app.folio.content.cards import CardSize


@dataclass(frozen=True)
class CardDimensions:
    rows: int
    cols: int
    width: int
    height: int


def safe_viewport_width(viewport_width: float) -> float:
    """Substitute the default width for zero, negative or non-finite input."""

    if isinstance(viewport_width, (int, float)) and math.isfinite(viewport_width) and viewport_width > 0:
        return viewport_width
    return DEFAULT_VIEWPORT_WIDTH


def layout_config_for_width(viewport_width: float) -> LayoutConfig:
    """Choose the grid sizing for a viewport.

    Policy:
    - desktop (>= mobile breakpoint): fixed column width
    - narrow: two columns fill the viewport, ``floor((width - gap) / 2)``

    Flooring keeps every card edge on a whole pixel so narrow screens don't
    jitter while panning.
    """

    width = safe_viewport_width(viewport_width)
    if width >= BREAKPOINT_MOBILE_PX:
        return LAYOUT_DESKTOP

    column_width = max(1, int((width - MOBILE_GAP_PX) // 2))
    return LayoutConfig(
        column_width=column_width,
        row_height=column_width,
        gap=MOBILE_GAP_PX,
        min_padding=MOBILE_MIN_PADDING_PX,
    )


def card_dimensions(size: CardSize, layout: LayoutConfig) -> CardDimensions:
    # A span of n cells also covers the n - 1 gaps between them.
    return CardDimensions(
        rows=size.rows,
        cols=size.cols,
        width=size.cols * layout.column_width + (size.cols - 1) * layout.gap,
        height=size.rows * layout.row_height + (size.rows - 1) * layout.gap,
    )
