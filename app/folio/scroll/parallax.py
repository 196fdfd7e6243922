"""Per-card image parallax.

The image inside a card is rendered slightly larger than the card
(``image_scale``) so it can pan without exposing an edge. The pan axis
follows the image's excess: an image proportionally wider than its card pans
horizontally, a taller one vertically, a matching one not at all.

The pan stays parked at its starting extreme until the card's centre crosses
the viewport centre, then travels to the opposite extreme over one card width
of further scrolling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from app.folio.config import DEFAULT_ANIMATION


@dataclass(frozen=True)
class ParallaxGeometry:
    max_offset: float
    is_horizontal_pan: bool
    initial_offset: float


NO_PAN = ParallaxGeometry(max_offset=0.0, is_horizontal_pan=False, initial_offset=0.0)


def _positive(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def compute_geometry(
    image_size: Optional[Tuple[float, float]],
    card_size: Tuple[float, float],
    image_scale: float = DEFAULT_ANIMATION.image_scale,
    safety_factor: float = DEFAULT_ANIMATION.parallax_safety_factor,
) -> ParallaxGeometry:
    """Pan axis and travel for an image of ``image_size`` in a card of ``card_size``.

    Both sizes are ``(width, height)``. Missing or zero-area sizes give
    :data:`NO_PAN`.
    """

    if image_size is None:
        return NO_PAN
    img_w, img_h = image_size
    card_w, card_h = card_size
    if not all(_positive(v) for v in (img_w, img_h, card_w, card_h)):
        return NO_PAN

    image_aspect = img_w / img_h
    card_aspect = card_w / card_h

    if image_aspect > card_aspect:
        # Fills the card height; excess is in width.
        rendered = card_h * image_aspect * image_scale
        overflow = rendered - card_w
        horizontal = True
    elif image_aspect < card_aspect:
        rendered = (card_w / image_aspect) * image_scale
        overflow = rendered - card_h
        horizontal = False
    else:
        return NO_PAN

    limit = max(0.0, overflow / 2 * safety_factor)
    if limit == 0.0:
        return NO_PAN
    return ParallaxGeometry(
        max_offset=limit,
        is_horizontal_pan=horizontal,
        # Horizontal pans start from the right edge, vertical from the bottom.
        initial_offset=limit if horizontal else -limit,
    )


def compute_offset(
    translate_x: float,
    card_center_x: float,
    viewport_center: float,
    geometry: ParallaxGeometry,
    card_width: float,
) -> float:
    """Image offset (px, along the pan axis) for the strip at ``translate_x``."""

    max_offset = geometry.max_offset
    initial = geometry.initial_offset
    if max_offset == 0 or not _positive(card_width):
        return initial
    if not math.isfinite(translate_x) or translate_x >= 0:
        return initial

    card_current_x = card_center_x + translate_x
    if card_current_x >= viewport_center:
        return initial

    t = min((viewport_center - card_current_x) / card_width, 1.0)
    if geometry.is_horizontal_pan:
        return max(min(initial - t * 2 * max_offset, initial), -max_offset)
    return min(max(initial + t * 2 * max_offset, initial), max_offset)
