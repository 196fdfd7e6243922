"""View-layer state for one rendered strip.

A :class:`Stage` owns the only mutable state in the system: the viewport
width, the scroll progress and the active category derived from it. Layout
is resolved through the cache only when the width changes, so scroll ticks
and paints read a held result. Per-card parallax geometry is cached until the
layout or an image size changes.

Hosts call :meth:`Stage.set_viewport_width` from (debounced) resize events
and :meth:`Stage.set_progress` from scroll events, then read
:meth:`Stage.card_transform` for painting.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from app.folio.config import ALL_CATEGORY, DEFAULT_VIEWPORT_WIDTH, Settings
from app.folio.content.cards import Card, CardKind
from app.folio.layout.grid import LayoutCache, LayoutResult
from app.folio.layout.columns import safe_viewport_width
from app.folio.scroll import phases as ph
from app.folio.scroll.parallax import NO_PAN, ParallaxGeometry, compute_geometry, compute_offset
from app.folio.scroll.spy import detect_active_category, scroll_offset_for_category


class CardTransform(NamedTuple):
    translate_x: float
    scale: float
    opacity: float
    parallax_x: float
    parallax_y: float


class Stage:
    def __init__(
        self,
        cards: Sequence[Card],
        categories: Optional[Iterable[str]] = None,
        *,
        settings: Optional[Settings] = None,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        cache: Optional[LayoutCache] = None,
    ) -> None:
        self.cards: Tuple[Card, ...] = tuple(cards)
        self.categories: List[str] = list(categories) if categories is not None else self._categories_from_cards()
        self.settings = settings or Settings()
        self.cache = cache or LayoutCache()
        self._viewport_width = safe_viewport_width(viewport_width)
        self._image_sizes: Dict[str, Tuple[int, int]] = {}
        self._geometry: Dict[int, ParallaxGeometry] = {}
        self._geometry_layout: Optional[LayoutResult] = None
        self._progress = 0.0
        self._translate_x = 0.0
        self.active_category = ALL_CATEGORY
        self._layout = self.cache.get(self.cards, self._viewport_width, self.categories)

    def _categories_from_cards(self) -> List[str]:
        seen = [ALL_CATEGORY]
        for card in self.cards:
            if card.is_body and card.category and card.category not in seen:
                seen.append(card.category)
        return seen

    # -- inputs ---------------------------------------------------------------

    @property
    def viewport_width(self) -> float:
        return self._viewport_width

    def set_viewport_width(self, width: float) -> None:
        width = safe_viewport_width(width)
        if width == self._viewport_width:
            return
        self._viewport_width = width
        self._layout = self.cache.get(self.cards, width, self.categories)
        # Same progress, new geometry: re-derive position and active category.
        self.set_progress(self._progress)

    def set_image_size(self, card_id: str, size: Optional[Tuple[int, int]]) -> None:
        if size is None:
            self._image_sizes.pop(card_id, None)
        else:
            self._image_sizes[card_id] = size
        for index, card in enumerate(self.cards):
            if card.id == card_id:
                self._geometry.pop(index, None)

    def set_progress(self, progress: float) -> str:
        """Record a scroll update and return the active category."""
        self._progress = ph.clamp_progress(progress)
        self._translate_x = ph.translate_x(self._progress, self.max_scroll, self.settings.phases)
        self.active_category = detect_active_category(
            self._translate_x,
            self._viewport_width,
            self._layout.category_anchors,
            self.categories,
        )
        return self.active_category

    # -- derived state --------------------------------------------------------

    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def max_scroll(self) -> float:
        return ph.max_scroll(self._layout.container_width, self._viewport_width)

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def phase(self) -> ph.ScrollPhase:
        return ph.phase_at(self._progress, self.settings.phases)

    @property
    def translate_x(self) -> float:
        return self._translate_x

    @property
    def intro_scale(self) -> float:
        return ph.intro_scale(self._progress, self.settings.phases, self.settings.animation.bookend_scale)

    @property
    def outro_scale(self) -> float:
        return ph.outro_scale(self._progress, self.settings.phases, self.settings.animation.bookend_scale)

    @property
    def content_opacity(self) -> float:
        return ph.content_opacity(self._progress, self.settings.phases)

    def geometry(self, index: int) -> ParallaxGeometry:
        layout = self._layout
        if layout is not self._geometry_layout:
            self._geometry.clear()
            self._geometry_layout = layout

        cached = self._geometry.get(index)
        if cached is not None:
            return cached

        card = self.cards[index]
        size = self._image_sizes.get(card.id)
        if size is None:
            geometry = NO_PAN
        else:
            pos = layout.positions[index]
            geometry = compute_geometry(
                size,
                (pos.width, pos.height),
                self.settings.animation.image_scale,
                self.settings.animation.parallax_safety_factor,
            )
        self._geometry[index] = geometry
        return geometry

    def card_transform(self, index: int) -> CardTransform:
        card = self.cards[index]
        pos = self._layout.positions[index]

        if card.kind is CardKind.LEAD:
            scale, opacity = self.intro_scale, 1.0
        elif card.kind is CardKind.TRAIL:
            scale, opacity = self.outro_scale, 1.0
        else:
            scale, opacity = 1.0, self.content_opacity

        geometry = self.geometry(index)
        offset = compute_offset(
            self._translate_x,
            pos.center_x,
            self._viewport_width / 2,
            geometry,
            pos.width,
        )
        if geometry.is_horizontal_pan:
            return CardTransform(self._translate_x, scale, opacity, offset, 0.0)
        return CardTransform(self._translate_x, scale, opacity, 0.0, offset)

    # -- navigation -----------------------------------------------------------

    def jump_to_category(self, category: str, scrollable_height: float) -> Optional[float]:
        """Scroll offset that centres ``category``; None means do nothing."""
        return scroll_offset_for_category(
            category,
            self._layout.category_anchors,
            self._viewport_width,
            self.max_scroll,
            scrollable_height,
            self.settings.phases,
        )
