"""Map one scroll progress value to the strip's visual state.

Progress runs through five phases (see :class:`ScrollPhaseBoundaries`):

    intro pause -> intro scale -> horizontal -> outro scale -> outro pause

Each output is piecewise linear and continuous: every piece ends on the value
the next piece starts from. Only the horizontal phase moves the strip; the
scale phases resize the lead/trail cards in place, and body-card opacity is
zero whenever a bookend is full-bleed.

These functions run on every scroll tick, so they take and return plain
floats.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple

from app.folio.config import DEFAULT_ANIMATION, DEFAULT_PHASES, ScrollPhaseBoundaries
from app.folio.layout.columns import safe_viewport_width


class ScrollPhase(str, Enum):
    INTRO_PAUSE = "intro_pause"
    INTRO_SCALE = "intro_scale"
    HORIZONTAL = "horizontal"
    OUTRO_SCALE = "outro_scale"
    OUTRO_PAUSE = "outro_pause"


class ScrollFrame(NamedTuple):
    phase: ScrollPhase
    translate_x: float
    intro_scale: float
    outro_scale: float
    content_opacity: float


def clamp_progress(progress: float) -> float:
    if not isinstance(progress, (int, float)) or not math.isfinite(progress):
        return 0.0
    return min(1.0, max(0.0, float(progress)))


def _fraction(p: float, start: float, end: float) -> float:
    return (p - start) / (end - start)


def max_scroll(container_width: float, viewport_width: float) -> float:
    """Leftmost strip translation: ``min(0, -(container - viewport))``.

    Zero when the strip does not overflow the viewport, or when the inputs
    are not finite.
    """

    value = min(0.0, -(container_width - safe_viewport_width(viewport_width)))
    return value if math.isfinite(value) else 0.0


def phase_at(progress: float, phases: ScrollPhaseBoundaries = DEFAULT_PHASES) -> ScrollPhase:
    p = clamp_progress(progress)
    if p < phases.intro_pause_end:
        return ScrollPhase.INTRO_PAUSE
    if p < phases.intro_scale_end:
        return ScrollPhase.INTRO_SCALE
    if p < phases.outro_scale_start:
        return ScrollPhase.HORIZONTAL
    if p < phases.outro_pause_start:
        return ScrollPhase.OUTRO_SCALE
    return ScrollPhase.OUTRO_PAUSE


def intro_scale(
    progress: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
    full_scale: float = DEFAULT_ANIMATION.bookend_scale,
) -> float:
    p = clamp_progress(progress)
    if p <= phases.intro_pause_end:
        return full_scale
    if p < phases.intro_scale_end:
        t = _fraction(p, phases.intro_pause_end, phases.intro_scale_end)
        return full_scale + (1.0 - full_scale) * t
    return 1.0


def outro_scale(
    progress: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
    full_scale: float = DEFAULT_ANIMATION.bookend_scale,
) -> float:
    p = clamp_progress(progress)
    if p <= phases.outro_scale_start:
        return 1.0
    if p < phases.outro_pause_start:
        t = _fraction(p, phases.outro_scale_start, phases.outro_pause_start)
        return 1.0 + (full_scale - 1.0) * t
    return full_scale


def translate_x(
    progress: float,
    max_scroll_px: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
) -> float:
    if not math.isfinite(max_scroll_px) or max_scroll_px >= 0:
        return 0.0
    p = clamp_progress(progress)
    if p <= phases.horizontal_start:
        return 0.0
    if p < phases.horizontal_end:
        return _fraction(p, phases.horizontal_start, phases.horizontal_end) * max_scroll_px
    return max_scroll_px


def content_opacity(progress: float, phases: ScrollPhaseBoundaries = DEFAULT_PHASES) -> float:
    p = clamp_progress(progress)
    if p <= phases.intro_pause_end:
        return 0.0
    if p < phases.intro_scale_end:
        return _fraction(p, phases.intro_pause_end, phases.intro_scale_end)
    if p <= phases.outro_scale_start:
        return 1.0
    if p < phases.outro_pause_start:
        return 1.0 - _fraction(p, phases.outro_scale_start, phases.outro_pause_start)
    return 0.0


def frame_at(
    progress: float,
    max_scroll_px: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
    full_scale: float = DEFAULT_ANIMATION.bookend_scale,
) -> ScrollFrame:
    """All outputs for one progress value."""

    return ScrollFrame(
        phase=phase_at(progress, phases),
        translate_x=translate_x(progress, max_scroll_px, phases),
        intro_scale=intro_scale(progress, phases, full_scale),
        outro_scale=outro_scale(progress, phases, full_scale),
        content_opacity=content_opacity(progress, phases),
    )


def progress_for_translate_x(
    target_x: float,
    max_scroll_px: float,
    phases: ScrollPhaseBoundaries = DEFAULT_PHASES,
) -> float | None:
    """Inverse of :func:`translate_x` over the horizontal phase.

    ``target_x`` is clamped to ``[max_scroll_px, 0]``. Returns None when the
    strip cannot move (``max_scroll_px`` zero or not finite).
    """

    if not math.isfinite(max_scroll_px) or max_scroll_px >= 0 or not math.isfinite(target_x):
        return None
    clamped = max(min(target_x, 0.0), max_scroll_px)
    ratio = abs(clamped / max_scroll_px)
    return phases.horizontal_start + ratio * (phases.horizontal_end - phases.horizontal_start)
