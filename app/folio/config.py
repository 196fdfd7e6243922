"""Layout, animation and scroll-phase constants.

Every number the layout and scroll code depends on lives here. Callers read
the module-level defaults or a :class:`Settings` produced by
:func:`load_settings`; nothing else should hard-code pixel values.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping


BREAKPOINT_MOBILE_PX = 640

GRID_ROWS = 2

DEFAULT_VIEWPORT_WIDTH = 1920
DEFAULT_VIEWPORT_HEIGHT = 1080

# Navigation sentinel: "before the first category".
ALL_CATEGORY = "All"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class LayoutConfig:
    """Responsive grid sizing. Cells are square (row_height == column_width)."""

    column_width: int
    row_height: int
    gap: int
    min_padding: int


LAYOUT_DESKTOP = LayoutConfig(column_width=300, row_height=300, gap=24, min_padding=24)

MOBILE_GAP_PX = 24
MOBILE_MIN_PADDING_PX = 16


@dataclass(frozen=True)
class AnimationConfig:
    # Cards show images scaled up slightly so the parallax pan has headroom.
    image_scale: float = 1.15
    # Fraction of the overflow the parallax pan may use; must stay below 1.
    parallax_safety_factor: float = 0.7
    # Full-bleed scale of the lead/trail cards during the pause phases.
    bookend_scale: float = 1.15

    def __post_init__(self) -> None:
        if not _is_number(self.image_scale) or self.image_scale < 1:
            raise ValueError("image_scale must be >= 1")
        if not _is_number(self.parallax_safety_factor) or not 0 <= self.parallax_safety_factor < 1:
            raise ValueError("parallax_safety_factor must be in [0, 1)")
        if not _is_number(self.bookend_scale) or self.bookend_scale <= 0:
            raise ValueError("bookend_scale must be > 0")


@dataclass(frozen=True)
class ScrollPhaseBoundaries:
    """Progress thresholds splitting [0, 1] into the five scroll phases.

    [0, intro_pause_end)                  intro pause
    [intro_pause_end, intro_scale_end)    intro scale
    [intro_scale_end, outro_scale_start)  horizontal pan
    [outro_scale_start, outro_pause_start) outro scale
    [outro_pause_start, 1]                outro pause
    """

    intro_pause_end: float = 0.06
    intro_scale_end: float = 0.12
    outro_scale_start: float = 0.88
    outro_pause_start: float = 0.94

    def __post_init__(self) -> None:
        values = self.as_tuple()
        for name, value in zip(("intro_pause_end", "intro_scale_end", "outro_scale_start", "outro_pause_start"), values):
            if not (_is_number(value) and 0 <= value <= 1):
                raise ValueError(f"{name} must be a number in [0, 1], got {value!r}")
        for lo, hi in zip(values, values[1:]):
            if not lo < hi:
                raise ValueError(f"phase boundaries must be strictly increasing: {values}")

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (
            self.intro_pause_end,
            self.intro_scale_end,
            self.outro_scale_start,
            self.outro_pause_start,
        )

    @property
    def horizontal_start(self) -> float:
        return self.intro_scale_end

    @property
    def horizontal_end(self) -> float:
        return self.outro_scale_start


DEFAULT_ANIMATION = AnimationConfig()
DEFAULT_PHASES = ScrollPhaseBoundaries()


@dataclass(frozen=True)
class Settings:
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    phases: ScrollPhaseBoundaries = field(default_factory=ScrollPhaseBoundaries)


def _apply_overrides(base: Any, overrides: Mapping[str, Any], section: str) -> Any:
    if not isinstance(overrides, Mapping):
        raise ValueError(f"settings section {section!r} must be an object")
    known = {f.name for f in fields(base)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"unknown {section} setting(s): {', '.join(unknown)}")
    return replace(base, **overrides)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings, applying JSON overrides from ``path`` if given.

    File shape: ``{"phases": {...}, "animation": {...}}``. Either section may
    be omitted. Invalid values raise ``ValueError`` so a bad configuration
    fails at startup instead of producing a broken scroll sequence.
    """

    settings = Settings()
    if path is None:
        return settings

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"could not read settings file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError("settings file must contain a JSON object")
    unknown = sorted(set(raw) - {"phases", "animation"})
    if unknown:
        raise ValueError(f"unknown settings section(s): {', '.join(unknown)}")

    if "animation" in raw:
        settings = replace(settings, animation=_apply_overrides(settings.animation, raw["animation"], "animation"))
    if "phases" in raw:
        settings = replace(settings, phases=_apply_overrides(settings.phases, raw["phases"], "phases"))
    return settings
