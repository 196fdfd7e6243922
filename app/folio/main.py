from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app.folio.config import DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH, load_settings
from app.folio.content.loader import ContentError, load_content
from app.folio.stage import Stage
from app.folio.utils.imaging import read_image_size, resolve_image_path


logger = logging.getLogger(__name__)

# The scroll track is five viewports tall; one of them is on screen.
SCROLL_VIEWPORTS = 4


def bootstrap_stage(
    content_path: str,
    *,
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
    settings_path: str | None = None,
    probe_images: bool = True,
) -> Stage:
    content = load_content(content_path)
    stage = Stage(
        content.cards,
        content.categories,
        settings=load_settings(settings_path),
        viewport_width=viewport_width,
    )
    if probe_images:
        base_dir = Path(content_path).resolve().parent
        for card in content.cards:
            image_path = resolve_image_path(card.image, base_dir)
            if image_path is not None:
                stage.set_image_size(card.id, read_image_size(image_path))
    return stage


def describe_stage(stage: Stage, scrollable_height: float, jump: str | None = None) -> list[str]:
    layout = stage.layout
    lines = [
        f"Viewport: {stage.viewport_width:g}px  columns: {layout.config.column_width}px  gap: {layout.config.gap}px",
        f"Cards: {len(layout.positions)}  container width: {layout.container_width:g}px  "
        f"content height: {layout.content_height}px  max scroll: {stage.max_scroll:g}px",
    ]
    for card, pos in zip(stage.cards, layout.positions):
        label = card.category or card.kind.value
        lines.append(
            f"  {card.id:<16} {card.size.label:<4} row {pos.row} col {pos.col:<3} "
            f"left {pos.left:>8.1f} top {pos.top:>6.1f} [{label}]"
        )
    for category, anchor in layout.category_anchors.items():
        lines.append(f"  anchor {category!r}: card #{anchor.index} left {anchor.left:g} centre {anchor.center_x:g}")

    lines.append(
        f"Progress {stage.progress:.3f} ({stage.phase.value}): translateX {stage.translate_x:.1f}  "
        f"intro {stage.intro_scale:.3f}  outro {stage.outro_scale:.3f}  opacity {stage.content_opacity:.3f}  "
        f"active {stage.active_category!r}"
    )

    if jump is not None:
        offset = stage.jump_to_category(jump, scrollable_height)
        if offset is None:
            lines.append(f"Jump to {jump!r}: nothing to scroll")
        else:
            lines.append(f"Jump to {jump!r}: scroll to {offset:.1f}px of {scrollable_height:g}px")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lay out a portfolio strip and inspect its scroll state")
    parser.add_argument("content", help="Content JSON file (list of records or {categories, items})")
    parser.add_argument("--width", type=float, default=DEFAULT_VIEWPORT_WIDTH, help="Viewport width in px")
    parser.add_argument("--progress", type=float, default=0.0, help="Scroll progress in [0, 1]")
    parser.add_argument("--jump", default=None, help="Category to compute a navigation jump for")
    parser.add_argument(
        "--scroll-height",
        type=float,
        default=DEFAULT_VIEWPORT_HEIGHT * SCROLL_VIEWPORTS,
        help="Scroll range of the host container in px",
    )
    parser.add_argument("--config", default=None, help="Settings JSON with phase/animation overrides")
    parser.add_argument("--gui", action="store_true", help="Open the desktop viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.gui:
        from native.folio_app.main import main as run_viewer

        return run_viewer([args.content] + (["--config", args.config] if args.config else []))

    try:
        stage = bootstrap_stage(args.content, viewport_width=args.width, settings_path=args.config)
    except ContentError as e:
        logger.error("%s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 2

    stage.set_progress(args.progress)
    for line in describe_stage(stage, args.scroll_height, args.jump):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
