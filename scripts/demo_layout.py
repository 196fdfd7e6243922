#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.folio.main import bootstrap_stage


def main() -> None:
    parser = argparse.ArgumentParser(description="Demo: sweep scroll progress over a content file")
    parser.add_argument("content", nargs="?", default=str(Path(__file__).with_name("sample_content.json")))
    parser.add_argument("--width", type=float, default=1920)
    parser.add_argument("--steps", type=int, default=20, help="Progress samples between 0 and 1")
    args = parser.parse_args()

    stage = bootstrap_stage(args.content, viewport_width=args.width)
    print(f"Container width: {stage.layout.container_width:g}px  max scroll: {stage.max_scroll:g}px")
    print(f"{'progress':>8}  {'phase':<12} {'translateX':>10} {'intro':>6} {'outro':>6} {'opacity':>7}  active")

    steps = max(1, args.steps)
    for i in range(steps + 1):
        active = stage.set_progress(i / steps)
        print(
            f"{stage.progress:>8.3f}  {stage.phase.value:<12} {stage.translate_x:>10.1f} "
            f"{stage.intro_scale:>6.3f} {stage.outro_scale:>6.3f} {stage.content_opacity:>7.3f}  {active}"
        )

    for category in stage.categories:
        offset = stage.jump_to_category(category, 4 * 1080)
        print(f"jump {category!r}: {'no-op' if offset is None else f'{offset:.1f}px'}")


if __name__ == "__main__":
    main()
