from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)


def read_image_size(path: str | Path) -> tuple[int, int] | None:
    """Return the natural (width, height) of an image file.

    Only the header is read. Missing, unreadable or zero-area images return
    None so callers fall back to a card without parallax.
    """
    try:
        with Image.open(path) as img:
            width, height = img.size
    except FileNotFoundError:
        logger.warning("Image not found: %s", path)
        return None
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Could not read image %s: %s", path, e)
        return None

    if width <= 0 or height <= 0:
        logger.warning("Image %s has zero area (%sx%s)", path, width, height)
        return None
    return width, height


def resolve_image_path(image: str | None, base_dir: str | Path | None = None) -> Path | None:
    """Resolve a card's image reference to a local file, if it is one.

    Remote URLs are served by the image service, not probed here.
    """
    if not image or "://" in image:
        return None
    p = Path(image)
    if not p.is_absolute() and base_dir is not None:
        p = Path(base_dir) / p
    return p
