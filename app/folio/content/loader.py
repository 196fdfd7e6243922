from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from app.folio.content.cards import Card, card_from_record
from app.folio.content.ordering import sandwich_order


logger = logging.getLogger(__name__)


class ContentError(ValueError):
    """Raised when a content file cannot be read at all."""


@dataclass(frozen=True)
class Content:
    cards: List[Card]
    categories: List[str]


def parse_content(raw: Any) -> Content:
    """Parse a decoded content document.

    Accepts either a bare list of records or
    ``{"categories": [...], "items": [...]}``.
    """

    if isinstance(raw, list):
        records, category_order = raw, []
    elif isinstance(raw, dict):
        records = raw.get("items", [])
        category_order = raw.get("categories", [])
    else:
        raise ContentError("content must be a list of records or an object with 'items'")

    if not isinstance(records, list):
        raise ContentError("'items' must be a list")
    if not isinstance(category_order, list):
        logger.warning("Ignoring non-list category order: %r", category_order)
        category_order = []

    cards = [card for card in (card_from_record(r) for r in records) if card is not None]
    skipped = len(records) - len(cards)
    if skipped:
        logger.warning("Skipped %d of %d content record(s)", skipped, len(records))

    ordered, categories = sandwich_order(cards, [str(c) for c in category_order])
    return Content(cards=ordered, categories=categories)


def load_content(path: str | Path) -> Content:
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ContentError(f"could not read content file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"content file {p} is not valid JSON: {e}") from e

    content = parse_content(raw)
    logger.info("Loaded %d card(s), %d categories from %s", len(content.cards), len(content.categories) - 1, p)
    return content
