"""Card model and content-record parsing.

Content records arrive from an external store as loose mappings. Parsing is
forgiving: a bad size or category degrades to a safe default, and only a
record that cannot be placed at all (no id, unknown kind) is skipped. One
malformed record must never take the whole page down.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


logger = logging.getLogger(__name__)


class CardKind(str, Enum):
    LEAD = "lead"
    BODY = "body"
    TRAIL = "trail"


_KIND_ALIASES = {
    "lead": CardKind.LEAD,
    "intro": CardKind.LEAD,
    "body": CardKind.BODY,
    "project": CardKind.BODY,
    "trail": CardKind.TRAIL,
    "outro": CardKind.TRAIL,
}


@dataclass(frozen=True)
class CardSize:
    """Grid span of a card.

    Labels use the content-store convention ``"<cols>x<rows>"``: ``"2x1"`` is
    two columns wide and one row tall.
    """

    rows: int
    cols: int

    @property
    def label(self) -> str:
        return f"{self.cols}x{self.rows}"


SIZE_1X1 = CardSize(rows=1, cols=1)

CARD_SIZES: dict[str, CardSize] = {
    "1x1": SIZE_1X1,
    "1x2": CardSize(rows=2, cols=1),
    "2x1": CardSize(rows=1, cols=2),
    "2x2": CardSize(rows=2, cols=2),
}


def parse_card_size(value: Any) -> CardSize:
    """Map a size label to a :class:`CardSize`, falling back to 1x1."""

    if isinstance(value, CardSize):
        return value
    if isinstance(value, str):
        size = CARD_SIZES.get(value.strip().lower().replace("×", "x"))
        if size is not None:
            return size
    logger.warning("Unknown card size %r; using 1x1", value)
    return SIZE_1X1


@dataclass(frozen=True)
class Card:
    id: str
    kind: CardKind
    size: CardSize = SIZE_1X1
    category: Optional[str] = None
    sort_key: float = math.inf
    title: str = ""
    image: Optional[str] = None

    @property
    def is_body(self) -> bool:
        return self.kind is CardKind.BODY


def _parse_kind(value: Any) -> CardKind | None:
    if isinstance(value, CardKind):
        return value
    if isinstance(value, str):
        return _KIND_ALIASES.get(value.strip().lower())
    return None


def _parse_sort_key(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return math.inf
    try:
        key = float(value)
    except (TypeError, ValueError):
        return math.inf
    return key if math.isfinite(key) else math.inf


def _parse_category(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def card_from_record(record: Mapping[str, Any]) -> Card | None:
    """Build a :class:`Card` from a content record.

    Accepted keys: ``id``, ``kind`` (or ``type``), ``size``, ``category``,
    ``sortKey`` (or ``sort``), ``title``, ``image``. Returns None (with a
    warning) when the record is flagged invalid, has no id, or has an unknown
    kind.
    """

    if not isinstance(record, Mapping):
        logger.warning("Skipping content record of type %s", type(record).__name__)
        return None

    if record.get("isValid") is False:
        logger.warning(
            "Skipping invalid content record %r: %s",
            record.get("id"),
            record.get("validationError", "no reason given"),
        )
        return None

    raw_id = record.get("id")
    if raw_id is None or str(raw_id).strip() == "":
        logger.warning("Skipping content record without id: %r", record)
        return None
    card_id = str(raw_id).strip()

    raw_kind = record.get("kind", record.get("type"))
    kind = _parse_kind(raw_kind)
    if kind is None:
        logger.warning("Skipping content record %s with unknown kind %r", card_id, raw_kind)
        return None

    category = None
    if kind is CardKind.BODY:
        category = _parse_category(record.get("category"))
        if category is None:
            logger.warning("Body card %s has no category; it will not anchor navigation", card_id)

    image = record.get("image")
    return Card(
        id=card_id,
        kind=kind,
        size=parse_card_size(record.get("size")),
        category=category,
        sort_key=_parse_sort_key(record.get("sortKey", record.get("sort"))),
        title=str(record.get("title") or ""),
        image=str(image) if image else None,
    )
