"""Dialect detection by signature sniffing."""
from __future__ import annotations

import logging
from enum import Enum

from .model import DocType

logger = logging.getLogger(__name__)


class Dialect(Enum):
    SHORT_FORM = "short_form"
    PODCAST_SEGMENT = "podcast_segment"
    PARABLE = "parable"
    VIDEO_PACKAGE = "video_package"
    GENERIC = "generic"


# (dialect, required prefix, required marker) in priority order.
DIALECT_SIGNATURES: tuple[tuple[Dialect, str, str], ...] = (
    (Dialect.SHORT_FORM, "**Title:**", "**Scene 1:**"),
    (Dialect.PODCAST_SEGMENT, "[EPISODE TITLE]:", "[SEGMENT 1:"),
    (Dialect.PARABLE, "🎬 Title:", "🎬 Scene-by-Scene Script"),
)

DOC_TYPE_SIGNATURES: tuple[tuple[str, DocType], ...] = (
    ("Daily Content Package: YouTube Short", DocType.YOUTUBE_SHORT),
    ("Daily Content Package: YouTube Long Form", DocType.YOUTUBE_LONG_FORM),
    ("Daily Content Package: Reels", DocType.REELS),
    ("Podcast Script", DocType.PODCAST),
    ("Blog Post", DocType.BLOG),
    ("Article:", DocType.ARTICLE),
)


def detect_dialect(text: str) -> Dialect:
    """Pick the grammar for a single text.

    The video package dialect needs four texts and is never returned here.
    """

    stripped = text.strip()
    for dialect, prefix, marker in DIALECT_SIGNATURES:
        if stripped.startswith(prefix) and marker in stripped:
            logger.debug("Detected %s dialect", dialect.value)
            return dialect
    logger.debug("No dialect signature matched, using generic grammar")
    return Dialect.GENERIC


def classify_doc_type(text: str) -> DocType:
    for phrase, doc_type in DOC_TYPE_SIGNATURES:
        if phrase in text:
            return doc_type
    return DocType.UNKNOWN
