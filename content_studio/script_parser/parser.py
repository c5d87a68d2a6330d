"""Entry points that detect the dialect and run the matching grammar."""
from __future__ import annotations

import logging

from .detect import Dialect, detect_dialect
from .generic import parse_generic
from .model import ParsedDocument, VideoPackage
from .parable import parse_parable
from .podcast import parse_podcast_segments
from .short_form import parse_short_form
from .video_package import parse_video_package as _parse_package

logger = logging.getLogger(__name__)


def parse_with_dialect(content: str, dialect: Dialect) -> ParsedDocument:
    if dialect is Dialect.SHORT_FORM:
        return parse_short_form(content)
    if dialect is Dialect.PODCAST_SEGMENT:
        return parse_podcast_segments(content)
    if dialect is Dialect.PARABLE:
        return parse_parable(content)
    if dialect is Dialect.GENERIC:
        return parse_generic(content)
    raise ValueError(f"{dialect.value} documents need all package texts")


def parse_document(content: str) -> ParsedDocument:
    dialect = detect_dialect(content)
    document = parse_with_dialect(content, dialect)
    _log_result(dialect, document)
    return document


def parse_video_package(package: VideoPackage) -> ParsedDocument:
    document = _parse_package(package)
    _log_result(Dialect.VIDEO_PACKAGE, document)
    return document


def _log_result(dialect: Dialect, document: ParsedDocument) -> None:
    logger.debug(
        "Parsed %s document as %s: %d scenes, %d visual cues",
        dialect.value,
        document.doc_type.value,
        len(document.scenes),
        len(document.visual_cues),
    )
