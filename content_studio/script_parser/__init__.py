"""Script parser package."""
from __future__ import annotations

from . import detect, export, model, parser, sections, settings, sources, storage
from .detect import Dialect, detect_dialect
from .model import DocType, ParsedDocument, Scene, VideoPackage, VisualCue
from .parser import parse_document, parse_video_package

__all__ = [
    "detect",
    "export",
    "model",
    "parser",
    "sections",
    "settings",
    "sources",
    "storage",
    "Dialect",
    "DocType",
    "ParsedDocument",
    "Scene",
    "VideoPackage",
    "VisualCue",
    "detect_dialect",
    "parse_document",
    "parse_video_package",
]
