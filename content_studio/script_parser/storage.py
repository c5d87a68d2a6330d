"""JSON persistence for the working document and image settings."""
from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from .model import ParsedDocument
from .settings import ImageSettings


class StoragePaths:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.document_path = base_dir / "document.json"
        self.settings_path = base_dir / "settings.json"

    def all_paths(self) -> list[Path]:
        return [self.document_path, self.settings_path]


def _load_json(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return cast(dict[str, Any], json.load(fh))


def _save_json(path: Path, data: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)


def save_document(paths: StoragePaths, document: ParsedDocument) -> None:
    _save_json(paths.document_path, document.to_dict())


def load_document(paths: StoragePaths) -> ParsedDocument | None:
    data = _load_json(paths.document_path)
    return ParsedDocument.from_dict(data) if data is not None else None


def save_settings(paths: StoragePaths, settings: ImageSettings) -> None:
    _save_json(paths.settings_path, settings.to_dict())


def load_settings(paths: StoragePaths) -> ImageSettings | None:
    data = _load_json(paths.settings_path)
    return ImageSettings.from_dict(data) if data is not None else None


def clear_storage(paths: StoragePaths) -> list[Path]:
    removed: list[Path] = []
    for path in paths.all_paths():
        if path.exists():
            path.unlink()
            removed.append(path)
    return removed
