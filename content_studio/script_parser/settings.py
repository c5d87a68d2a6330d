"""Image settings and prompt construction for downstream generators."""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from .model import Scene

logger = logging.getLogger(__name__)

STYLE_OPTIONS = ("photorealistic", "illustration", "cartoonish")
ASPECT_RATIOS = ("16:9", "9:16", "1:1", "4:3", "3:4")
TONE_OPTIONS = ("cinematic", "dramatic", "vibrant", "moody", "uplifting", "minimalist")

STYLE_ENV = "CONTENT_IMAGE_STYLE"
ASPECT_RATIO_ENV = "CONTENT_IMAGE_ASPECT_RATIO"
TONE_ENV = "CONTENT_IMAGE_TONE"


@dataclass(frozen=True)
class ImageSettings:
    style: str = "photorealistic"
    aspect_ratio: str = "9:16"
    tone: str = "cinematic"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageSettings:
        return resolve_settings(
            style=data.get("style"),
            aspect_ratio=data.get("aspect_ratio"),
            tone=data.get("tone"),
            environ={},
        )


DEFAULT_SETTINGS = ImageSettings()


def _pick(value: Any, env_value: str | None, options: tuple[str, ...] | None, name: str) -> str | None:
    for candidate in (value, env_value):
        if not candidate:
            continue
        cleaned = str(candidate).strip()
        if options is None or cleaned in options:
            return cleaned
        logger.debug("Ignoring invalid %s value: %s", name, cleaned)
    return None


def resolve_settings(
    *,
    style: str | None = None,
    aspect_ratio: str | None = None,
    tone: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ImageSettings:
    """Merge explicit values, environment variables and defaults, in that order."""

    env = os.environ if environ is None else environ
    return ImageSettings(
        style=_pick(style, env.get(STYLE_ENV), STYLE_OPTIONS, "style")
        or DEFAULT_SETTINGS.style,
        aspect_ratio=_pick(aspect_ratio, env.get(ASPECT_RATIO_ENV), ASPECT_RATIOS, "aspect ratio")
        or DEFAULT_SETTINGS.aspect_ratio,
        tone=_pick(tone, env.get(TONE_ENV), None, "tone") or DEFAULT_SETTINGS.tone,
    )


def settings_for_asset(settings: ImageSettings, asset: str) -> ImageSettings:
    """Adjust ``settings`` for one of ``scene``, ``cue``, ``transparent`` or ``featured``."""

    if asset in {"cue", "featured"}:
        return replace(settings, aspect_ratio="16:9")
    if asset == "transparent":
        return replace(settings, style="illustration", aspect_ratio="1:1")
    return settings


def build_image_prompt(prompt: str, settings: ImageSettings) -> str:
    return f"{prompt}, {settings.style} style, {settings.tone}, cinematic lighting"


def scene_generation_prompt(scene: Scene) -> str:
    return (
        f'{scene.background_prompt}. Text overlay: "{scene.text_overlay}". '
        f"Style hint from Pexels search: {scene.pexels_search}."
    )
