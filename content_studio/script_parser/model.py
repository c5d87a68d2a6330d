"""Normalized document model shared by every grammar."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class DocType(str, Enum):
    REELS = "Reels"
    ARTICLE = "Article"
    BLOG = "Blog"
    PODCAST = "Podcast"
    YOUTUBE_SHORT = "YouTube Short"
    YOUTUBE_LONG_FORM = "YouTube Long Form"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: str | None) -> DocType:
        for member in cls:
            if member.value == value or member.name == value:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class Scene:
    """One visual beat of a short-form video."""

    scene_number: int
    background_prompt: str
    action_prompt: str = ""
    text_overlay: str = ""
    pexels_search: str = ""

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Scene:
        return cls(
            scene_number=int(data.get("scene_number", 0) or 0),
            background_prompt=str(data.get("background_prompt", "")),
            action_prompt=str(data.get("action_prompt", "")),
            text_overlay=str(data.get("text_overlay", "")),
            pexels_search=str(data.get("pexels_search", "")),
        )


@dataclass(frozen=True)
class VisualCue:
    """Podcast and long-form counterpart of a scene."""

    cue_point: str
    image_type: str = ""
    background_prompt: str = ""
    purpose: str = ""
    pexels_search: str = ""

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VisualCue:
        return cls(
            cue_point=str(data.get("cue_point", "")),
            image_type=str(data.get("image_type", "")),
            background_prompt=str(data.get("background_prompt", "")),
            purpose=str(data.get("purpose", "")),
            pexels_search=str(data.get("pexels_search", "")),
        )


@dataclass(frozen=True)
class ParsedDocument:
    """Result of a single parse call.

    Exactly one of ``scenes`` and ``visual_cues`` is filled for video and
    podcast types; articles and blogs rely on ``raw_content`` and
    ``summary`` instead.
    """

    doc_type: DocType
    raw_content: str
    topic: str = ""
    title: str = ""
    summary: str = ""
    quote: str = ""
    voiceover_script: str = ""
    scenes: tuple[Scene, ...] = field(default_factory=tuple)
    visual_cues: tuple[VisualCue, ...] = field(default_factory=tuple)
    transparent_image_prompt: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "doc_type": self.doc_type.value,
            "topic": self.topic,
            "title": self.title,
            "summary": self.summary,
            "quote": self.quote,
            "voiceover_script": self.voiceover_script,
            "scenes": [scene.to_dict() for scene in self.scenes],
            "visual_cues": [cue.to_dict() for cue in self.visual_cues],
            "transparent_image_prompt": self.transparent_image_prompt,
            "raw_content": self.raw_content,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParsedDocument:
        scenes = data.get("scenes", []) or []
        cues = data.get("visual_cues", []) or []
        return cls(
            doc_type=DocType.from_value(data.get("doc_type")),
            raw_content=str(data.get("raw_content", "")),
            topic=str(data.get("topic", "")),
            title=str(data.get("title", "")),
            summary=str(data.get("summary", "")),
            quote=str(data.get("quote", "")),
            voiceover_script=str(data.get("voiceover_script", "")),
            scenes=tuple(Scene.from_dict(scene) for scene in scenes),
            visual_cues=tuple(VisualCue.from_dict(cue) for cue in cues),
            transparent_image_prompt=str(data.get("transparent_image_prompt", "")),
        )


@dataclass(frozen=True)
class VideoPackage:
    """The four related texts that make up one video package."""

    script: str
    visuals: str
    metadata: str = ""
    branding: str = ""
