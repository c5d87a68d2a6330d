"""Shared helpers that turn matched block fields into model entities."""
from __future__ import annotations

from dataclasses import dataclass

from .model import Scene, VisualCue


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def derive_search_hint(prompt: str) -> str:
    """First sentence of ``prompt``, cut again at its first comma."""

    return prompt.split(".", 1)[0].split(",", 1)[0].strip()


def build_scene(
    scene_number: int,
    background_prompt: str,
    *,
    text_overlay: str = "",
    action_prompt: str = "",
    pexels_search: str = "",
) -> Scene:
    return Scene(
        scene_number=scene_number,
        background_prompt=background_prompt,
        action_prompt=action_prompt,
        text_overlay=text_overlay,
        pexels_search=pexels_search or derive_search_hint(background_prompt),
    )


def build_cue(
    cue_point: str,
    background_prompt: str,
    *,
    purpose: str = "",
    image_type: str = "",
    pexels_search: str = "",
) -> VisualCue:
    return VisualCue(
        cue_point=cue_point,
        image_type=image_type,
        background_prompt=background_prompt,
        purpose=purpose,
        pexels_search=pexels_search or derive_search_hint(background_prompt),
    )


class ScriptAccumulator:
    """Collects voiceover entries in appearance order."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def add_scene(self, scene_number: int, text: str) -> None:
        if text:
            self._entries.append(f"Scene {scene_number}: {text}")

    def add_segment(self, label: str, text: str) -> None:
        if text:
            self._entries.append(f"{label}:\n{text}")

    def render(self) -> str:
        return "\n\n".join(self._entries)


@dataclass
class CueBuilder:
    cue_point: str
    background_prompt: str = ""
    purpose: str = ""

    def build(self) -> VisualCue:
        return build_cue(self.cue_point, self.background_prompt, purpose=self.purpose)
