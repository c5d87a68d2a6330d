"""Markdown summaries and zip export packages for parsed documents."""
from __future__ import annotations

import json
import zipfile
from collections.abc import Iterable, Mapping
from pathlib import Path

from .model import DocType, ParsedDocument, Scene, VisualCue

RAW_SCRIPT_FILES = {
    DocType.PODCAST: "scripts/podcast_script.txt",
    DocType.ARTICLE: "scripts/content.txt",
    DocType.BLOG: "scripts/content.txt",
}


def render_summary(document: ParsedDocument) -> str:
    lines = [f"# {document.title or 'Untitled'}", ""]
    lines.append(f"**Type:** {document.doc_type.value}")
    if document.topic:
        lines.append(f"**Topic:** {document.topic}")
    lines.append("")
    if document.quote:
        lines.extend([f"> {document.quote}", ""])
    if document.summary:
        lines.extend(["## Summary", "", document.summary, ""])
    if document.scenes:
        lines.extend(["## Scenes", ""])
        lines.append("| # | Background prompt | Action prompt | Text overlay | Search |")
        lines.append("| --- | --- | --- | --- | --- |")
        lines.extend(format_scene_row(scene) for scene in document.scenes)
        lines.append("")
    if document.visual_cues:
        lines.extend(["## Visual Cues", ""])
        lines.append("| Cue point | Image type | Background prompt | Purpose | Search |")
        lines.append("| --- | --- | --- | --- | --- |")
        lines.extend(format_cue_row(cue) for cue in document.visual_cues)
        lines.append("")
    if document.transparent_image_prompt:
        lines.extend(["## Transparent Image Prompt", "", document.transparent_image_prompt, ""])
    if document.voiceover_script:
        lines.extend(["## Voiceover Script", "", document.voiceover_script, ""])
    return "\n".join(lines)


def format_scene_row(scene: Scene) -> str:
    cells = [
        str(scene.scene_number),
        scene.background_prompt,
        scene.action_prompt,
        scene.text_overlay,
        scene.pexels_search,
    ]
    return "| " + " | ".join(escape_cell(cell) for cell in cells) + " |"


def format_cue_row(cue: VisualCue) -> str:
    cells = [cue.cue_point, cue.image_type, cue.background_prompt, cue.purpose, cue.pexels_search]
    return "| " + " | ".join(escape_cell(cell) for cell in cells) + " |"


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", "<br>")


def image_entries(images: Mapping[str, bytes]) -> Iterable[tuple[str, bytes]]:
    for key, data in sorted(images.items()):
        if key.startswith("scene-"):
            yield f"scenes/{key}.png", data
        elif key.startswith("cue-"):
            yield f"visual_cues/{key}.png", data
        elif key == "transparent":
            yield "extras/transparent.png", data
        elif key == "featured-image":
            yield "featured_image.png", data


def write_package(
    document: ParsedDocument,
    output_path: Path,
    images: Mapping[str, bytes] | None = None,
) -> Path:
    """Write the document, its scripts and any generated images into a zip."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        if document.voiceover_script:
            archive.writestr("scripts/voiceover_script.txt", document.voiceover_script)
        raw_name = RAW_SCRIPT_FILES.get(document.doc_type)
        if raw_name:
            archive.writestr(raw_name, document.raw_content)
        for name, data in image_entries(images or {}):
            archive.writestr(name, data)
        archive.writestr(
            "document.json", json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
        )
        archive.writestr("SUMMARY.md", render_summary(document))
    return output_path
