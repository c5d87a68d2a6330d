"""Grammar for markdown bulleted short-form scripts."""
from __future__ import annotations

import re

from .assemble import ScriptAccumulator, build_scene, collapse_whitespace
from .model import DocType, ParsedDocument, Scene

DEFAULT_TITLE = "Untitled"

TITLE_RE = re.compile(r"\*\*Title:\*\*[ \t]*(.*)")
THUMBNAIL_RE = re.compile(
    r"\*\*Thumbnail Image prompt:\*\*\s*(.*?)(?=\*\*Scene 1:\*\*|\Z)",
    re.DOTALL | re.IGNORECASE,
)
SCENE_MARKER_RE = re.compile(r"\*\*\s*Scene\s+\d+:\s*\*\*")
BACKGROUND_RE = re.compile(r"^(.*?)\s*\*", re.DOTALL)
TEXT_OVERLAY_RE = re.compile(r"\*\s*\*\*Text Overlay:\*\*[ \t]*(.*)")
VOICEOVER_RE = re.compile(r"\*\s*\*\*Voiceover:\*\*\s*[\"“](.*?)[\"”]", re.DOTALL)


def parse_short_form(content: str) -> ParsedDocument:
    match = TITLE_RE.search(content)
    title = (match.group(1).strip() if match else "") or DEFAULT_TITLE
    thumbnail = THUMBNAIL_RE.search(content)

    scenes: list[Scene] = []
    script = ScriptAccumulator()
    # Sequence order is authoritative; digits in the marker are ignored.
    blocks = SCENE_MARKER_RE.split(content)[1:]
    for scene_number, block in enumerate(blocks, start=1):
        background_match = BACKGROUND_RE.search(block)
        overlay_match = TEXT_OVERLAY_RE.search(block)
        voiceover_match = VOICEOVER_RE.search(block)
        background = collapse_whitespace(background_match.group(1)) if background_match else ""
        overlay = overlay_match.group(1).strip() if overlay_match else ""
        voiceover = collapse_whitespace(voiceover_match.group(1)) if voiceover_match else ""
        script.add_scene(scene_number, voiceover)
        if background or overlay:
            scenes.append(
                build_scene(
                    scene_number,
                    background,
                    text_overlay=overlay,
                    pexels_search=overlay or background.split(".", 1)[0].strip(),
                )
            )

    return ParsedDocument(
        doc_type=DocType.YOUTUBE_SHORT,
        raw_content=content,
        topic=title,
        title=title,
        voiceover_script=script.render(),
        scenes=tuple(scenes),
        transparent_image_prompt=thumbnail.group(1).strip() if thumbnail else "",
    )
