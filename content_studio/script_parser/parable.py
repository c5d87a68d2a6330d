"""Grammar for emoji delimited parable scripts."""
from __future__ import annotations

import re

from .assemble import ScriptAccumulator, build_scene, collapse_whitespace
from .model import DocType, ParsedDocument, Scene
from .sections import extract_between

DEFAULT_TITLE = "Untitled Story"

TITLE_RE = re.compile(r"🎬 Title:[ \t]*(.*)")
SCENE_BLOCK_RE = re.compile(r"Scene\s+(\d+)(.*?)(?=Scene\s+\d+|\Z)", re.DOTALL)
VOICEOVER_RE = re.compile(r"🎙️?\s*VO:(.*?)(?=🖼️?\s*Visual:|\Z)", re.DOTALL)
VISUAL_RE = re.compile(r"🖼️?\s*Visual:(.*)", re.DOTALL)
RULE_LINE_RE = re.compile(r"^_+$")

SCENE_SCRIPT_HEADER = "🎬 Scene-by-Scene Script"
SHORT_SCRIPT_HEADER = "📱 YouTube Short Script"
STORY_HEADER = "📖 Full Parable Story"
THUMBNAIL_HEADER = "🖼️ Thumbnail Prompt"
DISCLAIMER_HEADER = "⚖️ Disclaimer"


def _section(text: str, start_marker: str, end_marker: str) -> str:
    section = extract_between(text, start_marker, end_marker)
    return "\n".join(
        line for line in section.splitlines() if not RULE_LINE_RE.match(line.strip())
    )


def parse_parable(content: str) -> ParsedDocument:
    match = TITLE_RE.search(content)
    title = match.group(1).strip() if match else ""
    title = title or DEFAULT_TITLE

    scenes: list[Scene] = []
    script = ScriptAccumulator()
    section = _section(content, SCENE_SCRIPT_HEADER, SHORT_SCRIPT_HEADER)
    for block in SCENE_BLOCK_RE.finditer(section):
        scene_number = int(block.group(1))
        body = block.group(2)
        vo_match = VOICEOVER_RE.search(body)
        visual_match = VISUAL_RE.search(body)
        voiceover = collapse_whitespace(vo_match.group(1)) if vo_match else ""
        visual = collapse_whitespace(visual_match.group(1)) if visual_match else ""
        script.add_scene(scene_number, voiceover)
        if visual:
            scenes.append(build_scene(scene_number, visual, text_overlay=voiceover))

    return ParsedDocument(
        doc_type=DocType.YOUTUBE_SHORT,
        raw_content=content,
        topic=title,
        title=title,
        summary=_section(content, STORY_HEADER, SCENE_SCRIPT_HEADER),
        voiceover_script=script.render(),
        scenes=tuple(scenes),
        transparent_image_prompt=_section(content, THUMBNAIL_HEADER, DISCLAIMER_HEADER),
    )
