"""Grammar for key/value structured content packages.

One set of rules covers reels, YouTube shorts and long-form videos,
podcast scripts, blog posts and articles. Producers renamed a few labels
over time, so several fields accept an ordered list of synonyms.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from .assemble import CueBuilder, build_cue, build_scene
from .detect import classify_doc_type
from .model import DocType, ParsedDocument, Scene, VisualCue
from .sections import (
    extract_between,
    extract_keyed_line,
    extract_multiline_block,
    trimmed_lines,
)

SCENE_TYPES = {DocType.REELS, DocType.YOUTUBE_SHORT}

# (start header, end header) pairs tried in order; first non-empty wins.
VOICEOVER_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Voiceover Script", "Visuals & Overlays"),
    ("Full Script", "Visual Cues (for Video Production)"),
)
SEARCH_LABELS: tuple[str, ...] = ("Pexels Search", "Video Search Terms")

SUMMARY_KEY = "Summary"
SUMMARY_END_KEY = "What is Digital Literacy"
TRANSPARENT_START = "Transparent Sam Stacks Image Description"
TRANSPARENT_END = "Social Media Details"
LONG_FORM_CUES_START = "Visual Cues (for Video Production)"
LONG_FORM_CUES_END = "Legal Disclaimer"

SCENE_NUMBER_RE = re.compile(r"^(\d+):")
BACKGROUND_RE = re.compile(r"1\.\s*Background Prompt:[ \t]*(.*)")
OVERLAY_RE = re.compile(r"2\.\s*Text Overlay:[ \t]*(.*)")
IMAGE_TYPE_RE = re.compile(r"Image Type:[ \t]*(.*)")
CUE_BACKGROUND_RE = re.compile(r"Background Prompt:[ \t]*(.*)")
PURPOSE_RE = re.compile(r"Purpose:[ \t]*(.*)")
NUMBERED_CUE_POINT_RE = re.compile(r"\d+\.\s*Cue Point:\s*(.*)")
NUMBERED_BACKGROUND_RE = re.compile(r"\d+\.\s*Background Prompt:\s*(.*)")
NUMBERED_PURPOSE_RE = re.compile(r"\d+\.\s*Purpose:\s*(.*)")


def _group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def _search_terms(text: str) -> str:
    for label in SEARCH_LABELS:
        value = _group(re.compile(rf"3\.\s*{re.escape(label)}:[ \t]*(.*)"), text)
        if value:
            return value
    return ""


def _title(lines: Sequence[str]) -> str:
    title = extract_keyed_line(lines, "Title:")
    if title:
        return title
    first_line = next((line for line in lines if line), "")
    if ":" in first_line:
        return first_line.partition(":")[2].strip()
    return first_line


def _voiceover(content: str) -> str:
    for start, end in VOICEOVER_SECTIONS:
        section = extract_between(content, start, end, keep_blank_lines=True)
        if section:
            return section
    return ""


def extract_scenes(content: str) -> list[Scene]:
    scenes: list[Scene] = []
    for block in content.split("Scene "):
        match = SCENE_NUMBER_RE.match(block)
        if not match:
            continue
        scene_number = int(match.group(1))
        if not scene_number:
            continue
        body = block.partition("\n")[2] or block
        background = _group(BACKGROUND_RE, body)
        overlay = _group(OVERLAY_RE, body)
        # Narration lines such as "Scene 2: ..." carry no numbered fields.
        if not background and not overlay:
            continue
        scenes.append(
            build_scene(
                scene_number,
                background,
                text_overlay=overlay,
                pexels_search=_search_terms(body),
            )
        )
    return scenes


def extract_podcast_cues(content: str) -> list[VisualCue]:
    cues: list[VisualCue] = []
    for block in content.split("Cue Point:")[1:]:
        cues.append(
            build_cue(
                block.split("\n", 1)[0].strip(),
                _group(CUE_BACKGROUND_RE, block),
                purpose=_group(PURPOSE_RE, block),
                image_type=_group(IMAGE_TYPE_RE, block),
            )
        )
    return cues


def extract_long_form_cues(content: str) -> list[VisualCue]:
    """Scan numbered cue lines, committing a cue whenever a new one starts."""

    section = extract_between(content, LONG_FORM_CUES_START, LONG_FORM_CUES_END)
    cues: list[VisualCue] = []
    current: CueBuilder | None = None

    def commit() -> None:
        if current is not None:
            cues.append(current.build())

    for line in trimmed_lines(section):
        cue_match = NUMBERED_CUE_POINT_RE.search(line)
        if cue_match:
            commit()
            current = CueBuilder(cue_point=cue_match.group(1).strip())
            continue
        if current is None:
            continue
        background_match = NUMBERED_BACKGROUND_RE.search(line)
        if background_match:
            current.background_prompt = background_match.group(1).strip()
            continue
        purpose_match = NUMBERED_PURPOSE_RE.search(line)
        if purpose_match:
            current.purpose = purpose_match.group(1).strip()
    commit()
    return cues


def parse_generic(content: str) -> ParsedDocument:
    doc_type = classify_doc_type(content)
    lines = trimmed_lines(content)

    scenes: list[Scene] = []
    cues: list[VisualCue] = []
    if doc_type in SCENE_TYPES:
        scenes = extract_scenes(content)
    elif doc_type is DocType.PODCAST:
        cues = extract_podcast_cues(content)
    elif doc_type is DocType.YOUTUBE_LONG_FORM:
        cues = extract_long_form_cues(content)

    return ParsedDocument(
        doc_type=doc_type,
        raw_content=content,
        topic=extract_keyed_line(lines, "Topic:"),
        title=_title(lines),
        summary=extract_multiline_block(lines, SUMMARY_KEY, SUMMARY_END_KEY),
        quote=extract_keyed_line(lines, "Quote:"),
        voiceover_script=_voiceover(content),
        scenes=tuple(scenes),
        visual_cues=tuple(cues),
        transparent_image_prompt=extract_between(content, TRANSPARENT_START, TRANSPARENT_END),
    )
