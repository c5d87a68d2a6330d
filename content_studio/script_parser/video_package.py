"""Grammar for the four-file video package bundle.

A package is made of a script (per-scene narration separated by ``---``
rules), a visuals sheet (per-scene stock footage and cinematic prompts
separated by longer rules), a metadata sheet and a branding sheet. Script
and visuals blocks are paired by position; surplus blocks on either side
are dropped.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .assemble import ScriptAccumulator, build_scene, collapse_whitespace
from .model import DocType, ParsedDocument, Scene, VideoPackage
from .sections import extract_first_keyed_line, trimmed_lines

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Video"

SCRIPT_RULE_RE = re.compile(r"^[ \t]*-{3,}[ \t]*$", re.MULTILINE)
VISUALS_RULE_RE = re.compile(r"^[ \t]*(?:-{10,}|={10,}|━{10,})[ \t]*$", re.MULTILINE)
SCRIPT_SCENE_RE = re.compile(r"^Scene\s+(\d+):\s*(.*)$", re.DOTALL)
BULLET_RE = re.compile(r"^-\s*(.+)$")
TIMESTAMP_RE = re.compile(r"^\(?\d{1,2}:\d{2}(?::\d{2})?\b")

TITLE_LABELS = ("Title:", "Video Title:")
TRANSPARENT_LABELS = ("Transparent Image Prompt:", "Transparent Logo Prompt:")
STOCK_FOOTAGE_LABELS = ("Stock Footage (Primary):",)
PROMPTS_HEADER = "Cinematic Prompts:"
DESCRIPTION_KEY = "Description:"
TAGS_KEY = "Tags:"

SECTION_LABELS = (
    ("SCRIPT", "script"),
    ("VISUALS", "visuals"),
    ("METADATA", "metadata"),
    ("BRANDING", "branding"),
)


def _split_blocks(text: str, rule: re.Pattern[str]) -> list[str]:
    return [block.strip() for block in rule.split(text) if block.strip()]


def _script_blocks(text: str) -> list[tuple[int, str]]:
    accepted: list[tuple[int, str]] = []
    for block in _split_blocks(text, SCRIPT_RULE_RE):
        match = SCRIPT_SCENE_RE.match(block)
        if match:
            accepted.append((int(match.group(1)), collapse_whitespace(match.group(2))))
    return accepted


def _visual_blocks(text: str) -> list[str]:
    return [
        block
        for block in _split_blocks(text, VISUALS_RULE_RE)
        if PROMPTS_HEADER in block or any(label in block for label in STOCK_FOOTAGE_LABELS)
    ]


def _cinematic_prompts(lines: Sequence[str]) -> list[str]:
    prompts: list[str] = []
    capturing = False
    for line in lines:
        if not capturing:
            capturing = line.startswith(PROMPTS_HEADER)
            continue
        if not line:
            continue
        match = BULLET_RE.match(line)
        if not match:
            break
        prompts.append(match.group(1).strip())
    return prompts


def _description(lines: Sequence[str]) -> str:
    collected: list[str] = []
    capturing = False
    for line in lines:
        if not capturing:
            if line.startswith(DESCRIPTION_KEY):
                capturing = True
                remainder = line[len(DESCRIPTION_KEY):].strip()
                if remainder:
                    collected.append(remainder)
            continue
        if TIMESTAMP_RE.match(line) or line.startswith(TAGS_KEY):
            break
        if line:
            collected.append(line)
    return "\n".join(collected)


def _raw_content(package: VideoPackage) -> str:
    parts = []
    for label, attribute in SECTION_LABELS:
        parts.append(f"=== {label} ===\n{getattr(package, attribute).strip()}")
    return "\n\n".join(parts)


def parse_video_package(package: VideoPackage) -> ParsedDocument:
    metadata_lines = trimmed_lines(package.metadata)
    branding_lines = trimmed_lines(package.branding)
    title = extract_first_keyed_line(metadata_lines, TITLE_LABELS) or DEFAULT_TITLE
    transparent = extract_first_keyed_line(
        metadata_lines, TRANSPARENT_LABELS
    ) or extract_first_keyed_line(branding_lines, TRANSPARENT_LABELS)

    script_blocks = _script_blocks(package.script)
    visual_blocks = _visual_blocks(package.visuals)
    if len(script_blocks) != len(visual_blocks):
        logger.debug(
            "Package block counts differ (script=%d, visuals=%d); keeping %d",
            len(script_blocks),
            len(visual_blocks),
            min(len(script_blocks), len(visual_blocks)),
        )

    scenes: list[Scene] = []
    script = ScriptAccumulator()
    for (scene_number, narration), visual in zip(script_blocks, visual_blocks):
        lines = trimmed_lines(visual)
        prompts = _cinematic_prompts(lines)
        background = prompts[0] if prompts else ""
        scenes.append(
            build_scene(
                scene_number,
                background,
                text_overlay=narration,
                action_prompt=" ".join(prompts[1:]),
                pexels_search=extract_first_keyed_line(lines, STOCK_FOOTAGE_LABELS),
            )
        )
        script.add_scene(scene_number, narration)

    return ParsedDocument(
        doc_type=DocType.YOUTUBE_SHORT,
        raw_content=_raw_content(package),
        topic=title,
        title=title,
        summary=_description(metadata_lines),
        voiceover_script=script.render(),
        scenes=tuple(scenes),
        transparent_image_prompt=transparent,
    )
