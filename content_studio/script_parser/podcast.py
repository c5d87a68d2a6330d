"""Grammar for bracket tagged podcast segment scripts."""
from __future__ import annotations

import re

from .assemble import ScriptAccumulator, build_cue, collapse_whitespace
from .model import DocType, ParsedDocument, VisualCue

DEFAULT_TITLE = "Untitled Podcast"

TITLE_RE = re.compile(r"\[EPISODE TITLE\]:[ \t]*(.*)")
KEY_MESSAGE_RE = re.compile(r"\[KEY MESSAGE/THEME\]:\s*(.*?)(?=\[SEGMENT 1:|\Z)", re.DOTALL)
SEGMENT_MARKER_RE = re.compile(r"\[SEGMENT \d+:")
CUE_LABEL_RE = re.compile(r"^(.*?)\]")
OBJECTIVE_RE = re.compile(r"\*\s*\*\*Objective:\*\*\s*(.*?)(?=\*\s*\*\*Content:\*\*|\Z)", re.DOTALL)
CONTENT_RE = re.compile(
    r"\*\s*\*\*Content:\*\*\s*[\"“](.*?)[\"”](?=\s*\*\s*\*\*|\s*\Z)",
    re.DOTALL,
)
HOST_PROMPT_RE = re.compile(r"\*\s*\*\*Host Image Prompt:\*\*\s*(.*)", re.DOTALL)


def _group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def parse_podcast_segments(content: str) -> ParsedDocument:
    title = _group(TITLE_RE, content) or DEFAULT_TITLE
    summary = _group(KEY_MESSAGE_RE, content)

    cues: list[VisualCue] = []
    script = ScriptAccumulator()
    blocks = SEGMENT_MARKER_RE.split(content)[1:]
    for index, block in enumerate(blocks, start=1):
        cue_point = _group(CUE_LABEL_RE, block) or f"Segment {index}"
        purpose = _group(OBJECTIVE_RE, block)
        spoken = collapse_whitespace(_group(CONTENT_RE, block))
        background = collapse_whitespace(_group(HOST_PROMPT_RE, block))
        script.add_segment(cue_point, spoken)
        if background:
            cues.append(build_cue(cue_point, background, purpose=purpose))

    return ParsedDocument(
        doc_type=DocType.PODCAST,
        raw_content=content,
        topic=title,
        title=title,
        summary=summary,
        voiceover_script=script.render(),
        visual_cues=tuple(cues),
    )
